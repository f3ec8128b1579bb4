# orbit_probe/simulation/schedule.py
from orbit_probe.physics.thrust import ThrustCommand


class BurnSchedule:
    """
    Scripted thrust for headless runs: stands in for the keyboard.
    Each burn holds a command for [start_tick, start_tick + duration).
    Where burns overlap, the one added last wins.
    """
    def __init__(self, burns=()):
        self.burns = []
        for burn in burns:
            self.add_burn(*burn)

    def add_burn(self, start_tick, duration, command):
        start_tick = int(start_tick)
        duration = int(duration)
        if start_tick < 0:
            raise ValueError("Burn start_tick must be >= 0")
        if duration <= 0:
            raise ValueError("Burn duration must be > 0")
        event = {
            "start_tick": start_tick,
            "end_tick": start_tick + duration,
            "command": ThrustCommand.parse(command),
        }
        self.burns.append(event)
        return event

    def command_at(self, tick) -> ThrustCommand:
        command = ThrustCommand.NONE
        for event in self.burns:
            if event["start_tick"] <= tick < event["end_tick"]:
                command = event["command"]
        return command

    def __len__(self):
        return len(self.burns)
