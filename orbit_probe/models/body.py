# orbit_probe/models/body.py
from orbit_probe.config import settings
from orbit_probe.models.history import HistoryBuffer
from orbit_probe.physics.state import State


class Body:
    """
    Simulated probe: an id, a mass, the current State and a rolling history.
    id and mass are metadata only; the force model ignores the probe's own mass.
    """
    def __init__(self, body_id, mass, position, velocity, history_capacity=None):
        self.id = body_id
        self.mass = float(mass)
        self.current_state = State(position, velocity)
        capacity = settings.N_HISTORY if history_capacity is None else history_capacity
        self.history = HistoryBuffer(capacity)

    @classmethod
    def default(cls):
        """Probe at ISS altitude on the +y axis, moving along +x."""
        return cls(
            settings.DEFAULT_BODY_ID,
            settings.DEFAULT_BODY_MASS,
            settings.initial_position(),
            settings.initial_velocity(),
        )

    def update_history(self):
        self.history.push(self.current_state)

    def __repr__(self):
        return f"Body {self.id} at {self.current_state!r}"
