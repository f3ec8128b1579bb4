import logging
from typing import Any, Dict, Optional

from orbit_probe.config import settings
from orbit_probe.engine.simulation import Simulation
from orbit_probe.physics.thrust import ThrustCommand
from orbit_probe.physics.utils import altitude, angular_momentum, specific_energy, speed
from orbit_probe.simulation.schedule import BurnSchedule

logger = logging.getLogger(__name__)


def _state_record(state) -> Dict[str, float]:
    return {"x": state.x, "y": state.y, "vx": state.vx, "vy": state.vy}


def _new_tracker(body) -> Dict[str, Any]:
    s0 = body.current_state
    return {
        "body_id": body.id,
        "mass": body.mass,
        "initial_state": _state_record(s0),
        "initial_energy": specific_energy(s0),
        "initial_angular_momentum": angular_momentum(s0),
        "min_altitude": altitude(s0),
        "max_speed": speed(s0),
        "thrust_ticks": 0,
        "impact_tick": None,
    }


def run_simulation(
    simulation: Simulation,
    steps: int,
    schedule: Optional[BurnSchedule] = None,
    stop_on_impact: bool = True,
) -> Dict[str, Any]:
    """
    Headless host loop: one Simulation.tick per step, thrust taken from `schedule`
    and applied to every body. Returns a summary per body.

    A body at or below the central body's surface counts as an impact; with
    stop_on_impact the run ends after that tick.
    """
    steps = int(steps)
    if steps <= 0:
        raise ValueError("steps must be > 0")
    schedule = schedule or BurnSchedule()

    trackers = {body_id: _new_tracker(body) for body_id, body in simulation.bodies.items()}
    logger.info(
        "Starting run: bodies=%d, steps=%d, dt=%.2fs, burns=%d",
        len(trackers), steps, simulation.solver.dt, len(schedule),
    )

    ticks_run = 0
    last_frames = []
    for tick in range(steps):
        command = schedule.command_at(tick)
        last_frames = simulation.tick({body_id: command for body_id in trackers})
        ticks_run += 1

        impacted = False
        for frame in last_frames:
            tr = trackers[frame.body_id]
            alt = altitude(frame.state)
            tr["min_altitude"] = min(tr["min_altitude"], alt)
            tr["max_speed"] = max(tr["max_speed"], speed(frame.state))
            if frame.thrust != ThrustCommand.NONE:
                tr["thrust_ticks"] += 1
            if alt <= 0.0 and tr["impact_tick"] is None:
                tr["impact_tick"] = tick
                impacted = True
                logger.warning("Body %s reached the surface at tick %d (t=%.1fs)",
                               frame.body_id, tick, (tick + 1) * simulation.solver.dt)

        if (tick + 1) % settings.PROGRESS_EVERY == 0:
            logger.info("tick %d/%d", tick + 1, steps)

        if impacted and stop_on_impact:
            break

    bodies = {}
    for frame in last_frames:
        tr = trackers[frame.body_id]
        final_energy = specific_energy(frame.state)
        e0 = tr.pop("initial_energy")
        h0 = tr.pop("initial_angular_momentum")
        tr["final_state"] = _state_record(frame.state)
        tr["final_altitude"] = altitude(frame.state)
        tr["energy_drift"] = (final_energy - e0) / abs(e0) if e0 != 0 else float("nan")
        tr["angular_momentum_drift"] = (angular_momentum(frame.state) - h0) / abs(h0) if h0 != 0 else float("nan")
        tr["lookahead_end"] = [float(v) for v in frame.lookahead[-1]]
        bodies[frame.body_id] = tr

    logger.info("Run finished after %d ticks (%.1f simulated seconds)", ticks_run, ticks_run * simulation.solver.dt)
    return {
        "ticks": ticks_run,
        "dt": simulation.solver.dt,
        "simulated_seconds": ticks_run * simulation.solver.dt,
        "bodies": bodies,
    }
