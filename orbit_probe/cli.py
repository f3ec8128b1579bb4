# orbit_probe/cli.py
from orbit_probe.config import settings
from orbit_probe.models.body import Body
from orbit_probe.physics.thrust import ThrustCommand
from orbit_probe.physics.utils import circular_speed
from orbit_probe.simulation.schedule import BurnSchedule


def _ask(prompt, default, cast, min_val=None, max_val=None, unit=""):
    """
    Prompt until `cast` accepts the answer and it lies in [min_val, max_val].
    Empty input or EOF (piped / non-interactive runs) falls back to `default`.
    """
    while True:
        try:
            answer = input(prompt).strip()
        except EOFError:
            answer = ""
        if not answer:
            return cast(default)
        try:
            value = cast(answer)
        except ValueError:
            print(f"  '{answer}' is not a valid {cast.__name__}{unit}.")
            continue
        if (min_val is not None and value < min_val) or (max_val is not None and value > max_val):
            lo = "-inf" if min_val is None else min_val
            hi = "inf" if max_val is None else max_val
            print(f"  {value}{unit} is outside [{lo}, {hi}].")
            continue
        return value


def get_float(prompt, default, min_val=None, max_val=None, unit=""):
    return _ask(prompt, default, float, min_val, max_val, unit)


def get_int(prompt, default, min_val=None, max_val=None, unit=""):
    return _ask(prompt, default, int, min_val, max_val, unit)


def choose_integrator():
    """
      1 -> RK4 (default)
      2 -> constant-acceleration step (comparison only)
    """
    print("\nIntegrator")
    print("  1) RK4 (Recommended)")
    print("  2) Constant-acceleration step")
    try:
        choice = input("Select integrator [1]: ").strip()
    except EOFError:
        choice = ""
    if choice == "2":
        return "taylor"
    return "rk4"


def create_body():
    print("\nProbe Configuration")

    altitude = get_float(
        f"Altitude above Earth (m) [default {settings.DEFAULT_ALTITUDE}]: ",
        default=settings.DEFAULT_ALTITUDE,
        min_val=0.0,
        unit=" m",
    )

    r = settings.EARTH_RADIUS + altitude
    v_circ = circular_speed(r)
    print(f"  circular speed at this altitude: {v_circ:.1f} m/s")

    factor = get_float(
        f"Speed as a multiple of {settings.ISS_SPEED:.0f} m/s [default {settings.SPEED_FACTOR}]: ",
        default=settings.SPEED_FACTOR,
        min_val=0.0,
    )

    body = Body(
        settings.DEFAULT_BODY_ID,
        settings.DEFAULT_BODY_MASS,
        settings.initial_position(altitude),
        settings.initial_velocity(factor),
    )
    print(f"Probe initialized at r = {r:.1f} m, speed {factor * settings.ISS_SPEED:.1f} m/s")
    return body


def create_schedule(steps):
    """Optional single burn; Enter skips it."""
    print("\nBurn (thrust along velocity)")
    print("  +1) Prograde   -1) Retrograde   0) None")
    direction = get_int("Burn direction [default 0]: ", default=0, min_val=-1, max_val=1)
    schedule = BurnSchedule()
    if direction == 0:
        return schedule

    start = get_int(f"Burn start tick [0..{steps - 1}, default 0]: ", default=0, min_val=0, max_val=steps - 1)
    duration = get_int("Burn duration in ticks [default 10]: ", default=10, min_val=1, unit=" ticks")
    schedule.add_burn(start, duration, ThrustCommand(direction))
    return schedule


def run_cli():
    """
    Collect a run configuration.
    Returns (body, schedule, steps, integrator).
    """
    body = create_body()
    steps = get_int(f"\nTicks to simulate [default {settings.STEPS}]: ", default=settings.STEPS, min_val=1, unit=" ticks")
    schedule = create_schedule(steps)
    integrator = choose_integrator()
    return body, schedule, steps, integrator
