"""
Project settings (constants + small helpers).
Units: meters (m), seconds (s), kilograms (kg), meters/second (m/s).
"""
from __future__ import annotations

import math
import os

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
RUN_ID_PREFIX = "run"
VALIDATE_ON_IMPORT = False

# Earth (central body, fixed at the origin)
G = 6.6743e-11  # m^3 kg^-1 s^-2
EARTH_MASS = 5.972e24
GM = G * EARTH_MASS
EARTH_RADIUS = 6.371e6

# Integration
DT = 7.0  # simulated seconds per tick (not wall-clock)
INTEGRATOR = "rk4"
INTEGRATORS = ("rk4", "taylor")

# Thrust: fixed tangential acceleration magnitude
THRUST = 2.0  # m/s^2

# Trail / forecast sizes
N_HISTORY = 21
N_LOOKAHEAD = 1000

# Headless run
STEPS = 2000
PROGRESS_EVERY = 500

# Initial probe (ISS-like altitude, 10 % faster than the ISS)
DEFAULT_BODY_ID = 1
DEFAULT_BODY_MASS = 1.0
DEFAULT_ALTITUDE = 408_000.0
ISS_SPEED = 7660.0
SPEED_FACTOR = 1.1

# Display hints for the drawing collaborator (unused by the integrator)
VIEW_EXTENT = 6.0 * EARTH_RADIUS
BODY_MARKER_RADIUS = 50_000.0
THRUSTING_MARKER_RADIUS = 100_000.0
TRAIL_MARKER_RADIUS = 10_000.0


def initial_position(altitude: float | None = None) -> tuple[float, float]:
    alt = DEFAULT_ALTITUDE if altitude is None else float(altitude)
    return 0.0, EARTH_RADIUS + alt


def initial_velocity(speed_factor: float | None = None) -> tuple[float, float]:
    k = SPEED_FACTOR if speed_factor is None else float(speed_factor)
    return k * ISS_SPEED, 0.0


def validate_settings() -> None:
    if not (DT > 0 and math.isfinite(DT)):
        raise ValueError("DT must be a finite value > 0")
    if GM <= 0:
        raise ValueError("GM must be > 0")
    if EARTH_RADIUS <= 0:
        raise ValueError("EARTH_RADIUS must be > 0")
    if THRUST < 0:
        raise ValueError("THRUST must be >= 0")
    if N_HISTORY <= 0:
        raise ValueError("N_HISTORY must be > 0")
    if N_LOOKAHEAD <= 0:
        raise ValueError("N_LOOKAHEAD must be > 0")
    if STEPS <= 0:
        raise ValueError("STEPS must be > 0")
    if PROGRESS_EVERY <= 0:
        raise ValueError("PROGRESS_EVERY must be > 0")
    if DEFAULT_ALTITUDE <= -EARTH_RADIUS:
        raise ValueError("DEFAULT_ALTITUDE must keep the probe away from the origin")
    if INTEGRATOR not in INTEGRATORS:
        raise ValueError(f"INTEGRATOR must be one of {INTEGRATORS}, got {INTEGRATOR!r}")


if VALIDATE_ON_IMPORT:
    validate_settings()
