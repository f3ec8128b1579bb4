# orbit_probe/physics/utils.py
import math

import numpy as np

from orbit_probe.config import settings


def radius(state):
    return float(np.linalg.norm(state.r))


def speed(state):
    return float(np.linalg.norm(state.v))


def altitude(state, body_radius=None):
    re = settings.EARTH_RADIUS if body_radius is None else body_radius
    return radius(state) - re


def specific_energy(state, gm=None):
    """
    Specific mechanical energy (kinetic + point-mass potential).
    Used as a numerical drift diagnostic: constant under zero thrust for an exact integrator.
    """
    mu = settings.GM if gm is None else gm
    return 0.5 * float(np.dot(state.v, state.v)) - mu / radius(state)


def angular_momentum(state):
    """Scalar specific angular momentum h = x*vy - y*vx (positive counter-clockwise)."""
    return state.x * state.vy - state.y * state.vx


def circular_speed(r, gm=None):
    mu = settings.GM if gm is None else gm
    if r <= 0:
        raise ValueError("Orbital radius must be > 0")
    return math.sqrt(mu / r)


def orbital_period(r, gm=None):
    """Period of a circular orbit of radius r."""
    mu = settings.GM if gm is None else gm
    if r <= 0:
        raise ValueError("Orbital radius must be > 0")
    return 2.0 * math.pi * math.sqrt(r**3 / mu)
