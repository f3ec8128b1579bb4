# orbit_probe/physics/state.py
import numpy as np


def _frozen_vector(values, label):
    arr = np.array(values, dtype=float)
    if arr.shape != (2,):
        raise ValueError(f"{label} must be a 2D vector, got shape {arr.shape}.")
    arr.flags.writeable = False
    return arr


class State:
    """
    State vector for planar orbital motion.
    [x, y, vx, vy] in meters and meters/second, origin at the central body.

    Immutable: integration always builds a new State.
    """
    __slots__ = ("r", "v")

    def __init__(self, position, velocity):
        object.__setattr__(self, "r", _frozen_vector(position, "Position"))
        object.__setattr__(self, "v", _frozen_vector(velocity, "Velocity"))

    def __setattr__(self, name, value):
        raise AttributeError("State is immutable")

    @classmethod
    def from_components(cls, x, y, vx, vy):
        return cls((x, y), (vx, vy))

    @property
    def x(self):
        return float(self.r[0])

    @property
    def y(self):
        return float(self.r[1])

    @property
    def vx(self):
        return float(self.v[0])

    @property
    def vy(self):
        return float(self.v[1])

    def copy(self):
        return State(self.r.copy(), self.v.copy())

    def as_tuple(self):
        return (self.x, self.y, self.vx, self.vy)

    def __eq__(self, other):
        if not isinstance(other, State):
            return NotImplemented
        return np.array_equal(self.r, other.r) and np.array_equal(self.v, other.v)

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return f"State(x={self.x:.3f}, y={self.y:.3f}, vx={self.vx:.3f}, vy={self.vy:.3f})"


class Derivative:
    """
    Rate of change of a State.

    `velocity` is the derivative of position, `acceleration` the derivative of
    velocity. Combined through the named helpers below when building RK4 stages.
    """
    __slots__ = ("velocity", "acceleration")

    def __init__(self, velocity, acceleration):
        object.__setattr__(self, "velocity", _frozen_vector(velocity, "Velocity"))
        object.__setattr__(self, "acceleration", _frozen_vector(acceleration, "Acceleration"))

    def __setattr__(self, name, value):
        raise AttributeError("Derivative is immutable")

    @property
    def vx(self):
        return float(self.velocity[0])

    @property
    def vy(self):
        return float(self.velocity[1])

    @property
    def ax(self):
        return float(self.acceleration[0])

    @property
    def ay(self):
        return float(self.acceleration[1])

    def __repr__(self):
        return f"Derivative(ax={self.ax:.6g}, ay={self.ay:.6g}, vx={self.vx:.6g}, vy={self.vy:.6g})"


def scale_derivative(d, s):
    return Derivative(d.velocity * s, d.acceleration * s)


def add_derivatives(*ds):
    if not ds:
        raise ValueError("add_derivatives needs at least one Derivative")
    velocity = np.zeros(2, dtype=float)
    acceleration = np.zeros(2, dtype=float)
    for d in ds:
        velocity += d.velocity
        acceleration += d.acceleration
    return Derivative(velocity, acceleration)


def add_state_derivative(state, d):
    """Position advances by the derivative's velocity slot, velocity by its acceleration slot."""
    return State(state.r + d.velocity, state.v + d.acceleration)
