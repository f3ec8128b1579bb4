# orbit_probe/physics/solver.py
import math

from orbit_probe.physics.state import (
    State,
    add_derivatives,
    add_state_derivative,
    scale_derivative,
)
from orbit_probe.physics.thrust import ThrustCommand


def _checked_dt(dt):
    dt = float(dt)
    if not (dt > 0 and math.isfinite(dt)):
        raise ValueError(f"Time step must be a finite value > 0, got {dt!r}")
    return dt


class RK4Solver:
    """
    Runge-Kutta 4th order solver with a fixed step.
    The thrust command is held constant across the four stages.
    """
    def __init__(self, force_model, dt):
        self.force = force_model
        self.dt = _checked_dt(dt)

    def step(self, state, thrust=ThrustCommand.NONE):
        """
        Perform a single RK4 step.
        """
        dt = self.dt

        def deriv(s):
            return self.force.derivative(s, thrust)

        k1 = deriv(state)
        k2 = deriv(add_state_derivative(state, scale_derivative(k1, 0.5 * dt)))
        k3 = deriv(add_state_derivative(state, scale_derivative(k2, 0.5 * dt)))
        k4 = deriv(add_state_derivative(state, scale_derivative(k3, dt)))

        combined = add_derivatives(k1, scale_derivative(k2, 2.0), scale_derivative(k3, 2.0), k4)
        return add_state_derivative(state, scale_derivative(combined, dt / 6.0))


class TaylorSolver:
    """
    Constant-acceleration step: acceleration sampled once at the start of the step.
        v' = v + a*dt
        r' = r + v*dt + a*dt^2/2
    Cheaper than RK4 but drifts off a circular orbit much faster.
    """
    def __init__(self, force_model, dt):
        self.force = force_model
        self.dt = _checked_dt(dt)

    def step(self, state, thrust=ThrustCommand.NONE):
        dt = self.dt
        a = self.force.acceleration(state, thrust)
        return State(state.r + state.v * dt + 0.5 * a * dt * dt, state.v + a * dt)


SOLVERS = {
    "rk4": RK4Solver,
    "taylor": TaylorSolver,
}


def make_solver(name, force_model, dt):
    try:
        cls = SOLVERS[name.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown integrator: {name!r} (expected one of {sorted(SOLVERS)})") from None
    return cls(force_model, dt)
