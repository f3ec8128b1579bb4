# orbit_probe/physics/forces.py
import numpy as np

from orbit_probe.config import settings
from orbit_probe.physics.state import Derivative
from orbit_probe.physics.thrust import ThrustCommand


class DegenerateStateError(ValueError):
    """Raised when a State violates a force-model precondition (r == 0, or v == 0 under thrust)."""


class ForceModel:
    """
    Base force model. Acceleration signature takes the thrust command held for the step.
    """
    def acceleration(self, state, thrust=ThrustCommand.NONE) -> np.ndarray:
        raise NotImplementedError

    def derivative(self, state, thrust=ThrustCommand.NONE) -> Derivative:
        """Velocity feeds position, acceleration feeds velocity."""
        return Derivative(state.v, self.acceleration(state, thrust))


class NewtonianGravity(ForceModel):
    """Point-mass gravity of the central body at the origin."""
    def __init__(self, gm: float = None):
        self.gm = float(settings.GM if gm is None else gm)
        if self.gm <= 0:
            raise ValueError("gm must be > 0")

    def acceleration(self, state, thrust=ThrustCommand.NONE) -> np.ndarray:
        r = state.r
        norm = np.linalg.norm(r)
        if norm == 0:
            raise DegenerateStateError("Position at the origin: gravity is undefined (r == 0).")
        return -(self.gm / norm**3) * r


class TangentialThrust(ForceModel):
    """Fixed-magnitude acceleration along the unit velocity, signed by the command."""
    def __init__(self, magnitude: float = None):
        self.magnitude = float(settings.THRUST if magnitude is None else magnitude)
        if self.magnitude < 0:
            raise ValueError("thrust magnitude must be >= 0")

    def acceleration(self, state, thrust=ThrustCommand.NONE) -> np.ndarray:
        command = int(thrust)
        if command == 0:
            return np.zeros(2, dtype=float)
        velocity = state.v
        v = np.linalg.norm(velocity)
        if v == 0:
            raise DegenerateStateError("Zero velocity under active thrust: direction is undefined (v == 0).")
        return command * self.magnitude * velocity / v


class CompositeForce(ForceModel):
    def __init__(self, *models):
        self.models = list(models)

    def acceleration(self, state, thrust=ThrustCommand.NONE) -> np.ndarray:
        total_a = np.zeros(2, dtype=float)
        for model in self.models:
            total_a += model.acceleration(state, thrust)
        return total_a

    def has_thrust(self) -> bool:
        return any(isinstance(m, TangentialThrust) for m in self.models)


def default_force_model() -> CompositeForce:
    return CompositeForce(NewtonianGravity(), TangentialThrust())
