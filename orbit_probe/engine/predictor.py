"""
Lookahead predictor: where the probe would go if thrust were released now.

Runs the solver forward with ThrustCommand.NONE from a private copy of the
given State. Nothing it computes is written back to a Body.
"""
from numbers import Integral
from typing import Iterator

import numpy as np

from orbit_probe.physics.thrust import ThrustCommand


class LookaheadPredictor:
    def __init__(self, solver, steps: int):
        if isinstance(steps, bool) or not isinstance(steps, Integral):
            raise ValueError(f"Lookahead steps must be an integer, got {steps!r}")
        steps = int(steps)
        if steps <= 0:
            raise ValueError("Lookahead steps must be > 0")
        self.solver = solver
        self.steps = steps

    def iter_predict(self, state) -> Iterator[np.ndarray]:
        """Yield `steps` future positions, one per zero-thrust solver step."""
        s = state.copy()
        for _ in range(self.steps):
            s = self.solver.step(s, ThrustCommand.NONE)
            yield s.r

    def predict(self, state) -> np.ndarray:
        """Return the forecast as a (steps, 2) array of positions."""
        out = np.empty((self.steps, 2), dtype=float)
        for i, position in enumerate(self.iter_predict(state)):
            out[i] = position
        return out
