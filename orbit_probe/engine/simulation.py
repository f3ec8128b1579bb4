"""
Tick driver for one or more probes around a fixed central body.

Per tick and per body:
- advance the current State one solver step under that body's thrust command
- push the new State into the body's history
- forecast a zero-thrust lookahead from the new State

Bodies never share state; the forecast for one body cannot touch another.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from orbit_probe.config import settings
from orbit_probe.engine.predictor import LookaheadPredictor
from orbit_probe.models.body import Body
from orbit_probe.physics.forces import default_force_model
from orbit_probe.physics.solver import make_solver
from orbit_probe.physics.state import State
from orbit_probe.physics.thrust import ThrustCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Frame:
    """Everything the drawing collaborator needs for one body after one tick."""
    body_id: object
    thrust: ThrustCommand
    state: State
    history: Tuple[State, ...]
    lookahead: np.ndarray


class Simulation:
    def __init__(self, solver, predictor: LookaheadPredictor, bodies: Iterable[Body] = ()):
        self.solver = solver
        self.predictor = predictor
        self.bodies: Dict[object, Body] = {}
        self.tick_count = 0
        for body in bodies:
            self.add_body(body)

    @classmethod
    def from_settings(cls, bodies: Optional[Iterable[Body]] = None, integrator: Optional[str] = None):
        """
        Build force model, solver and predictor from settings.
        Installs Body.default() when no bodies are given.
        """
        settings.validate_settings()
        solver = make_solver(integrator or settings.INTEGRATOR, default_force_model(), settings.DT)
        predictor = LookaheadPredictor(solver, settings.N_LOOKAHEAD)
        if bodies is None:
            bodies = [Body.default()]
        return cls(solver, predictor, bodies)

    def add_body(self, body: Body) -> None:
        if body.id in self.bodies:
            raise ValueError(f"Duplicate body id: {body.id!r}")
        self.bodies[body.id] = body

    def get_body(self, body_id) -> Body:
        return self.bodies[body_id]

    def advance(self, body: Body, thrust=ThrustCommand.NONE) -> Tuple[State, Tuple[State, ...]]:
        """Step the body forward and record the new State. Returns (state, history newest-first)."""
        command = ThrustCommand.parse(thrust)
        body.current_state = self.solver.step(body.current_state, command)
        body.update_history()
        return body.current_state, body.history.read()

    def predict(self, state: State) -> np.ndarray:
        return self.predictor.predict(state)

    def tick(self, commands: Optional[Mapping[object, ThrustCommand]] = None) -> List[Frame]:
        """
        Advance every body once, in insertion order. Bodies missing from
        `commands` coast (ThrustCommand.NONE).
        """
        commands = commands or {}
        unknown = [body_id for body_id in commands if body_id not in self.bodies]
        if unknown:
            raise KeyError(f"Thrust commands for unknown body ids: {unknown!r}")
        frames = []
        for body_id, body in self.bodies.items():
            command = ThrustCommand.parse(commands.get(body_id, ThrustCommand.NONE))
            state, history = self.advance(body, command)
            lookahead = self.predict(state)
            frames.append(Frame(body_id, command, state, history, lookahead))
        self.tick_count += 1
        logger.debug("tick %d: %d bodies advanced", self.tick_count, len(frames))
        return frames
