# orbit_probe/models/history.py
from collections import deque
from numbers import Integral
from typing import Deque, Iterator, Tuple

import numpy as np

from orbit_probe.physics.state import State


class HistoryBuffer:
    """
    Fixed-capacity record of the most recent States, newest first.

    Slots never pushed are absent rather than zero-filled, so a fresh buffer
    draws no phantom trail at the origin.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, Integral):
            raise ValueError(f"History capacity must be an integer, got {capacity!r}")
        capacity = int(capacity)
        if capacity <= 0:
            raise ValueError("History capacity must be > 0")
        self._states: Deque[State] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._states.maxlen

    def push(self, state: State) -> None:
        # appendleft on a bounded deque drops the oldest entry from the right
        self._states.appendleft(state)

    def read(self) -> Tuple[State, ...]:
        return tuple(self._states)

    def positions(self) -> np.ndarray:
        if not self._states:
            return np.empty((0, 2), dtype=float)
        return np.array([s.r for s in self._states], dtype=float)

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[State]:
        return iter(tuple(self._states))
