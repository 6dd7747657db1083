"""Injectable randomness for cells, schedules and the simulator."""

from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Uniform integer generator used by every random decision in the core."""

    def next_int(self, bound: int) -> int:
        """Return an integer drawn uniformly from [0, bound)."""
        ...


class SeededRandom:
    """RandomSource backed by a private random.Random instance.

    Passing the same seed yields the same sequence, which keeps whole
    simulation runs reproducible.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)
