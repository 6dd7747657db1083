"""Movement schedules — the repeating patrol path a cell follows.

A schedule is an ordered, cyclic list of (direction, duration) steps.
The fraction of the total duration spent standing still drives both the
absorption bonus and the metabolic discount a cell receives.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

from cellsim.core.errors import InvariantViolation
from cellsim.core.random_source import RandomSource


class Direction(IntEnum):
    """Unit move applied once per tick. NONE keeps the cell in place."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) for one tick of movement. Screen coordinates: UP is -y."""
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NONE: (0, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass
class MovementStep:
    """Hold `direction` for `duration` ticks."""

    direction: Direction
    duration: int


class MovementSchedule:
    """Cyclic list of movement steps with a cached stationary fraction.

    The stationary fraction is computed when the steps are set. Editing a
    MovementStep in place does NOT refresh it; call
    recompute_stationary_fraction() after any such edit.
    """

    DEFAULT_DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)
    DEFAULT_DURATION = 20

    MAX_RANDOM_STEPS = 9
    MAX_RANDOM_DURATION = 10

    def __init__(self, steps: Iterable[MovementStep]) -> None:
        """Initialize the schedule.

        Args:
            steps: Ordered movement steps. Must be non-empty, every
                duration at least 1.

        Raises:
            InvariantViolation: If the steps are empty or a duration is < 1.
        """
        self.steps: list[MovementStep] = []
        self._stationary_fraction = 0.0
        self.set_steps(steps)

    @classmethod
    def default(cls) -> MovementSchedule:
        """Square patrol: UP, RIGHT, DOWN, LEFT, 20 ticks each."""
        return cls(MovementStep(d, cls.DEFAULT_DURATION) for d in cls.DEFAULT_DIRECTIONS)

    @classmethod
    def random(cls, rng: RandomSource) -> MovementSchedule:
        """Build a schedule of 1-9 steps with random directions and 1-10 tick durations.

        Args:
            rng: Source of randomness.

        Returns:
            A new MovementSchedule.
        """
        count = rng.next_int(cls.MAX_RANDOM_STEPS) + 1
        steps = []
        for _ in range(count):
            direction = Direction(rng.next_int(len(Direction)))
            duration = rng.next_int(cls.MAX_RANDOM_DURATION) + 1
            steps.append(MovementStep(direction, duration))
        return cls(steps)

    @classmethod
    def from_pairs(cls, pairs: Sequence[tuple[int, int]]) -> MovementSchedule:
        """Build a schedule from raw (direction_code, duration) pairs."""
        return cls(MovementStep(Direction(d), int(n)) for d, n in pairs)

    def set_steps(self, steps: Iterable[MovementStep]) -> None:
        """Replace all steps and recompute the stationary fraction."""
        new_steps = list(steps)
        if not new_steps:
            raise InvariantViolation("movement schedule must contain at least one step")
        for index, step in enumerate(new_steps):
            if step.duration < 1:
                raise InvariantViolation(
                    f"step {index} has duration {step.duration}; durations must be >= 1"
                )
        self.steps = new_steps
        self.recompute_stationary_fraction()

    def recompute_stationary_fraction(self) -> float:
        """Refresh the cached stationary fraction from the current steps.

        Returns:
            The new stationary fraction.

        Raises:
            InvariantViolation: If the steps now total zero duration.
        """
        total = self.total_duration()
        if total <= 0:
            raise InvariantViolation("movement schedule has zero total duration")
        stationary = sum(s.duration for s in self.steps if s.direction == Direction.NONE)
        self._stationary_fraction = stationary / total
        return self._stationary_fraction

    def stationary_fraction(self) -> float:
        """Fraction of the schedule's total duration spent with direction NONE."""
        return self._stationary_fraction

    def total_duration(self) -> int:
        return sum(s.duration for s in self.steps)

    def current_direction(self, step_index: int) -> Direction:
        """Direction of the step at step_index. Raises IndexError when out of range."""
        if not 0 <= step_index < len(self.steps):
            raise IndexError(f"step index {step_index} out of range for {len(self.steps)} steps")
        return self.steps[step_index].direction

    def duration_at(self, step_index: int) -> int:
        return self.steps[step_index].duration

    def __len__(self) -> int:
        return len(self.steps)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{s.direction.name}x{s.duration}" for s in self.steps)
        return f"MovementSchedule([{pairs}], stationary={self._stationary_fraction:.2f})"
