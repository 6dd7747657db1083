"""Unit tests for Direction and MovementSchedule."""

from __future__ import annotations

import pytest

from cellsim.core.errors import InvariantViolation
from cellsim.core.random_source import SeededRandom
from cellsim.core.schedule import Direction, MovementSchedule, MovementStep


class SequenceRandom:
    """RandomSource that replays fixed values, modulo the requested bound."""

    def __init__(self, values: list[int]) -> None:
        self.values = list(values)
        self.calls: list[int] = []

    def next_int(self, bound: int) -> int:
        self.calls.append(bound)
        return self.values.pop(0) % bound


def test_direction_codes():
    """Direction values keep their numeric codes."""
    assert [d.value for d in Direction] == [0, 1, 2, 3, 4]
    assert Direction(0) is Direction.NONE


def test_direction_deltas():
    """UP moves toward -y, DOWN toward +y, NONE stays put."""
    assert Direction.NONE.delta == (0, 0)
    assert Direction.UP.delta == (0, -1)
    assert Direction.DOWN.delta == (0, 1)
    assert Direction.LEFT.delta == (-1, 0)
    assert Direction.RIGHT.delta == (1, 0)


def test_default_schedule():
    """Default schedule is a 4-step square of 20 ticks each."""
    schedule = MovementSchedule.default()

    assert [s.direction for s in schedule.steps] == [
        Direction.UP,
        Direction.RIGHT,
        Direction.DOWN,
        Direction.LEFT,
    ]
    assert [s.duration for s in schedule.steps] == [20, 20, 20, 20]
    assert schedule.total_duration() == 80
    assert len(schedule) == 4


def test_default_schedule_is_never_stationary():
    """Default schedule has no NONE steps, so its stationary fraction is exactly 0."""
    assert MovementSchedule.default().stationary_fraction() == 0.0


def test_default_schedules_are_independent():
    """Each call returns a fresh schedule."""
    a = MovementSchedule.default()
    b = MovementSchedule.default()
    a.steps[0].duration = 3

    assert b.steps[0].duration == 20


def test_stationary_fraction_mixed():
    """Stationary fraction is NONE duration over total duration."""
    schedule = MovementSchedule(
        [
            MovementStep(Direction.NONE, 30),
            MovementStep(Direction.UP, 10),
            MovementStep(Direction.NONE, 10),
        ]
    )

    assert schedule.stationary_fraction() == pytest.approx(0.8)


def test_stationary_fraction_all_none():
    """A schedule of only NONE steps is fully stationary."""
    schedule = MovementSchedule([MovementStep(Direction.NONE, 100)])

    assert schedule.stationary_fraction() == 1.0


def test_empty_schedule_rejected():
    """An empty schedule breaks the construction contract."""
    with pytest.raises(InvariantViolation):
        MovementSchedule([])


def test_zero_duration_rejected():
    """Durations must be strictly positive."""
    with pytest.raises(InvariantViolation):
        MovementSchedule([MovementStep(Direction.UP, 0)])


def test_in_place_edit_requires_recompute():
    """Mutating a step does not refresh the cached fraction until recompute is called."""
    schedule = MovementSchedule(
        [MovementStep(Direction.NONE, 10), MovementStep(Direction.UP, 10)]
    )
    assert schedule.stationary_fraction() == pytest.approx(0.5)

    schedule.steps[1].direction = Direction.NONE
    assert schedule.stationary_fraction() == pytest.approx(0.5)

    assert schedule.recompute_stationary_fraction() == pytest.approx(1.0)
    assert schedule.stationary_fraction() == pytest.approx(1.0)


def test_recompute_detects_zero_total():
    """Editing every duration to zero is caught on recompute."""
    schedule = MovementSchedule([MovementStep(Direction.UP, 5)])
    schedule.steps[0].duration = 0

    with pytest.raises(InvariantViolation):
        schedule.recompute_stationary_fraction()


def test_set_steps_recomputes():
    """Replacing the steps refreshes the stationary fraction."""
    schedule = MovementSchedule.default()
    schedule.set_steps([MovementStep(Direction.NONE, 4), MovementStep(Direction.LEFT, 4)])

    assert schedule.stationary_fraction() == pytest.approx(0.5)
    assert len(schedule) == 2


def test_current_direction():
    """current_direction returns the step's direction and rejects bad indexes."""
    schedule = MovementSchedule.default()

    assert schedule.current_direction(0) == Direction.UP
    assert schedule.current_direction(3) == Direction.LEFT
    with pytest.raises(IndexError):
        schedule.current_direction(4)
    with pytest.raises(IndexError):
        schedule.current_direction(-1)


def test_random_schedule_draws():
    """random() draws the step count, then a direction and duration per step."""
    # count = 1 + 1, then (RIGHT, 1 + 6), (NONE, 1 + 9)
    rng = SequenceRandom([1, 4, 6, 0, 9])

    schedule = MovementSchedule.random(rng)

    assert rng.calls == [9, 5, 10, 5, 10]
    assert [(s.direction, s.duration) for s in schedule.steps] == [
        (Direction.RIGHT, 7),
        (Direction.NONE, 10),
    ]
    assert schedule.stationary_fraction() == pytest.approx(10 / 17)


def test_random_schedule_bounds():
    """Random schedules stay within 1-9 steps and 1-10 tick durations."""
    rng = SeededRandom(42)

    for _ in range(200):
        schedule = MovementSchedule.random(rng)
        assert 1 <= len(schedule) <= 9
        assert all(1 <= s.duration <= 10 for s in schedule.steps)
        assert 0.0 <= schedule.stationary_fraction() <= 1.0


def test_from_pairs():
    """from_pairs accepts raw (direction_code, duration) tuples."""
    schedule = MovementSchedule.from_pairs([(0, 3), (4, 1)])

    assert schedule.steps == [
        MovementStep(Direction.NONE, 3),
        MovementStep(Direction.RIGHT, 1),
    ]
