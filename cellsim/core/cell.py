"""Cell model — the per-tick update cycle of a single simulated organism.

Each tick a cell runs Move -> Absorb -> Divide -> Metabolise, in that
order. Movement follows the cell's MovementSchedule, energy is drawn from
a shared ResourceField, a full cell splits in two and an empty one
removes itself from the PopulationRegistry.
"""

from __future__ import annotations

import itertools
from typing import Optional, Protocol

import structlog

from cellsim.core.random_source import RandomSource
from cellsim.core.schedule import Direction, MovementSchedule

logger = structlog.get_logger()

_cell_ids = itertools.count(1)


class ResourceField(Protocol):
    """Shared, depletable source of energy."""

    def absorb_from_area(self, min_x: int, max_x: int, min_y: int, max_y: int) -> float:
        """Remove and return all energy in the half-open area [min_x, max_x) x [min_y, max_y)."""
        ...


class PopulationRegistry(Protocol):
    """Collection of live cells that receive ticks."""

    def add(self, cell: Cell) -> None:
        ...

    def remove(self, cell: Cell) -> bool:
        ...


class Cell:
    """A single cell in the simulation.

    State that changes every tick:
    - position (x, y), integer grid coordinates
    - step_index / distance_moved, the cell's place in its schedule
    - energy, always within [0, ENERGY_CAP]
    """

    ENERGY_CAP = 1024.0
    DEFAULT_METABOLIC_RATE = 1.2
    DEFAULT_FOOTPRINT = 5

    # Stationary bonus tuning: multiplier = max(coefficient * fraction**4, 1)
    ABSORB_BONUS = 4.0
    METABOLIC_DISCOUNT = 50.0

    def __init__(
        self,
        x: int,
        y: int,
        rng: RandomSource,
        schedule: Optional[MovementSchedule] = None,
        energy: Optional[float] = None,
        metabolic_rate: float = DEFAULT_METABOLIC_RATE,
        footprint_size: int = DEFAULT_FOOTPRINT,
    ) -> None:
        """Initialize a cell.

        Args:
            x: Initial x coordinate.
            y: Initial y coordinate.
            rng: Randomness for the initial energy and division offsets.
            schedule: Movement schedule; the default square patrol if None.
            energy: Starting energy; drawn uniformly from [0, 1024) if None.
            metabolic_rate: Energy spent per tick before any discount.
            footprint_size: Side of the square area absorbed from each tick.
        """
        if metabolic_rate <= 0:
            raise ValueError(f"metabolic_rate must be positive, got {metabolic_rate}")
        if footprint_size < 1:
            raise ValueError(f"footprint_size must be >= 1, got {footprint_size}")

        self.id = next(_cell_ids)
        self._x = int(x)
        self._y = int(y)
        self.rng = rng
        self.schedule = schedule if schedule is not None else MovementSchedule.default()
        self.metabolic_rate = metabolic_rate
        self.footprint_size = footprint_size

        self.step_index = 0
        self.distance_moved = 0

        if energy is None:
            energy = rng.next_int(int(self.ENERGY_CAP))
        self.energy = min(max(float(energy), 0.0), self.ENERGY_CAP)

        self.age = 0
        self._alive = True

    # ==================== Accessors ====================

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def position(self) -> tuple[int, int]:
        """Read-only (x, y) for renderers and queries."""
        return (self._x, self._y)

    def current_direction(self) -> Direction:
        return self.schedule.current_direction(self.step_index)

    def is_alive(self) -> bool:
        return self._alive

    # ==================== Update Cycle ====================

    def update(self, field: ResourceField, registry: PopulationRegistry) -> None:
        """Run one tick: move, absorb, divide, metabolise.

        Does nothing once the cell has died. Errors raised by the field or
        the registry propagate to the caller unchanged.
        """
        if not self._alive:
            return

        self.age += 1
        self.move()
        self.absorb(field)
        self.divide(registry)
        self.metabolise(registry)

    def move(self) -> None:
        """Advance along the schedule by one tick.

        When the current step is complete the cell wraps to the next step
        first, so the boundary tick already moves in the new direction.
        """
        if self.distance_moved >= self.schedule.duration_at(self.step_index):
            self.distance_moved = 0
            self.step_index = (self.step_index + 1) % len(self.schedule)

        dx, dy = self.current_direction().delta
        self._x += dx
        self._y += dy

        self.distance_moved += 1

    def absorb(self, field: ResourceField) -> float:
        """Take energy from the footprint area below the cell.

        Returns:
            The energy gained after any stationary bonus, before capping.
        """
        absorbed = field.absorb_from_area(
            self._x,
            self._x + self.footprint_size,
            self._y,
            self._y + self.footprint_size,
        )

        if self.current_direction() == Direction.NONE:
            absorbed *= self._stationary_multiplier(self.ABSORB_BONUS)

        self.energy = min(self.energy + absorbed, self.ENERGY_CAP)
        return absorbed

    def divide(self, registry: PopulationRegistry) -> Optional[Cell]:
        """Split into two when energy has reached the cap.

        Parent and child each keep half of the energy. The child is placed
        within footprint_size of the parent on both axes and inherits the
        schedule, footprint and metabolic rate.

        Returns:
            The new child, or None if the cell did not divide.
        """
        if self.energy < self.ENERGY_CAP:
            return None

        self.energy = self.energy / 2
        child = self.create_child()
        registry.add(child)

        logger.debug(
            "cell_divided",
            parent_id=self.id,
            child_id=child.id,
            x=child.x,
            y=child.y,
            energy=self.energy,
        )
        return child

    def create_child(self) -> Cell:
        """Build an offspring cell holding this cell's current energy."""
        span = self.footprint_size * 2
        x = self._x + self.rng.next_int(span) - self.footprint_size
        y = self._y + self.rng.next_int(span) - self.footprint_size
        return Cell(
            x,
            y,
            self.rng,
            schedule=self.schedule,
            energy=self.energy,
            metabolic_rate=self.metabolic_rate,
            footprint_size=self.footprint_size,
        )

    def metabolise(self, registry: PopulationRegistry) -> bool:
        """Spend this tick's energy and die if nothing is left.

        Standing still divides the cost by max(50 * fraction**4, 1).

        Returns:
            True if the cell died this tick.
        """
        cost = self.metabolic_rate
        if self.current_direction() == Direction.NONE:
            cost /= self._stationary_multiplier(self.METABOLIC_DISCOUNT)

        self.energy = max(self.energy - cost, 0.0)

        if self.energy == 0:
            self._alive = False
            registry.remove(self)
            logger.debug("cell_died", cell_id=self.id, age=self.age, x=self._x, y=self._y)
            return True
        return False

    # ==================== Internal ====================

    def _stationary_multiplier(self, coefficient: float) -> float:
        """max(coefficient * stationary_fraction**4, 1); never below neutral."""
        return max(coefficient * self.schedule.stationary_fraction() ** 4, 1.0)

    def __repr__(self) -> str:
        return (
            f"Cell(id={self.id}, pos=({self._x}, {self._y}), "
            f"energy={self.energy:.2f}, step={self.step_index}/{len(self.schedule)})"
        )
