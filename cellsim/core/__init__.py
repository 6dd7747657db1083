"""Core simulation — cells, movement schedules, food map, population, engine."""

from cellsim.core.cell import Cell
from cellsim.core.engine import CellularSimulator
from cellsim.core.errors import InvariantViolation
from cellsim.core.schedule import Direction, MovementSchedule, MovementStep

__all__ = [
    "Cell",
    "CellularSimulator",
    "Direction",
    "InvariantViolation",
    "MovementSchedule",
    "MovementStep",
]
