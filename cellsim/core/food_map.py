"""Food map — the shared, depletable energy field cells feed from.

This module provides:
- A dense grid of food levels, one value per world coordinate
- Area absorption that empties the queried cells
- Uniform regrowth up to a per-cell maximum
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger()


class FoodMap:
    """Grid of food levels indexed by integer (x, y) world coordinates.

    Coordinates outside [0, width) x [0, height) hold no food.
    """

    def __init__(
        self,
        width: int = 400,
        height: int = 400,
        initial_food: float = 1.0,
        max_food: float = 1.0,
    ) -> None:
        """Initialize the food map.

        Args:
            width: Number of columns.
            height: Number of rows.
            initial_food: Food level every grid cell starts with.
            max_food: Upper bound for any single grid cell.
        """
        if width < 1 or height < 1:
            raise ValueError(f"food map must be at least 1x1, got {width}x{height}")
        if max_food < 0 or initial_food < 0:
            raise ValueError("food levels must be non-negative")

        self.width = width
        self.height = height
        self.max_food = max_food

        start = min(initial_food, max_food)
        self._grid: list[list[float]] = [[start] * width for _ in range(height)]

    def absorb_from_area(self, min_x: int, max_x: int, min_y: int, max_y: int) -> float:
        """Remove and return all food in [min_x, max_x) x [min_y, max_y).

        The area is clipped to the map; an area entirely off the map
        yields 0.

        Returns:
            Total food absorbed, always >= 0.
        """
        x0 = max(min_x, 0)
        x1 = min(max_x, self.width)
        y0 = max(min_y, 0)
        y1 = min(max_y, self.height)

        if x0 >= x1 or y0 >= y1:
            return 0.0

        absorbed = 0.0
        for y in range(y0, y1):
            row = self._grid[y]
            absorbed += sum(row[x0:x1])
            row[x0:x1] = [0.0] * (x1 - x0)

        return absorbed

    def regrow(self, rate: float) -> None:
        """Add `rate` food to every grid cell, capped at max_food."""
        if rate <= 0:
            return
        cap = self.max_food
        for row in self._grid:
            for x, level in enumerate(row):
                if level < cap:
                    row[x] = min(level + rate, cap)

    def food_at(self, x: int, y: int) -> float:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._grid[y][x]
        return 0.0

    def set_food(self, x: int, y: int, amount: float) -> None:
        """Set the food level of one grid cell, clamped to [0, max_food]."""
        self._grid[y][x] = min(max(amount, 0.0), self.max_food)

    def total_food(self) -> float:
        return sum(sum(row) for row in self._grid)

    def clear(self) -> None:
        """Empty every grid cell."""
        for row in self._grid:
            row[:] = [0.0] * self.width
        logger.info("food_map_cleared")
