"""Cell collection — the live population with tick-safe add/remove."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import structlog

from cellsim.core.cell import Cell

logger = structlog.get_logger()


class CellCollection:
    """Insertion-ordered set of live cells.

    While a tick is iterating (inside `iterating()`), add() queues births
    and remove() records deaths; both are applied by flush() when the
    iteration ends. The list being iterated is never mutated in place.
    """

    def __init__(self) -> None:
        self._cells: dict[int, Cell] = {}
        self._pending_add: list[Cell] = []
        self._pending_remove: set[int] = set()
        self._iterating = False
        # (added, removed) applied at the end of the most recent iteration
        self.last_flush: tuple[int, int] = (0, 0)

    def add(self, cell: Cell) -> None:
        """Insert a cell so it receives future ticks."""
        if self._iterating:
            self._pending_add.append(cell)
            return
        self._cells[cell.id] = cell

    def remove(self, cell: Cell) -> bool:
        """Exclude a cell from future ticks.

        Removing a cell that is not present is a no-op.

        Returns:
            True if the cell was present (or queued) and is now removed.
        """
        if self._iterating:
            if cell.id in self._cells and cell.id not in self._pending_remove:
                self._pending_remove.add(cell.id)
                return True
            if cell in self._pending_add:
                self._pending_add.remove(cell)
                return True
            return False

        if cell.id not in self._cells:
            logger.debug("cell_remove_skipped", cell_id=cell.id, reason="not_found")
            return False
        del self._cells[cell.id]
        return True

    @contextmanager
    def iterating(self) -> Iterator[list[Cell]]:
        """Yield a snapshot of live cells, deferring structural changes until exit."""
        self._iterating = True
        try:
            yield list(self._cells.values())
        finally:
            self._iterating = False
            self.last_flush = self.flush()

    def flush(self) -> tuple[int, int]:
        """Apply queued additions and removals.

        Returns:
            (added, removed) counts.
        """
        removed = 0
        for cell_id in self._pending_remove:
            if self._cells.pop(cell_id, None) is not None:
                removed += 1
        self._pending_remove.clear()

        added = 0
        for cell in self._pending_add:
            self._cells[cell.id] = cell
            added += 1
        self._pending_add.clear()

        return added, removed

    def alive(self) -> list[Cell]:
        """Snapshot of cells that will receive the next tick."""
        return [c for c in self._cells.values() if c.id not in self._pending_remove]

    def get(self, cell_id: int) -> Cell | None:
        if cell_id in self._pending_remove:
            return None
        return self._cells.get(cell_id)

    def count(self) -> int:
        return len(self._cells) - len(self._pending_remove)

    def clear(self) -> None:
        """Drop every cell, including queued changes."""
        self._cells.clear()
        self._pending_add.clear()
        self._pending_remove.clear()
        logger.info("cell_collection_cleared")

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.alive())

    def __contains__(self, cell: object) -> bool:
        return (
            isinstance(cell, Cell)
            and cell.id in self._cells
            and cell.id not in self._pending_remove
        )
