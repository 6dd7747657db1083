"""Telemetry — point-in-time snapshots of the simulated population.

Snapshots are logged by the simulator at a fixed tick interval and are
useful for tracking boom/bust cycles in the population.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cellsim.core.engine import CellularSimulator


@dataclass
class WorldSnapshot:
    """Snapshot of world state at a specific tick.

    Attributes:
        tick: Simulation tick number when snapshot was taken
        cell_count: Number of living cells
        avg_energy: Average energy across living cells
        total_food: Food remaining on the map
        births: Divisions since the last snapshot
        deaths: Starvations since the last snapshot
        timestamp: Unix timestamp when snapshot was collected
    """

    tick: int
    cell_count: int
    avg_energy: float
    total_food: float
    births: int
    deaths: int
    timestamp: float


def collect_snapshot(simulator: CellularSimulator) -> WorldSnapshot:
    """Collect a snapshot of the current world state.

    Note:
        Birth and death counters are read, not reset. The caller resets
        them once the snapshot has been recorded.
    """
    cells = simulator.cells.alive()
    cell_count = len(cells)

    avg_energy = 0.0
    if cell_count > 0:
        avg_energy = sum(c.energy for c in cells) / cell_count

    return WorldSnapshot(
        tick=simulator.tick_counter,
        cell_count=cell_count,
        avg_energy=round(avg_energy, 2),
        total_food=round(simulator.food_map.total_food(), 2),
        births=simulator.births,
        deaths=simulator.deaths,
        timestamp=time.time(),
    )
