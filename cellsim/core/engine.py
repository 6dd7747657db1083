"""Simulation driver — tick loop and population lifecycle.

This module provides the CellularSimulator class which owns the food map
and the cell population and delivers one update per live cell per tick.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from cellsim.config import Settings
from cellsim.core.cell import Cell
from cellsim.core.food_map import FoodMap
from cellsim.core.population import CellCollection
from cellsim.core.random_source import RandomSource, SeededRandom
from cellsim.core.schedule import MovementSchedule
from cellsim.core.telemetry import WorldSnapshot, collect_snapshot

logger = structlog.get_logger()


class CellularSimulator:
    """Runs the world tick loop.

    Coordinates:
    - Initial population spawning
    - Per-tick cell updates (move, absorb, divide, metabolise)
    - Deferred births and deaths
    - Food regrowth
    - Statistics and telemetry logging
    """

    def __init__(
        self,
        settings: Settings,
        food_map: Optional[FoodMap] = None,
        cells: Optional[CellCollection] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """Initialize the simulator.

        Args:
            settings: Simulation settings.
            food_map: Shared food field; built from settings if None.
            cells: Live population; empty if None.
            rng: Randomness for spawning and cells; seeded from settings.seed if None.
        """
        self.settings = settings
        self.food_map = food_map or FoodMap(
            width=settings.world_width,
            height=settings.world_height,
            initial_food=settings.initial_food,
            max_food=settings.max_food,
        )
        self.cells = cells if cells is not None else CellCollection()
        self.rng = rng if rng is not None else SeededRandom(settings.seed)

        self.tick_counter = 0
        self.running = False

        # Reset after each snapshot
        self.births = 0
        self.deaths = 0
        self.last_snapshot: Optional[WorldSnapshot] = None

    def spawn_initial_population(self) -> list[Cell]:
        """Create settings.initial_population cells at random positions.

        Returns:
            The spawned cells.
        """
        spawned = []
        for _ in range(self.settings.initial_population):
            x = self.rng.next_int(self.settings.world_width)
            y = self.rng.next_int(self.settings.world_height)
            schedule = None
            if self.settings.random_schedules:
                schedule = MovementSchedule.random(self.rng)

            cell = Cell(
                x,
                y,
                self.rng,
                schedule=schedule,
                metabolic_rate=self.settings.metabolic_rate,
                footprint_size=self.settings.footprint_size,
            )
            self.cells.add(cell)
            spawned.append(cell)

        logger.info(
            "initial_population_spawned",
            count=len(spawned),
            random_schedules=self.settings.random_schedules,
        )
        return spawned

    def step(self) -> None:
        """Advance the world by one tick.

        Cells are updated in insertion order. Births and deaths raised
        during the pass are applied once every cell has been updated, so
        newborns first move on the following tick.
        """
        self.tick_counter += 1

        try:
            with self.cells.iterating() as snapshot:
                for cell in snapshot:
                    cell.update(self.food_map, self.cells)
        except Exception as exc:
            logger.error(
                "tick_error",
                tick=self.tick_counter,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise

        born, died = self.cells.last_flush
        self.births += born
        self.deaths += died

        self.food_map.regrow(self.settings.food_regrowth_rate)

        if self.tick_counter % self.settings.stats_interval == 0:
            self._log_statistics()

        if self.tick_counter % self.settings.snapshot_interval_ticks == 0:
            self._collect_telemetry()

    async def run(self, max_ticks: Optional[int] = None) -> None:
        """Main simulation loop.

        Runs until stop() is called, the population dies out, or
        max_ticks ticks have elapsed.

        Args:
            max_ticks: Optional tick limit for this call.
        """
        self.running = True
        logger.info("simulator_starting", tick_rate_ms=self.settings.tick_rate_ms)

        if self.cells.count() == 0:
            self.spawn_initial_population()

        budget_sec = self.settings.tick_rate_ms / 1000.0
        ticks_run = 0

        while self.running:
            if max_ticks is not None and ticks_run >= max_ticks:
                break

            loop = asyncio.get_running_loop()
            tick_start = loop.time()

            self.step()
            ticks_run += 1

            if self.cells.count() == 0:
                logger.info("population_extinct", tick=self.tick_counter)
                break

            tick_duration = loop.time() - tick_start
            if budget_sec and tick_duration > budget_sec:
                logger.warning(
                    "tick_overrun",
                    tick=self.tick_counter,
                    duration_ms=tick_duration * 1000,
                    budget_ms=self.settings.tick_rate_ms,
                )

            await asyncio.sleep(max(0.0, budget_sec - tick_duration))

        self.running = False
        logger.info("simulator_stopped", tick=self.tick_counter, cells=self.cells.count())

    def stop(self) -> None:
        """Stop the simulation loop after the current tick."""
        logger.info("simulator_stopping", tick=self.tick_counter)
        self.running = False

    def _log_statistics(self) -> None:
        cells = self.cells.alive()
        avg_energy = 0.0
        if cells:
            avg_energy = sum(c.energy for c in cells) / len(cells)

        logger.info(
            "simulation_stats",
            tick=self.tick_counter,
            cells=len(cells),
            avg_energy=round(avg_energy, 1),
            food=round(self.food_map.total_food(), 1),
        )

    def _collect_telemetry(self) -> WorldSnapshot:
        """Record a snapshot and reset the birth/death counters."""
        snapshot = collect_snapshot(self)
        self.last_snapshot = snapshot
        self.births = 0
        self.deaths = 0

        logger.info(
            "telemetry_snapshot",
            tick=snapshot.tick,
            cell_count=snapshot.cell_count,
            avg_energy=snapshot.avg_energy,
            total_food=snapshot.total_food,
            births=snapshot.births,
            deaths=snapshot.deaths,
        )
        return snapshot
