"""Tests for the SimulationRunner entry point."""

from __future__ import annotations

import pytest

from cellsim.config import Settings
from cellsim.main import SimulationRunner


@pytest.mark.asyncio
async def test_runner_runs_bounded():
    """The runner builds a simulator and runs it for the requested ticks."""
    settings = Settings(
        tick_rate_ms=0,
        world_width=50,
        world_height=50,
        initial_population=5,
        food_regrowth_rate=1.0,
        seed=3,
        log_level="warning",
    )
    runner = SimulationRunner(settings)

    await runner.run(max_ticks=2)

    assert runner.simulator is not None
    assert runner.simulator.tick_counter == 2


def test_runner_shutdown_without_simulator():
    """shutdown() before run() is harmless."""
    SimulationRunner(Settings()).shutdown()
