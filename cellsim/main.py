"""cellsim entry point — headless simulation runner.

Can be run directly via `python -m cellsim.main`. Settings come from
CELLSIM_* environment variables or a .env file.
"""

from __future__ import annotations

import asyncio
import signal
from typing import Optional

import structlog

from cellsim import __version__
from cellsim.config import Settings
from cellsim.core.engine import CellularSimulator
from cellsim.log_config import configure_logging

logger = structlog.get_logger()


class SimulationRunner:
    """Manages simulator lifecycle and graceful shutdown."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.simulator: Optional[CellularSimulator] = None

    async def run(self, max_ticks: Optional[int] = None) -> None:
        """Build the simulator and run it until stopped or extinct."""
        configure_logging(self.settings.log_level)
        logger.info("cellsim_starting", version=__version__, seed=self.settings.seed)

        self.simulator = CellularSimulator(self.settings)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.shutdown)
            except NotImplementedError:
                # Not available on Windows event loops
                pass

        await self.simulator.run(max_ticks=max_ticks)

    def shutdown(self) -> None:
        logger.info("shutdown_requested")
        if self.simulator is not None:
            self.simulator.stop()


def main() -> None:
    asyncio.run(SimulationRunner().run())


if __name__ == "__main__":
    main()
