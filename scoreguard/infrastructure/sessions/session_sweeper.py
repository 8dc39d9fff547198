"""Background task that evicts abandoned game sessions"""

import asyncio
import contextlib
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Run a sweep callable on a fixed interval until stopped

    Owned by the application lifespan. Tests call `sweep_once()` directly
    instead of waiting on the timer.
    """

    def __init__(self, sweep: Callable[[], int], interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("Sweep interval must be positive")
        self._sweep = sweep
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the sweep loop on the running event loop"""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info(f"Session sweeper started (every {self.interval_seconds:.0f}s)")

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish"""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Session sweeper stopped")

    def sweep_once(self) -> int:
        return self._sweep()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.sweep_once()
            except Exception as e:
                # Keep sweeping; a failed pass is retried on the next tick
                logger.error(f"Error sweeping expired sessions: {e}")
