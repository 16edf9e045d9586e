"""
quotesync periodic sync trigger.
"""

from __future__ import annotations

import asyncio
import contextlib

from quotesync.core.logging import get_logger
from quotesync.sync.engine import Sleep, SyncEngine, SyncSummary

logger = get_logger(__name__)


class PeriodicSync:
    """Runs the engine immediately and then once per interval on the event loop."""

    def __init__(
        self,
        engine: SyncEngine,
        interval_seconds: float = 60.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.engine = engine
        self.interval_seconds = interval_seconds
        self.sleep = sleep
        self.ticks = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info("Periodic sync started", interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Periodic sync stopped", ticks=self.ticks)

    async def trigger(self) -> SyncSummary:
        """Run one sync now, outside the timer."""
        return await self.engine.sync()

    async def _loop(self) -> None:
        while True:
            self.ticks += 1
            try:
                summary = await self.engine.sync()
                logger.debug("Periodic sync tick", tick=self.ticks, outcome=summary.outcome.name)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Periodic sync tick failed", tick=self.ticks)
            await self.sleep(self.interval_seconds)
