# =============================================================================
# core/services/scheduler.py - Hourly Temp Cleanup Scheduler
# =============================================================================
# Background asyncio task that empties the temp directory at a fixed minute
# past every hour. Owned by the application lifespan: started on startup,
# cancelled on shutdown. Tests call tick() directly instead of waiting.
#
# Usage:
#   scheduler = CleanupScheduler(Path("tmp"))
#   scheduler.start()
#   ...
#   await scheduler.stop()
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from pathlib import Path

from core.services.temp_cleanup import CleanupReport, purge_temp_dir

logger = logging.getLogger(__name__)


def seconds_until_next_run(now: datetime, minute: int = 0) -> float:
    """
    Seconds from `now` until the next wall-clock HH:`minute`:00.

    Always positive: exactly on the mark means the following hour.
    """
    target = now.replace(minute=minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(hours=1)
    return (target - now).total_seconds()


class CleanupScheduler:
    """
    Runs purge_temp_dir once per hour for the lifetime of the app.

    Ticks execute sequentially in a single loop, so two runs never overlap.
    """

    def __init__(self, directory: Path, minute: int = 0):
        self.directory = Path(directory)
        self.minute = minute
        self._task: asyncio.Task | None = None
        self._shutdown_event: asyncio.Event | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> CleanupReport:
        """Run one cleanup in a worker thread and log a summary."""
        report = await asyncio.to_thread(purge_temp_dir, self.directory)

        if report.existed and report.error is None:
            logger.info(
                f"Temp cleanup removed {len(report.deleted)} of "
                f"{len(report.outcomes)} entries in {self.directory}"
            )
        return report

    def start(self) -> None:
        """Spawn the background loop. Must be called from a running event loop."""
        if self.running:
            return
        self._shutdown_event = asyncio.Event()
        self._task = asyncio.create_task(self._run())
        logger.info(f"Temp cleanup scheduled hourly at minute {self.minute} for {self.directory}")

    async def stop(self) -> None:
        """Signal shutdown and wait for the loop to exit."""
        if self._shutdown_event:
            self._shutdown_event.set()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._shutdown_event = None

    async def _run(self) -> None:
        try:
            while True:
                delay = seconds_until_next_run(datetime.now(), self.minute)
                try:
                    await asyncio.wait_for(self._shutdown_event.wait(), timeout=delay)
                    break
                except asyncio.TimeoutError:
                    pass

                try:
                    await self.tick()
                except Exception as e:
                    logger.error(f"Temp cleanup tick failed: {e}")

        except asyncio.CancelledError:
            logger.info("Temp cleanup scheduler cancelled")
            raise
