import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from pipeline.fetch_cache import LastFetchCache
from pipeline.notifier import ImageNotifier, NotifyReport
from scraper.image_fetcher import FetchedImage

logger = logging.getLogger("PIPELINE")


class WatchPipeline:
    """
    One fetch-and-notify cycle at startup, then one per interval.
    Overlapping ticks are dropped rather than queued.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Optional[FetchedImage]]],
        notifier: ImageNotifier,
        cache: LastFetchCache,
        interval_seconds: float,
    ):
        self.fetch = fetch
        self.notifier = notifier
        self.cache = cache
        self.interval_seconds = interval_seconds
        self.last_cycle_at: Optional[datetime] = None
        self.last_report: Optional[NotifyReport] = None
        self._cycle_lock = asyncio.Lock()

    async def run_cycle(self) -> Optional[NotifyReport]:
        if self._cycle_lock.locked():
            logger.warning("Previous cycle still running, skipping this tick.")
            return None

        async with self._cycle_lock:
            logger.info("CHECK CYCLE START")
            self.last_cycle_at = datetime.now(timezone.utc)

            image = await self.fetch()
            if image is None:
                logger.info("CHECK CYCLE DONE (no image yet)")
                return None

            self.cache.remember(image)
            report = await self.notifier.notify_subscribers(image)
            self.last_report = report
            logger.info("CHECK CYCLE DONE")
            return report

    async def wait_idle(self):
        """Block until an in-flight cycle (if any) has finished."""
        async with self._cycle_lock:
            pass

    async def run_forever(self):
        logger.info(f"PIPELINE STARTED (interval {self.interval_seconds}s)")
        while True:
            try:
                await self.run_cycle()
            except Exception as e:
                logger.error(f"PIPELINE ERROR {e}", exc_info=True)
            await asyncio.sleep(self.interval_seconds)
