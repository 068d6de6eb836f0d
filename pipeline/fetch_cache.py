import time
from typing import Awaitable, Callable, Optional

from cachetools import TTLCache

from scraper.image_fetcher import FetchedImage

_KEY = "latest"


class LastFetchCache:
    """
    The most recent successful fetch, shared by the scheduled cycle and the
    /subscribe handler so a new subscriber does not trigger a second download.
    """

    def __init__(self, ttl_seconds: float, timer: Callable[[], float] = time.monotonic):
        self._cache = TTLCache(maxsize=1, ttl=ttl_seconds, timer=timer)
        self._timer = timer
        self.fetched_at: Optional[float] = None

    def remember(self, image: FetchedImage):
        self._cache[_KEY] = image
        self.fetched_at = self._timer()

    def get_fresh(self) -> Optional[FetchedImage]:
        return self._cache.get(_KEY)

    async def get_or_fetch(self, fetch: Callable[[], Awaitable[Optional[FetchedImage]]]) -> Optional[FetchedImage]:
        image = self.get_fresh()
        if image is not None:
            return image

        image = await fetch()
        if image is not None:
            self.remember(image)
        return image
