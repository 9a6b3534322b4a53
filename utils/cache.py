import enum
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from config.settings import CACHE_TTL_SECONDS
from models.article import AggregateResult

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Loader = Callable[[datetime], AggregateResult]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheState(enum.Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


class NewsCache:
    """
    Holds the last aggregate result and refreshes it once it is older than the TTL.

    Refreshes are single-flight: callers that find the cache stale while
    another refresh is running wait for it and reuse its result instead of
    starting their own.
    """

    def __init__(
        self,
        loader: Loader,
        ttl: timedelta = timedelta(seconds=CACHE_TTL_SECONDS),
        clock: Clock = utc_now,
    ):
        self.loader = loader
        self.ttl = ttl
        self.clock = clock
        self._payload: Optional[AggregateResult] = None
        self._fetched_at: Optional[datetime] = None
        self._lock = threading.Lock()

    @property
    def payload(self) -> Optional[AggregateResult]:
        return self._payload

    @property
    def fetched_at(self) -> Optional[datetime]:
        return self._fetched_at

    def state(self, now: Optional[datetime] = None) -> CacheState:
        if self._payload is None or self._fetched_at is None:
            return CacheState.EMPTY
        now = now or self.clock()
        if now - self._fetched_at >= self.ttl:
            return CacheState.STALE
        return CacheState.FRESH

    def age_seconds(self, now: Optional[datetime] = None) -> Optional[int]:
        """Whole seconds since the last refresh, or None if never refreshed."""
        if self._fetched_at is None:
            return None
        now = now or self.clock()
        return int((now - self._fetched_at).total_seconds())

    def get(self) -> AggregateResult:
        """
        Return the cached result, refreshing it first if it is empty or stale.

        Raises:
            Exception: Whatever the loader raises; the previous result is kept.
        """
        if self.state() is CacheState.FRESH:
            logger.info("Returning cached news data")
            return self._payload

        with self._lock:
            # Another caller may have refreshed while we waited for the lock
            if self.state() is CacheState.FRESH:
                logger.info("Returning news data refreshed by a concurrent request")
                return self._payload
            return self._refresh_locked()

    def refresh(self) -> AggregateResult:
        """Refresh unconditionally, regardless of the cache state."""
        with self._lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> AggregateResult:
        now = self.clock()
        logger.info("Fetching fresh news data")
        result = self.loader(now)
        self._payload = result
        self._fetched_at = now
        return result
