"""
Fixed-window rate limiter guarding calls to the Google Custom Search API.
Two independent windows: one second (burst cap) and one local calendar day (free-tier quota).
In-memory, single process; fails fast instead of queuing.
"""
import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from tools.errors import RateLimitExceeded

logger = logging.getLogger(__name__)

# Google API free tier allows 100 search queries per day
DEFAULT_PER_SECOND = 5
DEFAULT_PER_DAY = 100
SECOND_WINDOW_SEC = 1.0


def start_of_day(ts: float) -> float:
    """Epoch seconds of local midnight for the day containing ts."""
    return datetime.fromtimestamp(ts).replace(hour=0, minute=0, second=0, microsecond=0).timestamp()


@dataclass(frozen=True)
class RateCounters:
    """Point-in-time copy of the limiter state."""
    second_count: int
    daily_count: int
    second_window_start: float
    day_window_start: float


class RateLimiter:
    """
    admit() either counts the call against both windows or raises RateLimitExceeded.
    A rejected call is not counted.
    """

    def __init__(
        self,
        per_second: int = DEFAULT_PER_SECOND,
        per_day: int = DEFAULT_PER_DAY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if per_second < 1 or per_day < 1:
            raise ValueError("Rate limit caps must be at least 1")
        self.per_second = per_second
        self.per_day = per_day
        self._clock = clock
        self._lock = threading.Lock()
        now = clock()
        self._second_count = 0
        self._daily_count = 0
        self._second_window_start = now
        self._day_window_start = start_of_day(now)

    def _roll_windows(self, now: float) -> None:
        if now - self._second_window_start > SECOND_WINDOW_SEC:
            self._second_count = 0
            self._second_window_start = now
        today = start_of_day(now)
        if today > self._day_window_start:
            self._daily_count = 0
            self._day_window_start = today

    def admit(self) -> None:
        with self._lock:
            self._roll_windows(self._clock())
            if self._daily_count >= self.per_day:
                logger.warning("rate_limit_daily_exceeded: %s/%s", self._daily_count, self.per_day)
                raise RateLimitExceeded(
                    f"Rate limit exceeded: daily quota of {self.per_day} requests reached. Try again tomorrow."
                )
            if self._second_count >= self.per_second:
                logger.warning("rate_limit_second_exceeded: %s/%s", self._second_count, self.per_second)
                raise RateLimitExceeded(
                    f"Rate limit exceeded: at most {self.per_second} requests per second. Try again shortly."
                )
            self._second_count += 1
            self._daily_count += 1

    def snapshot(self) -> RateCounters:
        with self._lock:
            return RateCounters(
                second_count=self._second_count,
                daily_count=self._daily_count,
                second_window_start=self._second_window_start,
                day_window_start=self._day_window_start,
            )
