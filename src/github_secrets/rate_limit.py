"""Client-side rate limiting for GitHub API calls.

GitHub allows 5000 authenticated requests per hour. The limiter keeps a
sliding window of request start times and a count of requests in flight,
and suspends callers of :meth:`RateLimiter.acquire` until both limits allow
another request.
"""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable

from icecream import ic

REQUESTS_PER_HOUR = 5000
WINDOW_SECONDS = 3600.0
MAX_CONCURRENT_REQUESTS = 5
POLL_INTERVAL_SECONDS = 0.1


class RateLimiter:
    """Sliding-window and concurrency limiter.

    All state changes happen between awaits, so callers sharing one event
    loop never observe a half-updated limiter.

    Attributes:
        max_per_window: Maximum request starts within ``window`` seconds.
        window: Length of the sliding window in seconds.
        max_concurrent: Maximum requests in flight at once.
        poll_interval: Sleep between checks while at the concurrency limit.

    """

    def __init__(
        self,
        *,
        max_per_window: int = REQUESTS_PER_HOUR,
        window: float = WINDOW_SECONDS,
        max_concurrent: int = MAX_CONCURRENT_REQUESTS,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.max_per_window = max_per_window
        self.window = window
        self.max_concurrent = max_concurrent
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._in_flight = 0

    def __repr__(self) -> str:
        return (
            f"RateLimiter(in_flight={self._in_flight}/{self.max_concurrent}, "
            f"window_count={len(self._timestamps)}/{self.max_per_window}, window={self.window}s)"
        )

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def window_count(self) -> int:
        """Number of request starts recorded in the current window."""
        self._prune(self._clock())
        return len(self._timestamps)

    def _prune(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.window:
            self._timestamps.popleft()

    async def acquire(self) -> None:
        """Wait until a request may start, then record it.

        Suspends while ``max_concurrent`` requests are in flight (polling
        every ``poll_interval`` seconds) and while ``max_per_window``
        requests have started within the trailing window (sleeping until
        the oldest one leaves the window).
        """
        while True:
            now = self._clock()
            self._prune(now)

            if self._in_flight >= self.max_concurrent:
                await self._sleep(self.poll_interval)
                continue

            if len(self._timestamps) >= self.max_per_window:
                delay = self.window - (now - self._timestamps[0])
                ic(delay)
                await self._sleep(delay)
                continue

            self._timestamps.append(now)
            self._in_flight += 1
            return

    def release(self) -> None:
        """Mark a request as finished. Extra releases are ignored."""
        if self._in_flight > 0:
            self._in_flight -= 1

    async def __aenter__(self) -> "RateLimiter":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.release()
