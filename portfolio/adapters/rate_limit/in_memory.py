"""In-memory fixed-window rate limiter.

State lives in this process only, so N workers allow N times the limit.
Each key's window opens at its own first request, not on a wall-clock grid.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from portfolio.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult

logger = logging.getLogger(__name__)


@dataclass
class _WindowState:
    window_start: float
    count: int


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Counts requests per key inside a fixed window that starts at the first hit.

    Every call is counted, including rejected ones, so a client hammering the
    endpoint keeps its counter above the limit until the window runs out.

    Expired entries are dropped by an access-triggered sweep that runs at most
    once per ``sweep_interval_seconds``; pass ``0`` to keep entries for the
    lifetime of the process.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        sweep_interval_seconds: float = 0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of requests allowed per window.
            window_seconds: Length of the window in seconds.
            sweep_interval_seconds: Minimum spacing between sweeps of expired keys.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit, window_seconds or sweep_interval_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if sweep_interval_seconds < 0:
            raise ValueError("sweep_interval_seconds must be >= 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._sweep_interval = sweep_interval_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}
        self._last_sweep = clock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    def _is_expired(self, state: _WindowState, now: float) -> bool:
        return now >= state.window_start + self._window_seconds

    def _sweep_locked(self, now: float) -> None:
        if not self._sweep_interval or now - self._last_sweep < self._sweep_interval:
            return
        expired = [k for k, s in self._state_by_key.items() if self._is_expired(s, now)]
        for key in expired:
            del self._state_by_key[key]
        self._last_sweep = now
        if expired:
            logger.debug("rate_limit.swept", extra={"evicted": len(expired), "tracked": len(self._state_by_key)})

    def consume(self, key: str) -> RateLimitResult:
        """Count one request for ``key``.

        A missing or expired record opens a new window with a count of 1.
        Otherwise the count is incremented and the request is allowed only
        while the count stays within the limit.
        """
        now = self._clock()

        with self._lock:
            self._sweep_locked(now)

            state = self._state_by_key.get(key)
            if state is None or self._is_expired(state, now):
                state = _WindowState(window_start=now, count=1)
                self._state_by_key[key] = state
            else:
                state.count += 1

            reset_at = state.window_start + self._window_seconds
            remaining = max(0, self._limit - state.count)

            if state.count <= self._limit:
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=remaining,
                    reset_at=int(math.ceil(reset_at)),
                    retry_after_seconds=None,
                )

            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=0,
                reset_at=int(math.ceil(reset_at)),
                retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
            )

    def reset(self) -> None:
        with self._lock:
            self._state_by_key.clear()
            self._last_sweep = self._clock()
