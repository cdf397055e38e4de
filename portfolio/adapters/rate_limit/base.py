"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the backing store can be swapped later (e.g., a shared Redis counter)
without touching the routes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single rate limit decision.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Requests left in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the current window ends.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, key: str) -> RateLimitResult:
        """Record one request for ``key`` and decide whether it may proceed.

        Implementations must treat an unknown key as the first request of a
        fresh window and must not raise for any key value.
        """
        raise NotImplementedError

    def check(self, key: str) -> bool:
        """Boolean shorthand for :meth:`consume`."""
        return self.consume(key).allowed

    @abstractmethod
    def reset(self) -> None:
        """Forget every tracked key."""
        raise NotImplementedError
