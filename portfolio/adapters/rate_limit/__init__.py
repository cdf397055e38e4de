"""Rate limiting adapters.

This package keeps the limiter behind a small interface so the in-memory
implementation can later be replaced by a shared store without changing
the API layer.
"""

from portfolio.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from portfolio.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = ["AbstractRateLimiter", "InMemoryFixedWindowRateLimiter", "RateLimitResult"]
