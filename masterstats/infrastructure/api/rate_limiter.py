"""Sliding-window rate limiting for the game-data API."""
import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    limit: int
    seconds: float
    calls: Deque[float] = field(default_factory=deque)

    def prune(self, now: float) -> None:
        while self.calls and now - self.calls[0] > self.seconds:
            self.calls.popleft()

    def has_room(self) -> bool:
        return len(self.calls) < self.limit

    def wait_time(self, now: float) -> float:
        if self.has_room() or not self.calls:
            return 0.0
        return self.seconds - (now - self.calls[0]) + 0.01


class RateLimiter:
    """Limiter enforcing several windows at once.

    The API publishes an application limit as pairs such as
    "20 per 1 second" and "100 per 120 seconds"; a call is allowed only
    when every window has room.
    """

    def __init__(self, windows: Iterable[Tuple[int, float]]):
        self._windows: List[_Window] = [_Window(limit, seconds) for limit, seconds in windows]
        if not self._windows:
            raise ValueError("a rate limiter needs at least one window")
        self._lock = asyncio.Lock()

    @classmethod
    def per_second_and_two_minutes(cls, requests_per_1_sec: int, requests_per_2_min: int) -> 'RateLimiter':
        return cls([(requests_per_1_sec, 1.0), (requests_per_2_min, 120.0)])

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = time.monotonic()
                for window in self._windows:
                    window.prune(now)
                if all(window.has_room() for window in self._windows):
                    for window in self._windows:
                        window.calls.append(now)
                    return
                wait = max(0.05, max(window.wait_time(now) for window in self._windows))
                logger.debug(f"Rate limit, waiting {wait:.2f}s")
                await asyncio.sleep(wait)

    def usage(self) -> List[Tuple[int, int, float]]:
        """``(used, limit, window_seconds)`` for every window."""
        now = time.monotonic()
        return [
            (sum(1 for t in w.calls if now - t <= w.seconds), w.limit, w.seconds)
            for w in self._windows
        ]

    async def reset(self) -> None:
        async with self._lock:
            for window in self._windows:
                window.calls.clear()


class EndpointRateLimiter:
    """Per-endpoint rate limiters falling back to a shared default."""

    def __init__(self, default: Optional[RateLimiter] = None):
        self.limiters: Dict[str, RateLimiter] = {}
        self._default = default

    def set_default_limiter(self, limiter: RateLimiter) -> None:
        self._default = limiter

    def add_endpoint_limiter(self, endpoint: str, limiter: RateLimiter) -> None:
        self.limiters[endpoint] = limiter

    def _limiter_for(self, endpoint: str) -> Optional[RateLimiter]:
        return self.limiters.get(endpoint, self._default)

    async def acquire(self, endpoint: str = "default") -> None:
        limiter = self._limiter_for(endpoint)
        if limiter:
            await limiter.acquire()

    async def reset_endpoint(self, endpoint: str = "default") -> None:
        limiter = self._limiter_for(endpoint)
        if limiter:
            await limiter.reset()
