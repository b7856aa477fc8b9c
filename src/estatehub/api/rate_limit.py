"""
Request Rate Limiting

Fixed-window request counters keyed by client address. One limiter caps all
API traffic; a stricter one guards the login endpoint.
"""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fastapi import HTTPException, Request, status

from config.settings import settings
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RateLimitResult:
    """Outcome of a single hit against a limiter."""
    allowed: bool
    limit: int
    remaining: int
    retry_after: int


class RateLimiter:
    """
    In-process fixed-window counter.

    Each key gets `limit` hits per `window_seconds`; the window starts at
    the key's first hit and resets once it has elapsed.
    """

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        """Record one request for key and report whether it is allowed."""
        now = self._clock()
        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            self._prune(now)

        retry_after = max(1, int(started + self.window_seconds - now))
        return RateLimitResult(
            allowed=count <= self.limit,
            limit=self.limit,
            remaining=max(0, self.limit - count),
            retry_after=retry_after,
        )

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float) -> None:
        # Drop expired windows once the table grows; caller holds the lock.
        if len(self._windows) < 10000:
            return
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]


general_limiter = RateLimiter(settings.rate_limit_requests, settings.rate_limit_window_seconds)
auth_limiter = RateLimiter(settings.rate_limit_auth_requests, settings.rate_limit_window_seconds)


def client_key(request: Request) -> str:
    """Client address used as the limiter key."""
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def enforce_auth_rate_limit(request: Request) -> None:
    """
    Dependency applying the stricter authentication cap.

    Raises:
        HTTPException: 429 when the client has exhausted its login attempts
    """
    if not settings.rate_limit_enabled:
        return
    key = client_key(request)
    result = auth_limiter.hit(key)
    if not result.allowed:
        logger.warning("rate_limit_exceeded", scope="auth", client=key, path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts, please try again later",
            headers={"Retry-After": str(result.retry_after)},
        )
