"""Rate limiting middleware for login, registration and booking.

Fixed-window counters per client IP and endpoint, kept in process memory.
Each API worker counts independently.
"""

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for a rate limit rule."""

    requests: int  # Number of allowed requests
    window_seconds: int  # Time window in seconds


@dataclass
class RateLimitEntry:
    """Tracking entry for rate limit state."""

    count: int = 0
    window_start: float = field(default_factory=time.time)


def default_rate_limits() -> dict[tuple[str, str], RateLimitConfig]:
    """Limits for login, registration and booking, taken from settings."""
    return {
        ("POST", "/api/v1/auth/login"): RateLimitConfig(
            requests=settings.login_rate_limit_per_minute, window_seconds=60
        ),
        ("POST", "/api/v1/auth/register"): RateLimitConfig(
            requests=settings.register_rate_limit_per_hour, window_seconds=3600
        ),
        ("POST", "/api/v1/appointments"): RateLimitConfig(
            requests=settings.booking_rate_limit_per_hour, window_seconds=3600
        ),
    }


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request.

    Handles X-Forwarded-For header for reverse proxy scenarios.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain (original client)
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


class InMemoryRateLimitStorage:
    """In-memory fixed-window counters."""

    def __init__(self, cleanup_interval: int = 300) -> None:
        self._storage: dict[str, RateLimitEntry] = defaultdict(RateLimitEntry)
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def _cleanup_expired(self, max_window: int = 3600) -> None:
        """Remove expired entries to prevent memory growth."""
        now = time.time()
        if now - self._last_cleanup < self._cleanup_interval:
            return

        expired_keys = [
            key
            for key, entry in self._storage.items()
            if now - entry.window_start > max_window
        ]
        for key in expired_keys:
            del self._storage[key]

        self._last_cleanup = now

    def check_and_increment(
        self, key: str, limit: int, window_seconds: int
    ) -> tuple[bool, int, int]:
        """Check rate limit and increment counter.

        Returns:
            Tuple of (is_allowed, remaining_requests, reset_seconds)
        """
        self._cleanup_expired()

        now = time.time()
        entry = self._storage[key]

        if now - entry.window_start > window_seconds:
            entry.count = 1
            entry.window_start = now
            return True, limit - 1, window_seconds

        reset = max(int(window_seconds - (now - entry.window_start)), 1)

        if entry.count < limit:
            entry.count += 1
            return True, limit - entry.count, reset

        return False, 0, reset


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies per-IP rate limits to configured endpoints.

    Returns 429 Too Many Requests with ``Retry-After`` when a limit is hit.
    """

    def __init__(
        self,
        app,
        rate_limits: dict[tuple[str, str], RateLimitConfig] | None = None,
        storage: InMemoryRateLimitStorage | None = None,
        enabled: bool = True,
    ) -> None:
        super().__init__(app)
        self.rate_limits = rate_limits or default_rate_limits()
        self.storage = storage or InMemoryRateLimitStorage()
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self.enabled:
            return await call_next(request)

        method = request.method
        path = request.url.path.rstrip("/") or "/"

        config = self.rate_limits.get((method, path))
        if not config:
            return await call_next(request)

        client_ip = get_client_ip(request)
        key = f"{method}:{path}:{client_ip}"

        is_allowed, remaining, reset = self.storage.check_and_increment(
            key, config.requests, config.window_seconds
        )

        if not is_allowed:
            logger.warning(f"Rate limit exceeded: {method} {path} from {client_ip}")

            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Too many requests. Please try again later.",
                    "retry_after": reset,
                },
                headers={
                    "Retry-After": str(reset),
                    "X-RateLimit-Limit": str(config.requests),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(reset),
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(config.requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(reset)

        return response
