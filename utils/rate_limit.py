"""
===============================================================================
Artb Fixed-Window Rate Limiting
===============================================================================
Per-client request counters for the AI and form route classes.

Each limiter owns a table of windows keyed by client address. A window opens
on the first hit, counts every request until ``window_seconds`` have elapsed,
then starts over. Windows live for the process lifetime only.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Dict

from flask import g, request

from utils.errors import RateLimitExceeded

logger = logging.getLogger(__name__)

# Expired windows are dropped once the table grows past this many keys
PRUNE_THRESHOLD = 1024


@dataclass
class RateLimitWindow:
    started_at: float
    count: int = 0


@dataclass(frozen=True)
class RateLimitStatus:
    """Outcome of a single hit, used for the decision and response headers."""

    allowed: bool
    limit: int
    remaining: int
    reset_in: float

    @property
    def reset_seconds(self) -> int:
        return max(0, math.ceil(self.reset_in))


class FixedWindowRateLimiter:
    """
    Thread-safe fixed-window counter.

    Args:
        name (str): Limiter name used in logs.
        window_seconds (float): Window length.
        max_requests (int): Requests allowed per key and window.
        message (str): Client-facing rejection message.
        clock (callable): Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        name: str,
        window_seconds: float,
        max_requests: int,
        message: str,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.message = message
        self._clock = clock
        self._windows: Dict[str, RateLimitWindow] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitStatus:
        """Count one request for ``key`` and report whether it is allowed."""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now - window.started_at >= self.window_seconds:
                if len(self._windows) >= PRUNE_THRESHOLD:
                    self._prune(now)
                window = RateLimitWindow(started_at=now)
                self._windows[key] = window
            window.count += 1
            count = window.count
            reset_in = window.started_at + self.window_seconds - now

        return RateLimitStatus(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_in=reset_in,
        )

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float) -> None:
        # Caller holds the lock
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


def client_key() -> str:
    """Client network identity for the current request."""
    return request.remote_addr or "unknown"


def rate_limited(limiter_name: str):
    """
    Route decorator applying the named limiter from the app's services.

    Rejections raise ``RateLimitExceeded`` before the view body runs, so no
    payload is read and no external call is made.
    """
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            # utils.services imports this module
            from utils.services import get_services

            limiter = get_services().limiters[limiter_name]
            key = client_key()
            status = limiter.hit(key)
            g.rate_limit_status = status
            if not status.allowed:
                logger.info("Rate limit '%s' exceeded for %s", limiter.name, key)
                raise RateLimitExceeded(limiter.message, retry_after=status.reset_seconds)
            return view(*args, **kwargs)
        return wrapped
    return decorator


def apply_rate_limit_headers(response):
    """``after_request`` hook adding RateLimit-* headers on limited routes."""
    status = g.get("rate_limit_status")
    if status is not None:
        response.headers["RateLimit-Limit"] = str(status.limit)
        response.headers["RateLimit-Remaining"] = str(status.remaining)
        response.headers["RateLimit-Reset"] = str(status.reset_seconds)
    return response
