"""
Fixed-Window Rate Limiter

Per-client submission throttling owned by the submission pipeline.

Responsibility:
    - Count requests per client address within a fixed window
    - Reject once the count exceeds the configured ceiling
    - Start a fresh window on the first request after the previous one expired

Architecture Notes:
    - Application Layer service, injected into SubmissionPipeline
    - Process-local and ephemeral (counters are lost on restart)
    - Read-modify-write per request; a race between concurrent requests from the
      same address can over- or under-count by one, bounded by the window

Configuration:
    - RATE_LIMIT_MAX_REQUESTS (default 10)
    - RATE_LIMIT_WINDOW_SECONDS (default 900 = 15 minutes)
"""

import logging
import math
import os
import time
from dataclasses import dataclass
from typing import Callable, Optional

from src.domain.shared.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."


@dataclass
class _WindowState:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """
    Fixed-window request counter keyed by client address.

    The window opens with the first request from an address and lasts
    `window_seconds`. Requests 1..max_requests pass; later requests in the same
    window raise RateLimitExceededError. Rejected requests still count.

    Attributes:
        max_requests: Ceiling per window
        window_seconds: Window length in seconds

    Examples:
        >>> limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60)
        >>> limiter.hit("10.0.0.1")
        1
        >>> limiter.hit("10.0.0.1")
        2
        >>> limiter.hit("10.0.0.1")
        Traceback (most recent call last):
        ...
        RateLimitExceededError: Too many requests. Please try again later.
    """

    def __init__(
        self,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize limiter.

        Args:
            max_requests: Ceiling per window (default from env: RATE_LIMIT_MAX_REQUESTS or 10)
            window_seconds: Window length (default from env: RATE_LIMIT_WINDOW_SECONDS or 900)
            clock: Time source returning seconds since the epoch
        """
        self.max_requests = max_requests or int(
            os.getenv("RATE_LIMIT_MAX_REQUESTS", "10")
        )
        self.window_seconds = window_seconds or float(
            os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900")
        )
        self._clock = clock
        self._windows: dict[str, _WindowState] = {}

    def hit(self, client_address: str) -> int:
        """
        Record one request for a client.

        Args:
            client_address: Caller's address (any stable client key)

        Returns:
            Request count within the current window

        Raises:
            RateLimitExceededError: If the count exceeds max_requests
        """
        now = self._clock()
        self._evict_expired(now)

        state = self._windows.get(client_address)
        if state is None or now > state.reset_at:
            state = _WindowState(count=1, reset_at=now + self.window_seconds)
            self._windows[client_address] = state
        else:
            state.count += 1

        if state.count > self.max_requests:
            retry_after = max(1, math.ceil(state.reset_at - now))
            logger.warning(
                f"Rate limit exceeded for {client_address}: "
                f"{state.count}/{self.max_requests} requests, retry in {retry_after}s"
            )
            raise RateLimitExceededError(
                RATE_LIMIT_MESSAGE,
                client_address=client_address,
                retry_after=retry_after,
            )

        return state.count

    def remaining(self, client_address: str) -> int:
        """Requests left in the client's current window."""
        state = self._windows.get(client_address)
        if state is None or self._clock() > state.reset_at:
            return self.max_requests
        return max(0, self.max_requests - state.count)

    def reset(self, client_address: Optional[str] = None) -> None:
        """Forget one client's window, or all windows when no address is given."""
        if client_address is None:
            self._windows.clear()
        else:
            self._windows.pop(client_address, None)

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, state in self._windows.items() if now > state.reset_at]
        for key in expired:
            del self._windows[key]
