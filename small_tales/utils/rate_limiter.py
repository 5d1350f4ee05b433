"""Rate Limiter - throttles speech provider calls to stay under the provider's quota."""

import time
from collections import defaultdict
from threading import Lock
from typing import Callable, Optional


class RateLimiter:
    """Thread-safe sliding-window rate limiter.

    Provider calls run in worker threads (``asyncio.to_thread``), so the limiter
    blocks the calling thread, never the event loop. ``clock`` and ``sleep`` are
    injectable so tests can drive it with a fake clock.
    """

    def __init__(
        self,
        max_calls: int = 60,
        time_window: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize rate limiter.

        Args:
            max_calls: Maximum number of calls allowed in time_window
            time_window: Time window in seconds (default: 60 seconds)
            clock: Monotonic clock returning seconds
            sleep: Blocking sleep function
        """
        if max_calls < 1:
            raise ValueError("max_calls must be at least 1")
        self.max_calls = max_calls
        self.time_window = time_window
        self._clock = clock
        self._sleep = sleep

        # Call timestamps per endpoint
        self.calls: defaultdict[str, list[float]] = defaultdict(list)
        self.lock = Lock()

    def _prune(self, endpoint: str, now: float) -> list[float]:
        calls = self.calls[endpoint]
        calls[:] = [call_time for call_time in calls if now - call_time < self.time_window]
        return calls

    def wait_if_needed(self, endpoint: str = "default") -> float:
        """
        Block until a call to endpoint is allowed, then record it.

        Args:
            endpoint: Endpoint identifier (for per-endpoint limiting)

        Returns:
            Seconds spent waiting
        """
        waited = 0.0
        with self.lock:
            now = self._clock()
            calls = self._prune(endpoint, now)

            if len(calls) >= self.max_calls:
                wait_time = (calls[0] + self.time_window) - now
                if wait_time > 0:
                    self._sleep(wait_time)
                    waited = wait_time
                    now = self._clock()
                    calls = self._prune(endpoint, now)

            calls.append(now)
        return waited

    def can_proceed(self, endpoint: str = "default") -> bool:
        """
        Check if a call can proceed without waiting.

        Args:
            endpoint: Endpoint identifier

        Returns:
            True if call can proceed immediately
        """
        with self.lock:
            return len(self._prune(endpoint, self._clock())) < self.max_calls

    def reset(self, endpoint: Optional[str] = None) -> None:
        """
        Reset rate limiter for an endpoint or all endpoints.

        Args:
            endpoint: Endpoint identifier, or None for all endpoints
        """
        with self.lock:
            if endpoint:
                self.calls[endpoint] = []
            else:
                self.calls.clear()


_elevenlabs_limiter: Optional[RateLimiter] = None


def get_elevenlabs_limiter(max_calls: int = 100, time_window: float = 60.0) -> RateLimiter:
    """Get or create the process-wide ElevenLabs rate limiter."""
    global _elevenlabs_limiter
    if _elevenlabs_limiter is None:
        _elevenlabs_limiter = RateLimiter(max_calls=max_calls, time_window=time_window)
    return _elevenlabs_limiter
