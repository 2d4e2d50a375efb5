"""Fixed-window request counter for coarse per-client throttling."""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from resume_ai.config import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS
from resume_ai.errors import RateLimitExceeded
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    """
    Counts requests per client inside fixed windows of ``window_seconds``.
    Create one per process and pass it to call sites; ``clock`` is injectable for tests.
    """

    def __init__(
        self,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def _current_window(self, client_id: str, now: float) -> _Window:
        window = self._windows.get(client_id)
        if window is None or now - window.started_at >= self.window_seconds:
            window = _Window(started_at=now)
            self._windows[client_id] = window
        return window

    def check(self, client_id: str) -> bool:
        """Count one request for client_id; False when its window is already full."""
        with self._lock:
            window = self._current_window(client_id, self._clock())
            if window.count >= self.max_requests:
                return False
            window.count += 1
            return True

    def retry_after(self, client_id: str) -> int:
        """Whole seconds until client_id's window resets (0 if it has room)."""
        with self._lock:
            now = self._clock()
            window = self._current_window(client_id, now)
            if window.count < self.max_requests:
                return 0
            return max(1, math.ceil(window.started_at + self.window_seconds - now))

    def hit(self, client_id: str) -> None:
        if not self.check(client_id):
            retry_after = self.retry_after(client_id)
            logger.warning(
                "Rate limit exceeded for %s: %s/%ss, retry after %ss",
                client_id,
                self.max_requests,
                self.window_seconds,
                retry_after,
            )
            raise RateLimitExceeded(self.max_requests, self.window_seconds, retry_after)

    def cleanup(self) -> int:
        """Drop windows that have expired; returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, w in self._windows.items() if now - w.started_at >= self.window_seconds]
            for key in expired:
                del self._windows[key]
        if expired:
            logger.debug("Cleaned up %s expired rate limit windows", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)
