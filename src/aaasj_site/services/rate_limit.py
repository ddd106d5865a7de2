"""Fixed-window request rate limiting."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass
class _Window:
    count: int
    resets_at: datetime


@dataclass
class FixedWindowRateLimiter:
    """In-memory limiter allowing ``max_requests`` per client per window."""

    window_seconds: int
    max_requests: int
    _windows: dict[str, _Window]

    def __init__(self, window_seconds: int, max_requests: int) -> None:
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._windows = {}

    def is_limited(self, client_key: str, now: datetime | None = None) -> bool:
        """Count a request and report whether the client is over its quota."""
        current = now or datetime.now(tz=UTC)
        window = self._windows.get(client_key)
        if window is None or current > window.resets_at:
            self._windows[client_key] = _Window(
                count=1,
                resets_at=current + timedelta(seconds=self.window_seconds),
            )
            self._prune(current)
            return False
        if window.count >= self.max_requests:
            return True
        window.count += 1
        return False

    def _prune(self, now: datetime) -> None:
        expired = [
            key for key, window in self._windows.items() if now > window.resets_at
        ]
        for key in expired:
            self._windows.pop(key, None)
