# tracker/auth/rate_limit.py
"""
Login rate limiting.

Each client key gets a fixed window that opens on its first attempt. Once
the allowed attempts are used up, further attempts are refused until the
window closes. A successful login clears the key.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from tracker.common.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_WINDOW_SECONDS = 15 * 60


@dataclass
class AttemptWindow:
    count: int
    reset_at: float


class AttemptStore(Protocol):
    def get(self, key: str) -> Optional[AttemptWindow]: ...

    def set(self, key: str, window: AttemptWindow) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryAttemptStore:
    """Dict-backed AttemptStore holding at most max_keys clients (oldest evicted first)."""

    def __init__(self, max_keys: int = 10_000) -> None:
        self.max_keys = max_keys
        self._windows: "OrderedDict[str, AttemptWindow]" = OrderedDict()

    def get(self, key: str) -> Optional[AttemptWindow]:
        return self._windows.get(key)

    def set(self, key: str, window: AttemptWindow) -> None:
        self._windows[key] = window
        self._windows.move_to_end(key)
        while len(self._windows) > self.max_keys:
            self._windows.popitem(last=False)

    def delete(self, key: str) -> None:
        self._windows.pop(key, None)

    def __len__(self) -> int:
        return len(self._windows)


class LoginRateLimiter:
    """Fixed-window attempt counter with an injectable clock and store."""

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        store: Optional[AttemptStore] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.store = store if store is not None else MemoryAttemptStore()
        self.clock = clock

    def hit(self, key: str) -> None:
        """
        Count one login attempt for key.

        Raises:
            RateLimitExceededError: When the key has no attempts left in its window
        """
        now = self.clock()
        window = self.store.get(key)

        if window is None or now > window.reset_at:
            self.store.set(key, AttemptWindow(count=1, reset_at=now + self.window_seconds))
            return

        if window.count >= self.max_attempts:
            retry_after = max(int(window.reset_at - now), 0)
            logger.warning(f"Rate limit exceeded for {key}")
            raise RateLimitExceededError(key, retry_after)

        window.count += 1
        self.store.set(key, window)

    def reset(self, key: str) -> None:
        self.store.delete(key)
