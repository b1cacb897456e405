"""
Per-device write cooldown for resume profile saves.
In-memory and process-local: each worker enforces its own window, state resets on restart.
"""
from __future__ import annotations

import threading
import time
from typing import Callable


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class RateLimiter:
    """
    Allows one accepted write per device token per `window_ms`.
    Constructed once at app startup (see main.lifespan) and injected into the resume router.
    """

    def __init__(self, window_ms: int, clock: Callable[[], float] = _monotonic_ms):
        self.window_ms = window_ms
        self._clock = clock
        self._last_accepted: dict[str, float] = {}
        self._lock = threading.Lock()

    def should_allow(self, token: str | None, now: float | None = None) -> bool:
        """
        True if `token` may write now; records `now` only when allowed.
        Empty/absent tokens are never throttled.
        """
        if not token:
            return True
        if now is None:
            now = self._clock()
        with self._lock:
            last = self._last_accepted.get(token)
            if last is not None and now - last < self.window_ms:
                return False
            self._last_accepted[token] = now
            return True

    def reset(self) -> None:
        with self._lock:
            self._last_accepted.clear()

    def __len__(self) -> int:
        return len(self._last_accepted)
