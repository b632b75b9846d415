"""
Coalesce rapid document changes into one rebuild after a quiet period.
Clock values are passed in, so it runs on the caller's loop without timers or threads.
"""
from __future__ import annotations

import time
from typing import Any, Callable

_MISSING = object()


class RebuildDebouncer:
    def __init__(self, delay: float = 0.3, clock: Callable[[], float] = time.monotonic) -> None:
        self.delay = delay
        self._clock = clock
        self._pending: Any = _MISSING
        self._deadline = 0.0

    @property
    def pending(self) -> bool:
        return self._pending is not _MISSING

    def submit(self, document: Any, now: float | None = None) -> None:
        """Record the latest document; restarts the quiet period."""
        now = self._clock() if now is None else now
        self._pending = document
        self._deadline = now + self.delay

    def poll(self, now: float | None = None) -> tuple[bool, Any]:
        """(True, document) once the quiet period has passed since the last submit; else (False, None)."""
        if self._pending is _MISSING:
            return False, None
        now = self._clock() if now is None else now
        if now < self._deadline:
            return False, None
        document, self._pending = self._pending, _MISSING
        return True, document

    def cancel(self) -> None:
        self._pending = _MISSING
