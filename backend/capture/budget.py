"""Session-wide capture budget.

The host only allows a handful of visible-area captures per second across
the whole browser session.  :class:`CaptureBudget` enforces that ceiling with
an in-memory sliding window: :meth:`acquire` records the capture, or raises
:class:`~backend.errors.RateLimitedError` when the window is already full.
Callers are expected to back off and retry (see
:mod:`backend.capture.retry`).
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Deque

from backend.errors import RateLimitedError


class CaptureBudget:
    def __init__(
        self,
        max_per_window: int = 2,
        window_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_per_window < 1:
            raise ValueError("max_per_window must be at least 1")
        self._max = max_per_window
        self._window = window_seconds
        self._clock = clock
        self._stamps: Deque[float] = deque()
        self._lock = threading.Lock()

    def acquire(self) -> None:
        """Reserve one capture slot.

        Raises:
            RateLimitedError: The window already holds ``max_per_window``
                captures.
        """
        with self._lock:
            now = self._clock()
            while self._stamps and now - self._stamps[0] >= self._window:
                self._stamps.popleft()
            if len(self._stamps) >= self._max:
                retry_after = self._window - (now - self._stamps[0])
                raise RateLimitedError(
                    f"MAX_CAPTURE_CALLS_PER_SECOND exceeded; retry after {retry_after:.2f}s"
                )
            self._stamps.append(now)
