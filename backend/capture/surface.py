"""Single-slot coordinator for the shared rendering surface.

At most one surface (the headless browser session that hosts hidden pages)
exists at a time.  The slot holds either nothing, a creation in flight, or a
live surface with a count of its current holders, all behind one lock:

* the first caller of :meth:`SurfaceSlot.acquire` creates the surface;
* callers that arrive while creation is in flight wait on the same
  :class:`~concurrent.futures.Future` instead of creating a second one,
  then join as holders of the surface it produced;
* :meth:`SurfaceSlot.release` drops one holder; the surface is closed when
  the last holder lets go, so the next job starts fresh;
* :meth:`SurfaceSlot.session` pairs acquire and release, on error paths too;
* :meth:`SurfaceSlot.shutdown` closes whatever is live, regardless of holders.
"""

from __future__ import annotations

import re
import threading
from concurrent.futures import Future
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, Optional, TypeVar

from backend.errors import SurfaceError

S = TypeVar("S")

_QUOTA_ERROR = re.compile(r"quota|limit", re.IGNORECASE)


def is_quota_error(exc: Exception) -> bool:
    """``True`` when *exc* reads like a resource quota or limit being hit."""
    return bool(_QUOTA_ERROR.search(str(exc)))


class SurfaceSlot(Generic[S]):
    def __init__(
        self,
        create: Callable[[], S],
        close: Callable[[S], None],
        create_retries: int = 1,
        should_retry: Callable[[Exception], bool] = is_quota_error,
    ) -> None:
        self._create = create
        self._close = close
        self._create_retries = create_retries
        self._should_retry = should_retry
        self._lock = threading.Lock()
        self._pending: Optional[Future] = None
        self._surface: Optional[S] = None
        self._holders = 0

    @property
    def is_live(self) -> bool:
        with self._lock:
            return self._surface is not None

    @property
    def holders(self) -> int:
        with self._lock:
            return self._holders

    def acquire(self) -> S:
        """Return the live surface, creating it if needed, and hold it.

        Every successful call must be matched by one :meth:`release`.

        Raises:
            SurfaceError: Creation failed even after the allowed retries.
        """
        while True:
            with self._lock:
                if self._surface is not None:
                    self._holders += 1
                    return self._surface
                pending = self._pending
                owner = pending is None
                if owner:
                    pending = self._pending = Future()

            if owner:
                break

            print("[SURFACE] Waiting for in-flight surface creation …")
            # Re-checked under the lock: the surface may be gone again by now.
            pending.result()

        try:
            surface = self._create_with_retry()
        except BaseException as exc:
            with self._lock:
                self._pending = None
            pending.set_exception(exc)
            raise

        with self._lock:
            self._surface = surface
            self._pending = None
            self._holders += 1
        pending.set_result(surface)
        return surface

    def _create_with_retry(self) -> S:
        attempts = self._create_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                print("[SURFACE] Creating rendering surface …")
                surface = self._create()
                print("[SURFACE] Rendering surface ready.")
                return surface
            except Exception as exc:
                print(f"[SURFACE] Creation failed (attempt {attempt}/{attempts}): {exc}")
                if attempt == attempts or not self._should_retry(exc):
                    raise SurfaceError(
                        f"could not create rendering surface after {attempt} attempt(s): {exc}"
                    ) from exc
        raise AssertionError("unreachable")  # pragma: no cover

    def release(self) -> None:
        """Drop one holder; close the surface once nobody holds it."""
        with self._lock:
            if self._surface is None:
                return
            self._holders = max(self._holders - 1, 0)
            if self._holders:
                return
            surface, self._surface = self._surface, None
        self._close_quietly(surface)

    def shutdown(self) -> None:
        """Close the live surface, if any, whoever still holds it."""
        with self._lock:
            surface, self._surface = self._surface, None
            self._holders = 0
        if surface is not None:
            self._close_quietly(surface)

    def _close_quietly(self, surface: S) -> None:
        try:
            self._close(surface)
            print("[SURFACE] Rendering surface closed.")
        except Exception as exc:
            print(f"[SURFACE] Error closing rendering surface: {exc}")

    @contextmanager
    def session(self) -> Iterator[S]:
        """Hold the surface for one job; the last session out closes it."""
        surface = self.acquire()
        try:
            yield surface
        finally:
            self.release()
