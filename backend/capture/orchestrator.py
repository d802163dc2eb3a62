"""Scroll-and-capture orchestration for a single page.

``capture_full_page`` plans one job per viewport-height offset, then drains
that queue with a single worker.  The worker scrolls, lets the page settle
and takes one visible-area capture, so only one capture is ever in flight.
The capture step is wrapped by :func:`~backend.capture.retry.retry_on_rate_limit`.

``load_and_capture`` does the same for a URL that first has to be opened in
a hidden page, and always closes that page afterwards.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional

from backend.capture.models import CapturedPage, CaptureTiming, PageDimensions, Tile
from backend.capture.protocols import CaptureTarget, PageHost
from backend.capture.retry import retry_on_rate_limit


@dataclass(frozen=True)
class TileJob:
    """Capture the viewport scrolled to ``offset``; keep ``height`` pixels of it."""

    offset: int
    height: int


def plan_tiles(dimensions: PageDimensions) -> Deque[TileJob]:
    """Return the ordered tile jobs covering ``[0, scroll_height)``."""
    step = dimensions.client_height
    total = dimensions.scroll_height
    return deque(
        TileJob(offset=offset, height=min(step, total - offset))
        for offset in range(0, total, step)
    )


class CaptureQueue:
    """Single-worker queue that turns :class:`TileJob` items into tiles."""

    def __init__(
        self,
        target: CaptureTarget,
        timing: CaptureTiming,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._target = target
        self._timing = timing
        self._sleep = sleep or time.sleep
        self._capture = retry_on_rate_limit(
            max_attempts=timing.max_attempts,
            delay=timing.retry_delay,
            sleep=self._sleep,
        )(target.capture_visible_area)

    def run(self, jobs: Deque[TileJob]) -> List[Tile]:
        tiles: List[Tile] = []
        total = len(jobs)
        while jobs:
            job = jobs.popleft()
            self._target.scroll_to(0, job.offset)
            # Lets layout/paint finish and keeps us under the capture ceiling.
            self._sleep(self._timing.settle_delay)
            image = self._capture()
            tiles.append(Tile(image=image, vertical_offset=job.offset, height=job.height))
            print(f"[CAPTURE] tile {len(tiles)}/{total} at y={job.offset}")
        return tiles


def _restore_scroll(target: CaptureTarget) -> None:
    try:
        target.scroll_to(0, 0)
    except Exception as exc:
        print(f"[CAPTURE] could not restore scroll position: {exc}")


def capture_full_page(
    target: CaptureTarget,
    timing: Optional[CaptureTiming] = None,
    sleep: Optional[Callable[[float], None]] = None,
    source_url: Optional[str] = None,
) -> CapturedPage:
    """Capture the full scrollable height of *target* as a list of tiles.

    Args:
        target: An already-open page.
        timing: Pacing configuration.  Defaults to the global settings.
        sleep: Sleep function, injectable for tests.
        source_url: URL to record on the result; defaults to ``target.url``.

    Returns:
        A :class:`CapturedPage` with ``ceil(scroll_height / client_height)``
        tiles and the dimensions read before capture started.

    Raises:
        CaptureError: A capture failed, or stayed rate-limited past the
            attempt budget.  No partial page is returned.
    """
    timing = timing or CaptureTiming.from_settings()
    dimensions = target.get_viewport_metrics()
    jobs = plan_tiles(dimensions)
    url = source_url or target.url

    print(
        f"[CAPTURE] {url}: scrollHeight={dimensions.scroll_height} "
        f"clientHeight={dimensions.client_height} → {len(jobs)} tile(s)"
    )

    try:
        tiles = CaptureQueue(target, timing, sleep).run(jobs)
    finally:
        _restore_scroll(target)

    return CapturedPage(
        source_url=url,
        title=target.title or url,
        tiles=tiles,
        dimensions=dimensions,
    )


def load_and_capture(
    host: PageHost,
    url: str,
    timing: Optional[CaptureTiming] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> CapturedPage:
    """Open *url* in a hidden page, wait for it to load, then capture it.

    The hidden page is closed whether the capture succeeds or raises.

    Raises:
        LoadTimeoutError: The page did not finish loading in time.
        CaptureError: Capturing failed (see :func:`capture_full_page`).
    """
    timing = timing or CaptureTiming.from_settings()
    wait = sleep or time.sleep

    handle: Optional[CaptureTarget] = None
    try:
        handle = host.open_hidden_page(url)
        host.await_load_complete(handle, int(timing.load_timeout * 1000))
        # Late-rendering content (fonts, lazy images) gets a moment to land.
        wait(timing.post_load_delay)
        return capture_full_page(handle, timing=timing, sleep=wait, source_url=url)
    finally:
        if handle is not None:
            try:
                host.close_page(handle)
            except Exception as exc:
                print(f"[CAPTURE] could not close hidden page for {url}: {exc}")
