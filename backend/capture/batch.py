"""Batch coordinator: captures many pages, one at a time, in caller order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from backend.capture.models import CapturedPage, CaptureFailure, CaptureTiming
from backend.capture.orchestrator import load_and_capture
from backend.capture.protocols import PageHost
from backend.errors import CaptureError, NothingCapturedError


@dataclass
class BatchResult:
    pages: List[CapturedPage] = field(default_factory=list)
    failures: List[CaptureFailure] = field(default_factory=list)


def capture_batch(
    host: PageHost,
    urls: Sequence[str],
    timing: Optional[CaptureTiming] = None,
    sleep: Optional[Callable[[float], None]] = None,
    on_progress: Optional[Callable[[int, int, str], None]] = None,
) -> BatchResult:
    """Capture every URL in *urls* sequentially.

    A page that fails is recorded in :attr:`BatchResult.failures` and the
    batch moves on to the next URL.

    Args:
        host: Opens the hidden pages.
        urls: Pages to capture, in output order.
        timing: Pacing configuration shared by every page.
        sleep: Sleep function, injectable for tests.
        on_progress: Called as ``on_progress(done, total, url)`` after each page.

    Raises:
        NothingCapturedError: Not one page was captured.
    """
    timing = timing or CaptureTiming.from_settings()
    result = BatchResult()
    total = len(urls)

    for index, url in enumerate(urls, start=1):
        print(f"[BATCH] Capturing page {index} of {total}: {url}")
        try:
            page = load_and_capture(host, url, timing=timing, sleep=sleep)
        except CaptureError as exc:
            print(f"[BATCH] ✗ Failed {url!r}: {exc}")
            result.failures.append(CaptureFailure(url=url, error=exc))
        else:
            print(f"[BATCH] ✓ {url} ({len(page.tiles)} tile(s))")
            result.pages.append(page)
        if on_progress is not None:
            on_progress(index, total, url)

    if not result.pages:
        raise NothingCapturedError(
            f"No pages were captured successfully ({len(result.failures)} failed)"
        )
    return result
