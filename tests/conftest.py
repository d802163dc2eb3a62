"""Shared fakes for the capture and job tests.

``FakeTarget`` and ``FakeHost`` stand in for a real browser page and browser
context.  Each capture returns a genuine PNG (made with Pillow) so the
assembler can decode what the fakes produce.
"""

from __future__ import annotations

import io
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

import pytest
from PIL import Image

from backend.capture.models import CaptureTiming, PageDimensions
from backend.errors import LoadTimeoutError


def make_png(width: int = 40, height: int = 20, color: Tuple[int, int, int] = (200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def page_sizes_pt(data: bytes) -> List[Tuple[float, float]]:
    """``(width, height)`` in points of every page's media box in *data*."""
    from pypdf import PdfReader

    return [
        (float(page.mediabox.width), float(page.mediabox.height))
        for page in PdfReader(io.BytesIO(data)).pages
    ]


class FakeTarget:
    """In-memory page: fixed metrics, recorded scrolls, scripted capture outcomes.

    *outcomes* is consumed one entry per capture call: an exception instance
    is raised, anything else yields a PNG.  Once exhausted every call succeeds.
    """

    def __init__(
        self,
        url: str = "https://example.com/",
        scroll_height: int = 1000,
        client_height: int = 400,
        title: str = "Example",
        outcomes: Optional[Iterable[object]] = None,
        png: Optional[bytes] = None,
    ) -> None:
        self._url = url
        self._title = title
        self.dimensions = PageDimensions(
            scroll_height=scroll_height,
            client_height=client_height,
            scroll_width=1280,
            client_width=1280,
        )
        self.outcomes: List[object] = list(outcomes or [])
        self.png = png or make_png()
        self.scrolls: List[Tuple[int, int]] = []
        self.capture_calls = 0

    @property
    def url(self) -> str:
        return self._url

    @property
    def title(self) -> str:
        return self._title

    def get_viewport_metrics(self) -> PageDimensions:
        return self.dimensions

    def scroll_to(self, x: int, y: int) -> None:
        self.scrolls.append((x, y))

    def capture_visible_area(self) -> bytes:
        self.capture_calls += 1
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if isinstance(outcome, BaseException):
                raise outcome
        return self.png


class FakeHost:
    """Hands out :class:`FakeTarget` pages by URL and records their lifecycle."""

    def __init__(
        self,
        targets: Optional[Dict[str, FakeTarget]] = None,
        load_timeouts: Optional[Set[str]] = None,
    ) -> None:
        self.targets = dict(targets or {})
        self.load_timeouts = set(load_timeouts or ())
        self.opened: List[str] = []
        self.closed: List[str] = []
        self.timeouts_seen: List[int] = []

    def open_hidden_page(self, url: str) -> FakeTarget:
        self.opened.append(url)
        target = self.targets.get(url)
        if target is None:
            target = self.targets[url] = FakeTarget(url=url, title=f"Title of {url}")
        return target

    def await_load_complete(self, handle: FakeTarget, timeout_ms: int) -> None:
        self.timeouts_seen.append(timeout_ms)
        if handle.url in self.load_timeouts:
            raise LoadTimeoutError(f"Page load timeout after {timeout_ms} ms")

    def close_page(self, handle: FakeTarget) -> None:
        self.closed.append(handle.url)


@pytest.fixture
def no_sleep() -> Callable[[float], None]:
    """Sleep replacement that records requested delays instead of waiting."""
    calls: List[float] = []

    def _sleep(seconds: float) -> None:
        calls.append(seconds)

    _sleep.calls = calls  # type: ignore[attr-defined]
    return _sleep


@pytest.fixture
def fast_timing() -> CaptureTiming:
    return CaptureTiming(
        settle_delay=0.6,
        retry_delay=1.0,
        max_attempts=3,
        load_timeout=5.0,
        post_load_delay=0.25,
    )
