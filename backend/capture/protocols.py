"""Collaborator interfaces the capture orchestrator depends on.

Anything that can report its scroll metrics, scroll, and grab its visible
area is a :class:`CaptureTarget`; anything that can open, await and close
hidden pages is a :class:`PageHost`.  The Playwright driver implements both;
tests use in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol

from backend.capture.models import PageDimensions


class CaptureTarget(Protocol):
    @property
    def url(self) -> str: ...

    @property
    def title(self) -> str: ...

    def get_viewport_metrics(self) -> PageDimensions: ...

    def scroll_to(self, x: int, y: int) -> None: ...

    def capture_visible_area(self) -> bytes:
        """Return the visible area as encoded image bytes.

        Raises:
            RateLimitedError: The host's capture ceiling was hit.
            CaptureError: Any other capture failure.
        """
        ...


class PageHost(Protocol):
    def open_hidden_page(self, url: str) -> CaptureTarget: ...

    def await_load_complete(self, handle: CaptureTarget, timeout_ms: int) -> None:
        """Block until *handle* has loaded.

        Raises:
            LoadTimeoutError: Loading did not finish within *timeout_ms*.
        """
        ...

    def close_page(self, handle: CaptureTarget) -> None: ...
