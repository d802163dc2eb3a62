"""Playwright-backed implementations of the capture collaborators.

* :class:`PlaywrightTarget` — a :class:`~backend.capture.protocols.CaptureTarget`
  over one Playwright page.
* :class:`PlaywrightHost` — a :class:`~backend.capture.protocols.PageHost`
  that opens hidden pages in a shared browser context.
* :class:`BrowserSurface` — the browser session itself; the unit managed by
  :class:`~backend.capture.surface.SurfaceSlot`.

Every Playwright error is translated into the pipeline's own error types so
the batch coordinator only has to deal with :class:`~backend.errors.CaptureError`.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    sync_playwright,
)

from backend.capture.budget import CaptureBudget
from backend.capture.models import PageDimensions
from backend.capture.surface import SurfaceSlot
from backend.config import settings
from backend.errors import CaptureError, LoadTimeoutError

_METRICS_JS = """() => ({
    scrollHeight: document.documentElement.scrollHeight,
    clientHeight: document.documentElement.clientHeight,
    scrollWidth: document.documentElement.scrollWidth,
    clientWidth: document.documentElement.clientWidth
})"""

_SCROLL_JS = "([x, y]) => window.scrollTo(x, y)"


# ---------------------------------------------------------------------------
# Capture target
# ---------------------------------------------------------------------------

class PlaywrightTarget:
    """A single open page that can be measured, scrolled and captured."""

    def __init__(self, page: Page, budget: CaptureBudget) -> None:
        self._page = page
        self._budget = budget

    @property
    def page(self) -> Page:
        return self._page

    @property
    def url(self) -> str:
        return self._page.url

    @property
    def title(self) -> str:
        try:
            return self._page.title()
        except PlaywrightError:
            return ""

    def get_viewport_metrics(self) -> PageDimensions:
        try:
            raw = self._page.evaluate(_METRICS_JS)
        except PlaywrightError as exc:
            raise CaptureError(f"could not read page metrics: {exc}") from exc
        try:
            return PageDimensions(
                scroll_height=int(raw["scrollHeight"]),
                client_height=int(raw["clientHeight"]),
                scroll_width=int(raw["scrollWidth"]),
                client_width=int(raw["clientWidth"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CaptureError(f"unusable page metrics {raw!r}: {exc}") from exc

    def scroll_to(self, x: int, y: int) -> None:
        try:
            self._page.evaluate(_SCROLL_JS, [x, y])
        except PlaywrightError as exc:
            raise CaptureError(f"could not scroll to ({x}, {y}): {exc}") from exc

    def capture_visible_area(self) -> bytes:
        self._budget.acquire()
        try:
            return self._page.screenshot(type="png", full_page=False)
        except PlaywrightError as exc:
            raise CaptureError(f"screenshot failed: {exc}") from exc


# ---------------------------------------------------------------------------
# Hidden page host
# ---------------------------------------------------------------------------

class PlaywrightHost:
    """Opens background pages in one browser context."""

    def __init__(
        self,
        context: BrowserContext,
        budget: CaptureBudget,
        navigation_timeout_ms: int = 30_000,
    ) -> None:
        self._context = context
        self._budget = budget
        self._navigation_timeout_ms = navigation_timeout_ms

    def open_hidden_page(self, url: str) -> PlaywrightTarget:
        try:
            page = self._context.new_page()
        except PlaywrightError as exc:
            raise CaptureError(f"could not open a page: {exc}") from exc

        try:
            # "commit" returns as soon as navigation starts; the load event
            # is awaited separately so its timeout is explicit.
            page.goto(url, wait_until="commit", timeout=self._navigation_timeout_ms)
        except PlaywrightTimeoutError as exc:
            with suppress(PlaywrightError):
                page.close()
            raise LoadTimeoutError(f"Navigation timeout: {url}") from exc
        except PlaywrightError as exc:
            with suppress(PlaywrightError):
                page.close()
            raise CaptureError(f"could not navigate to {url}: {exc}") from exc

        return PlaywrightTarget(page, self._budget)

    def await_load_complete(self, handle: PlaywrightTarget, timeout_ms: int) -> None:
        try:
            handle.page.wait_for_load_state("load", timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise LoadTimeoutError(
                f"Page load timeout after {timeout_ms} ms: {handle.url}"
            ) from exc
        except PlaywrightError as exc:
            raise CaptureError(f"page failed while loading: {exc}") from exc

    def close_page(self, handle: PlaywrightTarget) -> None:
        handle.page.close()


# ---------------------------------------------------------------------------
# Browser surface
# ---------------------------------------------------------------------------

@dataclass
class BrowserSurface:
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    budget: CaptureBudget

    def host(self) -> PlaywrightHost:
        return PlaywrightHost(
            self.context,
            self.budget,
            navigation_timeout_ms=int(settings.page_load_timeout * 1000),
        )

    def close(self) -> None:
        try:
            self.context.close()
            self.browser.close()
        finally:
            self.playwright.stop()


def launch_surface() -> BrowserSurface:
    """Start Playwright and a Chromium browser with the configured viewport."""
    pw = sync_playwright().start()
    try:
        browser = pw.chromium.launch(headless=settings.headless)
        context = browser.new_context(
            viewport={
                "width": settings.viewport_width,
                "height": settings.viewport_height,
            }
        )
    except BaseException:
        pw.stop()
        raise
    return BrowserSurface(
        playwright=pw,
        browser=browser,
        context=context,
        budget=CaptureBudget(max_per_window=settings.captures_per_second),
    )


def make_surface_slot() -> SurfaceSlot[BrowserSurface]:
    """Return an empty slot that launches and closes :class:`BrowserSurface`."""
    return SurfaceSlot(
        create=launch_surface,
        close=lambda surface: surface.close(),
        create_retries=settings.surface_create_retries,
    )
