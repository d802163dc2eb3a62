"""High-level runner for one "pages → PDF" job.

``build_pdf`` is the single entry point shared by the CLI and the HTTP API.
It wires together the rendering-surface slot, the batch coordinator and the
assembler:

    acquire surface → capture each URL in order → release surface → assemble
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from backend.assembler import OutputSettings, assemble, count_pages, pdf_filename
from backend.capture.batch import capture_batch
from backend.capture.models import CapturedPage, CaptureFailure, CaptureTiming
from backend.capture.surface import SurfaceSlot
from backend.config import settings


@dataclass
class PdfJob:
    """Result of :func:`build_pdf`."""

    pdf: bytes
    output_settings: OutputSettings
    pages: List[CapturedPage] = field(default_factory=list)
    failures: List[CaptureFailure] = field(default_factory=list)
    page_count: int = 0

    @property
    def filename(self) -> str:
        """Suggested file name, taken from the first captured page's title."""
        return pdf_filename(self.pages[0].title if self.pages else None)


def default_output_settings() -> OutputSettings:
    return OutputSettings.from_strings(settings.default_paper_size, settings.default_orientation)


def build_pdf(
    urls: Sequence[str],
    output_settings: Optional[OutputSettings] = None,
    slot: Optional[SurfaceSlot[Any]] = None,
    timing: Optional[CaptureTiming] = None,
    sleep: Optional[Callable[[float], None]] = None,
    on_progress: Optional[Callable[[int, int, str], None]] = None,
) -> PdfJob:
    """Capture *urls* in order and assemble them into one PDF.

    The rendering surface is acquired through *slot* for the capture phase
    only and is always released before assembly starts, including when
    capture fails.

    Args:
        urls: Pages to include, in output order.
        output_settings: Paper size and orientation.  Defaults to settings.
        slot: Surface slot whose surfaces expose ``host()``.  Defaults to a
            fresh Playwright browser slot.
        timing: Capture pacing.  Defaults to settings.
        sleep: Sleep function, injectable for tests.
        on_progress: ``on_progress(done, total, url)`` after each page.

    Raises:
        ValueError: *urls* is empty.
        NothingCapturedError: Every page failed.
        SurfaceError: The browser could not be started.
    """
    if not urls:
        raise ValueError("Select at least one page to include in the PDF")

    output_settings = output_settings or default_output_settings()
    if slot is None:
        from backend.capture.playwright_driver import make_surface_slot  # noqa: PLC0415

        slot = make_surface_slot()

    with slot.session() as surface:
        batch = capture_batch(
            surface.host(),
            urls,
            timing=timing,
            sleep=sleep,
            on_progress=on_progress,
        )

    pdf = assemble(batch.pages, output_settings, title=batch.pages[0].title)
    page_count = count_pages(pdf)
    print(
        f"[DONE] {page_count} PDF page(s) from {len(batch.pages)} captured page(s); "
        f"{len(batch.failures)} failed."
    )
    return PdfJob(
        pdf=pdf,
        output_settings=output_settings,
        pages=batch.pages,
        failures=batch.failures,
        page_count=page_count,
    )
