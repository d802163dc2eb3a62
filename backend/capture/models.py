"""Data models for the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from backend.config import settings


@dataclass(frozen=True)
class PageDimensions:
    """Snapshot of a page's scrollable viewport, in CSS pixels."""

    scroll_height: int
    client_height: int
    scroll_width: int
    client_width: int

    def __post_init__(self) -> None:
        for name in ("scroll_height", "client_height", "scroll_width", "client_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")


@dataclass(frozen=True)
class Tile:
    """One viewport-sized screenshot of a page."""

    image: bytes = field(repr=False)
    vertical_offset: int
    height: int


@dataclass
class CapturedPage:
    """Every tile of a single page, top to bottom."""

    source_url: str
    title: str
    tiles: List[Tile]
    dimensions: PageDimensions


@dataclass
class CaptureFailure:
    """A page that could not be captured, tagged with the reason."""

    url: str
    error: Exception

    @property
    def message(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass(frozen=True)
class CaptureTiming:
    """Pacing knobs for capture.  All durations are in seconds."""

    settle_delay: float = 0.6
    retry_delay: float = 1.0
    max_attempts: int = 3
    load_timeout: float = 30.0
    post_load_delay: float = 1.0

    @classmethod
    def from_settings(cls) -> CaptureTiming:
        return cls(
            settle_delay=settings.capture_settle_delay,
            retry_delay=settings.capture_retry_delay,
            max_attempts=settings.capture_max_attempts,
            load_timeout=settings.page_load_timeout,
            post_load_delay=settings.post_load_delay,
        )
