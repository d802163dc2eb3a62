"""Capture package — scroll-and-capture of full pages as viewport tiles."""

from backend.capture.batch import BatchResult, capture_batch
from backend.capture.budget import CaptureBudget
from backend.capture.models import (
    CapturedPage,
    CaptureFailure,
    CaptureTiming,
    PageDimensions,
    Tile,
)
from backend.capture.orchestrator import capture_full_page, load_and_capture, plan_tiles
from backend.capture.retry import retry_on_rate_limit
from backend.capture.surface import SurfaceSlot

__all__ = [
    "BatchResult",
    "capture_batch",
    "CaptureBudget",
    "CapturedPage",
    "CaptureFailure",
    "CaptureTiming",
    "PageDimensions",
    "Tile",
    "capture_full_page",
    "load_and_capture",
    "plan_tiles",
    "retry_on_rate_limit",
    "SurfaceSlot",
]
