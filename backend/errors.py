"""Exception hierarchy shared by the capture and assembly pipelines.

Per-anchor problems never leave the classifier, and per-tile decode problems
never leave the assembler.  Everything a page can fail with is a
:class:`CaptureError`, so the batch coordinator can record it against that
one URL and move on.  Only :class:`NothingCapturedError` and
:class:`SurfaceError` end a whole job.
"""

from __future__ import annotations


class BinderError(Exception):
    """Base class for every error raised by the Page Binder backend."""


class CaptureError(BinderError):
    """A page could not be captured."""


class RateLimitedError(CaptureError):
    """The host refused a visible-area capture because of its rate ceiling."""


class RetryExhaustedError(CaptureError):
    """A rate-limited capture kept failing after every allowed attempt."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class LoadTimeoutError(CaptureError):
    """A hidden page never signalled load-complete within the timeout."""


class DecodeError(BinderError):
    """A tile's image bytes could not be decoded."""


class NothingCapturedError(BinderError):
    """Not a single page was captured, so there is nothing to assemble."""


class SurfaceError(BinderError):
    """The shared rendering surface could not be created."""
