"""Output file naming."""

from __future__ import annotations

import re

_FORBIDDEN = re.compile(r'[<>:"/\\|?*]')
_MAX_LENGTH = 100


def sanitize_filename(name: str | None) -> str:
    """Strip characters that are illegal in file names and cap the length.

    Falls back to ``"webpage"`` when nothing usable is left.
    """
    cleaned = _FORBIDDEN.sub("", (name or "").strip())[:_MAX_LENGTH].strip()
    return cleaned or "webpage"


def pdf_filename(title: str | None) -> str:
    """``sanitize_filename(title)`` with a ``.pdf`` extension."""
    return sanitize_filename(title) + ".pdf"
