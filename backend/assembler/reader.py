"""Read-back helpers for finished PDFs."""

from __future__ import annotations

from io import BytesIO


def _reader(data: bytes):
    import pypdf  # noqa: PLC0415

    return pypdf.PdfReader(BytesIO(data))


def count_pages(data: bytes) -> int:
    """Return the number of pages in the PDF *data*."""
    return len(_reader(data).pages)
