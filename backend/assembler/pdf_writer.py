"""Image decoding (Pillow) and PDF page writing (reportlab).

:class:`PdfDocument` speaks millimetres measured from the top-left corner of
the page and converts to reportlab's points measured from the bottom-left.
"""

from __future__ import annotations

from io import BytesIO
from typing import Optional, Tuple

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from backend.errors import DecodeError

_TEXT_FONT = "Helvetica"


def decode_image(blob: bytes) -> Tuple[int, int]:
    """Return ``(width, height)`` in pixels of the encoded image *blob*.

    The image is fully decoded, not just sniffed, so truncated data is caught
    here rather than inside the PDF writer.

    Raises:
        DecodeError: The bytes are not a readable image.
    """
    try:
        with Image.open(BytesIO(blob)) as img:
            img.load()
            return img.size
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"could not decode image: {exc}") from exc


class PdfDocument:
    """A multi-page PDF with a fixed page size, built in memory."""

    def __init__(self, width_mm: float, height_mm: float, title: Optional[str] = None) -> None:
        self.width_mm = width_mm
        self.height_mm = height_mm
        self._buffer = BytesIO()
        self._canvas = pdfcanvas.Canvas(self._buffer, pagesize=(width_mm * mm, height_mm * mm))
        if title:
            self._canvas.setTitle(title)
        self._canvas.setCreator("Page Binder")
        self._page_count = 1
        self._data: Optional[bytes] = None

    @property
    def page_count(self) -> int:
        return self._page_count

    def add_page(self) -> None:
        """Finish the current page and start a blank one."""
        self._canvas.showPage()
        self._page_count += 1

    def place_image(self, blob: bytes, x: float, y: float, width: float, height: float) -> None:
        bottom = self.height_mm - y - height
        self._canvas.drawImage(
            ImageReader(BytesIO(blob)),
            x * mm,
            bottom * mm,
            width=width * mm,
            height=height * mm,
            mask="auto",
        )

    def add_text(self, text: str, x: float, y: float, font_size: int = 12) -> None:
        """Draw *text* with its baseline *y* millimetres below the top edge."""
        self._canvas.setFont(_TEXT_FONT, font_size)
        self._canvas.drawString(x * mm, (self.height_mm - y) * mm, text)

    def serialize(self) -> bytes:
        """Finish the document and return the PDF bytes."""
        if self._data is None:
            self._canvas.save()
            self._data = self._buffer.getvalue()
        return self._data
