"""Page assembly: captured tiles → one paginated PDF.

Every tile becomes exactly one PDF page, in input order.  A tile whose image
cannot be decoded still gets its page, carrying a one-line note instead of
the picture, so page numbering stays predictable and the rest of the
document is unaffected.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from backend.assembler.layout import fit_to_page
from backend.assembler.paper import OutputSettings
from backend.assembler.pdf_writer import PdfDocument, decode_image
from backend.capture.models import CapturedPage
from backend.errors import DecodeError, NothingCapturedError

# Where the failure note goes on a placeholder page (mm from top-left).
_NOTE_X = 10.0
_NOTE_Y = 20.0


def assemble(
    pages: Sequence[CapturedPage],
    settings: OutputSettings,
    decode: Callable[[bytes], Tuple[int, int]] = decode_image,
    document_factory: Callable[..., PdfDocument] = PdfDocument,
    title: Optional[str] = None,
) -> bytes:
    """Lay every tile of *pages* onto its own page and return the PDF bytes.

    Args:
        pages: Captured pages in output order.
        settings: Paper size and orientation.
        decode: Returns ``(width, height)`` for an image blob; raises
            :class:`~backend.errors.DecodeError` on unreadable data.
        document_factory: Builds the document from ``(width_mm, height_mm)``.
        title: Optional PDF metadata title.

    Raises:
        NothingCapturedError: *pages* contains no tiles at all.
    """
    total_tiles = sum(len(page.tiles) for page in pages)
    if total_tiles == 0:
        raise NothingCapturedError("No captured tiles to assemble")

    page_width, page_height = settings.page_size_mm()
    print(
        f"[ASSEMBLE] {len(pages)} page(s), {total_tiles} tile(s) on "
        f"{settings.paper_size.value} {settings.orientation.value} "
        f"({page_width}×{page_height} mm)"
    )
    doc = document_factory(page_width, page_height, title=title)

    first = True
    for page in pages:
        for tile in page.tiles:
            if not first:
                doc.add_page()
            first = False

            try:
                image_width, image_height = decode(tile.image)
            except DecodeError as exc:
                print(f"[ASSEMBLE] ✗ Tile at y={tile.vertical_offset} of {page.source_url}: {exc}")
                doc.add_text(f"Failed to capture: {page.source_url}", _NOTE_X, _NOTE_Y)
                continue

            placement = fit_to_page(image_width, image_height, page_width, page_height)
            doc.place_image(
                tile.image,
                placement.x,
                placement.y,
                placement.width,
                placement.height,
            )

    data = doc.serialize()
    print(f"[ASSEMBLE] PDF written ({len(data)} bytes).")
    return data
