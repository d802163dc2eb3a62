"""Assembler package — captured tiles to a paginated PDF."""

from backend.assembler.assembler import assemble
from backend.assembler.filenames import pdf_filename, sanitize_filename
from backend.assembler.layout import Placement, fit_to_page
from backend.assembler.paper import Orientation, OutputSettings, PaperSize
from backend.assembler.pdf_writer import PdfDocument, decode_image
from backend.assembler.reader import count_pages

__all__ = [
    "assemble",
    "pdf_filename",
    "sanitize_filename",
    "Placement",
    "fit_to_page",
    "Orientation",
    "OutputSettings",
    "PaperSize",
    "PdfDocument",
    "decode_image",
    "count_pages",
]
