"""Paper sizes, orientation and the output settings that combine them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class PaperSize(str, Enum):
    A4 = "A4"
    LETTER = "Letter"
    LEGAL = "Legal"

    @classmethod
    def parse(cls, value: str) -> PaperSize:
        """Case-insensitive lookup: ``"a4"``, ``"LETTER"`` and ``"Legal"`` all work."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown paper size {value!r}. Use one of: {choices}")


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value: str) -> Orientation:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown orientation {value!r}. Use: portrait | landscape"
            ) from None


# Portrait (width, height) in millimetres.
PAPER_SIZES_MM: dict[PaperSize, Tuple[float, float]] = {
    PaperSize.A4: (210.0, 297.0),
    PaperSize.LETTER: (215.9, 279.4),
    PaperSize.LEGAL: (215.9, 355.6),
}


@dataclass(frozen=True)
class OutputSettings:
    paper_size: PaperSize = PaperSize.A4
    orientation: Orientation = Orientation.PORTRAIT

    @classmethod
    def from_strings(cls, paper_size: str, orientation: str) -> OutputSettings:
        return cls(
            paper_size=PaperSize.parse(paper_size),
            orientation=Orientation.parse(orientation),
        )

    def page_size_mm(self) -> Tuple[float, float]:
        """Return ``(width, height)`` in millimetres for this paper and orientation."""
        width, height = PAPER_SIZES_MM[self.paper_size]
        if self.orientation is Orientation.LANDSCAPE:
            return height, width
        return width, height
