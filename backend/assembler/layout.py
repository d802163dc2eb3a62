"""Fit-to-page geometry for placing one tile image on one PDF page."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Placement:
    """Image rectangle in millimetres, measured from the page's top-left corner."""

    x: float
    y: float
    width: float
    height: float


def fit_to_page(
    image_width: int,
    image_height: int,
    page_width: float,
    page_height: float,
) -> Placement:
    """Scale an image to fill the page in one dimension and center it.

    An image proportionally wider than the page spans the full page width;
    anything else spans the full page height.  The leftover space on the
    other axis is split evenly into two margins.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"image size must be positive, got {image_width}x{image_height}")

    image_ratio = image_width / image_height
    page_ratio = page_width / page_height

    if image_ratio > page_ratio:
        width = page_width
        height = page_width / image_ratio
    else:
        height = page_height
        width = page_height * image_ratio

    return Placement(
        x=(page_width - width) / 2,
        y=(page_height - height) / 2,
        width=width,
        height=height,
    )
