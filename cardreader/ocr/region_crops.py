"""
Card region cropping for OCR.

The card is cut into two horizontal bands at fixed relative heights:
- Header: top 15% of the card, capped at 150 px (player name and year)
- Body: the 70% below the header offset (ratings, defense, result charts)

Both bands span the full card width.
"""

import logging
from typing import Optional

import numpy as np

from cardreader.config import (
    HEADER_HEIGHT_FRACTION,
    HEADER_MAX_HEIGHT_PX,
    BODY_HEIGHT_FRACTION,
)

logger = logging.getLogger(__name__)


class SegmentationError(ValueError):
    """The image is empty or too small to yield the requested region."""


def crop_region(
    image: np.ndarray,
    start_fraction: float,
    height_fraction: float,
    max_height: Optional[int] = None,
    region_name: str = "Region"
) -> np.ndarray:
    """
    Crop a full-width horizontal band with validation.

    Args:
        image: Input image as numpy array
        start_fraction: Top boundary as fraction of image height (0.0-1.0)
        height_fraction: Band height as fraction of image height
        max_height: Optional pixel cap on the band height
        region_name: Name of region for error messages

    Returns:
        Cropped band as numpy array (a view into image)

    Raises:
        SegmentationError: If image is empty or the band has zero size
    """
    if image is None or image.size == 0:
        raise SegmentationError(f"Empty input image for {region_name} crop")

    h, w = image.shape[:2]

    band_height = height_fraction * h
    if max_height is not None:
        band_height = min(max_height, band_height)

    # Clamp to image bounds
    y_start = max(0, int(h * start_fraction))
    y_end = min(h, int(h * start_fraction + band_height))

    if y_end <= y_start or w == 0:
        raise SegmentationError(
            f"{region_name} crop bounds invalid for {w}x{h} image: y=[{y_start}:{y_end}] "
            "(image too small to segment)"
        )

    crop = image[y_start:y_end, :w]

    logger.debug(f"{region_name} crop: [{y_start}:{y_end}, 0:{w}] -> {crop.shape}")
    return crop


def crop_header_for_ocr(image: np.ndarray) -> np.ndarray:
    """
    Crop the header band (player name and year).

    Height is min(HEADER_MAX_HEIGHT_PX, HEADER_HEIGHT_FRACTION * height).
    """
    return crop_region(
        image,
        0.0,
        HEADER_HEIGHT_FRACTION,
        max_height=HEADER_MAX_HEIGHT_PX,
        region_name="Header"
    )


def crop_body_for_ocr(image: np.ndarray) -> np.ndarray:
    """
    Crop the body band (ratings, defense grid, result charts).

    Starts at the header's fractional offset, not the capped header
    height, so on tall scans a strip between the two bands is skipped.
    """
    return crop_region(
        image,
        HEADER_HEIGHT_FRACTION,
        BODY_HEIGHT_FRACTION,
        region_name="Body"
    )


class RegionBuffer:
    """
    Owns a private copy of one cropped region for the span of a `with` block.

    The pixels are dropped on exit whether recognition succeeded or not,
    so a failed call does not keep the crop alive.

    Usage:
        with header_region(card) as region:
            text = ocr.recognize(region.pixels)
    """

    def __init__(self, pixels: np.ndarray, name: str):
        self.name = name
        self.pixels: Optional[np.ndarray] = np.ascontiguousarray(pixels).copy()

    @property
    def released(self) -> bool:
        return self.pixels is None

    def release(self) -> None:
        if self.pixels is not None:
            logger.debug(f"Releasing {self.name} buffer {self.pixels.shape}")
            self.pixels = None

    def __enter__(self) -> "RegionBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def header_region(image: np.ndarray) -> RegionBuffer:
    """Header crop wrapped in a RegionBuffer."""
    return RegionBuffer(crop_header_for_ocr(image), "header")


def body_region(image: np.ndarray) -> RegionBuffer:
    """Body crop wrapped in a RegionBuffer."""
    return RegionBuffer(crop_body_for_ocr(image), "body")
