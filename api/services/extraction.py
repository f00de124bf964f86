"""
Extraction service wrapper
Uses CardExtractor for consistent extraction across API and CLI
"""

import logging
from typing import Optional

from cardreader.extraction.pipeline import CardExtractor
from cardreader.models import ExtractedCardRecord
from cardreader.ocr.base_ocr import BaseOCRService
from cardreader.utils.image_io import decode_image_bytes

logger = logging.getLogger(__name__)

# One extractor per process; it holds no per-request state
_extractor: Optional[CardExtractor] = None


def get_extractor() -> CardExtractor:
    """Get or create the shared CardExtractor instance"""
    global _extractor
    if _extractor is None:
        _extractor = CardExtractor()
    return _extractor


def set_ocr_service(ocr_service: Optional[BaseOCRService], timeout: Optional[float] = None) -> None:
    """Swap the recognition engine (tests, alternate engines). None resets."""
    global _extractor
    _extractor = CardExtractor(ocr_service=ocr_service, timeout=timeout) if ocr_service else None


async def extract_uploaded_card(data: bytes, filename: str = "upload") -> ExtractedCardRecord:
    """
    Decode an uploaded image in memory and extract its card record.

    Header and body are recognized concurrently in worker threads.
    """
    image = decode_image_bytes(data)
    logger.info(f"Extracting {filename} ({image.shape[1]}x{image.shape[0]})")
    return await get_extractor().extract_async(image)
