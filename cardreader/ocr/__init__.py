"""
OCR package for player card text extraction.

This package provides:
- BaseOCRService: Abstract interface for OCR engines
- TesseractOCRService: Tesseract-based OCR implementation
- RecognitionError / RecognitionTimeout: fatal recognition failures
- Region cropping for the header and body bands
"""

from cardreader.ocr.base_ocr import BaseOCRService, RecognitionError, RecognitionTimeout
from cardreader.ocr.tesseract_service import TesseractOCRService
from cardreader.ocr.region_crops import (
    SegmentationError,
    RegionBuffer,
    crop_region,
    crop_header_for_ocr,
    crop_body_for_ocr,
    header_region,
    body_region,
)

__all__ = [
    'BaseOCRService',
    'RecognitionError',
    'RecognitionTimeout',
    'TesseractOCRService',
    'SegmentationError',
    'RegionBuffer',
    'crop_region',
    'crop_header_for_ocr',
    'crop_body_for_ocr',
    'header_region',
    'body_region',
]
