"""
Card extraction pipeline.

image -> header/body crops -> OCR per region -> field decoders -> record

Recognition is the only blocking step. extract() reads the header and then
the body; extract_async() reads both regions at once since neither depends
on the other.
"""

import asyncio
import logging
from typing import Optional, Tuple

import numpy as np

from cardreader.extraction.assembler import assemble_record
from cardreader.models import ExtractedCardRecord
from cardreader.ocr.base_ocr import BaseOCRService, RecognitionError, RecognitionTimeout
from cardreader.ocr.region_crops import RegionBuffer, header_region, body_region
from cardreader.utils.image_io import ImageSource, load_image, fetch_image

logger = logging.getLogger(__name__)


class CardExtractor:
    """
    Reads a player card image into an ExtractedCardRecord.

    A recognition failure in either region aborts the whole call; no
    partial record is returned and nothing is retried.

    Usage:
        extractor = CardExtractor(TesseractOCRService(), timeout=20)
        record = extractor.extract("cards/ruth_1927.jpg")
        print(record.to_dict())
    """

    def __init__(
        self,
        ocr_service: Optional[BaseOCRService] = None,
        timeout: Optional[float] = None
    ):
        """
        Args:
            ocr_service: Recognition engine (default: TesseractOCRService)
            timeout: Per-region deadline in seconds; None uses the
                     service default
        """
        if ocr_service is None:
            from cardreader.ocr.tesseract_service import TesseractOCRService
            ocr_service = TesseractOCRService()

        self.ocr = ocr_service
        self.timeout = timeout

    def _read_region(self, region: RegionBuffer) -> str:
        """Recognize one region, releasing its buffer on every exit path."""
        with region:
            pixels = region.pixels
            if pixels is None:
                raise RecognitionError(f"{region.name} region was released before recognition")
            logger.debug(f"Recognizing {region.name} region {pixels.shape}")
            return self.ocr.recognize(pixels, timeout=self.timeout)

    def _crop(self, image: np.ndarray) -> Tuple[RegionBuffer, RegionBuffer]:
        header = header_region(image)
        try:
            body = body_region(image)
        except Exception:
            header.release()
            raise
        return header, body

    def recognize_regions(self, source: ImageSource) -> Tuple[str, str]:
        """
        OCR the header and body bands, one after the other.

        Returns:
            (header_text, body_text)
        """
        image = load_image(source)
        header, body = self._crop(image)

        try:
            header_text = self._read_region(header)
            body_text = self._read_region(body)
        finally:
            # body is never read if the header fails
            body.release()

        return header_text, body_text

    def extract(self, source: ImageSource) -> ExtractedCardRecord:
        """
        Extract a card record, recognizing header then body.

        Args:
            source: numpy image, file path or data: URL

        Returns:
            ExtractedCardRecord

        Raises:
            ImageLoadError: Unreadable source
            SegmentationError: Image too small to segment
            RecognitionError: OCR failed for either region
        """
        header_text, body_text = self.recognize_regions(source)
        return assemble_record(header_text, body_text)

    async def _read_region_async(self, region: RegionBuffer) -> str:
        read = asyncio.to_thread(self._read_region, region)
        if not self.timeout:
            return await read

        try:
            return await asyncio.wait_for(read, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise RecognitionTimeout(
                f"{region.name} recognition exceeded {self.timeout}s"
            ) from e

    async def recognize_regions_async(self, source: ImageSource) -> Tuple[str, str]:
        """
        OCR the header and body bands concurrently.

        If either task fails the other is cancelled before the error
        propagates.

        Returns:
            (header_text, body_text)
        """
        image = await fetch_image(source)
        header, body = self._crop(image)

        tasks = [
            asyncio.ensure_future(self._read_region_async(header)),
            asyncio.ensure_future(self._read_region_async(body)),
        ]

        try:
            header_text, body_text = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        finally:
            # A cancelled thread may still be inside OCR; drop our references
            header.release()
            body.release()

        return header_text, body_text

    async def extract_async(self, source: ImageSource) -> ExtractedCardRecord:
        """
        Extract a card record, recognizing both regions concurrently.

        Args:
            source: numpy image, file path, data: URL or http(s) URL

        Returns:
            ExtractedCardRecord
        """
        header_text, body_text = await self.recognize_regions_async(source)
        return assemble_record(header_text, body_text)


def extract_card(
    source: ImageSource,
    ocr_service: Optional[BaseOCRService] = None,
    timeout: Optional[float] = None
) -> ExtractedCardRecord:
    """Convenience wrapper: extract one card with a fresh CardExtractor."""
    return CardExtractor(ocr_service=ocr_service, timeout=timeout).extract(source)
