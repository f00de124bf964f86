"""
cardreader/tests/test_pipeline.py: Integration tests for CardExtractor

Uses FakeOCRService, so no Tesseract install is needed.

Tests:
- Sequential and concurrent extraction produce the same record
- Both regions in flight at once on the async path
- Failure in either region aborts the call
- Region buffers released on success and failure
- Deadline handling
"""

import asyncio
import threading

import numpy as np
import pytest

from cardreader.extraction import pipeline
from cardreader.extraction.pipeline import CardExtractor, extract_card
from cardreader.ocr.base_ocr import RecognitionError, RecognitionTimeout
from cardreader.ocr.region_crops import SegmentationError
from cardreader.utils.image_io import ImageLoadError

from cardreader.tests.conftest import FakeOCRService


@pytest.fixture
def tracked_regions(monkeypatch):
    """Record every RegionBuffer the pipeline creates."""
    created = []
    real_header = pipeline.header_region
    real_body = pipeline.body_region

    def header(image):
        region = real_header(image)
        created.append(region)
        return region

    def body(image):
        region = real_body(image)
        created.append(region)
        return region

    monkeypatch.setattr(pipeline, 'header_region', header)
    monkeypatch.setattr(pipeline, 'body_region', body)
    return created


class TestSequentialExtraction:

    def test_extract_from_array(self, card_image, fake_ocr):
        record = CardExtractor(fake_ocr).extract(card_image)

        assert record.player_name == "Ruth, Babe"
        assert record.year == "1927"
        assert record.balance == "1R"
        assert record.defense['C'].throwing == "T-1"

    def test_extract_from_file(self, card_image_file, fake_ocr):
        record = extract_card(card_image_file, ocr_service=fake_ocr)
        assert record.player_name == "Ruth, Babe"

    def test_each_region_read_once(self, card_image, fake_ocr):
        CardExtractor(fake_ocr, timeout=12).extract(card_image)

        assert [call[0] for call in fake_ocr.calls] == ['header', 'body']
        assert fake_ocr.calls[0][1] == (150, 700, 3)
        assert fake_ocr.calls[1][1] == (700, 700, 3)
        assert all(call[2] == 12 for call in fake_ocr.calls)

    def test_unknown_player_when_header_unreadable(self, card_image):
        ocr = FakeOCRService(header_text="~~ smudge ~~")
        record = CardExtractor(ocr).extract(card_image)
        assert record.player_name == "Unknown Player"
        assert record.balance == "1R"

    @pytest.mark.parametrize("region", ['header', 'body'])
    def test_failure_aborts(self, card_image, region):
        ocr = FakeOCRService(fail_on=region)
        with pytest.raises(RecognitionError):
            CardExtractor(ocr).extract(card_image)

    def test_header_failure_skips_body(self, card_image):
        ocr = FakeOCRService(fail_on='header')
        with pytest.raises(RecognitionError):
            CardExtractor(ocr).extract(card_image)
        assert [call[0] for call in ocr.calls] == ['header']

    @pytest.mark.parametrize("region", [None, 'header', 'body'])
    def test_buffers_released(self, card_image, tracked_regions, region):
        ocr = FakeOCRService(fail_on=region)
        extractor = CardExtractor(ocr)

        if region is None:
            extractor.extract(card_image)
        else:
            with pytest.raises(RecognitionError):
                extractor.extract(card_image)

        assert len(tracked_regions) == 2
        assert all(r.released for r in tracked_regions)

    def test_tiny_image(self, fake_ocr):
        with pytest.raises(SegmentationError):
            CardExtractor(fake_ocr).extract(np.zeros((5, 5, 3), dtype=np.uint8))
        assert fake_ocr.calls == []

    def test_missing_file(self, tmp_path, fake_ocr):
        with pytest.raises(ImageLoadError):
            CardExtractor(fake_ocr).extract(tmp_path / "nope.png")

    def test_same_image_same_record(self, card_image, fake_ocr):
        extractor = CardExtractor(fake_ocr)
        assert extractor.extract(card_image) == extractor.extract(card_image)


class TestConcurrentExtraction:

    def test_matches_sequential(self, card_image, fake_ocr):
        extractor = CardExtractor(fake_ocr)

        sequential = extractor.extract(card_image)
        concurrent = asyncio.run(extractor.extract_async(card_image))

        assert concurrent == sequential

    def test_regions_in_flight_together(self, card_image):
        # Neither recognize() call can return until both have started
        barrier = threading.Barrier(2, timeout=5)
        ocr = FakeOCRService(barrier=barrier)

        record = asyncio.run(CardExtractor(ocr).extract_async(card_image))

        assert record.player_name == "Ruth, Babe"
        assert sorted(call[0] for call in ocr.calls) == ['body', 'header']

    @pytest.mark.parametrize("region", ['header', 'body'])
    def test_failure_aborts(self, card_image, tracked_regions, region):
        ocr = FakeOCRService(fail_on=region)

        with pytest.raises(RecognitionError):
            asyncio.run(CardExtractor(ocr).extract_async(card_image))

        assert all(r.released for r in tracked_regions)

    def test_engine_timeout_type_preserved(self, card_image):
        ocr = FakeOCRService(fail_on='body', error=RecognitionTimeout("killed at deadline"))

        with pytest.raises(RecognitionTimeout):
            asyncio.run(CardExtractor(ocr).extract_async(card_image))

    def test_deadline_exceeded(self, card_image):
        ocr = FakeOCRService(delay=0.5)
        extractor = CardExtractor(ocr, timeout=0.05)

        with pytest.raises(RecognitionTimeout):
            asyncio.run(extractor.extract_async(card_image))

    def test_data_url_source(self, card_png_bytes, fake_ocr):
        import base64

        url = "data:image/png;base64," + base64.b64encode(card_png_bytes).decode('ascii')
        record = asyncio.run(CardExtractor(fake_ocr).extract_async(url))

        assert record.year == "1927"
