"""
cardreader/tests/conftest.py: Pytest configuration and shared fixtures

Provides:
- Synthetic card images (numpy / PNG on disk)
- A fake OCR service that answers per region without Tesseract
- Sample recognized card text
- Logging configuration
"""

import time
import threading
import logging

import cv2
import numpy as np
import pytest

from cardreader.ocr.base_ocr import BaseOCRService, RecognitionError

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

CARD_HEIGHT = 1000
CARD_WIDTH = 700

HEADER_TEXT = "Ruth, Babe (1927)\n"

BODY_TEXT = (
    "Balance: 1R stealing-(B) running 1-11 bunting-C hit & run-B c-1(-5)e1 T-1\n"
    "vs LEFTY PITCHERS 1-5 HR 6-8 SI** WALK\n"
    "vs RIGHTY PITCHERS 1-3 DO strikeout\n"
    "9-12 TR\n"
)

PITCHER_BODY_TEXT = (
    "Balance: 3L\n"
    "S6\n"
    "vs LEFTY BATTERS 1-4 strikeout 5-9 SI*\n"
    "vs RIGHTY BATTERS 1-2 HR\n"
    "p-2e4\n"
)


class FakeOCRService(BaseOCRService):
    """
    Recognition double that tells the header crop from the body crop by
    height (header crops are at most `header_rows` tall).

    Args:
        header_text / body_text: Text returned per region
        fail_on: 'header' or 'body' to raise RecognitionError there
        delay: Seconds to sleep inside recognize()
        barrier: Optional threading.Barrier both regions must reach
    """

    def __init__(
        self,
        header_text=HEADER_TEXT,
        body_text=BODY_TEXT,
        header_rows=150,
        fail_on=None,
        error=None,
        delay=0.0,
        barrier=None,
        available=True
    ):
        self.header_text = header_text
        self.body_text = body_text
        self.header_rows = header_rows
        self.fail_on = fail_on
        self.error = error
        self.delay = delay
        self.barrier = barrier
        self.available = available
        self.calls = []
        self.availability_checks = 0
        self._lock = threading.Lock()

    def region_of(self, image):
        return 'header' if image.shape[0] <= self.header_rows else 'body'

    def recognize(self, image, timeout=None):
        region = self.region_of(image)
        with self._lock:
            self.calls.append((region, image.shape, timeout))

        if self.barrier is not None:
            self.barrier.wait()
        if self.delay:
            time.sleep(self.delay)

        if self.fail_on == region:
            raise self.error or RecognitionError(f"engine failed on {region}")

        return self.header_text if region == 'header' else self.body_text

    def is_available(self):
        self.availability_checks += 1
        return self.available


@pytest.fixture
def card_image():
    """Blank 700x1000 BGR card image"""
    return np.full((CARD_HEIGHT, CARD_WIDTH, 3), 255, dtype=np.uint8)


@pytest.fixture
def card_image_file(tmp_path, card_image):
    """Card image saved as PNG"""
    path = tmp_path / "card.png"
    cv2.imwrite(str(path), card_image)
    return path


@pytest.fixture
def card_png_bytes(card_image):
    """Card image encoded as PNG bytes"""
    ok, encoded = cv2.imencode('.png', card_image)
    assert ok
    return encoded.tobytes()


@pytest.fixture
def fake_ocr():
    return FakeOCRService()


def pytest_configure(config):
    """
    Pytest configuration hook

    Args:
        config: Pytest config object
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (pipeline, CLI, API)")
    config.addinivalue_line("markers", "slow: Slow tests (> 1 second)")


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on naming conventions"""
    for item in items:
        if 'integration' in item.nodeid.lower():
            item.add_marker(pytest.mark.integration)

        if 'slow' in item.nodeid.lower():
            item.add_marker(pytest.mark.slow)
