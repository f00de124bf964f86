"""
Tesseract OCR service implementation.

Uses pytesseract to read card regions as plain multi-line text.
"""

import cv2
import numpy as np
import logging
import platform
from pathlib import Path
from typing import Optional

from cardreader.ocr.base_ocr import BaseOCRService, RecognitionError, RecognitionTimeout
from cardreader.config import (
    OCR_LANG,
    OCR_PSM_MODE,
    OCR_OEM_MODE,
    OCR_TIMEOUT_SECONDS,
    OCR_UPSCALE_MIN_HEIGHT,
    OCR_UPSCALE_FACTOR,
    TESSERACT_CMD,
)

logger = logging.getLogger(__name__)

# Lazy import pytesseract to avoid import errors if not installed
_pytesseract = None

# Common Tesseract install locations on Windows
WINDOWS_TESSERACT_PATHS = [
    r"C:\Program Files\Tesseract-OCR\tesseract.exe",
    r"C:\Program Files (x86)\Tesseract-OCR\tesseract.exe",
    r"C:\ProgramData\chocolatey\bin\tesseract.exe",
]


def _find_tesseract_windows() -> Optional[str]:
    """Find Tesseract executable on Windows."""
    for path in WINDOWS_TESSERACT_PATHS:
        if Path(path).exists():
            logger.info(f"Found Tesseract at: {path}")
            return path
    return None


def _get_pytesseract():
    """Lazy load pytesseract module and configure path if needed."""
    global _pytesseract
    if _pytesseract is None:
        try:
            import pytesseract

            # On Windows, auto-configure Tesseract path if not in PATH
            if platform.system() == "Windows":
                tesseract_path = _find_tesseract_windows()
                if tesseract_path:
                    pytesseract.pytesseract.tesseract_cmd = tesseract_path
                    logger.info(f"Configured pytesseract to use: {tesseract_path}")

            _pytesseract = pytesseract
        except ImportError:
            raise ImportError(
                "pytesseract is required for OCR. Install with: pip install pytesseract\n"
                "Also ensure Tesseract is installed on your system:\n"
                "  Windows: choco install tesseract or download from GitHub\n"
                "  Linux: apt-get install tesseract-ocr\n"
                "  macOS: brew install tesseract"
            )
    return _pytesseract


class TesseractOCRService(BaseOCRService):
    """
    Tesseract-based OCR service for player card regions.

    One Tesseract run per call (no retries, no fallback preprocessing
    chain). Any engine failure, timeout or blank result is raised as
    RecognitionError.

    Usage:
        ocr = TesseractOCRService(timeout=15)
        header_text = ocr.recognize(header_crop)
    """

    # Valid Tesseract PSM modes (0-13)
    VALID_PSM_MODES = range(0, 14)

    def __init__(
        self,
        tesseract_cmd: Optional[str] = TESSERACT_CMD,
        lang: str = OCR_LANG,
        psm: int = OCR_PSM_MODE,
        timeout: Optional[float] = OCR_TIMEOUT_SECONDS
    ):
        """
        Initialize the Tesseract OCR service.

        Args:
            tesseract_cmd: Optional path to tesseract executable.
                          If not provided, uses system PATH.
            lang: Tesseract language code
            psm: Page segmentation mode (default 6 = uniform block of text)
            timeout: Default deadline in seconds (0 or None = no deadline)
        """
        if psm not in self.VALID_PSM_MODES:
            raise ValueError(f"Invalid PSM mode: {psm}. Must be 0-13.")

        self._tesseract_cmd = tesseract_cmd
        self.lang = lang
        self.psm = psm
        self.timeout = timeout or 0

        if tesseract_cmd:
            pytesseract = _get_pytesseract()
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    @property
    def config(self) -> str:
        return f'--psm {self.psm} --oem {OCR_OEM_MODE}'

    def is_available(self) -> bool:
        """Check if Tesseract is properly installed."""
        try:
            pytesseract = _get_pytesseract()
            version = pytesseract.get_tesseract_version()
            logger.info(f"Tesseract version: {version}")
            return True
        except Exception as e:
            logger.warning(f"Tesseract not available: {e}")
            return False

    def _to_grayscale(self, image: np.ndarray) -> np.ndarray:
        """Convert image to grayscale."""
        if len(image.shape) == 3:
            if image.shape[2] == 4:  # RGBA
                return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
            elif image.shape[2] == 3:  # RGB or BGR
                return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        return image.copy()

    def _preprocess(self, image: np.ndarray) -> np.ndarray:
        """Grayscale, upscaling short crops so small print stays legible."""
        h, w = image.shape[:2]
        if h < OCR_UPSCALE_MIN_HEIGHT:
            image = cv2.resize(
                image,
                (w * OCR_UPSCALE_FACTOR, h * OCR_UPSCALE_FACTOR),
                interpolation=cv2.INTER_CUBIC
            )
        return self._to_grayscale(image)

    def recognize(
        self,
        image: np.ndarray,
        timeout: Optional[float] = None
    ) -> str:
        """
        Run Tesseract once over a region.

        Args:
            image: Region crop (RGB, BGR, or grayscale)
            timeout: Deadline in seconds; None uses the service default

        Returns:
            Recognized text with line breaks preserved

        Raises:
            RecognitionError: Empty image, engine failure, or blank result
            RecognitionTimeout: Tesseract was killed at the deadline
        """
        if image is None or image.size == 0:
            raise RecognitionError("Empty image provided to OCR")

        deadline = self.timeout if timeout is None else timeout
        pytesseract = _get_pytesseract()

        try:
            gray = self._preprocess(image)
            text = pytesseract.image_to_string(
                gray,
                lang=self.lang,
                config=self.config,
                timeout=deadline
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, cv2.error) as e:
            logger.error(f"Tesseract failed: {e}")
            raise RecognitionError(f"Tesseract failed: {e}") from e
        except RuntimeError as e:
            # pytesseract signals a killed process with a bare RuntimeError
            if 'timeout' in str(e).lower():
                logger.error(f"Tesseract timed out after {deadline}s")
                raise RecognitionTimeout(f"Tesseract timed out after {deadline}s") from e
            raise

        if not text or not text.strip():
            raise RecognitionError("Tesseract returned no text")

        logger.debug(f"OCR ({image.shape[1]}x{image.shape[0]}): {len(text.splitlines())} line(s)")
        return text
