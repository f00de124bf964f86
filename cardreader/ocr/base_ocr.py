"""
Base OCR service interface.

Defines the abstract interface for recognition engines, allowing for
swappable implementations (Tesseract, EasyOCR, a test double, etc.)
"""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class RecognitionError(RuntimeError):
    """The engine could not turn a region into usable text."""


class RecognitionTimeout(RecognitionError):
    """The engine did not finish before the deadline."""


class BaseOCRService(ABC):
    """
    Abstract base class for OCR services.

    Implementations make a single attempt per call and raise
    RecognitionError instead of returning empty text.

    Example usage:
        ocr = TesseractOCRService()
        text = ocr.recognize(body_crop, timeout=10)
    """

    @abstractmethod
    def recognize(
        self,
        image: np.ndarray,
        timeout: Optional[float] = None
    ) -> str:
        """
        Recognize the text in an image region.

        Args:
            image: Region as numpy array (RGB, BGR or grayscale)
            timeout: Deadline in seconds; None uses the service default

        Returns:
            Plain multi-line text

        Raises:
            RecognitionError: Engine failure or no usable text
            RecognitionTimeout: Deadline elapsed
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the OCR service is properly installed and available.

        Returns:
            True if the service can be used, False otherwise
        """
        pass
