"""
cardreader/utils/image_io.py: Card image loading
Accepts numpy arrays, PIL images, file paths, data: URLs and http(s) URLs
"""

import base64
import logging
from pathlib import Path
from typing import Optional, Union

import aiohttp
import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

ImageSource = Union[np.ndarray, Image.Image, str, Path]

DOWNLOAD_TIMEOUT_SECONDS = 30


class ImageLoadError(ValueError):
    """The image could not be read or decoded."""


def decode_image_bytes(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, ...) to a BGR array."""
    if not data:
        raise ImageLoadError("Empty image data")

    buffer = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if img is None:
        raise ImageLoadError("Could not decode image data")
    return img


def pil_to_bgr(image: Image.Image) -> np.ndarray:
    """Convert a PIL image (any mode) to a BGR array."""
    if image.width == 0 or image.height == 0:
        raise ImageLoadError("Empty PIL image")
    rgb = np.array(image.convert('RGB'))
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def _decode_data_url(url: str) -> np.ndarray:
    header, _, payload = url.partition(',')
    if ';base64' not in header:
        raise ImageLoadError("Only base64 data URLs are supported")
    try:
        data = base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise ImageLoadError(f"Invalid base64 payload in data URL: {e}") from e
    return decode_image_bytes(data)


def is_remote_url(source: ImageSource) -> bool:
    return isinstance(source, str) and source.lower().startswith(('http://', 'https://'))


def load_image(source: ImageSource) -> np.ndarray:
    """
    Load a card image from a local source.

    Args:
        source: numpy array, PIL image, file path, or data: URL

    Returns:
        Image as BGR numpy array

    Raises:
        ImageLoadError: If the source cannot be read or decoded
    """
    if isinstance(source, np.ndarray):
        if source.size == 0:
            raise ImageLoadError("Empty image array")
        return source

    if isinstance(source, Image.Image):
        return pil_to_bgr(source)

    if is_remote_url(source):
        raise ImageLoadError(f"Remote URL needs fetch_image(): {source}")

    if isinstance(source, str) and source.startswith('data:'):
        return _decode_data_url(source)

    path = Path(source)
    if not path.exists():
        raise ImageLoadError(f"Image not found: {path}")

    img = cv2.imread(str(path))
    if img is None:
        raise ImageLoadError(f"Could not load image: {path}")

    logger.debug(f"Loaded {path.name}: {img.shape[1]}x{img.shape[0]}")
    return img


async def fetch_image(
    source: ImageSource,
    session: Optional[aiohttp.ClientSession] = None
) -> np.ndarray:
    """
    Load a card image, downloading it first if it is an http(s) URL.

    Args:
        source: Anything load_image() accepts, or an http(s) URL
        session: Optional shared aiohttp session

    Returns:
        Image as BGR numpy array
    """
    if not is_remote_url(source):
        return load_image(source)

    own_session = session is None
    if own_session:
        session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=DOWNLOAD_TIMEOUT_SECONDS)
        )

    try:
        async with session.get(source) as response:
            if response.status != 200:
                raise ImageLoadError(f"Download failed ({response.status}): {source}")
            data = await response.read()
    except aiohttp.ClientError as e:
        raise ImageLoadError(f"Download failed: {source}: {e}") from e
    finally:
        if own_session:
            await session.close()

    logger.debug(f"Downloaded {len(data)} bytes from {source}")
    return decode_image_bytes(data)
