"""Configuration for the tabletop baseball card reader."""

import os
from dotenv import load_dotenv

load_dotenv()

# Region segmentation (fractions of full card height)
# Header holds "Last, First (YYYY)"; capped so very tall scans don't pull
# the top of the ratings block into the header crop.
HEADER_HEIGHT_FRACTION = float(os.getenv("HEADER_HEIGHT_FRACTION", "0.15"))
HEADER_MAX_HEIGHT_PX = int(os.getenv("HEADER_MAX_HEIGHT_PX", "150"))

# Body starts at the header's fractional offset (not the capped height)
BODY_HEIGHT_FRACTION = float(os.getenv("BODY_HEIGHT_FRACTION", "0.70"))

# Tesseract settings
OCR_LANG = os.getenv("OCR_LANG", "eng")
OCR_PSM_MODE = int(os.getenv("OCR_PSM_MODE", "6"))  # 6 = uniform block of text
OCR_OEM_MODE = int(os.getenv("OCR_OEM_MODE", "3"))
# Roster screenshots are multi-column pages, not a single text block
ROSTER_OCR_PSM_MODE = int(os.getenv("ROSTER_OCR_PSM_MODE", "3"))  # 3 = automatic page segmentation
TESSERACT_CMD = os.getenv("TESSERACT_CMD") or None

# Deadline per region in seconds (0 = wait forever)
OCR_TIMEOUT_SECONDS = float(os.getenv("OCR_TIMEOUT_SECONDS", "0"))

# Crops shorter than this are upscaled before OCR
OCR_UPSCALE_MIN_HEIGHT = int(os.getenv("OCR_UPSCALE_MIN_HEIGHT", "60"))
OCR_UPSCALE_FACTOR = int(os.getenv("OCR_UPSCALE_FACTOR", "2"))

# Extraction
UNKNOWN_PLAYER = "Unknown Player"

# API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(15 * 1024 * 1024)))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
