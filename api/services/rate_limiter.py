"""
Rate limiting configuration for the API.

Provides a shared Limiter instance that can be used across all route modules.
"""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

# Per-client limit on extraction uploads (OCR is the expensive step)
EXTRACT_RATE_LIMIT = os.getenv("EXTRACT_RATE_LIMIT", "30/minute")

# Using remote address (IP) as the key for rate limiting
limiter = Limiter(key_func=get_remote_address)
