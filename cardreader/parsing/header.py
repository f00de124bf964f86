"""
Header decoding: player name and card year.

The header crop normally reads "Last, First (YYYY)". OCR often adds stray
marks around it, so each line is searched rather than matched whole.
"""

import re
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Capitalized name tokens (commas, initials, apostrophes, hyphens allowed)
# followed by a parenthesized 4-digit year: "Ruth, Babe (1927)", "Flick, E. (1905)"
NAME_YEAR_PATTERN = re.compile(
    r"([A-Z][A-Za-z'.\-]*(?:(?:\s*,\s*|\s+)[A-Z][A-Za-z'.\-]*)*)\s*\((\d{4})\)"
)

# OCR spacing around the comma varies: "Ruth , Babe", "Ruth,Babe"
COMMA_SPACING = re.compile(r'\s*,\s*')


def decode_name_year(text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Find the player name and year in header text.

    Lines are scanned top to bottom and the first matching line wins.

    Args:
        text: Recognized header text (may span several lines)

    Returns:
        (name, year), or (None, None) if no line matches
    """
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        match = NAME_YEAR_PATTERN.search(line)
        if match:
            name = COMMA_SPACING.sub(', ', match.group(1).strip())
            logger.debug(f"Header match: '{name}' ({match.group(2)}) from '{line}'")
            return name, match.group(2)

    logger.debug("No name/year found in header text")
    return None, None
