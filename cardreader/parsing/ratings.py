"""
Label-anchored rating decoders.

Each decoder looks for the first occurrence of its label in the body text
and returns the grade that follows it, or None. Labels are matched
case-insensitively; grades are reported uppercase.
"""

import re
from typing import Optional

# "Balance: 1R", "balance 9L", "Balance: E"
BALANCE_PATTERN = re.compile(r'Balance[:\s]*(\d*[LRE])\b', re.IGNORECASE)

# "stealing-(A)", "stealing (AAA)"
STEAL_PATTERN = re.compile(r'stealing[:\s-]*\(([A-E]{1,3})\)', re.IGNORECASE)

# "running 1-13"
RUN_PATTERN = re.compile(r'running[:\s]*(\d-\d{2})(?!\d)', re.IGNORECASE)

# "bunting-C"
BUNTING_PATTERN = re.compile(r'bunting[:\s-]*([A-D])\b', re.IGNORECASE)

# "hit & run-B"
HIT_AND_RUN_PATTERN = re.compile(r'hit\s*&\s*run[:\s-]*([A-D])\b', re.IGNORECASE)


def _first_group(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(1).upper()


def decode_balance(text: str) -> Optional[str]:
    """Balance code, e.g. '1R', '9L' or 'E'."""
    return _first_group(BALANCE_PATTERN, text)


def decode_steal_rating(text: str) -> Optional[str]:
    """Stealing grade, 1-3 letters A-E (e.g. 'AA')."""
    return _first_group(STEAL_PATTERN, text)


def decode_run_rating(text: str) -> Optional[str]:
    """Running range, e.g. '1-13'."""
    return _first_group(RUN_PATTERN, text)


def decode_bunting(text: str) -> Optional[str]:
    """Bunting grade A-D."""
    return _first_group(BUNTING_PATTERN, text)


def decode_hit_and_run(text: str) -> Optional[str]:
    """Hit-and-run grade A-D."""
    return _first_group(HIT_AND_RUN_PATTERN, text)
