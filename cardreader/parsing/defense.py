"""
Defense grid decoding.

Fielding entries read "<position>-<range>[(<arm>)]e<error>", e.g.
"ss-2e12", "1b-1e5", "c-1(-5)e1", "rf-2(+1)e4". Catchers also carry a
throwing rating printed separately as "T-1".
"""

import re
import logging
from dataclasses import replace
from functools import reduce
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from cardreader.models import DefenseRating

logger = logging.getLogger(__name__)

# Parentheses around the arm modifier are optional: OCR drops them often.
DEFENSE_PATTERN = re.compile(
    r'\b(?P<position>[A-Z0-9]{1,2})-(?P<range>\d)\(?(?P<arm>[-+]?\d+)?\)?e(?P<error>\d+)',
    re.IGNORECASE
)

THROWING_PATTERN = re.compile(r'\bT-(\d)\b', re.IGNORECASE)

CATCHER = 'C'


def _fold_rating(ratings: Dict[str, DefenseRating], match: re.Match) -> Dict[str, DefenseRating]:
    """Insert one grid entry; a repeated position replaces the earlier one."""
    position = match.group('position').upper()
    arm = match.group('arm')

    rating = DefenseRating(
        range=int(match.group('range')),
        error=int(match.group('error')),
        arm=int(arm) if arm is not None else None,
    )

    if position in ratings:
        logger.debug(f"Defense: {position} seen again, keeping later entry '{match.group(0)}'")

    return {**ratings, position: rating}


def decode_defense(text: str) -> Optional[Mapping[str, DefenseRating]]:
    """
    Collect every fielding entry in the body text.

    The whole text is scanned (entries often share a line). When the same
    position appears more than once the last entry wins. A throwing rating
    is attached to the catcher entry if there is one and dropped otherwise.

    Args:
        text: Recognized body text

    Returns:
        Read-only mapping of uppercased position to DefenseRating,
        or None if no entries were found
    """
    ratings = reduce(_fold_rating, DEFENSE_PATTERN.finditer(text), {})

    throwing = THROWING_PATTERN.search(text)
    if throwing:
        if CATCHER in ratings:
            catcher = replace(ratings[CATCHER], throwing=f"T-{throwing.group(1)}")
            ratings = {**ratings, CATCHER: catcher}
        else:
            logger.debug(f"Throwing rating '{throwing.group(0)}' found without a catcher entry; ignored")

    if not ratings:
        return None

    return MappingProxyType(ratings)
