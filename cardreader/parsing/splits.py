"""
Split chart decoding (hitting and pitching result columns).

Result tokens are pulled out line by line. A line's tokens are placed in
the vs-lefty or vs-righty bucket only when the line itself names the
opponent's handedness; tokens on unmarked lines are dropped. Which of a
bucket's three columns a token really belongs to cannot be told from the
recognized text, so tokens are dealt left to right across the columns and
the editing UI is expected to confirm them.
"""

import re
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from cardreader.models import LeftyColumns, PitchingChart, RightyColumns, SplitChart

logger = logging.getLogger(__name__)

OUTCOME_WORDS = r'(?i:home\s?run|triple|double|single|walk|strikeout|lineout|flyout|groundout|popout|foulout)\b'

# Chart abbreviations; labels such as "BUNTING" or "LEFTY" after a range are not results
OUTCOME_CODES = r'(?:HBP|HR|SI|DO|TR|BB|GB|FB|LO|PO|FO|K)\*{0,2}(?![A-Za-z])'

# Alternatives are tried in order at each position, so a dice range with its
# outcome ("1-10 HR") is taken as one token before the shorthand branch can
# claim the bare "HR".
RESULT_TOKEN_PATTERN = re.compile(
    # Dice range + outcome: "1-10 HR", "11-15 SI*", "2-5 strikeout"
    rf'\b\d{{1,2}}-\d{{1,2}}\s+(?:{OUTCOME_CODES}|{OUTCOME_WORDS})'
    # Shorthand outcome codes: "HR", "SI**", "DO*"
    r'|\b(?:HR|SI|DO|TR)\*{0,2}(?![A-Za-z])'
    # Outcome words: "HOMERUN", "single", "strikeout"
    rf'|\b{OUTCOME_WORDS}'
)

ENDURANCE_PATTERN = re.compile(r'\b([SRC]\d)\b', re.IGNORECASE)

# Hitter cards chart results against opposing pitchers
HITTING_LEFT_MARKERS = ('LEFTY PITCHER', 'VS LHP', 'VS. LHP')
HITTING_RIGHT_MARKERS = ('RIGHTY PITCHER', 'VS RHP', 'VS. RHP')

# Pitcher cards chart results against opposing batters
PITCHING_LEFT_MARKERS = ('LEFTY BATTER', 'LEFTY HITTER', 'VS LHB', 'VS. LHB')
PITCHING_RIGHT_MARKERS = ('RIGHTY BATTER', 'RIGHTY HITTER', 'VS RHB', 'VS. RHB')

Columns = Tuple[Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]]

EMPTY_COLUMNS: Columns = ((), (), ())


def find_result_tokens(line: str) -> List[str]:
    """Return every result token on a line, in reading order."""
    return [match.group(0) for match in RESULT_TOKEN_PATTERN.finditer(line)]


def _has_marker(line: str, markers: Sequence[str]) -> bool:
    upper = line.upper()
    return any(marker in upper for marker in markers)


def _deal(columns: Columns, tokens: Iterable[str]) -> Columns:
    """Return new columns with tokens appended round-robin, first column first."""
    dealt = list(columns)
    for i, token in enumerate(tokens):
        dealt[i % 3] = dealt[i % 3] + (token,)
    return tuple(dealt)


def decode_splits(
    text: str,
    left_markers: Sequence[str],
    right_markers: Sequence[str]
) -> SplitChart:
    """
    Bucket result tokens by the handedness marker on their line.

    Args:
        text: Recognized body text
        left_markers: Uppercase substrings that mark a vs-lefty line
        right_markers: Uppercase substrings that mark a vs-righty line

    Returns:
        SplitChart (possibly empty)
    """
    lefty = EMPTY_COLUMNS
    righty = EMPTY_COLUMNS

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        tokens = find_result_tokens(line)
        if not tokens:
            continue

        if _has_marker(line, left_markers):
            lefty = _deal(lefty, tokens)
        elif _has_marker(line, right_markers):
            righty = _deal(righty, tokens)
        else:
            logger.debug(f"Unmarked chart line, {len(tokens)} token(s) dropped: '{line}'")

    return SplitChart(
        vs_lefty=LeftyColumns(*lefty),
        vs_righty=RightyColumns(*righty),
    )


def decode_hitting(text: str) -> Optional[SplitChart]:
    """Hitting chart, or None if no marked result lines were found."""
    chart = decode_splits(text, HITTING_LEFT_MARKERS, HITTING_RIGHT_MARKERS)
    return None if chart.is_empty() else chart


def decode_endurance(text: str) -> Optional[str]:
    """First endurance code (S#, R# or C#) anywhere in the text."""
    match = ENDURANCE_PATTERN.search(text)
    return match.group(1).upper() if match else None


def decode_pitching(text: str) -> Optional[PitchingChart]:
    """
    Pitching chart with endurance.

    Returns None only when there are no marked result lines and no
    endurance code.
    """
    chart = decode_splits(text, PITCHING_LEFT_MARKERS, PITCHING_RIGHT_MARKERS)
    endurance = decode_endurance(text)

    if chart.is_empty() and endurance is None:
        return None

    return PitchingChart(
        vs_lefty=chart.vs_lefty,
        vs_righty=chart.vs_righty,
        endurance=endurance,
    )
