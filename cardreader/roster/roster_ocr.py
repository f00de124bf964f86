"""
cardreader/roster/roster_ocr.py: Roster screenshots to roster assignments

A roster screenshot shows one division: a division header, then each team
as a "Team Name (W-L)" line followed by lines of player entries. One OCR
line often holds several entries mixed with salary and position columns:

    Cash .00M Flick, E. (1905) I L RF 6.36M Cash .07M Harper, B. (2015)

Entries are normalized to the "Last, I. (YYYY)" form used in roster
assignment files, which is what diagnose_roster_mismatches() reads.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from cardreader.config import ROSTER_OCR_PSM_MODE
from cardreader.ocr.base_ocr import BaseOCRService
from cardreader.utils.image_io import ImageSource, load_image

logger = logging.getLogger(__name__)

# "Manhattan WOW Award Stars (9-12)"
TEAM_HEADER_PATTERN = re.compile(r"^([A-Za-z][A-Za-z\s']*?)\s*\((\d+-\d+)\)")

# "Flick, E. (1905)", optionally behind a one-letter team column: "M Jenkins, F. (1968)"
PLAYER_ENTRY_PATTERN = re.compile(
    r"(?:\b[A-Z]\s+)?"
    r"([A-Z][A-Za-z'\-]+(?:\s+[A-Z][A-Za-z'\-]+)*)"
    r"\s*,\s*([A-Z])\.?\s*\((\d{4})\)"
)

LABEL_WORDS = ('division', 'cash', 'total value', 'roster total', 'pitchers', 'hitters')

MIN_LINE_LENGTH = 10


class RosterParseError(ValueError):
    """The recognized text holds nothing to parse."""


@dataclass
class TeamRoster:
    """One team block read from a roster screenshot."""

    team_name: str
    record: Optional[str] = None
    hitters: List[str] = field(default_factory=list)
    pitchers: List[str] = field(default_factory=list)


def _clean_line(line: str) -> str:
    # OCR reads "I" as "|" and mixes apostrophe glyphs
    return line.replace('|', 'I').replace('`', "'").replace('’', "'").strip()


def extract_players_from_line(line: str) -> List[str]:
    """
    Every player entry on one OCR line, as "Last, I. (YYYY)".

    Example:
        >>> extract_players_from_line("Cash .00M Flick, E. (1905) I L RF 6.36M")
        ['Flick, E. (1905)']
    """
    players = []
    for match in PLAYER_ENTRY_PATTERN.finditer(_clean_line(line)):
        last_name, initial, year = match.groups()
        players.append(f"{last_name}, {initial}. ({year})")
    return players


def is_label_line(line: str) -> bool:
    """Division headers, section labels, totals and fragments too short to hold an entry."""
    lower = line.lower()
    if len(lower) < MIN_LINE_LENGTH:
        return True
    if 'total' in lower and ('pitcher' in lower or 'hitter' in lower):
        return True
    return any(word in lower for word in LABEL_WORDS)


def parse_roster_text(text: str) -> List[TeamRoster]:
    """
    Split recognized roster text into teams.

    Team header lines start a new team; player entries on the following
    lines belong to it. Label lines holding no entry are skipped before the
    header check, so "East Division (45-30)" never becomes a team. Entries
    seen before the first team header are dropped.

    The screenshot gives no reliable hitter/pitcher split, so every entry is
    listed under hitters.

    Args:
        text: Full recognized text of one screenshot

    Returns:
        TeamRoster per team, in order of appearance

    Raises:
        RosterParseError: If the text has no non-blank lines
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise RosterParseError("No text found in roster image")

    logger.debug(f"Parsing {len(lines)} roster line(s)")

    teams: Dict[str, TeamRoster] = {}
    current: Optional[TeamRoster] = None

    for line in lines:
        players = extract_players_from_line(line)

        if not players and is_label_line(line):
            logger.debug(f"Skipping label line: '{line}'")
            continue

        header = TEAM_HEADER_PATTERN.match(line)
        if header and not players:
            name = ' '.join(header.group(1).split())
            current = teams.setdefault(name, TeamRoster(team_name=name, record=header.group(2)))
            logger.info(f"Found team: '{name}' ({header.group(2)})")
            continue

        if not players:
            continue

        if current is None:
            logger.warning(f"{len(players)} player(s) before any team header dropped: '{line}'")
            continue

        current.hitters.extend(players)

    for team in teams.values():
        logger.info(f"Team '{team.team_name}': {len(team.hitters)} player(s)")

    return list(teams.values())


def to_roster_assignments(teams: Iterable[TeamRoster]) -> Dict[str, Any]:
    """
    Build the roster assignment document: {"rosters": {team: {...}}}.

    A team appearing in several screenshots has its entries merged.
    """
    rosters: Dict[str, Dict[str, List[str]]] = {}
    for team in teams:
        entry = rosters.setdefault(team.team_name, {'hitters': [], 'pitchers': []})
        entry['hitters'].extend(team.hitters)
        entry['pitchers'].extend(team.pitchers)
    return {'rosters': rosters}


class RosterReader:
    """
    Reads roster screenshots with one full-image OCR pass each.

    Usage:
        reader = RosterReader()
        teams = reader.read_images(["east.png", "west.png"])
        assignments = to_roster_assignments(teams)
    """

    def __init__(
        self,
        ocr_service: Optional[BaseOCRService] = None,
        timeout: Optional[float] = None
    ):
        if ocr_service is None:
            from cardreader.ocr.tesseract_service import TesseractOCRService
            ocr_service = TesseractOCRService(psm=ROSTER_OCR_PSM_MODE)

        self.ocr = ocr_service
        self.timeout = timeout

    def read_image(self, source: ImageSource) -> List[TeamRoster]:
        """
        Recognize and parse one screenshot.

        Raises:
            ImageLoadError: Unreadable source
            RecognitionError: OCR failed
            RosterParseError: No text recognized
        """
        image = load_image(source)
        text = self.ocr.recognize(image, timeout=self.timeout)
        return parse_roster_text(text)

    def read_images(self, sources: Iterable[ImageSource]) -> List[TeamRoster]:
        """Read several screenshots; teams from all of them, in order."""
        teams: List[TeamRoster] = []
        for i, source in enumerate(sources, start=1):
            found = self.read_image(source)
            logger.info(f"Roster image {i}: {len(found)} team(s)")
            teams.extend(found)
        return teams
