"""
cardreader/roster/diagnostic.py: Roster reconciliation report

Compares a roster assignment file against stored player records and logs
categorized mismatch counts. Mismatches are reported, never raised.

Roster file format:
    {"rosters": {"<team>": {"hitters": ["Flick, E. (1905)", ...],
                            "pitchers": [...]}}}

Player records: {"name": "Flick, Elmer", "season": "1905", "roster": "<team>"}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 20


@dataclass
class RosterDiagnostic:
    """Counts (and the entries behind them) from one reconciliation run."""

    roster_file_count: int
    database_count: int
    missing_from_database: List[str] = field(default_factory=list)
    """Roster entries with no stored player, as '<entry> -> <team>'."""

    unassigned_in_database: List[str] = field(default_factory=list)
    """Stored players with no roster assignment, as '<name> (<season>)'."""

    @property
    def missing_from_database_count(self) -> int:
        return len(self.missing_from_database)

    @property
    def unassigned_in_database_count(self) -> int:
        return len(self.unassigned_in_database)

    def to_dict(self) -> Dict[str, int]:
        return {
            'rosterFileCount': self.roster_file_count,
            'databaseCount': self.database_count,
            'missingFromDatabase': self.missing_from_database_count,
            'unassignedInDatabase': self.unassigned_in_database_count,
        }


def player_key(name: str, season: Any) -> Optional[str]:
    """
    Build the roster-file key for a stored player.

    "Flick, Elmer" + 1905 -> "flick, e. (1905)". Names without a comma
    (or with nothing after it) have no key.
    """
    parts = [part.strip() for part in str(name).split(',')]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None

    last_name = parts[0]
    first_initial = parts[1][0].upper()
    return f"{last_name}, {first_initial}. ({season})".lower()


def roster_entries(roster_data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Flatten a roster file into (entry, team) pairs, hitters before pitchers."""
    entries = []
    for team_name, team_data in (roster_data.get('rosters') or {}).items():
        team_data = team_data or {}
        for player in list(team_data.get('hitters') or []) + list(team_data.get('pitchers') or []):
            entries.append((str(player), team_name))
    return entries


def _log_sample(items: List[str]) -> None:
    for item in items[:SAMPLE_SIZE]:
        logger.info(f"  - {item}")
    if len(items) > SAMPLE_SIZE:
        logger.info(f"  ... and {len(items) - SAMPLE_SIZE} more")


def diagnose_roster_mismatches(
    roster_data: Mapping[str, Any],
    database_players: Iterable[Mapping[str, Any]]
) -> RosterDiagnostic:
    """
    Reconcile roster assignments against stored players.

    Args:
        roster_data: Parsed roster assignment file
        database_players: Player records with 'name', 'season' and
                          optional 'roster'

    Returns:
        RosterDiagnostic with counts and mismatch lists
    """
    players = list(database_players)
    entries = roster_entries(roster_data)

    logger.info("=" * 60)
    logger.info("ROSTER DIAGNOSTIC")
    logger.info("=" * 60)
    logger.info(f"Total players in roster file: {len(entries)}")
    logger.info(f"Total players in database: {len(players)}")

    db_keys: Set[str] = set()
    for player in players:
        key = player_key(player.get('name', ''), player.get('season', ''))
        if key:
            db_keys.add(key)

    missing = [
        f"{entry} -> {team}"
        for entry, team in entries
        if entry.strip().lower() not in db_keys
    ]

    logger.info(f"Players in ROSTER FILE but NOT in DATABASE ({len(missing)}):")
    _log_sample(missing)

    unassigned = [
        f"{player.get('name', '')} ({player.get('season', '')})"
        for player in players
        if not player.get('roster')
    ]

    logger.info(f"Players in DATABASE without roster assignment: {len(unassigned)}")
    _log_sample(unassigned)
    logger.info("=" * 60)

    return RosterDiagnostic(
        roster_file_count=len(entries),
        database_count=len(players),
        missing_from_database=missing,
        unassigned_in_database=unassigned,
    )


def load_json(path: Path) -> Any:
    """Read a JSON file (roster file or player export)."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
