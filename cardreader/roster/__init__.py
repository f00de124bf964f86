"""Roster screenshot reading and reconciliation against stored player records."""

from cardreader.roster.diagnostic import RosterDiagnostic, diagnose_roster_mismatches, player_key
from cardreader.roster.roster_ocr import (
    RosterParseError,
    RosterReader,
    TeamRoster,
    extract_players_from_line,
    parse_roster_text,
    to_roster_assignments,
)

__all__ = [
    'RosterDiagnostic',
    'diagnose_roster_mismatches',
    'player_key',
    'RosterParseError',
    'RosterReader',
    'TeamRoster',
    'extract_players_from_line',
    'parse_roster_text',
    'to_roster_assignments',
]
