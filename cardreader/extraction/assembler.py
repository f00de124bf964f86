"""
Merge decoder outputs into one ExtractedCardRecord.

The header decoder reads the header text; every other decoder reads the
body text. Decoders own disjoint fields so the merge is a plain union.
"""

import logging

from cardreader.config import UNKNOWN_PLAYER
from cardreader.models import ExtractedCardRecord
from cardreader.parsing import (
    decode_name_year,
    decode_balance,
    decode_steal_rating,
    decode_run_rating,
    decode_bunting,
    decode_hit_and_run,
    decode_defense,
    decode_hitting,
    decode_pitching,
)

logger = logging.getLogger(__name__)


def assemble_record(header_text: str, body_text: str) -> ExtractedCardRecord:
    """
    Decode recognized header and body text into a card record.

    Only the player name is defaulted (to UNKNOWN_PLAYER); every other
    field stays None when its decoder finds nothing.

    Args:
        header_text: Text recognized from the header band
        body_text: Text recognized from the body band

    Returns:
        ExtractedCardRecord
    """
    name, year = decode_name_year(header_text)

    record = ExtractedCardRecord(
        player_name=name or UNKNOWN_PLAYER,
        year=year,
        balance=decode_balance(body_text),
        steal_rating=decode_steal_rating(body_text),
        run_rating=decode_run_rating(body_text),
        bunting=decode_bunting(body_text),
        hit_and_run=decode_hit_and_run(body_text),
        defense=decode_defense(body_text),
        hitting=decode_hitting(body_text),
        pitching=decode_pitching(body_text),
    )

    found = [key for key in record.to_dict() if key != 'playerName']
    logger.info(f"Extracted '{record.player_name}': {', '.join(found) if found else 'no fields'}")
    return record
