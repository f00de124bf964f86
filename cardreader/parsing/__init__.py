"""
Field decoders for recognized card text.

Every decoder is a pure function of text returning an optional value;
no match means the field is absent, never an error.
"""

from cardreader.parsing.header import decode_name_year
from cardreader.parsing.ratings import (
    decode_balance,
    decode_steal_rating,
    decode_run_rating,
    decode_bunting,
    decode_hit_and_run,
)
from cardreader.parsing.defense import decode_defense
from cardreader.parsing.splits import (
    decode_splits,
    decode_hitting,
    decode_pitching,
    decode_endurance,
    find_result_tokens,
)

__all__ = [
    'decode_name_year',
    'decode_balance',
    'decode_steal_rating',
    'decode_run_rating',
    'decode_bunting',
    'decode_hit_and_run',
    'decode_defense',
    'decode_splits',
    'decode_hitting',
    'decode_pitching',
    'decode_endurance',
    'find_result_tokens',
]
