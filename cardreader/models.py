"""
cardreader/models.py: Extraction result types

One ExtractedCardRecord is built per extraction call and handed to the
caller; nothing here is persisted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class DefenseRating:
    """Fielding grade for one position, e.g. ``c-1(-5)e1``."""

    range: int
    """Range rating (1 best, 5 worst)."""

    error: int
    """Error number."""

    arm: Optional[int] = None
    """Signed arm modifier for catchers and outfielders."""

    throwing: Optional[str] = None
    """Catcher throwing rating, e.g. 'T-1'."""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'range': self.range, 'error': self.error}
        if self.arm is not None:
            data['arm'] = self.arm
        if self.throwing is not None:
            data['throwing'] = self.throwing
        return data


@dataclass(frozen=True)
class LeftyColumns:
    """Result columns 1-3 (vs. left-handed opponents)."""

    column1: Tuple[str, ...] = ()
    column2: Tuple[str, ...] = ()
    column3: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.column1 or self.column2 or self.column3)

    def to_dict(self) -> Dict[str, list]:
        return {
            'column1': list(self.column1),
            'column2': list(self.column2),
            'column3': list(self.column3),
        }


@dataclass(frozen=True)
class RightyColumns:
    """Result columns 4-6 (vs. right-handed opponents)."""

    column4: Tuple[str, ...] = ()
    column5: Tuple[str, ...] = ()
    column6: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.column4 or self.column5 or self.column6)

    def to_dict(self) -> Dict[str, list]:
        return {
            'column4': list(self.column4),
            'column5': list(self.column5),
            'column6': list(self.column6),
        }


@dataclass(frozen=True)
class SplitChart:
    """Hitting result chart split by opponent handedness."""

    vs_lefty: LeftyColumns = field(default_factory=LeftyColumns)
    vs_righty: RightyColumns = field(default_factory=RightyColumns)

    def is_empty(self) -> bool:
        return not (self.vs_lefty or self.vs_righty)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'vsLefty': self.vs_lefty.to_dict(),
            'vsRighty': self.vs_righty.to_dict(),
        }


@dataclass(frozen=True)
class PitchingChart(SplitChart):
    """Pitching result chart plus the endurance code (S#, R#, C#)."""

    endurance: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.endurance is not None:
            data['endurance'] = self.endurance
        return data


@dataclass(frozen=True)
class ExtractedCardRecord:
    """
    Gameplay attributes read off one player card.

    Every field except player_name is independently optional: a decoder
    that finds nothing leaves its field as None.
    """

    player_name: str
    year: Optional[str] = None
    balance: Optional[str] = None
    steal_rating: Optional[str] = None
    run_rating: Optional[str] = None
    bunting: Optional[str] = None
    hit_and_run: Optional[str] = None
    defense: Optional[Mapping[str, DefenseRating]] = None
    hitting: Optional[SplitChart] = None
    pitching: Optional[PitchingChart] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the wire shape consumed by the editing UI.

        Keys are camelCase and absent fields are omitted.
        """
        data: Dict[str, Any] = {'playerName': self.player_name}

        scalars = (
            ('year', self.year),
            ('balance', self.balance),
            ('stealRating', self.steal_rating),
            ('runRating', self.run_rating),
            ('bunting', self.bunting),
            ('hitAndRun', self.hit_and_run),
        )
        for key, value in scalars:
            if value is not None:
                data[key] = value

        if self.defense is not None:
            data['defense'] = {pos: rating.to_dict() for pos, rating in self.defense.items()}
        if self.hitting is not None:
            data['hitting'] = self.hitting.to_dict()
        if self.pitching is not None:
            data['pitching'] = self.pitching.to_dict()

        return data
