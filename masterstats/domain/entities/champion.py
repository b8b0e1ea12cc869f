"""Champion catalog entries and per-champion mastery records."""
from dataclasses import dataclass
from typing import Any, Mapping

from ..enums import NO_GRADE

MIN_CHAMPION_LEVEL = 1
MAX_CHAMPION_LEVEL = 7


@dataclass(frozen=True)
class ChampionCatalogEntry:
    """Static reference data for one champion."""

    champion_id: int
    key_name: str
    display_name: str
    portrait_url: str

    def to_dict(self) -> dict:
        return {
            'champion_id': self.champion_id,
            'key_name': self.key_name,
            'display_name': self.display_name,
            'portrait_url': self.portrait_url,
        }


@dataclass(frozen=True)
class ChampionMastery:
    """One player's progress on one champion."""

    champion_id: int
    champion_points: int
    champion_level: int
    chest_granted: int = 0
    highest_grade: str = NO_GRADE

    @property
    def has_chest(self) -> bool:
        return self.chest_granted > 0

    @property
    def has_grade(self) -> bool:
        return self.highest_grade not in (None, "", NO_GRADE)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> 'ChampionMastery':
        """Build a record from a champion-mastery API payload.

        ``chestGranted`` arrives as a boolean on current endpoints and as an
        integer on older ones; both are normalised to an int.
        """
        grade = data.get('highestGrade')
        return cls(
            champion_id=int(data['championId']),
            champion_points=max(0, int(data.get('championPoints', 0))),
            champion_level=int(data.get('championLevel', MIN_CHAMPION_LEVEL)),
            chest_granted=int(data.get('chestGranted', 0) or 0),
            highest_grade=str(grade) if grade is not None else NO_GRADE,
        )

    def to_dict(self) -> dict:
        return {
            'champion_id': self.champion_id,
            'champion_points': self.champion_points,
            'champion_level': self.champion_level,
            'chest_granted': self.chest_granted,
            'highest_grade': self.highest_grade,
        }
