"""Derived per-summoner view consumed by the presentation layer."""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from ..enums import GradeLetter, GradeModifier
from .champion import ChampionCatalogEntry, ChampionMastery


class EmptySlot:
    """Placeholder filling a top-N list that has fewer real entries than N."""

    is_empty = True
    mastery: Optional[ChampionMastery] = None
    champion: Optional[ChampionCatalogEntry] = None

    _instance: Optional['EmptySlot'] = None

    def __new__(cls) -> 'EmptySlot':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY_SLOT"

    def __bool__(self) -> bool:
        return False


EMPTY_SLOT = EmptySlot()


@dataclass(frozen=True)
class ChampionSlot:
    """A real top-N entry: the mastery record plus its catalog entry."""

    mastery: ChampionMastery
    champion: ChampionCatalogEntry
    is_empty: bool = field(default=False, init=False)

    @property
    def champion_points(self) -> int:
        return self.mastery.champion_points

    @property
    def champion_level(self) -> int:
        return self.mastery.champion_level


Slot = Union[ChampionSlot, EmptySlot]
GradeHistogram = Dict[GradeModifier, Dict[GradeLetter, int]]


@dataclass(frozen=True)
class DerivedView:
    """Statistics derived on demand from a SummonerStatistic."""

    top_champions: Tuple[Slot, ...]
    top_chestless_champions: Tuple[Slot, ...]
    level_histogram: Dict[int, int]
    grade_histogram: GradeHistogram
    chests_granted: int
    champions_played: int
    champions_total: int
    champions_not_played: int

    @property
    def chests_not_granted(self) -> int:
        return max(0, self.champions_played - self.chests_granted)

    @property
    def chestless_rows(self) -> Tuple[Tuple[Slot, ...], Tuple[Slot, ...]]:
        """Top chestless champions split into an upper and a lower row."""
        half = (len(self.top_chestless_champions) + 1) // 2
        return self.top_chestless_champions[:half], self.top_chestless_champions[half:]

    @property
    def grade_categories(self) -> list:
        """Base letters in grade order, for a chart's category axis."""
        return [letter.value for letter in GradeLetter.all_letters()]

    def grade_series(self) -> list:
        """``(modifier, counts)`` pairs, best modifier first, counts in letter order."""
        return [
            (modifier.value, [self.grade_histogram[modifier][letter] for letter in GradeLetter.all_letters()])
            for modifier in GradeModifier.all_modifiers()
        ]

    def chest_series(self) -> list:
        return [
            ("Chests granted", self.chests_granted),
            ("Chest not granted", self.chests_not_granted),
            ("Not played", self.champions_not_played),
        ]
