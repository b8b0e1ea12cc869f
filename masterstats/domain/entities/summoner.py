"""Summoner identity and per-summoner statistic entities."""
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..enums import Region, Tier
from ..errors import InvalidIdentity
from .champion import ChampionMastery

MAX_SUMMONER_NAME_LENGTH = 32

_WHITESPACE = re.compile(r"\s+")
_FORBIDDEN = re.compile(r"[/\\?%\x00-\x1f\x7f]")


def normalize_summoner_name(name: str) -> str:
    """Lower-case the name and drop whitespace, as the game service does."""
    return _WHITESPACE.sub("", name).lower()


@dataclass(frozen=True)
class SummonerIdentity:
    """A (region, summoner name) pair addressing one player."""

    region: Region
    summoner_name: str

    @property
    def normalized_name(self) -> str:
        return normalize_summoner_name(self.summoner_name)

    @property
    def summoner_key(self) -> str:
        """Cache key, unique per (region, normalized name)."""
        return f"{self.normalized_name}_{self.region.friendly}"

    @classmethod
    def create(cls, region: 'Region | str', summoner_name: str) -> 'SummonerIdentity':
        """Validate inputs and build an identity.

        Raises:
            InvalidIdentity: unknown region, or an empty/invalid name.
        """
        resolved = Region.from_string(region)
        if not isinstance(summoner_name, str):
            raise InvalidIdentity("summoner name must be a string")
        name = summoner_name.strip()
        if not name or not normalize_summoner_name(name):
            raise InvalidIdentity("summoner name must not be empty")
        if len(name) > MAX_SUMMONER_NAME_LENGTH:
            raise InvalidIdentity(f"summoner name longer than {MAX_SUMMONER_NAME_LENGTH} characters")
        if _FORBIDDEN.search(name):
            raise InvalidIdentity(f"summoner name '{name}' contains invalid characters")
        return cls(region=resolved, summoner_name=name)

    def __str__(self) -> str:
        return f"{self.summoner_name} ({self.region.name})"


@dataclass(frozen=True)
class RawSummonerData:
    """What the fetch collaborator returns for one summoner."""

    summoner_id: str
    summoner_name: str
    summoner_level: int = 0
    profile_icon_id: int = 0
    tier: Optional[str] = None
    division: Optional[str] = None
    mastery_score: int = 0
    masteries: Tuple[ChampionMastery, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SummonerStatistic:
    """Derived statistics for one summoner, owned by the summoner cache.

    Masteries are already filtered down to champions known to the catalog
    and keep the order the fetch collaborator returned them in.
    """

    identity: SummonerIdentity
    summoner_name: str
    tier: Tier = Tier.UNRANKED
    division: Optional[str] = None
    mastery_score: int = 0
    masteries: Tuple[ChampionMastery, ...] = field(default_factory=tuple)
    summoner_id: str = ""
    summoner_level: int = 0
    profile_icon_id: int = 0

    @property
    def summoner_key(self) -> str:
        return self.identity.summoner_key

    @property
    def region(self) -> Region:
        return self.identity.region

    @property
    def rank_label(self) -> str:
        """``"Unranked"`` or e.g. ``"Gold II"``."""
        if not self.tier.is_ranked:
            return "Unranked"
        if self.division:
            return f"{self.tier.display_name} {self.division}"
        return self.tier.display_name

    @property
    def total_champion_points(self) -> int:
        return sum(m.champion_points for m in self.masteries)

    @property
    def champions_played(self) -> int:
        return len(self.masteries)

    def to_dict(self) -> dict:
        """Convert statistic to dictionary."""
        return {
            'summoner_key': self.summoner_key,
            'region': self.region.name,
            'summoner_id': self.summoner_id,
            'summoner_name': self.summoner_name,
            'summoner_level': self.summoner_level,
            'profile_icon_id': self.profile_icon_id,
            'tier': self.tier.value,
            'division': self.division,
            'rank': self.rank_label,
            'mastery_score': self.mastery_score,
            'total_champion_points': self.total_champion_points,
            'masteries': [m.to_dict() for m in self.masteries],
        }
