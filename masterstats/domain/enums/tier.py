"""Ranked tier enumeration."""
from enum import Enum
from typing import Optional

from ..errors import DataInconsistency

# Tier strings the game-data service uses for "not placed this season".
NO_TIER_VALUES = frozenset({"", "NULL", "NONE", "UNRANKED"})


class Tier(Enum):
    """League of Legends ranked tiers, declared from highest to lowest.

    ``UNRANKED`` is the explicit sentinel for a summoner without a tier
    (the game-data service sends the literal string ``"null"``).
    """

    CHALLENGER = "CHALLENGER"
    MASTER = "MASTER"
    DIAMOND = "DIAMOND"
    PLATINUM = "PLATINUM"
    GOLD = "GOLD"
    SILVER = "SILVER"
    BRONZE = "BRONZE"
    UNRANKED = "UNRANKED"

    @property
    def rank(self) -> int:
        """Position in the tier table, 0 for Challenger."""
        return _TIER_RANKS[self]

    @property
    def color(self) -> str:
        """Chart color for this tier."""
        return _TIER_COLORS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def is_ranked(self) -> bool:
        return self is not Tier.UNRANKED

    @classmethod
    def all_tiers(cls) -> list['Tier']:
        """Get all tiers, highest first."""
        return list(cls)

    @classmethod
    def lowest(cls) -> 'Tier':
        return cls.UNRANKED

    @classmethod
    def parse(cls, value: Optional[str]) -> 'Tier':
        """Create a Tier from the service's tier string.

        ``None`` and ``"null"`` map to ``UNRANKED``.

        Raises:
            DataInconsistency: for a tier string outside the tier table.
        """
        if isinstance(value, Tier):
            return value
        if value is None:
            return cls.UNRANKED
        name = str(value).strip().upper()
        if name in NO_TIER_VALUES:
            return cls.UNRANKED
        try:
            return cls[name]
        except KeyError:
            raise DataInconsistency(f"unknown tier '{value}'") from None


_TIER_RANKS = {tier: index for index, tier in enumerate(Tier)}

_TIER_COLORS = {
    Tier.CHALLENGER: "#f4c874",
    Tier.MASTER: "#9d4dc5",
    Tier.DIAMOND: "#576bce",
    Tier.PLATINUM: "#4e9996",
    Tier.GOLD: "#cd8837",
    Tier.SILVER: "#80989d",
    Tier.BRONZE: "#8c523a",
    Tier.UNRANKED: "#6c7a89",
}
