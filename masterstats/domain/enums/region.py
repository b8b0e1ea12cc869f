"""Region enumeration for League of Legends servers."""
from enum import Enum

from ..errors import InvalidIdentity


class Region(Enum):
    """League of Legends regional servers, named by their short shard code.

    Provides:
    - platform_route: platform host (e.g., euw1)
    - regional_route: routing host for account APIs (e.g., europe)
    - friendly: short lower-case label used in summoner keys and URLs
    """

    # Americas
    NA = "na1"     # North America
    BR = "br1"     # Brazil
    LAN = "la1"    # Latin America North
    LAS = "la2"    # Latin America South

    # Europe
    EUW = "euw1"   # Europe West
    EUNE = "eun1"  # Europe Nordic & East
    TR = "tr1"     # Turkey
    RU = "ru"      # Russia

    # Asia
    KR = "kr"      # Korea
    JP = "jp1"     # Japan

    # Oceania
    OCE = "oc1"    # Oceania

    @property
    def platform_route(self) -> str:
        """Get platform routing value for API calls."""
        return self.value

    @property
    def regional_route(self) -> str:
        """Get regional routing for account APIs."""
        if self in (Region.NA, Region.BR, Region.LAN, Region.LAS):
            return "americas"
        if self in (Region.EUW, Region.EUNE, Region.TR, Region.RU):
            return "europe"
        if self is Region.OCE:
            return "sea"
        return "asia"

    @property
    def friendly(self) -> str:
        """Get the short lower-case label (e.g. ``euw``)."""
        return self.name.lower()

    @classmethod
    def all_regions(cls) -> list['Region']:
        """Get all available regions."""
        return list(cls)

    @classmethod
    def from_string(cls, value: str) -> 'Region':
        """Resolve a region from its short code or platform route.

        Accepts ``"NA"``, ``"na"`` and ``"na1"`` alike.

        Raises:
            InvalidIdentity: if the value names no known shard.
        """
        if isinstance(value, Region):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidIdentity("region must be a non-empty string")
        code = value.strip()
        try:
            return cls[code.upper()]
        except KeyError:
            pass
        try:
            return cls(code.lower())
        except ValueError:
            raise InvalidIdentity(f"unknown region '{value}'") from None
