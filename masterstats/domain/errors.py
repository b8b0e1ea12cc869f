"""Domain error hierarchy."""
from __future__ import annotations

from typing import Optional


class MasterStatsError(Exception):
    """Base class for every error raised by the statistics core."""


class InvalidIdentity(MasterStatsError):
    """Unknown region or empty/invalid summoner name.

    Raised before any fetch or cache access.
    """


class SummonerNotFound(MasterStatsError):
    """The game-data service reports that the summoner does not exist."""

    def __init__(self, region: str, summoner_name: str) -> None:
        super().__init__(f"summoner '{summoner_name}' not found on {region}")
        self.region = region
        self.summoner_name = summoner_name


class FetchFailure(MasterStatsError):
    """Network, timeout or parse failure while fetching summoner data."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChampionNotFound(MasterStatsError, KeyError):
    """Champion id or key name absent from the catalog."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "champion not found"


class DataInconsistency(MasterStatsError):
    """Catalog/mastery mismatch or a value outside the known rank tables.

    Never propagated out of statistic computation: callers log it and clamp.
    """
