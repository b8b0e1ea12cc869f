"""Interfaces of the collaborators the statistics core consumes."""
from abc import ABC, abstractmethod

from ..entities import RawSummonerData
from ..enums import Region


class ISummonerFetcher(ABC):
    """Interface for fetching raw summoner and mastery data."""

    @abstractmethod
    async def fetch_summoner(self, region: Region, summoner_name: str) -> RawSummonerData:
        """Fetch one summoner with ranked info and champion masteries.

        Raises:
            SummonerNotFound: the player does not exist on that region.
            FetchFailure: network, timeout or parse error.
        """
        pass
