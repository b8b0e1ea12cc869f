"""Summoner repository implementation."""
import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from masterstats.domain.entities import ChampionMastery, RawSummonerData
from masterstats.domain.enums import Region
from masterstats.domain.errors import FetchFailure, SummonerNotFound
from masterstats.domain.interfaces import ISummonerFetcher
from masterstats.infrastructure.api import RiotAPIClient

logger = logging.getLogger(__name__)

SOLO_QUEUE = 'RANKED_SOLO_5x5'


class SummonerRepository(ISummonerFetcher):
    """Fetches summoner, ranked and mastery data through the Riot API."""

    def __init__(self, api_client: RiotAPIClient):
        """
        Initialize summoner repository.

        Args:
            api_client: Riot API client instance (already entered)
        """
        self.api_client = api_client

    async def fetch_summoner(self, region: Region, summoner_name: str) -> RawSummonerData:
        """
        Fetch a summoner with solo-queue rank, mastery score and masteries.

        Args:
            region: Server region
            summoner_name: Summoner name as typed by the user

        Returns:
            RawSummonerData with masteries in API order

        Raises:
            SummonerNotFound: the name does not exist on the region
            FetchFailure: request or payload errors
        """
        summoner_data = await self.api_client.get_summoner_by_name(region, summoner_name)
        if not summoner_data:
            raise SummonerNotFound(region.name, summoner_name)

        try:
            summoner_id = summoner_data['id']
            puuid = summoner_data['puuid']
        except KeyError as exc:
            raise FetchFailure(f"summoner payload missing {exc}") from exc

        entries, mastery_payload, score = await asyncio.gather(
            self.api_client.get_league_entries_by_summoner(region, summoner_id),
            self.api_client.get_champion_masteries(region, puuid),
            self.api_client.get_mastery_score(region, puuid),
        )

        tier, division = self.get_solo_rank(entries)
        masteries = self.parse_masteries(mastery_payload)
        logger.debug(f"fetched {summoner_name} on {region.name}: {len(masteries)} masteries, tier={tier}")

        return RawSummonerData(
            summoner_id=str(summoner_id),
            summoner_name=summoner_data.get('name') or summoner_data.get('gameName') or summoner_name,
            summoner_level=int(summoner_data.get('summonerLevel', 0)),
            profile_icon_id=int(summoner_data.get('profileIconId', 0)),
            tier=tier,
            division=division,
            mastery_score=score,
            masteries=masteries,
        )

    @staticmethod
    def get_solo_rank(entries: List[Dict]) -> Tuple[Optional[str], Optional[str]]:
        """Return ``(tier, division)`` of the solo queue entry, ``(None, None)`` if unranked."""
        for entry in entries:
            if entry.get('queueType') == SOLO_QUEUE:
                return entry.get('tier'), entry.get('rank')
        return None, None

    @staticmethod
    def parse_masteries(payload: List[Dict]) -> Tuple[ChampionMastery, ...]:
        try:
            return tuple(ChampionMastery.from_api(item) for item in payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchFailure(f"malformed champion mastery payload: {exc!r}") from exc
