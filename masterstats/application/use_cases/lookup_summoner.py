"""Use case: look up one summoner's statistics."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from masterstats.application.services.overall_statistics import OverallStatistics
from masterstats.application.services.statistic_aggregator import derive_view
from masterstats.application.services.summoner_cache import SummonerCache
from masterstats.core.logging.logger import get_logger
from masterstats.domain.catalog import ChampionCatalog
from masterstats.domain.entities import DerivedView, SummonerIdentity, SummonerStatistic
from masterstats.domain.enums import Region

_log = get_logger(__name__, service="lookup")


@dataclass(frozen=True)
class SummonerReport:
    """A summoner's statistic together with its derived view."""

    statistic: SummonerStatistic
    view: DerivedView


class LookupSummonerUseCase:
    """The single entry point the presentation layer calls.

    Catalog and cache are constructed once at process start and injected
    here; nothing in the lookup path reads module-level state.
    """

    def __init__(self, cache: SummonerCache, catalog: ChampionCatalog) -> None:
        self.cache = cache
        self.catalog = catalog

    @property
    def overall(self) -> OverallStatistics:
        return self.cache.overall

    async def execute(
        self,
        region: Region | str,
        summoner_name: str,
        timeout: Optional[float] = None,
    ) -> SummonerStatistic:
        """Validate the identity, then read through the cache.

        Raises:
            InvalidIdentity: before any cache access or fetch
            SummonerNotFound, FetchFailure: from the fetch on a cache miss
        """
        identity = SummonerIdentity.create(region, summoner_name)
        return await self.cache.get(identity, timeout=timeout)

    async def report(
        self,
        region: Region | str,
        summoner_name: str,
        timeout: Optional[float] = None,
    ) -> SummonerReport:
        statistic = await self.execute(region, summoner_name, timeout=timeout)
        return SummonerReport(statistic=statistic, view=derive_view(statistic, self.catalog))
