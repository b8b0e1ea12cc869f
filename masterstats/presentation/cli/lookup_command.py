from __future__ import annotations

import asyncio
import sys
from typing import Optional, Sequence

from masterstats.application.services import SummonerCache
from masterstats.application.use_cases import LookupSummonerUseCase, SummonerReport
from masterstats.config import settings
from masterstats.core.logging.logger import get_logger
from masterstats.domain.catalog import ChampionCatalog
from masterstats.domain.errors import MasterStatsError
from masterstats.infrastructure import RiotAPIClient, SummonerRepository, load_catalog
from .formatting import render_overall, render_report


class LookupCommand:
    """Look up one or more summoners of a region and print their statistics."""

    def __init__(self, catalog: Optional[ChampionCatalog] = None) -> None:
        self._catalog = catalog
        self._log = get_logger(__name__, service="lookup-cli")

    async def _print_results(self, use_case: LookupSummonerUseCase, region: str, names: Sequence[str]) -> int:
        results = await asyncio.gather(
            *(use_case.report(region, name, timeout=settings.FETCH_TIMEOUT) for name in names),
            return_exceptions=True,
        )
        failures = 0
        for name, result in zip(names, results):
            print("")
            if isinstance(result, SummonerReport):
                print(render_report(result), flush=True)
            elif isinstance(result, MasterStatsError):
                failures += 1
                self._log.warning(lambda: f"lookup-failed {name}: {result}")
                print(f"{name}: {result}", flush=True)
            else:
                raise result
        print("")
        print(render_overall(use_case.overall, color=sys.stdout.isatty()), flush=True)
        return failures

    async def run(self, region: str, names: Sequence[str]) -> int:
        """Returns the number of names that could not be looked up."""
        settings.validate()
        catalog = self._catalog or await load_catalog()
        self._log.info(lambda: f"start region={region} names={len(names)} champions={catalog.size()}")
        async with RiotAPIClient(settings.RIOT_API_KEY) as api:
            cache = SummonerCache(SummonerRepository(api), catalog)
            use_case = LookupSummonerUseCase(cache, catalog)
            return await self._print_results(use_case, region, names)
