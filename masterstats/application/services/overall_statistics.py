"""Process-wide rollup of the summoners currently held by the cache."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from masterstats.core.logging.logger import get_logger
from masterstats.domain.catalog import ChampionCatalog
from masterstats.domain.entities import SummonerStatistic
from masterstats.domain.enums import Region, Tier
from masterstats.domain.ordering import tier_sort_key

_log = get_logger(__name__, service="overall")


@dataclass(frozen=True)
class OverallSnapshot:
    """Result of one complete rebuild."""

    region_counts: Mapping[Region, int] = field(default_factory=dict)
    tier_counts: Mapping[Region, Mapping[Tier, int]] = field(default_factory=dict)
    champions_total: int = 0


class OverallStatistics:
    """Counts by region and by region×tier.

    Every ``refresh`` recomputes from the full snapshot it is given and swaps
    the result in with a single assignment, so readers always see one
    complete rebuild and never a partially patched one.
    """

    def __init__(self) -> None:
        self._current = OverallSnapshot()
        self.refresh_count = 0

    def refresh(
        self,
        snapshot: Iterable[Tuple[str, SummonerStatistic]],
        catalog: Optional[ChampionCatalog] = None,
    ) -> OverallSnapshot:
        region_counts: Dict[Region, int] = {}
        tier_counts: Dict[Region, Dict[Tier, int]] = {}
        for _key, statistic in snapshot:
            region = statistic.region
            region_counts[region] = region_counts.get(region, 0) + 1
            tiers = tier_counts.setdefault(region, {})
            tiers[statistic.tier] = tiers.get(statistic.tier, 0) + 1

        rebuilt = OverallSnapshot(
            region_counts=MappingProxyType(region_counts),
            tier_counts=MappingProxyType({r: MappingProxyType(t) for r, t in tier_counts.items()}),
            champions_total=catalog.size() if catalog is not None else self._current.champions_total,
        )
        self._current = rebuilt
        self.refresh_count += 1
        _log.debug(lambda: f"overall refreshed: {sum(region_counts.values())} summoners in {len(region_counts)} regions")
        return rebuilt

    @property
    def current(self) -> OverallSnapshot:
        return self._current

    def region_counts(self) -> Mapping[Region, int]:
        return self._current.region_counts

    def tier_counts(self, region: Region) -> Mapping[Tier, int]:
        return self._current.tier_counts.get(region, MappingProxyType({}))

    def all_tier_counts(self) -> Mapping[Region, Mapping[Tier, int]]:
        return self._current.tier_counts

    def total_summoners(self) -> int:
        return sum(self._current.region_counts.values())

    def tier_series(self) -> List[Tuple[Region, Tier, int]]:
        """``(region, tier, count)`` rows, regions in enum order, tiers highest first."""
        current = self._current
        return [
            (region, tier, current.tier_counts[region][tier])
            for region in Region.all_regions() if region in current.tier_counts
            for tier in sorted(current.tier_counts[region], key=tier_sort_key)
        ]
