"""Bounded read-through cache of per-summoner statistics.

Concurrency model (single event loop):

- Hits are served without taking the lock.
- Concurrent misses for the same key share one in-flight task; each caller
  awaits it through ``asyncio.shield`` so that a cancelled or timed-out
  caller never cancels the fetch other callers still wait for.
- Inserts, evictions and invalidations run under one ``asyncio.Lock`` and
  rebuild the overall statistics before the lock is released, so a caller
  returning from ``get`` always sees an aggregate that includes its entry.
"""
from __future__ import annotations

import asyncio
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from masterstats.config import settings
from masterstats.core.logging.context import log_context
from masterstats.core.logging.logger import get_logger
from masterstats.domain.catalog import ChampionCatalog
from masterstats.domain.entities import SummonerIdentity, SummonerStatistic
from masterstats.domain.errors import FetchFailure, MasterStatsError
from masterstats.domain.interfaces import ISummonerFetcher
from .overall_statistics import OverallStatistics
from .statistic_aggregator import aggregate

_log = get_logger(__name__, service="cache")


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    evictions: int = 0
    failures: int = 0


class SummonerCache:
    """Least-recently-used cache of :class:`SummonerStatistic`, keyed by summoner key."""

    def __init__(
        self,
        fetcher: ISummonerFetcher,
        catalog: ChampionCatalog,
        *,
        capacity: Optional[int] = None,
        overall: Optional[OverallStatistics] = None,
        fetch_timeout: Optional[float] = None,
    ) -> None:
        self.capacity = capacity if capacity is not None else settings.SUMMONER_CACHE_CAPACITY
        if self.capacity < 1:
            raise ValueError("cache capacity must be at least 1")
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else settings.FETCH_TIMEOUT
        self.overall = overall if overall is not None else OverallStatistics()
        self.stats = CacheStats()
        self._fetcher = fetcher
        self._catalog = catalog
        self._entries: "OrderedDict[str, SummonerStatistic]" = OrderedDict()
        self._inflight: Dict[str, asyncio.Task] = {}
        # bumped by invalidate/clear; a load started under an older generation is not installed
        self._generations: Dict[str, int] = {}
        self._lock = asyncio.Lock()

    # Public API -------------------------------------------------

    async def get(self, identity: SummonerIdentity, timeout: Optional[float] = None) -> SummonerStatistic:
        """Return the cached statistic, fetching and aggregating it on a miss.

        Args:
            identity: validated summoner identity
            timeout: how long this caller waits for a miss to resolve; on
                expiry the caller gets ``FetchFailure`` while a shared fetch
                keeps running for the other callers

        Raises:
            SummonerNotFound: the fetch collaborator does not know the summoner
            FetchFailure: network, parse or timeout failure; nothing is cached
        """
        key = identity.summoner_key
        with log_context(region=identity.region.name, summoner_key=key):
            statistic = self._entries.get(key)
            if statistic is not None:
                self._entries.move_to_end(key)
                self.stats.hits += 1
                _log.trace("cache hit")
                return statistic

            task = self._inflight.get(key)
            if task is None or task.done():
                self.stats.misses += 1
                _log.debug("cache miss")
                task = asyncio.get_running_loop().create_task(
                    self._load(identity, self._generations.get(key, 0)), name=f"load:{key}")
                self._inflight[key] = task
                task.add_done_callback(self._forget_inflight(key))
            else:
                self.stats.coalesced += 1
                _log.debug("joining in-flight fetch")

            waiter = asyncio.shield(task)
            if timeout is None:
                return await waiter
            try:
                return await asyncio.wait_for(waiter, timeout)
            except asyncio.TimeoutError:
                raise FetchFailure(f"lookup of {identity} timed out after {timeout}s") from None

    def peek(self, identity: SummonerIdentity) -> Optional[SummonerStatistic]:
        """Cached statistic without fetching or touching recency."""
        return self._entries.get(identity.summoner_key)

    async def invalidate(self, identity: SummonerIdentity) -> bool:
        """Drop the entry so the next ``get`` re-fetches.

        A fetch already in flight for the summoner is detached rather than
        cancelled: callers already waiting on it still get its result, but it
        is not cached and later callers start a fresh fetch.

        Returns whether there was an entry or an in-flight fetch to drop.
        """
        key = identity.summoner_key
        async with self._lock:
            detached = self._detach_inflight(key)
            removed = self._entries.pop(key, None)
            if removed is not None:
                self._refresh_overall()
        if removed is None and not detached:
            return False
        _log.info(lambda: f"invalidated {key}")
        return True

    async def clear(self) -> None:
        """Drop every entry and detach every in-flight fetch."""
        async with self._lock:
            for key in list(self._inflight):
                self._detach_inflight(key)
            self._entries.clear()
            self._refresh_overall()

    def snapshot(self) -> List[Tuple[str, SummonerStatistic]]:
        """Entries from least to most recently used."""
        return list(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, SummonerIdentity) and identity.summoner_key in self._entries

    @property
    def inflight_count(self) -> int:
        return sum(1 for task in self._inflight.values() if not task.done())

    # Internals --------------------------------------------------

    def _detach_inflight(self, key: str) -> bool:
        # caller holds self._lock
        if self._inflight.pop(key, None) is None:
            return False
        self._generations[key] = self._generations.get(key, 0) + 1
        return True

    def _forget_inflight(self, key: str):
        def _done(task: asyncio.Task) -> None:
            if self._inflight.get(key) is task:
                del self._inflight[key]
            if not task.cancelled() and task.exception() is not None:
                # exception() also marks the failure retrieved when no waiter is left
                self.stats.failures += 1
        return _done

    async def _load(self, identity: SummonerIdentity, generation: int) -> SummonerStatistic:
        try:
            raw = await asyncio.wait_for(
                self._fetcher.fetch_summoner(identity.region, identity.summoner_name),
                self.fetch_timeout,
            )
        except asyncio.TimeoutError:
            _log.warning(lambda: f"fetch timed out after {self.fetch_timeout}s")
            raise FetchFailure(f"fetching {identity} timed out after {self.fetch_timeout}s") from None
        except MasterStatsError as exc:
            _log.info(lambda: f"fetch failed: {exc}")
            raise
        except Exception as exc:
            _log.exception(lambda: f"fetch collaborator raised {exc!r}")
            raise FetchFailure(f"fetching {identity} failed: {exc}") from exc

        statistic = aggregate(identity, raw, self._catalog)
        key = identity.summoner_key
        async with self._lock:
            if self._generations.get(key, 0) != generation:
                _log.debug("fetch finished after invalidation; result not cached")
                return statistic
            self._install(key, statistic)
        _log.debug(lambda: f"cached {key} ({len(statistic.masteries)} masteries)")
        return statistic

    def _install(self, key: str, statistic: SummonerStatistic) -> None:
        # caller holds self._lock
        if key in self._entries:
            self._entries[key] = statistic
            self._entries.move_to_end(key)
        else:
            while len(self._entries) >= self.capacity:
                evicted_key, _ = self._entries.popitem(last=False)
                self.stats.evictions += 1
                _log.debug(lambda: f"evicted {evicted_key}")
            self._entries[key] = statistic
        assert len(self._entries) <= self.capacity, "summoner cache exceeded its capacity"
        self._refresh_overall()

    def _refresh_overall(self) -> None:
        self.overall.refresh(self.snapshot(), self._catalog)
