import asyncio

import pytest

from masterstats.application.services import OverallStatistics, SummonerCache
from masterstats.domain.entities import SummonerIdentity
from masterstats.domain.enums import Region, Tier
from masterstats.domain.errors import FetchFailure, SummonerNotFound

from conftest import FakeFetcher, make_catalog, mastery, raw_summoner


def identity(name: str, region: str = "NA") -> SummonerIdentity:
    return SummonerIdentity.create(region, name)


def fetcher_for(*names: str, **kwargs) -> FakeFetcher:
    return FakeFetcher({name: raw_summoner(name, masteries=(mastery(1),)) for name in names}, **kwargs)


def test_second_lookup_is_a_cache_hit():
    async def scenario():
        fetcher = fetcher_for("Faker")
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        first = await cache.get(identity("Faker"))
        second = await cache.get(identity("faker"))
        return fetcher, cache, first, second

    fetcher, cache, first, second = asyncio.run(scenario())
    assert first is second
    assert len(fetcher.calls) == 1
    assert cache.stats.hits == 1 and cache.stats.misses == 1


def test_capacity_plus_one_evicts_first_inserted():
    names = ["alpha", "bravo", "charlie", "delta"]

    async def scenario():
        cache = SummonerCache(fetcher_for(*names), make_catalog(), capacity=3)
        for name in names:
            await cache.get(identity(name))
        return cache

    cache = asyncio.run(scenario())
    assert len(cache) == 3
    assert identity("alpha") not in cache
    assert [key for key, _ in cache.snapshot()] == ["bravo_na", "charlie_na", "delta_na"]
    assert cache.stats.evictions == 1


def test_reads_refresh_recency():
    async def scenario():
        fetcher = fetcher_for("alpha", "bravo", "charlie")
        cache = SummonerCache(fetcher, make_catalog(), capacity=2)
        await cache.get(identity("alpha"))
        await cache.get(identity("bravo"))
        await cache.get(identity("alpha"))
        await cache.get(identity("charlie"))
        return cache

    cache = asyncio.run(scenario())
    assert identity("alpha") in cache
    assert identity("bravo") not in cache
    assert identity("charlie") in cache


def test_evicted_entry_is_fetched_again():
    async def scenario():
        fetcher = fetcher_for("alpha", "bravo")
        cache = SummonerCache(fetcher, make_catalog(), capacity=1)
        await cache.get(identity("alpha"))
        await cache.get(identity("bravo"))
        await cache.get(identity("alpha"))
        return fetcher

    fetcher = asyncio.run(scenario())
    assert [name for _, name in fetcher.calls] == ["alpha", "bravo", "alpha"]


def test_concurrent_misses_share_one_fetch():
    async def scenario():
        gate = asyncio.Event()
        fetcher = fetcher_for("Faker", gate=gate)
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        first = asyncio.create_task(cache.get(identity("Faker")))
        second = asyncio.create_task(cache.get(identity("FAKER")))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(first, second)
        return fetcher, cache, results

    fetcher, cache, (a, b) = asyncio.run(scenario())
    assert len(fetcher.calls) == 1
    assert a is b
    assert cache.stats.coalesced == 1


def test_cancelled_waiter_does_not_cancel_shared_fetch():
    async def scenario():
        gate = asyncio.Event()
        fetcher = fetcher_for("Faker", gate=gate)
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        leaving = asyncio.create_task(cache.get(identity("Faker")))
        staying = asyncio.create_task(cache.get(identity("Faker")))
        await asyncio.sleep(0)
        leaving.cancel()
        await asyncio.sleep(0)
        gate.set()
        result = await staying
        return fetcher, cache, leaving, result

    fetcher, cache, leaving, result = asyncio.run(scenario())
    assert leaving.cancelled()
    assert result.summoner_name == "Faker"
    assert len(fetcher.calls) == 1
    assert identity("Faker") in cache


def test_cancelling_the_only_waiter_still_caches_result():
    async def scenario():
        gate = asyncio.Event()
        fetcher = fetcher_for("Faker", gate=gate)
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        waiter = asyncio.create_task(cache.get(identity("Faker")))
        await asyncio.sleep(0)
        waiter.cancel()
        gate.set()
        await asyncio.sleep(0.05)
        return fetcher, cache

    fetcher, cache = asyncio.run(scenario())
    assert identity("Faker") in cache
    assert len(fetcher.calls) == 1


def test_not_found_is_not_cached():
    async def scenario():
        fetcher = FakeFetcher({})
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        for _ in range(2):
            with pytest.raises(SummonerNotFound):
                await cache.get(identity("Nobody"))
        return fetcher, cache

    fetcher, cache = asyncio.run(scenario())
    assert len(fetcher.calls) == 2
    assert len(cache) == 0
    assert cache.stats.failures == 2


def test_fetch_failure_propagates_to_every_waiter():
    async def scenario():
        gate = asyncio.Event()
        fetcher = FakeFetcher({"Faker": FetchFailure("upstream 503", status_code=503)}, gate=gate)
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        waiters = [asyncio.create_task(cache.get(identity("Faker"))) for _ in range(3)]
        await asyncio.sleep(0)
        gate.set()
        return fetcher, cache, await asyncio.gather(*waiters, return_exceptions=True)

    fetcher, cache, results = asyncio.run(scenario())
    assert len(fetcher.calls) == 1
    assert all(isinstance(r, FetchFailure) for r in results)
    assert len(cache) == 0


def test_fetch_timeout_is_a_fetch_failure():
    async def scenario():
        fetcher = fetcher_for("Faker", delay=1.0)
        cache = SummonerCache(fetcher, make_catalog(), capacity=10, fetch_timeout=0.01)
        with pytest.raises(FetchFailure):
            await cache.get(identity("Faker"))
        return fetcher, cache

    fetcher, cache = asyncio.run(scenario())
    assert len(fetcher.calls) == 1
    assert len(cache) == 0


def test_caller_timeout_leaves_shared_fetch_running():
    async def scenario():
        gate = asyncio.Event()
        fetcher = fetcher_for("Faker", gate=gate)
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        patient = asyncio.create_task(cache.get(identity("Faker")))
        with pytest.raises(FetchFailure):
            await cache.get(identity("Faker"), timeout=0.01)
        gate.set()
        return fetcher, await patient

    fetcher, result = asyncio.run(scenario())
    assert result.summoner_name == "Faker"
    assert len(fetcher.calls) == 1


def test_unexpected_collaborator_error_becomes_fetch_failure():
    async def scenario():
        cache = SummonerCache(FakeFetcher({"Faker": RuntimeError("boom")}), make_catalog(), capacity=10)
        with pytest.raises(FetchFailure) as excinfo:
            await cache.get(identity("Faker"))
        return excinfo.value

    error = asyncio.run(scenario())
    assert isinstance(error.__cause__, RuntimeError)


def test_overall_is_rebuilt_before_get_returns():
    async def scenario():
        fetcher = FakeFetcher({
            "alpha": raw_summoner("alpha", tier="GOLD"),
            "bravo": raw_summoner("bravo", tier="null"),
            "charlie": raw_summoner("charlie", tier="GOLD"),
        })
        overall = OverallStatistics()
        cache = SummonerCache(fetcher, make_catalog(), capacity=2, overall=overall)
        await cache.get(identity("alpha"))
        after_first = dict(overall.region_counts())
        await cache.get(identity("bravo", "EUW"))
        await cache.get(identity("charlie"))
        return overall, after_first

    overall, after_first = asyncio.run(scenario())
    assert after_first == {Region.NA: 1}
    # alpha was evicted by charlie
    assert dict(overall.region_counts()) == {Region.EUW: 1, Region.NA: 1}
    assert dict(overall.tier_counts(Region.NA)) == {Tier.GOLD: 1}
    assert dict(overall.tier_counts(Region.EUW)) == {Tier.UNRANKED: 1}
    assert {region: dict(tiers) for region, tiers in overall.all_tier_counts().items()} == {
        Region.NA: {Tier.GOLD: 1}, Region.EUW: {Tier.UNRANKED: 1},
    }
    assert overall.total_summoners() == 2


def test_invalidate_forces_refetch_and_updates_overall():
    async def scenario():
        fetcher = fetcher_for("Faker")
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        await cache.get(identity("Faker"))
        removed = await cache.invalidate(identity("Faker"))
        counts_after_invalidate = dict(cache.overall.region_counts())
        missing = await cache.invalidate(identity("Nobody"))
        await cache.get(identity("Faker"))
        return fetcher, removed, missing, counts_after_invalidate

    fetcher, removed, missing, counts = asyncio.run(scenario())
    assert removed is True
    assert missing is False
    assert counts == {}
    assert len(fetcher.calls) == 2


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        SummonerCache(FakeFetcher(), make_catalog(), capacity=0)


def test_invalidate_during_fetch_forces_a_fresh_fetch():
    async def scenario():
        gate = asyncio.Event()
        fetcher = fetcher_for("Faker", gate=gate)
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        before = asyncio.create_task(cache.get(identity("Faker")))
        await asyncio.sleep(0)
        assert cache.inflight_count == 1
        detached = await cache.invalidate(identity("Faker"))
        after = asyncio.create_task(cache.get(identity("Faker")))
        await asyncio.sleep(0)
        gate.set()
        stale, fresh = await asyncio.gather(before, after)
        return fetcher, cache, detached, stale, fresh

    fetcher, cache, detached, stale, fresh = asyncio.run(scenario())
    assert detached is True
    assert len(fetcher.calls) == 2
    assert stale is not fresh
    assert cache.peek(identity("Faker")) is fresh
    assert len(cache) == 1
    assert cache.overall.total_summoners() == 1


def test_peek_does_not_fetch_or_refresh_recency():
    async def scenario():
        fetcher = fetcher_for("alpha", "bravo", "charlie")
        cache = SummonerCache(fetcher, make_catalog(), capacity=2)
        missing = cache.peek(identity("alpha"))
        alpha = await cache.get(identity("alpha"))
        await cache.get(identity("bravo"))
        peeked = cache.peek(identity("alpha"))
        await cache.get(identity("charlie"))
        return fetcher, cache, missing, alpha, peeked

    fetcher, cache, missing, alpha, peeked = asyncio.run(scenario())
    assert missing is None
    assert peeked is alpha
    assert len(fetcher.calls) == 3
    # peek left alpha least recently used, so charlie evicted it
    assert cache.peek(identity("alpha")) is None


def test_clear_empties_cache_and_overall():
    async def scenario():
        gate = asyncio.Event()
        fetcher = fetcher_for("alpha", "bravo")
        cache = SummonerCache(fetcher, make_catalog(), capacity=10)
        await cache.get(identity("alpha"))
        fetcher.gate = gate
        pending = asyncio.create_task(cache.get(identity("bravo", "EUW")))
        await asyncio.sleep(0)
        await cache.clear()
        gate.set()
        await pending
        return cache

    cache = asyncio.run(scenario())
    assert len(cache) == 0
    assert cache.inflight_count == 0
    assert dict(cache.overall.all_tier_counts()) == {}
    assert cache.overall.total_summoners() == 0
