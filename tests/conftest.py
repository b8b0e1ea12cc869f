import asyncio
from typing import Dict, List, Optional, Tuple, Union

import pytest

from masterstats.domain.catalog import ChampionCatalog
from masterstats.domain.entities import (
    ChampionCatalogEntry, ChampionMastery, RawSummonerData, normalize_summoner_name,
)
from masterstats.domain.enums import Region
from masterstats.domain.errors import SummonerNotFound
from masterstats.domain.interfaces import ISummonerFetcher


def make_catalog(size: int = 140) -> ChampionCatalog:
    return ChampionCatalog.load(
        ChampionCatalogEntry(
            champion_id=i,
            key_name=f"champ{i}",
            display_name=f"Champion {i}",
            portrait_url=f"https://cdn.example/champ{i}.png",
        )
        for i in range(1, size + 1)
    )


def mastery(champion_id: int, points: int = 1000, level: int = 5, chest: int = 0, grade: str = "null") -> ChampionMastery:
    return ChampionMastery(
        champion_id=champion_id,
        champion_points=points,
        champion_level=level,
        chest_granted=chest,
        highest_grade=grade,
    )


def raw_summoner(name: str = "Faker", tier: Optional[str] = "CHALLENGER", division: Optional[str] = "I",
                 masteries: Tuple[ChampionMastery, ...] = ()) -> RawSummonerData:
    return RawSummonerData(
        summoner_id=f"id-{name}",
        summoner_name=name,
        summoner_level=30,
        profile_icon_id=7,
        tier=tier,
        division=division,
        mastery_score=sum(m.champion_level for m in masteries),
        masteries=tuple(masteries),
    )


class FakeFetcher(ISummonerFetcher):
    """In-memory fetch collaborator recording every call.

    ``gate`` (an asyncio.Event) holds every fetch until it is set; ``delay``
    sleeps before answering. Names without an entry raise SummonerNotFound.
    """

    def __init__(self, results: Optional[Dict[str, Union[RawSummonerData, Exception]]] = None,
                 gate: Optional[asyncio.Event] = None, delay: float = 0.0):
        self.results = {normalize_summoner_name(k): v for k, v in (results or {}).items()}
        self.gate = gate
        self.delay = delay
        self.calls: List[Tuple[Region, str]] = []

    async def fetch_summoner(self, region: Region, summoner_name: str) -> RawSummonerData:
        self.calls.append((region, summoner_name))
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.results.get(normalize_summoner_name(summoner_name))
        if result is None:
            raise SummonerNotFound(region.name, summoner_name)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def catalog() -> ChampionCatalog:
    return make_catalog()


@pytest.fixture
def faker_raw() -> RawSummonerData:
    return raw_summoner(
        "Faker",
        masteries=(
            mastery(1, points=50_000, level=7, chest=1, grade="S+"),
            mastery(2, points=40_000, level=6, chest=0, grade="S"),
            mastery(3, points=30_000, level=5, chest=1, grade="A-"),
            mastery(4, points=20_000, level=4, chest=0, grade="null"),
            mastery(5, points=10_000, level=3, chest=0, grade="B"),
        ),
    )
