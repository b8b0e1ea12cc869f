"""Domain entities."""
from .champion import ChampionCatalogEntry, ChampionMastery, MIN_CHAMPION_LEVEL, MAX_CHAMPION_LEVEL
from .summoner import SummonerIdentity, RawSummonerData, SummonerStatistic, normalize_summoner_name
from .view import DerivedView, ChampionSlot, EmptySlot, EMPTY_SLOT

__all__ = [
    'ChampionCatalogEntry',
    'ChampionMastery',
    'MIN_CHAMPION_LEVEL',
    'MAX_CHAMPION_LEVEL',
    'SummonerIdentity',
    'RawSummonerData',
    'SummonerStatistic',
    'normalize_summoner_name',
    'DerivedView',
    'ChampionSlot',
    'EmptySlot',
    'EMPTY_SLOT',
]
