"""Domain layer - Entities, enums, orderings, catalog and interfaces."""
from .entities import (
    ChampionCatalogEntry, ChampionMastery, SummonerIdentity, RawSummonerData,
    SummonerStatistic, DerivedView, ChampionSlot, EMPTY_SLOT,
)
from .enums import Region, Tier, Grade, GradeLetter, GradeModifier
from .catalog import ChampionCatalog
from .errors import (
    MasterStatsError, InvalidIdentity, SummonerNotFound, FetchFailure,
    ChampionNotFound, DataInconsistency,
)
from .interfaces import ISummonerFetcher

__all__ = [
    # Entities
    'ChampionCatalogEntry',
    'ChampionMastery',
    'SummonerIdentity',
    'RawSummonerData',
    'SummonerStatistic',
    'DerivedView',
    'ChampionSlot',
    'EMPTY_SLOT',
    # Enums
    'Region',
    'Tier',
    'Grade',
    'GradeLetter',
    'GradeModifier',
    # Catalog
    'ChampionCatalog',
    # Errors
    'MasterStatsError',
    'InvalidIdentity',
    'SummonerNotFound',
    'FetchFailure',
    'ChampionNotFound',
    'DataInconsistency',
    # Interfaces
    'ISummonerFetcher',
]
