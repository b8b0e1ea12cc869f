"""Application layer - Services and use cases."""
from .services import SummonerCache, OverallStatistics
from .use_cases import LookupSummonerUseCase

__all__ = [
    'SummonerCache',
    'OverallStatistics',
    'LookupSummonerUseCase',
]
