"""Application use cases."""
from .lookup_summoner import LookupSummonerUseCase, SummonerReport

__all__ = [
    'LookupSummonerUseCase',
    'SummonerReport',
]
