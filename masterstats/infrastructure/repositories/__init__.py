"""Infrastructure repositories."""
from .summoner_repository import SummonerRepository

__all__ = [
    'SummonerRepository',
]
