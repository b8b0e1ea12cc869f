"""Domain interfaces."""
from .fetcher import ISummonerFetcher

__all__ = [
    'ISummonerFetcher',
]
