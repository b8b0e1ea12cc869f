"""Infrastructure layer - API client, repositories and static data."""
from .api import RiotAPIClient, RateLimiter, EndpointRateLimiter
from .repositories import SummonerRepository
from .static_data import DataDragonCatalogSource, load_catalog, load_catalog_file

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'EndpointRateLimiter',
    'SummonerRepository',
    'DataDragonCatalogSource',
    'load_catalog',
    'load_catalog_file',
]
