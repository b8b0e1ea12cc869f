"""Static reference data loading."""
from .data_dragon import (
    DataDragonCatalogSource,
    catalog_from_data_dragon,
    champion_portrait_url,
    load_catalog,
    load_catalog_file,
    profile_icon_url,
)

__all__ = [
    'DataDragonCatalogSource',
    'catalog_from_data_dragon',
    'champion_portrait_url',
    'load_catalog',
    'load_catalog_file',
    'profile_icon_url',
]
