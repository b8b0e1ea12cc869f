"""Champion catalog loading from Data Dragon (remote) or a local champion.json."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from masterstats.config import settings
from masterstats.domain.catalog import ChampionCatalog
from masterstats.domain.entities import ChampionCatalogEntry

logger = logging.getLogger(__name__)


def champion_portrait_url(version: str, image_file: str, base_url: str = settings.DDRAGON_BASE_URL) -> str:
    return f"{base_url}/cdn/{version}/img/champion/{image_file}"


def profile_icon_url(version: str, icon_id: int, base_url: str = settings.DDRAGON_BASE_URL) -> str:
    return f"{base_url}/cdn/{version}/img/profileicon/{icon_id}.png"


def catalog_from_data_dragon(
    payload: Mapping[str, Any],
    version: Optional[str] = None,
    base_url: str = settings.DDRAGON_BASE_URL,
) -> ChampionCatalog:
    """Build a catalog from a Data Dragon ``champion.json`` document.

    The numeric champion id is the entry's ``key``; the URL-safe key name is
    the lower-cased ``id`` (``"MonkeyKing"`` -> ``"monkeyking"``).
    """
    version = version or str(payload.get('version', ''))
    entries: List[ChampionCatalogEntry] = []
    for champ in payload.get('data', {}).values():
        image_file = champ.get('image', {}).get('full') or f"{champ['id']}.png"
        entries.append(ChampionCatalogEntry(
            champion_id=int(champ['key']),
            key_name=str(champ['id']).lower(),
            display_name=champ.get('name', champ['id']),
            portrait_url=champion_portrait_url(version, image_file, base_url),
        ))
    return ChampionCatalog.load(entries, version=version)


def load_catalog_file(path: Union[str, Path], version: Optional[str] = None) -> ChampionCatalog:
    """Load a catalog from a ``champion.json`` file on disk."""
    with open(path, encoding='utf-8') as fh:
        payload = json.load(fh)
    catalog = catalog_from_data_dragon(payload, version)
    logger.info(f"loaded {catalog.size()} champions from {path}")
    return catalog


class DataDragonCatalogSource:
    """Downloads the champion list for one game version."""

    def __init__(
        self,
        *,
        version: Optional[str] = None,
        locale: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.version = version if version is not None else settings.DDRAGON_VERSION
        self.locale = locale or settings.DDRAGON_LOCALE
        self.base_url = base_url or settings.DDRAGON_BASE_URL
        self._transport = transport

    async def _get_json(self, client: httpx.AsyncClient, url: str) -> Any:
        response = await client.get(url)
        response.raise_for_status()
        return response.json()

    async def latest_version(self, client: httpx.AsyncClient) -> str:
        versions: List[str] = await self._get_json(client, f"{self.base_url}/api/versions.json")
        if not versions:
            raise ValueError("Data Dragon returned no versions")
        return versions[0]

    async def load(self) -> ChampionCatalog:
        async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT, transport=self._transport) as client:
            version = self.version or await self.latest_version(client)
            payload: Dict[str, Any] = await self._get_json(
                client, f"{self.base_url}/cdn/{version}/data/{self.locale}/champion.json"
            )
        catalog = catalog_from_data_dragon(payload, version, self.base_url)
        logger.info(f"loaded {catalog.size()} champions from Data Dragon {version}")
        return catalog


async def load_catalog() -> ChampionCatalog:
    """Load the catalog configured in settings: local file if set, else Data Dragon."""
    if settings.CHAMPION_DATA_FILE:
        return load_catalog_file(settings.CHAMPION_DATA_FILE, settings.DDRAGON_VERSION or None)
    return await DataDragonCatalogSource().load()
