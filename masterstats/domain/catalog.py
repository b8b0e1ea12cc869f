"""Champion catalog: read-only lookup of static champion data."""
from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from .entities import ChampionCatalogEntry
from .errors import ChampionNotFound


class ChampionCatalog:
    """All champions in the game, keyed by id and by key name.

    Built once with :meth:`load` at process start and never mutated
    afterwards, so concurrent readers need no synchronisation.
    """

    def __init__(self, by_id: Mapping[int, ChampionCatalogEntry], version: str = "") -> None:
        self._by_id = MappingProxyType(dict(by_id))
        self._by_key = MappingProxyType({e.key_name.lower(): e for e in by_id.values()})
        self.version = version

    @classmethod
    def load(cls, entries: Iterable[ChampionCatalogEntry], version: str = "") -> 'ChampionCatalog':
        """Build a catalog from entries.

        Key names are stored lower-cased.

        Raises:
            ValueError: if two entries share an id or a key name.
        """
        by_id: dict[int, ChampionCatalogEntry] = {}
        keys: set[str] = set()
        for entry in entries:
            if entry.key_name != entry.key_name.lower():
                entry = replace(entry, key_name=entry.key_name.lower())
            if entry.champion_id in by_id:
                raise ValueError(f"duplicate champion id {entry.champion_id}")
            if entry.key_name in keys:
                raise ValueError(f"duplicate champion key name '{entry.key_name}'")
            by_id[entry.champion_id] = entry
            keys.add(entry.key_name)
        return cls(by_id, version=version)

    def by_id(self, champion_id: int) -> ChampionCatalogEntry:
        try:
            return self._by_id[champion_id]
        except KeyError:
            raise ChampionNotFound(f"no champion with id {champion_id}") from None

    def by_key_name(self, key_name: str) -> ChampionCatalogEntry:
        try:
            return self._by_key[key_name.lower()]
        except KeyError:
            raise ChampionNotFound(f"no champion with key name '{key_name}'") from None

    def find_by_id(self, champion_id: int) -> Optional[ChampionCatalogEntry]:
        return self._by_id.get(champion_id)

    def size(self) -> int:
        """Total champions in the game."""
        return len(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, champion_id: object) -> bool:
        return champion_id in self._by_id

    def __iter__(self) -> Iterator[ChampionCatalogEntry]:
        return iter(self._by_id.values())
