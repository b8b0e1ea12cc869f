from __future__ import annotations

import contextvars
from typing import Any, Dict

# Per-task logging context; asyncio copies it into every task it spawns.
_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("masterstats_log_context", default={})


def get_context() -> Dict[str, Any]:
    return dict(_context.get())


def bind(**values: Any) -> None:
    merged = {**_context.get(), **{k: v for k, v in values.items() if v is not None}}
    _context.set(merged)


def unbind(*keys: str) -> None:
    remaining = {k: v for k, v in _context.get().items() if k not in keys}
    _context.set(remaining)


class log_context:
    """Bind values for the duration of a ``with`` block.

    Usable as a plain or an async context manager::

        with log_context(region="EUW", summoner_key="faker_euw"):
            ...
    """

    def __init__(self, **values: Any) -> None:
        self._values = {k: v for k, v in values.items() if v is not None}
        self._token: contextvars.Token | None = None

    def __enter__(self) -> Dict[str, Any]:
        merged = {**_context.get(), **self._values}
        self._token = _context.set(merged)
        return merged

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._token is not None:
            _context.reset(self._token)
            self._token = None
        return False

    async def __aenter__(self) -> Dict[str, Any]:
        return self.__enter__()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return self.__exit__(exc_type, exc, tb)
