from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    SUCCESS = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


_CUSTOM_LEVELS = (LogLevel.TRACE, LogLevel.SUCCESS)


def register_levels() -> None:
    for level in _CUSTOM_LEVELS:
        if logging.getLevelName(int(level)) != level.name:
            logging.addLevelName(int(level), level.name)


def to_level(value: int | str) -> int:
    """Map a level name (including TRACE/SUCCESS) or number to a number."""
    if isinstance(value, int):
        return value
    try:
        return int(LogLevel[value.strip().upper()])
    except KeyError:
        return logging.INFO
