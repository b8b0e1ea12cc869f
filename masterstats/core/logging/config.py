from __future__ import annotations

import logging
import os
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import Optional

from .formatter import ConsoleFormatter, JSONFormatter
from .levels import register_levels, to_level

_listener: QueueListener | None = None


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def bootstrap_logging(
    *,
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "masterstats.jsonl",
    console: Optional[bool] = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Configure the root logger once at process start.

    Console output is opt-in (``LOG_CONSOLE=true`` or ``console=True``). When
    ``log_dir`` is given, records are also written as JSON lines to a
    rotating file through a queue so that request handling never blocks on
    disk I/O.
    """
    global _listener
    shutdown_logging()
    register_levels()

    root = logging.getLogger()
    root.handlers.clear()
    root_level = to_level(level or os.getenv("LOG_LEVEL", "INFO"))
    root.setLevel(root_level)

    if console if console is not None else _env_flag("LOG_CONSOLE"):
        stream = logging.StreamHandler()
        console_level = os.getenv("LOG_CONSOLE_LEVEL", "")
        stream.setLevel(to_level(console_level) if console_level else root_level)
        stream.setFormatter(ConsoleFormatter())
        root.addHandler(stream)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(root_level)
        file_handler.setFormatter(JSONFormatter())
        records: Queue[logging.LogRecord] = Queue(-1)
        root.addHandler(QueueHandler(records))
        _listener = QueueListener(records, file_handler, respect_handler_level=True)
        _listener.start()

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(root_level, logging.WARNING))


def shutdown_logging() -> None:
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None
