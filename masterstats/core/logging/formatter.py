from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

from .context import get_context
from .levels import LogLevel

_COLORS = {
    LogLevel.TRACE: "\033[90m",
    LogLevel.DEBUG: "\033[37m",
    LogLevel.INFO: "\033[36m",
    LogLevel.SUCCESS: "\033[32m",
    LogLevel.WARNING: "\033[33m",
    LogLevel.ERROR: "\033[31m",
    LogLevel.CRITICAL: "\033[1;31m",
}
_RESET = "\033[0m"


def _base_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
        "level": record.levelname,
        "service": getattr(record, "service", None),
        "logger": record.name,
        "function": record.funcName,
        "line": record.lineno,
        "thread": record.thread,
        "task": getattr(record, "taskName", None),
    }


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    # Records formatted on the queue listener thread carry the context
    # captured when they were emitted.
    captured = getattr(record, "log_context", None)
    return captured if captured is not None else get_context()


def _format_context(ctx: Dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in sorted(ctx.items()))


class ConsoleFormatter(logging.Formatter):
    """Single colored line: time | level | service | location | message | context."""

    def format(self, record: logging.LogRecord) -> str:
        try:
            fields = _base_fields(record)
            parts = [
                fields["timestamp"],
                fields["level"],
                fields["service"] or "-",
                f"{fields['logger']}:{fields['function']}:{fields['line']}",
                record.getMessage(),
            ]
            elapsed = getattr(record, "execution_time_ms", None)
            if elapsed is not None:
                parts.append(f"t={elapsed}ms")
            ctx = _record_context(record)
            if ctx:
                parts.append(_format_context(ctx))
            if record.exc_info:
                parts.append(self.formatException(record.exc_info))
            color = _COLORS.get(record.levelno, "")
            return f"{color}{' | '.join(parts)}{_RESET}"
        except Exception:
            return record.getMessage()


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for the rotating file handler."""

    def format(self, record: logging.LogRecord) -> str:
        try:
            payload: Dict[str, Any] = _base_fields(record)
            payload["message"] = record.getMessage()
            ctx = _record_context(record)
            if ctx:
                payload["context"] = ctx
            elapsed = getattr(record, "execution_time_ms", None)
            if elapsed is not None:
                payload["execution_time_ms"] = elapsed
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str, separators=(",", ":"))
        except Exception:
            return json.dumps({"message": "log format error"}, separators=(",", ":"))
