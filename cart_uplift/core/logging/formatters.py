"""
Log record formatters

Keyword fields passed to a StructuredLogger travel on the record as
``extra_fields``. Shop and order identifiers are pulled out of them so
every line about an order can be grepped by the same keys.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

CONTEXT_KEYS = ("shop_id", "order_id", "product_id")


def record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return dict(getattr(record, "extra_fields", None) or {})


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


class JSONFormatter(logging.Formatter):
    """One JSON object per line"""

    def __init__(self, include_location: bool = False):
        super().__init__()
        self.include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        fields = record_fields(record)
        entry: Dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {key: fields.pop(key) for key in CONTEXT_KEYS if key in fields}
        if context:
            entry["context"] = context
        if fields:
            entry["fields"] = fields

        if self.include_location:
            entry["location"] = f"{record.module}.{record.funcName}:{record.lineno}"
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines, optionally colored by level"""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        fields = record_fields(record)
        shop = fields.get("shop_id")
        prefix = f"[{shop}] " if shop else ""

        line = (
            f"{self.formatTime(record, self.datefmt)} {record.levelname:<8} "
            f"{record.name}: {prefix}{record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        color = self.LEVEL_COLORS.get(record.levelname) if self.use_colors else None
        return f"{color}{line}{self.RESET}" if color else line


def build_formatter(name: str, for_terminal: bool = True) -> logging.Formatter:
    """Formatter for a LOG_FORMAT value: console, json or structured"""
    if name == "json":
        return JSONFormatter()
    if name == "structured":
        return JSONFormatter(include_location=True)
    return ConsoleFormatter(use_colors=for_terminal)
