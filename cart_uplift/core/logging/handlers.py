"""
Handler construction from LoggingConfig
"""

import logging
import logging.handlers
import os
import sys
from typing import List

from .config import LoggingConfig
from .formatters import build_formatter


def _rotating_file(
    config: LoggingConfig, filename: str, level: int
) -> logging.handlers.RotatingFileHandler:
    os.makedirs(config.file.log_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        os.path.join(config.file.log_dir, filename),
        maxBytes=config.file.max_bytes,
        backupCount=config.file.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(build_formatter(config.format, for_terminal=False))
    return handler


def build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """app.log, errors.log and stderr handlers, each only when enabled"""
    level = config.numeric_level(config.level)
    handlers: List[logging.Handler] = []

    if config.file.enabled:
        handlers.append(_rotating_file(config, "app.log", level))
        if config.file.errors_enabled:
            handlers.append(_rotating_file(config, "errors.log", logging.ERROR))

    if config.console.enabled:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(config.numeric_level(config.console.level))
        console.setFormatter(build_formatter(config.format, for_terminal=sys.stderr.isatty()))
        handlers.append(console)

    return handlers
