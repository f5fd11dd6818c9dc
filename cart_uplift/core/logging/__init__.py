"""
Logging module for the Cart Uplift worker
"""

from .config import LoggingConfig
from .formatters import ConsoleFormatter, JSONFormatter, build_formatter
from .handlers import build_handlers
from .logger import StructuredLogger, get_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "ConsoleFormatter",
    "JSONFormatter",
    "build_formatter",
    "build_handlers",
    "StructuredLogger",
    "get_logger",
    "setup_logging",
]
