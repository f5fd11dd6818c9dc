"""
Structured logger

``get_logger(__name__).info("Attributed order", shop_id=..., revenue=...)``
renders as ``Attributed order | shop_id=... | revenue=...`` and keeps the
keyword fields on the record for the JSON formatters.
"""

import logging
from typing import Any, Dict, Optional

from .config import LoggingConfig
from .handlers import build_handlers

NOISY_LOGGERS = ("asyncio", "httpx", "urllib3", "sqlalchemy.engine.Engine")


def render_fields(fields: Dict[str, Any]) -> str:
    parts = []
    for key, value in fields.items():
        if isinstance(value, str) and " " in value:
            parts.append(f'{key}="{value}"')
        else:
            parts.append(f"{key}={value}")
    return " | ".join(parts)


class StructuredLogger:
    """Wraps a stdlib logger; keyword arguments become structured fields"""

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        self._logger = logger
        self._context = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **context) -> "StructuredLogger":
        """A logger that adds `context` to every message"""
        return StructuredLogger(self._logger, {**self._context, **context})

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs):
        if not self._logger.isEnabledFor(level):
            return

        fields = {
            key: value
            for key, value in {**self._context, **kwargs}.items()
            if value is not None
        }
        text = f"{message} | {render_fields(fields)}" if fields else message
        self._logger.log(level, text, exc_info=exc_info, extra={"extra_fields": fields})

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Error with the active exception's traceback"""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Replace the root handlers with those described by `config`"""
    config = config or LoggingConfig()

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    root.setLevel(config.numeric_level(config.level))
    for handler in build_handlers(config):
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(logging.getLogger(name))


# Configure from settings on first import
try:
    from cart_uplift.core.config.settings import settings

    setup_logging(LoggingConfig.from_settings(settings.logging))
except Exception as e:
    logging.basicConfig(level=logging.INFO)
    logging.getLogger(__name__).warning(f"Falling back to basic logging: {e}")
