"""
Logging configuration model
"""

import logging
from typing import Literal

from pydantic import BaseModel, Field


class FileLogConfig(BaseModel):
    enabled: bool = True
    log_dir: str = "logs"
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    errors_enabled: bool = True


class ConsoleLogConfig(BaseModel):
    enabled: bool = True
    level: str = "INFO"


class LoggingConfig(BaseModel):
    """Resolved logging setup"""

    level: str = "INFO"
    format: Literal["console", "json", "structured"] = "console"
    file: FileLogConfig = Field(default_factory=FileLogConfig)
    console: ConsoleLogConfig = Field(default_factory=ConsoleLogConfig)

    @staticmethod
    def numeric_level(name: str) -> int:
        return getattr(logging, name.upper(), logging.INFO)

    @classmethod
    def from_settings(cls, logging_settings) -> "LoggingConfig":
        """Build the config from LoggingSettings"""
        return cls(
            level=logging_settings.LOG_LEVEL,
            format=logging_settings.LOG_FORMAT,
            file=FileLogConfig(
                enabled=logging_settings.LOG_FILE_ENABLED,
                log_dir=logging_settings.LOG_DIR,
                max_bytes=logging_settings.LOG_MAX_BYTES,
                backup_count=logging_settings.LOG_BACKUP_COUNT,
                errors_enabled=logging_settings.LOG_ERROR_FILE_ENABLED,
            ),
            console=ConsoleLogConfig(
                enabled=logging_settings.LOG_CONSOLE_ENABLED,
                level=logging_settings.LOG_LEVEL,
            ),
        )
