"""Настройки логирования.

Классы:
    LoggingConfig
        pydantic-settings модель, читает SEARCH_SYNC_LOG_* из окружения.

Environment Variables:
    SEARCH_SYNC_LOG_LEVEL: Уровень консоли (TRACE/DEBUG/INFO/WARNING/ERROR/CRITICAL).
    SEARCH_SYNC_LOG_FILE_LEVEL: Уровень файла.
    SEARCH_SYNC_LOG_FILE: Путь к файлу логов.
    SEARCH_SYNC_LOG_JSON_FORMAT: Контекст в файле как JSON (true/false).
    SEARCH_SYNC_LOG_REDACT: Маскировать учётные данные (true/false).
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Настройки хендлеров search_sync.

    Явные аргументы важнее переменных окружения, окружение важнее
    значений по умолчанию. Экземпляр неизменяем.

    Example:
        >>> setup_logging(LoggingConfig(level="DEBUG", file="/tmp/search_sync.log"))
    """

    level: LogLevel = "INFO"
    file_level: LogLevel = "TRACE"
    file: Path | None = Field(default=None, description="None: только консоль")
    json_format: bool = False
    show_path: bool = False
    redact: bool = Field(default=True, description="SensitiveDataFilter на всех хендлерах")

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_SYNC_LOG_",
        extra="forbid",
        frozen=True,
    )

    @field_validator("level", "file_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """debug -> DEBUG, чтобы env-переменные не зависели от регистра."""
        if isinstance(v, str):
            return v.strip().upper()
        return v
