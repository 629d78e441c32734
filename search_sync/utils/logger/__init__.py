"""Логирование search_sync: эмодзи модулей, контекст индекса, маскирование секретов.

Функции:
    get_logger(name: str) -> SyncLogger
        Логгер модуля. При первом вызове настраивает логирование с дефолтами.
    setup_logging(config: LoggingConfig | None = None) -> None
        (Пере)настроить хендлеры корневого логгера search_sync.

Константы:
    TRACE: int
        Уровень TRACE (5), ниже DEBUG.

Example:
    >>> from search_sync.utils.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> log = logger.bind(index="default", doc_type="articles")
    >>> log.info("Mapping rebuilt")  # -> 🗂️ [default/articles] Mapping rebuilt
"""

import logging

from rich.logging import RichHandler

from .config import LoggingConfig
from .filters import SensitiveDataFilter
from .formatters import TRACE, FileFormatter
from .logger import SyncLogger

ROOT_LOGGER_NAME: str = "search_sync"

_current_config: LoggingConfig | None = None


def _console_handler(config: LoggingConfig) -> logging.Handler:
    # markup=False: иначе [default/articles] разбирается как rich-разметка
    return RichHandler(
        level=logging.getLevelName(config.level),
        show_time=True,
        show_level=False,
        show_path=config.show_path,
        rich_tracebacks=True,
        markup=False,
    )


def _file_handler(config: LoggingConfig) -> logging.Handler:
    handler = logging.FileHandler(config.file, mode="a", encoding="utf-8")
    handler.setLevel(logging.getLevelName(config.file_level))
    handler.setFormatter(FileFormatter(json_context=config.json_format))
    return handler


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Настраивает хендлеры логгера "search_sync".

    Повторный вызов закрывает и заменяет прежние хендлеры. Сам логгер
    пропускает всё начиная с TRACE, уровни отсекаются на хендлерах.
    Записи не уходят в корневой логгер приложения.

    Args:
        config: Настройки. None: LoggingConfig() из окружения.
    """
    global _current_config

    config = config or LoggingConfig()
    _current_config = config

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers = [_console_handler(config)]
    if config.file:
        handlers.append(_file_handler(config))

    for handler in handlers:
        if config.redact:
            handler.addFilter(SensitiveDataFilter())
        root.addHandler(handler)

    root.setLevel(TRACE)
    root.propagate = False


def get_logger(name: str) -> SyncLogger:
    """Логгер для модуля (обычно get_logger(__name__))."""
    if _current_config is None:
        setup_logging()
    return SyncLogger(name)


__all__ = [
    "TRACE",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "setup_logging",
    "SyncLogger",
    "LoggingConfig",
    "FileFormatter",
    "SensitiveDataFilter",
]
