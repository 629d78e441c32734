"""Логгер с привязкой контекста индекса.

Классы:
    SyncLogger
        Обёртка над logging.Logger: keyword-контекст, bind(), уровень TRACE.
"""

from __future__ import annotations

import logging
from typing import Any

from .formatters import LEVEL_EMOJI, TRACE, context_prefix, get_module_emoji

logging.addLevelName(TRACE, "TRACE")


class SyncLogger:
    """Структурированный логгер search_sync.

    Контекст передаётся keyword-аргументами и уходит в LogRecord через
    extra. Ключи index/doc_type/doc_id дополнительно выводятся префиксом
    сообщения.

    Example:
        >>> log = SyncLogger("search_sync.core.documents").bind(
        ...     index="default", doc_type="articles"
        ... )
        >>> log.debug("Indexing document", doc_id=42)
        >>> # -> 🔧 [default/articles/42] Indexing document
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = dict(context or {})

    def bind(self, **context: Any) -> SyncLogger:
        """Новый логгер с контекстом, дополненным переданными ключами."""
        return type(self)(self.name, {**self._context, **context})

    def _log(self, level: int, msg: str, context: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return

        extra = {**self._context, **context}
        emoji = LEVEL_EMOJI.get(level) or get_module_emoji(self.name)
        # RichHandler выводит только сообщение, поэтому префикс вшивается в него
        self._logger.log(level, f"{emoji} {context_prefix(extra)}{msg}", extra=extra)

    def trace(self, msg: str, **context: Any) -> None:
        """Тела запросов к индексу и решения синхронизации."""
        self._log(TRACE, msg, context)

    def debug(self, msg: str, **context: Any) -> None:
        """Каждый вызов клиента Elasticsearch."""
        self._log(logging.DEBUG, msg, context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(logging.ERROR, msg, context)

    def critical(self, msg: str, **context: Any) -> None:
        self._log(logging.CRITICAL, msg, context)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)
