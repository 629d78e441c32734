"""Форматирование записей лога.

Классы:
    FileFormatter
        Строчный формат для файла: время | модуль | уровень | сообщение | контекст.

Функции:
    get_module_emoji(logger_name: str) -> str
        Эмодзи модуля по имени логгера.
    context_prefix(context: Mapping) -> str
        Префикс "[index/doc_type/doc_id] " из контекста.
    record_context(record: LogRecord) -> dict
        Пользовательский контекст записи (всё, что пришло через extra).
"""

import json
import logging
from typing import Any, Mapping

TRACE: int = 5

EMOJI_MAP: dict[str, str] = {
    "synchronizer": "🔁",
    "integrations": "🔗",
    "peewee": "💾",
    "adapter": "💾",
    "documents": "📄",
    "projector": "🧬",
    "params": "🧾",
    "bulk": "📦",
    "admin": "🗂️",
    "query": "🔍",
    "search_proxy": "🔍",
    "config": "⚙️",
}

# INFO не имеет своего эмодзи: используется эмодзи модуля
LEVEL_EMOJI: dict[int, str] = {
    logging.CRITICAL: "💀",
    logging.ERROR: "❌",
    logging.WARNING: "⚠️",
    logging.DEBUG: "🔧",
    TRACE: "🔬",
}

FALLBACK_EMOJI: str = "📌"

CONTEXT_ID_KEYS: tuple[str, ...] = ("index", "doc_type", "doc_id")

# Атрибуты, которые есть у любой LogRecord, плюс те, что добавляет Formatter
STANDARD_ATTRIBUTES: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
}


def get_module_emoji(logger_name: str) -> str:
    """Эмодзи самого специфичного известного компонента имени логгера.

    search_sync.core.bulk -> 📦, search_sync.integrations.peewee.adapter -> 💾
    """
    for part in reversed(logger_name.lower().split(".")):
        emoji = EMOJI_MAP.get(part)
        if emoji:
            return emoji
    return FALLBACK_EMOJI


def context_prefix(context: Mapping[str, Any]) -> str:
    ids = [
        str(context[key])
        for key in CONTEXT_ID_KEYS
        if context.get(key) not in (None, "")
    ]
    return f"[{'/'.join(ids)}] " if ids else ""


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Контекст из extra без стандартных атрибутов и context id."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in STANDARD_ATTRIBUTES
        and key not in CONTEXT_ID_KEYS
        and not key.startswith("_")
    }


class FileFormatter(logging.Formatter):
    """Формат файла логов.

    2026-10-19 14:20:02 | BULK | DEBUG | 📦 [default/articles] Bulk request finished | success=3

    Сообщение уже содержит эмодзи и префикс контекста (их добавляет
    SyncLogger), форматтер дописывает остальной контекст.
    """

    def __init__(self, json_context: bool = False) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.json_context = json_context

    def _render_context(self, context: dict[str, Any]) -> str:
        if self.json_context:
            return json.dumps(context, ensure_ascii=False, default=str)
        return " ".join(f"{key}={value}" for key, value in context.items())

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            self.formatTime(record, self.datefmt),
            record.name.rsplit(".", 1)[-1].upper(),
            record.levelname,
            record.getMessage(),
        ]

        context = record_context(record)
        if context:
            parts.append(self._render_context(context))

        line = " | ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
