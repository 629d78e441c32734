"""Привязка модели к индексу.

Классы:
    IndexBinding
        Имя индекса, имя типа и схема маппинга для класса модели.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_INDEX_NAME = "default"


@dataclass
class IndexBinding:
    """Конфигурация индексации уровня класса модели.

    Attributes:
        index_name: Логическое имя индекса.
        type_name: Имя типа (обычно имя таблицы модели).
        mapping_properties: Схема полей {имя: {type: ..., ...}}, передаётся
            в put_mapping как есть.
        uses_timestamps: Запрашивать ли `_timestamp` в search_by_query.
    """

    index_name: str
    type_name: str
    mapping_properties: dict[str, Any] = field(default_factory=dict)
    uses_timestamps: bool = True

    def uses_timestamps_in_index(self) -> bool:
        return self.uses_timestamps

    def use_timestamps_in_index(self) -> None:
        self.uses_timestamps = True

    def dont_use_timestamps_in_index(self) -> None:
        self.uses_timestamps = False

    def get_mapping_properties(self) -> dict[str, Any]:
        return self.mapping_properties

    def set_mapping_properties(self, mapping: Optional[dict[str, Any]]) -> None:
        self.mapping_properties = dict(mapping or {})
