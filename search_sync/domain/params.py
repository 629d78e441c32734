"""Параметры запроса к индексу.

Классы:
    SearchParams
        Неизменяемый набор параметров для вызова клиента Elasticsearch.
"""

from dataclasses import dataclass
from typing import Any, Optional

# Разделитель между именем индекса и типа в имени физического индекса
TYPE_SEPARATOR = "-"


@dataclass(frozen=True)
class SearchParams:
    """Параметры, общие для всех операций с индексом.

    В Elasticsearch 8 нет mapping types, поэтому каждый тип живёт
    в собственном физическом индексе `"{index}-{doc_type}"` (см. target).

    Attributes:
        index: Логическое имя индекса.
        doc_type: Имя типа (по умолчанию имя таблицы модели).
        id: ID документа (всегда равен первичному ключу модели).
        fields: Список полей через запятую (`_source`, `_timestamp`).
        size: Лимит результатов.
        from_: Смещение результатов.
    """

    index: str
    doc_type: str
    id: Optional[Any] = None
    fields: Optional[str] = None
    size: Optional[Any] = None
    from_: Optional[Any] = None

    @property
    def target(self) -> str:
        """Имя физического индекса для этого типа."""
        return f"{self.index}{TYPE_SEPARATOR}{self.doc_type}"

    def to_request(self) -> dict[str, Any]:
        """Собирает keyword-аргументы для клиента Elasticsearch.

        Returns:
            Словарь, в котором есть только заданные параметры.
        """
        request: dict[str, Any] = {"index": self.target}

        if self.id is not None:
            request["id"] = self.id
        if self.fields:
            request["stored_fields"] = self.fields
        if self.size is not None:
            request["size"] = self.size
        if self.from_ is not None:
            request["from_"] = self.from_

        return request
