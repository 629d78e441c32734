"""Результаты операций с индексом.

Классы:
    ResultCollection
        Список моделей из поисковой выдачи с метаданными ответа.
    BulkResult
        Итог bulk-запроса.
    DeleteOutcome
        Исход удаления, где отсутствие цели: штатная ситуация.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional


class DeleteOutcome(str, Enum):
    """Исход удаления маппинга или документов типа.

    Attributes:
        DELETED: Цель существовала и удалена.
        NOT_FOUND: Цели не было (404), удалять нечего.
    """

    DELETED = "deleted"
    NOT_FOUND = "not_found"


@dataclass
class BulkResult:
    """Итог bulk-запроса в том виде, в котором его вернул helpers.bulk.

    Attributes:
        success: Количество успешных операций.
        errors: Список ошибок по элементам (пустой, если ошибок нет).
    """

    success: int = 0
    errors: list[Any] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class ResultCollection(list):
    """Результат поиска: модели, восстановленные из хитов, плюс ответ целиком.

    Ведёт себя как обычный список моделей. Метаданные ответа доступны
    через свойства.

    Пример:
        >>> results = Article.search.search("python")
        >>> results.total_hits
        12
        >>> [a.title for a in results]

    Attributes:
        response: Сырой ответ Elasticsearch.
    """

    def __init__(
        self,
        response: Mapping[str, Any],
        hydrate: Callable[[Mapping[str, Any]], Any],
    ):
        """Восстанавливает модели из хитов ответа.

        Args:
            response: Ответ search API.
            hydrate: Функция hit -> инстанс модели.
        """
        self.response = response
        super().__init__(hydrate(hit) for hit in self.hits)

    @property
    def hits(self) -> list[Mapping[str, Any]]:
        """Сырые хиты ответа."""
        return list(self.response.get("hits", {}).get("hits", []))

    @property
    def total_hits(self) -> int:
        """Общее количество совпадений.

        Поддерживает оба формата: число (старые версии) и
        {"value": N, "relation": "eq"} (Elasticsearch 7+).
        """
        total = self.response.get("hits", {}).get("total", 0)
        if isinstance(total, Mapping):
            return int(total.get("value", 0))
        return int(total or 0)

    @property
    def max_score(self) -> Optional[float]:
        return self.response.get("hits", {}).get("max_score")

    @property
    def took(self) -> Optional[int]:
        """Время выполнения запроса на стороне Elasticsearch, мс."""
        return self.response.get("took")

    @property
    def timed_out(self) -> bool:
        return bool(self.response.get("timed_out", False))

    @property
    def shards(self) -> Mapping[str, Any]:
        return self.response.get("_shards", {})

    @property
    def aggregations(self) -> Mapping[str, Any]:
        return self.response.get("aggregations", {})

    def __repr__(self) -> str:
        return (
            f"ResultCollection(count={len(self)}, total_hits={self.total_hits}, "
            f"took={self.took})"
        )

