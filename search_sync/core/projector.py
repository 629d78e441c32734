"""Проекция моделей в документы индекса и обратно.

Классы:
    DocumentProjector
        model -> document и hit -> model.
"""

from typing import Any, Mapping

from search_sync.domain import (
    DocumentMeta,
    MalformedHitError,
    attach_document_meta,
)
from search_sync.interfaces import BaseEntityAdapter
from search_sync.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentProjector:
    """Преобразует инстансы модели в документы и хиты в инстансы.

    Прямое направление отдаёт сериализацию ORM как есть, без фильтрации
    полей. Обратное строит новый несохранённый инстанс из `_source`
    (поверх которого накладываются `fields`) и привязывает к нему
    score/version хита.

    Attributes:
        adapter: Адаптер моделей ORM.
    """

    def __init__(self, adapter: BaseEntityAdapter):
        self.adapter = adapter

    def to_document(self, instance: Any) -> dict[str, Any]:
        """Документ, который уйдёт в индекс для этого инстанса."""
        return self.adapter.to_document(instance)

    def from_hit(self, hit: Mapping[str, Any]) -> Any:
        """Восстанавливает инстанс модели из хита поисковой выдачи.

        Args:
            hit: {"_source": {...}, "fields": {...}?, "_score": x, "_version": n?}

        Returns:
            Инстанс с is_document=True.

        Raises:
            MalformedHitError: Если в хите нет `_score` или `_source`
                (либо `_source` не словарь).
        """
        if not isinstance(hit.get("_source"), Mapping):
            raise MalformedHitError("_source")
        if "_score" not in hit:
            raise MalformedHitError("_score")

        attributes: dict[str, Any] = dict(hit["_source"])
        # fields побеждают при совпадении ключей
        attributes.update(hit.get("fields") or {})

        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in attributes.items():
            if self.adapter.has_field(key):
                values[key] = value
            else:
                extra[key] = value

        instance = self.adapter.new_from_attributes(values)

        attach_document_meta(
            instance,
            DocumentMeta(
                is_document=True,
                score=hit["_score"],
                version=hit.get("_version"),
                extra=extra,
            ),
        )

        logger.trace(
            "Hit hydrated",
            doc_id=hit.get("_id"),
            score=hit["_score"],
            version=hit.get("_version"),
        )
        return instance
