"""Массовые операции с индексом.

Классы:
    BulkIndexer
        Индексация/удаление/переиндексация набора моделей одним bulk-запросом.
"""

from typing import Any, Iterable, Iterator

from elasticsearch import Elasticsearch
from elasticsearch.helpers import bulk

from search_sync.core.admin import HTTP_NOT_FOUND, response_status
from search_sync.core.params import build_basic_params
from search_sync.core.projector import DocumentProjector
from search_sync.domain import BulkResult, DeleteOutcome, IndexBinding
from search_sync.interfaces import BaseEntityAdapter
from search_sync.utils.logger import get_logger

logger = get_logger(__name__)


class BulkIndexer:
    """Bulk-операции над всеми строками модели или над переданным набором.

    Пакетирование и повторы: забота helpers.bulk; ошибки отдельных
    элементов возвращаются в BulkResult.errors без дальнейшей обработки.

    Attributes:
        client: Клиент Elasticsearch.
        binding: Привязка модели к индексу.
        adapter: Адаптер моделей ORM.
        projector: Проектор model -> document.
    """

    def __init__(
        self,
        client: Elasticsearch,
        binding: IndexBinding,
        adapter: BaseEntityAdapter,
        projector: DocumentProjector | None = None,
    ):
        self.client = client
        self.binding = binding
        self.adapter = adapter
        self.projector = projector or DocumentProjector(adapter)
        self.log = logger.bind(index=binding.index_name, doc_type=binding.type_name)

    @property
    def target(self) -> str:
        return build_basic_params(self.binding.index_name, self.binding.type_name).target

    def _index_actions(self, instances: Iterable[Any]) -> Iterator[dict[str, Any]]:
        target = self.target
        for instance in instances:
            yield {
                "_op_type": "index",
                "_index": target,
                "_id": self.adapter.get_key(instance),
                "_source": self.projector.to_document(instance),
            }

    def _delete_actions(self, instances: Iterable[Any]) -> Iterator[dict[str, Any]]:
        target = self.target
        for instance in instances:
            yield {
                "_op_type": "delete",
                "_index": target,
                "_id": self.adapter.get_key(instance),
            }

    def _submit(self, actions: Iterable[dict[str, Any]], **kwargs: Any) -> BulkResult:
        success, errors = bulk(self.client, actions, raise_on_error=False, **kwargs)
        result = BulkResult(success=success, errors=list(errors))
        if result.errors:
            self.log.warning(
                "Bulk request finished with errors",
                success=result.success,
                failed=len(result.errors),
            )
        else:
            self.log.debug("Bulk request finished", success=result.success)
        return result

    # === Произвольный набор инстансов ===

    def add_to_index(self, instances: Iterable[Any]) -> BulkResult:
        """Индексирует переданные инстансы одним bulk-запросом."""
        return self._submit(self._index_actions(instances))

    def delete_from_index(self, instances: Iterable[Any]) -> BulkResult:
        """Удаляет документы переданных инстансов. Отсутствующие (404) не ошибка."""
        return self._submit(
            self._delete_actions(instances), ignore_status=(HTTP_NOT_FOUND,)
        )

    def reindex_instances(self, instances: Iterable[Any]) -> BulkResult:
        """Удаляет и заново индексирует переданные инстансы."""
        instances = list(instances)
        self.delete_from_index(instances)
        return self.add_to_index(instances)

    # === Все строки модели ===

    def add_all_to_index(self) -> BulkResult:
        """Индексирует все строки таблицы модели."""
        self.log.info("Indexing all rows")
        return self.add_to_index(self.adapter.fetch_all())

    def reindex(self) -> BulkResult:
        """Переиндексирует все строки (например, после rebuild_mapping)."""
        self.log.info("Reindexing all rows")
        return self.reindex_instances(self.adapter.fetch_all())

    def delete_all_from_index(self) -> DeleteOutcome:
        """Удаляет все документы типа через delete_by_query.

        Отсутствие индекса типа (404): штатная ситуация.

        Returns:
            DeleteOutcome.DELETED или DeleteOutcome.NOT_FOUND.
        """
        response = self.client.options(ignore_status=HTTP_NOT_FOUND).delete_by_query(
            index=self.target,
            query={"match_all": {}},
        )
        if response_status(response) == HTTP_NOT_FOUND:
            self.log.info("Nothing to delete, type is absent")
            return DeleteOutcome.NOT_FOUND

        self.log.info("All documents deleted")
        return DeleteOutcome.DELETED
