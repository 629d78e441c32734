"""Операции с отдельным документом индекса.

Классы:
    DocumentIndexer
        index / update (upsert) / delete / get для инстанса модели.
"""

from typing import Any

from elasticsearch import Elasticsearch

from search_sync.core.params import build_basic_params
from search_sync.core.projector import DocumentProjector
from search_sync.domain import DocumentMissingError, IndexBinding, SearchParams
from search_sync.interfaces import BaseEntityAdapter
from search_sync.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentIndexer:
    """Синхронизирует один инстанс модели с его документом в индексе.

    ID документа всегда равен первичному ключу модели: по нему же
    документ потом обновляется, читается и удаляется.

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

    def params_for(self, instance: Any, **kwargs: Any) -> SearchParams:
        """Базовые параметры для инстанса (с id, если у него есть ключ)."""
        return build_basic_params(
            self.binding.index_name,
            self.binding.type_name,
            self.adapter.get_key(instance),
            **kwargs,
        )

    def _log_for(self, params: SearchParams):
        return logger.bind(index=params.index, doc_type=params.doc_type, doc_id=params.id)

    def add_to_index(self, instance: Any) -> Any:
        """Полностью индексирует документ инстанса.

        Args:
            instance: Сохранённый инстанс модели.

        Returns:
            Ответ index API.

        Raises:
            DocumentMissingError: Если инстанс не сохранён в БД.
        """
        if not self.adapter.exists(instance):
            raise DocumentMissingError()

        params = self.params_for(instance)
        document = self.projector.to_document(instance)

        log = self._log_for(params)
        log.debug("Indexing document")
        log.trace("Index payload", document=document)

        request = params.to_request()
        request["id"] = self.adapter.get_key(instance)
        return self.client.index(**request, document=document)

    def update_index(self, instance: Any, upsert: bool = True) -> Any:
        """Частично обновляет документ инстанса.

        Args:
            instance: Инстанс модели.
            upsert: Создать документ, если его нет (doc_as_upsert).

        Returns:
            Ответ update API.
        """
        params = self.params_for(instance)
        document = self.projector.to_document(instance)

        log = self._log_for(params)
        log.debug("Updating document", upsert=upsert)
        log.trace("Update payload", document=document)

        extra: dict[str, Any] = {"doc": document}
        if upsert:
            extra["doc_as_upsert"] = True

        return self.client.update(**params.to_request(), **extra)

    def remove_from_index(self, instance: Any) -> Any:
        """Удаляет документ инстанса.

        Проверки существования нет: NotFoundError клиента пробрасывается.
        """
        params = self.params_for(instance)
        self._log_for(params).debug("Removing document")
        return self.client.delete(**params.to_request())

    def get_indexed_document(self, instance: Any) -> Any:
        """Читает документ инстанса из индекса (get API)."""
        params = self.params_for(instance)
        self._log_for(params).debug("Fetching document")
        return self.client.get(**params.to_request())
