"""Оркестратор индекса одной модели.

Классы:
    ModelIndex
        Собирает проектор, индексатор, администратора, поиск, bulk и
        синхронизатор для одного класса модели.
"""

from typing import Any, Optional

from elasticsearch import Elasticsearch

from search_sync.core.admin import IndexAdministrator
from search_sync.core.bulk import BulkIndexer
from search_sync.core.documents import DocumentIndexer
from search_sync.core.projector import DocumentProjector
from search_sync.core.query import QueryFacade
from search_sync.core.synchronizer import LifecycleSynchronizer
from search_sync.domain import IndexBinding
from search_sync.interfaces import BaseEntityAdapter


class ModelIndex:
    """Все операции с индексом для одного класса модели.

    Компоненты не зависят от конкретной ORM: с моделями они работают
    только через BaseEntityAdapter.

    Пример:
        >>> index = ModelIndex(client, binding, PeeweeEntityAdapter(Article))
        >>> index.admin.rebuild_mapping(shards=1, replicas=0)
        >>> index.bulk.add_all_to_index()
        >>> index.query.search("python")

    Attributes:
        client: Клиент Elasticsearch.
        binding: Привязка модели к индексу.
        adapter: Адаптер моделей ORM.
        projector: model <-> document.
        documents: Операции с документом отдельного инстанса.
        admin: Индекс и маппинг.
        query: Поиск.
        bulk: Массовые операции.
        synchronizer: Обработчик событий save/delete.
    """

    def __init__(
        self,
        client: Elasticsearch,
        binding: IndexBinding,
        adapter: BaseEntityAdapter,
        sync_enabled: bool = True,
        projector: Optional[DocumentProjector] = None,
    ):
        self.client = client
        self.binding = binding
        self.adapter = adapter
        self.projector = projector or DocumentProjector(adapter)

        self.documents = DocumentIndexer(client, binding, adapter, self.projector)
        self.admin = IndexAdministrator(client, binding)
        self.query = QueryFacade(client, binding, self.projector)
        self.bulk = BulkIndexer(client, binding, adapter, self.projector)
        self.synchronizer = LifecycleSynchronizer(self.documents, sync_enabled=sync_enabled)

    def new_from_hit(self, hit: dict[str, Any]) -> Any:
        return self.projector.from_hit(hit)
