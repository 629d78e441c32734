"""Ядро синхронизации: не зависит от конкретной ORM.

Классы:
    DocumentProjector
        model <-> document.
    DocumentIndexer
        index / update / delete / get для одного инстанса.
    IndexAdministrator
        Индекс и маппинг типа.
    QueryFacade
        Поиск с восстановлением моделей.
    BulkIndexer
        Массовые операции.
    LifecycleSynchronizer
        Обработчик событий save/delete.
    ModelIndex
        Оркестратор всех компонентов для одной модели.

Функции:
    build_basic_params
        Параметры для вызовов клиента Elasticsearch.
"""

from search_sync.core.params import build_basic_params
from search_sync.core.projector import DocumentProjector
from search_sync.core.documents import DocumentIndexer
from search_sync.core.admin import IndexAdministrator
from search_sync.core.query import QueryFacade
from search_sync.core.bulk import BulkIndexer
from search_sync.core.synchronizer import LifecycleSynchronizer
from search_sync.core.service import ModelIndex

__all__ = [
    "build_basic_params",
    "DocumentProjector",
    "DocumentIndexer",
    "IndexAdministrator",
    "QueryFacade",
    "BulkIndexer",
    "LifecycleSynchronizer",
    "ModelIndex",
]
