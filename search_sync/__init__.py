"""search_sync: синхронизация моделей Peewee с Elasticsearch.

Архитектура:
    Domain: DTO и исключения (IndexBinding, SearchParams, ResultCollection).
    Interfaces: Контракты (BaseEntityAdapter, LifecycleListener).
    Core: Логика, не зависящая от ORM (проектор, индексатор, поиск, bulk).
    Integrations: Дескриптор SearchIndex и хуки Peewee.

Пример:
    >>> from peewee import Model, CharField, SqliteDatabase
    >>> from search_sync import SearchIndex
    >>>
    >>> db = SqliteDatabase("app.db")
    >>>
    >>> class Article(Model):
    ...     title = CharField()
    ...
    ...     search = SearchIndex(mapping_properties={"title": {"type": "text"}})
    ...
    ...     class Meta:
    ...         database = db
    >>>
    >>> Article.search.rebuild_mapping()
    >>> Article.create(title="Elasticsearch in practice")
    >>> Article.search.search("practice").total_hits
"""

# Domain Layer
from search_sync.domain import (
    IndexBinding,
    SearchParams,
    DocumentMeta,
    ResultCollection,
    BulkResult,
    DeleteOutcome,
    SearchSyncError,
    DocumentMissingError,
    MalformedHitError,
)

# Interfaces Layer
from search_sync.interfaces import BaseEntityAdapter, LifecycleListener

# Core Layer
from search_sync.core import (
    build_basic_params,
    DocumentProjector,
    DocumentIndexer,
    IndexAdministrator,
    QueryFacade,
    BulkIndexer,
    LifecycleSynchronizer,
    ModelIndex,
)

# Config
from search_sync.config import SyncConfig, get_config, create_client

# Integration Layer
from search_sync.integrations import SearchIndex, InstanceManager, SearchProxy
from search_sync.integrations.peewee import PeeweeEntityAdapter

__all__ = [
    # Domain
    "IndexBinding",
    "SearchParams",
    "DocumentMeta",
    "ResultCollection",
    "BulkResult",
    "DeleteOutcome",
    "SearchSyncError",
    "DocumentMissingError",
    "MalformedHitError",
    # Interfaces
    "BaseEntityAdapter",
    "LifecycleListener",
    # Core
    "build_basic_params",
    "DocumentProjector",
    "DocumentIndexer",
    "IndexAdministrator",
    "QueryFacade",
    "BulkIndexer",
    "LifecycleSynchronizer",
    "ModelIndex",
    # Config
    "SyncConfig",
    "get_config",
    "create_client",
    # Integrations
    "SearchIndex",
    "InstanceManager",
    "SearchProxy",
    "PeeweeEntityAdapter",
]
