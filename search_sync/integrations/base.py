"""Дескриптор индекса для ORM моделей.

Классы:
    InstanceManager
        Операции с документом конкретного инстанса.
    SearchIndex
        Дескриптор, который связывает модель с индексом Elasticsearch.
"""

from typing import Any, Callable, Optional, TYPE_CHECKING

from elasticsearch import Elasticsearch
from peewee import Model

from search_sync.config import SyncConfig, create_client, get_config
from search_sync.core.service import ModelIndex
from search_sync.domain import IndexBinding, SearchParams, get_document_meta
from search_sync.integrations.peewee.entity import PeeweeEntityAdapter
from search_sync.interfaces import LifecycleListener

if TYPE_CHECKING:
    from search_sync.integrations.search_proxy import SearchProxy


class InstanceManager:
    """Менеджер документа конкретного инстанса.

    Возвращается при обращении к дескриптору через инстанс:

        >>> article = Article.get_by_id(1)
        >>> article.search.add_to_index()
        >>> article.search.get_indexed_document()

    Attributes:
        instance: ORM инстанс.
        descriptor: Родительский дескриптор SearchIndex.
    """

    def __init__(self, instance: Any, descriptor: "SearchIndex"):
        self.instance = instance
        self.descriptor = descriptor

    @property
    def _index(self) -> ModelIndex:
        return self.descriptor.index

    def add_to_index(self) -> Any:
        """Индексирует документ целиком.

        Raises:
            DocumentMissingError: Если инстанс не сохранён в БД.
        """
        return self._index.documents.add_to_index(self.instance)

    def update_index(self, upsert: bool = True) -> Any:
        return self._index.documents.update_index(self.instance, upsert=upsert)

    def remove_from_index(self) -> Any:
        return self._index.documents.remove_from_index(self.instance)

    def get_indexed_document(self) -> Any:
        return self._index.documents.get_indexed_document(self.instance)

    def get_index_document_data(self) -> dict[str, Any]:
        """Документ, который уйдёт в индекс для этого инстанса."""
        return self._index.projector.to_document(self.instance)

    def get_basic_es_params(
        self,
        get_id: bool = True,
        get_source: bool = False,
        get_timestamp: bool = False,
        limit: Optional[Any] = None,
        offset: Optional[Any] = None,
    ) -> SearchParams:
        return self._index.documents.params_for(
            self.instance,
            get_id=get_id,
            get_source=get_source,
            get_timestamp=get_timestamp,
            limit=limit,
            offset=offset,
        )

    # === Происхождение инстанса ===

    @property
    def is_document(self) -> bool:
        """Инстанс построен из документа Elasticsearch, а не из БД."""
        return get_document_meta(self.instance).is_document

    @property
    def document_score(self) -> Optional[float]:
        return get_document_meta(self.instance).score

    @property
    def document_version(self) -> Optional[int]:
        return get_document_meta(self.instance).version

    @property
    def extra_attributes(self) -> dict[str, Any]:
        """Ключи хита, которым нет поля в модели ({} для записей из БД)."""
        return get_document_meta(self.instance).extra


class SearchIndex(LifecycleListener):
    """Дескриптор для синхронизации ORM модели с Elasticsearch.

    Реализует Descriptor Protocol: при создании класса модели
    регистрирует хуки save()/delete_instance(), при доступе через класс
    возвращает SearchProxy, через инстанс: InstanceManager.

    Клиент Elasticsearch и компоненты ядра создаются лениво, при первой
    операции с индексом.

    Пример:
        >>> from peewee import Model, CharField, TextField
        >>> from search_sync import SearchIndex
        >>>
        >>> class Article(Model):
        ...     title = CharField()
        ...     body = TextField()
        ...
        ...     search = SearchIndex(
        ...         mapping_properties={
        ...             "title": {"type": "text"},
        ...             "body": {"type": "text"},
        ...         },
        ...     )
        >>>
        >>> Article.search.rebuild_mapping()
        >>> Article.create(title="Hello", body="...")  # -> update + doc_as_upsert
        >>> results = Article.search.search("hello")
        >>> results[0].search.document_score

    Attributes:
        name: Имя дескриптора (устанавливается автоматически).
        owner: Класс-владелец (устанавливается автоматически).
    """

    def __init__(
        self,
        mapping_properties: Optional[dict[str, Any]] = None,
        index_name: Optional[str] = None,
        type_name: Optional[str] = None,
        uses_timestamps: bool = True,
        sync_enabled: Optional[bool] = None,
        recurse: bool = False,
        client: Optional[Elasticsearch] = None,
        client_factory: Optional[Callable[[SyncConfig], Elasticsearch]] = None,
        config: Optional[SyncConfig] = None,
    ):
        """Настраивает индекс модели.

        Args:
            mapping_properties: Схема полей для put_mapping.
            index_name: Имя индекса (по умолчанию config.default_index).
            type_name: Имя типа (по умолчанию имя таблицы модели).
            uses_timestamps: Запрашивать `_timestamp` в search_by_query.
            sync_enabled: Синхронизация по событиям (по умолчанию
                config.sync_enabled).
            recurse: Разворачивать связанные объекты в документ.
            client: Готовый клиент Elasticsearch.
            client_factory: Фабрика клиента (по умолчанию create_client).
            config: Конфигурация (по умолчанию get_config()).
        """
        self.mapping_properties = dict(mapping_properties or {})
        self.index_name = index_name
        self.type_name = type_name
        self.uses_timestamps = uses_timestamps
        self.sync_enabled = sync_enabled
        self.recurse = recurse
        self.client_factory = client_factory or create_client
        self.name: Optional[str] = None
        self.owner: Optional[type] = None

        self._config = config
        self._client = client
        self._binding: Optional[IndexBinding] = None
        self._index: Optional[ModelIndex] = None

    def __set_name__(self, owner: type, name: str) -> None:
        """Запоминает владельца и подключает хуки Peewee."""
        if self.owner is owner:
            return

        self.name = name
        self.owner = owner

        if issubclass(owner, Model):
            from search_sync.integrations.peewee.adapter import register_model

            register_model(owner, self)

    def __get__(self, instance: Any, owner: type) -> "SearchProxy | InstanceManager":
        if instance is None:
            from search_sync.integrations.search_proxy import SearchProxy

            return SearchProxy(model=owner, descriptor=self)
        return InstanceManager(instance=instance, descriptor=self)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"Cannot set attribute '{self.name}'")

    # === Ленивая сборка ===

    @property
    def config(self) -> SyncConfig:
        if self._config is None:
            self._config = get_config()
        return self._config

    @property
    def adapter(self) -> PeeweeEntityAdapter:
        if self.owner is None:
            raise RuntimeError("SearchIndex is not attached to a model class")
        return PeeweeEntityAdapter(self.owner, recurse=self.recurse)

    @property
    def binding(self) -> IndexBinding:
        if self._binding is None:
            self._binding = IndexBinding(
                index_name=self.index_name or self.config.default_index,
                type_name=self.type_name or self.adapter.get_type_name(),
                mapping_properties=self.mapping_properties,
                uses_timestamps=self.uses_timestamps,
            )
        return self._binding

    @property
    def client(self) -> Elasticsearch:
        if self._client is None:
            self._client = self.client_factory(self.config)
        return self._client

    @property
    def index(self) -> ModelIndex:
        if self._index is None:
            sync_enabled = (
                self.config.sync_enabled if self.sync_enabled is None else self.sync_enabled
            )
            self._index = ModelIndex(
                client=self.client,
                binding=self.binding,
                adapter=self.adapter,
                sync_enabled=sync_enabled,
            )
        return self._index

    # === LifecycleListener ===

    def on_persisted(self, entity: Any) -> None:
        self.index.synchronizer.on_persisted(entity)

    def on_deleted(self, entity: Any) -> None:
        self.index.synchronizer.on_deleted(entity)
