"""Прокси-объект для операций уровня класса модели.

Классы:
    SearchProxy
        Поиск, управление индексом/маппингом и bulk-операции модели.
"""

from typing import Any, Iterable, Mapping, Optional, TYPE_CHECKING

from elasticsearch import Elasticsearch

from search_sync.core.params import build_basic_params
from search_sync.core.service import ModelIndex
from search_sync.core.synchronizer import LifecycleSynchronizer
from search_sync.domain import BulkResult, DeleteOutcome, ResultCollection, SearchParams

if TYPE_CHECKING:
    from search_sync.integrations.base import SearchIndex


class SearchProxy:
    """Прокси для операций с индексом на уровне класса модели.

    Пример:
        >>> Article.search.rebuild_mapping(shards=1, replicas=0)
        >>> Article.search.add_all_to_index()
        >>> for article in Article.search.search("python"):
        ...     print(article.title, article.search.document_score)

    Attributes:
        model: Класс ORM модели.
        descriptor: Родительский дескриптор SearchIndex.
    """

    def __init__(self, model: type, descriptor: "SearchIndex"):
        self.model = model
        self.descriptor = descriptor

    @property
    def index(self) -> ModelIndex:
        return self.descriptor.index

    @property
    def client(self) -> Elasticsearch:
        return self.descriptor.client

    @property
    def synchronizer(self) -> LifecycleSynchronizer:
        return self.index.synchronizer

    # === Конфигурация уровня класса ===

    def get_index_name(self) -> str:
        return self.descriptor.binding.index_name

    def get_type_name(self) -> str:
        return self.descriptor.binding.type_name

    def get_mapping_properties(self) -> dict[str, Any]:
        return self.descriptor.binding.get_mapping_properties()

    def set_mapping_properties(self, mapping: Optional[dict[str, Any]]) -> None:
        self.descriptor.binding.set_mapping_properties(mapping)

    def uses_timestamps_in_index(self) -> bool:
        return self.descriptor.binding.uses_timestamps_in_index()

    def use_timestamps_in_index(self) -> None:
        self.descriptor.binding.use_timestamps_in_index()

    def dont_use_timestamps_in_index(self) -> None:
        self.descriptor.binding.dont_use_timestamps_in_index()

    def get_basic_es_params(
        self,
        get_id: bool = True,
        get_source: bool = False,
        get_timestamp: bool = False,
        limit: Optional[Any] = None,
        offset: Optional[Any] = None,
    ) -> SearchParams:
        """Параметры без id: у класса нет первичного ключа."""
        binding = self.descriptor.binding
        return build_basic_params(
            binding.index_name,
            binding.type_name,
            get_id=get_id,
            get_source=get_source,
            get_timestamp=get_timestamp,
            limit=limit,
            offset=offset,
        )

    # === Поиск ===

    def search(self, term: Optional[str] = None) -> ResultCollection:
        """Простой поиск по всем полям."""
        return self.index.query.search(term)

    def search_by_query(
        self,
        query: Optional[Mapping[str, Any]] = None,
        limit: Optional[Any] = None,
        offset: Optional[Any] = None,
    ) -> ResultCollection:
        """Поиск произвольным телом запроса (query DSL)."""
        return self.index.query.search_by_query(query, limit=limit, offset=offset)

    def new_from_hit(self, hit: Mapping[str, Any]) -> Any:
        """Инстанс модели из хита поисковой выдачи."""
        return self.index.projector.from_hit(hit)

    # === Индекс и маппинг ===

    def index_exists(self) -> bool:
        return self.index.admin.index_exists()

    def type_exists(self) -> bool:
        return self.index.admin.type_exists()

    def create_index(self, shards: Optional[int] = None, replicas: Optional[int] = None) -> Any:
        return self.index.admin.create_index(shards, replicas)

    def create_index_if_not_exists(
        self, shards: Optional[int] = None, replicas: Optional[int] = None
    ) -> Any:
        return self.index.admin.create_index_if_not_exists(shards, replicas)

    def get_mapping(self) -> Mapping[str, Any]:
        return self.index.admin.get_mapping()

    def mapping_exists(self) -> bool:
        return self.index.admin.mapping_exists()

    def put_mapping(self) -> Any:
        return self.index.admin.put_mapping()

    def delete_mapping(self) -> DeleteOutcome:
        return self.index.admin.delete_mapping()

    def rebuild_mapping(self, shards: Optional[int] = None, replicas: Optional[int] = None) -> Any:
        return self.index.admin.rebuild_mapping(shards, replicas)

    # === Bulk ===

    def add_all_to_index(self) -> BulkResult:
        return self.index.bulk.add_all_to_index()

    def reindex(self) -> BulkResult:
        return self.index.bulk.reindex()

    def delete_all_from_index(self) -> DeleteOutcome:
        return self.index.bulk.delete_all_from_index()

    def add_to_index(self, instances: Iterable[Any]) -> BulkResult:
        """Индексирует переданный набор инстансов."""
        return self.index.bulk.add_to_index(instances)

    def delete_from_index(self, instances: Iterable[Any]) -> BulkResult:
        return self.index.bulk.delete_from_index(instances)

    def reindex_instances(self, instances: Iterable[Any]) -> BulkResult:
        return self.index.bulk.reindex_instances(instances)
