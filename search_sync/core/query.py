"""Поиск моделей через Elasticsearch.

Классы:
    QueryFacade
        Простой поиск по всем полям и поиск произвольным query DSL.
"""

from typing import Any, Mapping, Optional

from elasticsearch import Elasticsearch

from search_sync.core.admin import response_body
from search_sync.core.params import build_basic_params
from search_sync.core.projector import DocumentProjector
from search_sync.domain import IndexBinding, ResultCollection, SearchParams
from search_sync.utils.logger import get_logger

logger = get_logger(__name__)

# Поле `_all` удалено из Elasticsearch, вместо него: поиск по всем полям
ALL_FIELDS = "*"

# Ключи тела запроса, которые клиент принимает под другим именем
BODY_ALIASES = {"from": "from_"}


def merge_request(params: SearchParams, body: Mapping[str, Any]) -> dict[str, Any]:
    """Собирает единый набор keyword-аргументов для client.search().

    Тело запроса накладывается поверх базовых параметров: при совпадении
    ключей (size, from, stored_fields) побеждает тело. Индекс всегда
    берётся из параметров.

    Args:
        params: Базовые параметры (индекс, fields, size/from).
        body: Тело запроса search API.

    Returns:
        Словарь для client.search(**request), без `body=`.
    """
    request = params.to_request()
    for key, value in body.items():
        request[BODY_ALIASES.get(key, key)] = value
    request["index"] = params.target
    return request


class QueryFacade:
    """Выполняет поиск и возвращает модели, восстановленные из хитов.

    Attributes:
        client: Клиент Elasticsearch.
        binding: Привязка модели к индексу.
        projector: Проектор hit -> model.
    """

    def __init__(
        self,
        client: Elasticsearch,
        binding: IndexBinding,
        projector: DocumentProjector,
    ):
        self.client = client
        self.binding = binding
        self.projector = projector

    def _execute(self, params: SearchParams, body: Mapping[str, Any]) -> ResultCollection:
        request = merge_request(params, body)

        log = logger.bind(index=params.index, doc_type=params.doc_type)
        log.debug("Searching", size=request.get("size"), offset=request.get("from_"))
        log.trace("Search request", request=request)

        response = self.client.search(**request)
        results = ResultCollection(response_body(response), self.projector.from_hit)

        log.debug("Search finished", hits=len(results), total_hits=results.total_hits)
        return results

    def search(self, term: Optional[str] = None) -> ResultCollection:
        """Простой поиск: match по всем полям документа.

        Args:
            term: Поисковая строка.

        Returns:
            ResultCollection с моделями.
        """
        params = build_basic_params(
            self.binding.index_name, self.binding.type_name, get_id=False
        )
        body = {
            "query": {
                "multi_match": {
                    "query": term,
                    "fields": [ALL_FIELDS],
                    "lenient": True,
                }
            }
        }
        return self._execute(params, body)

    def search_by_query(
        self,
        query: Optional[Mapping[str, Any]] = None,
        limit: Optional[Any] = None,
        offset: Optional[Any] = None,
    ) -> ResultCollection:
        """Поиск произвольным телом запроса (query DSL как есть).

        Пример:
            >>> Article.search.search_by_query(
            ...     {"query": {"term": {"status": "published"}}},
            ...     limit=10,
            ...     offset=20,
            ... )

        Args:
            query: Тело запроса search API.
            limit: size.
            offset: from.

        Returns:
            ResultCollection с моделями.
        """
        params = build_basic_params(
            self.binding.index_name,
            self.binding.type_name,
            get_source=True,
            get_timestamp=self.binding.uses_timestamps_in_index(),
            limit=limit,
            offset=offset,
        )
        return self._execute(params, dict(query or {}))
