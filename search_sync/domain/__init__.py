"""Доменный слой: DTO и исключения.

Классы:
    IndexBinding
        Привязка класса модели к индексу и типу.
    SearchParams
        Параметры вызова клиента Elasticsearch.
    DocumentMeta
        Метаданные инстанса, построенного из хита.
    ResultCollection
        Модели из поисковой выдачи с метаданными ответа.
    BulkResult
        Итог bulk-запроса.
    DeleteOutcome
        Исход удаления (DELETED / NOT_FOUND).
    SearchSyncError, DocumentMissingError, MalformedHitError
        Исключения.
"""

from search_sync.domain.binding import IndexBinding, DEFAULT_INDEX_NAME
from search_sync.domain.params import SearchParams
from search_sync.domain.document import (
    DocumentMeta,
    RELATIONAL,
    attach_document_meta,
    get_document_meta,
)
from search_sync.domain.result import ResultCollection, BulkResult, DeleteOutcome
from search_sync.domain.errors import (
    SearchSyncError,
    DocumentMissingError,
    MalformedHitError,
)

__all__ = [
    "IndexBinding",
    "DEFAULT_INDEX_NAME",
    "SearchParams",
    "DocumentMeta",
    "RELATIONAL",
    "attach_document_meta",
    "get_document_meta",
    "ResultCollection",
    "BulkResult",
    "DeleteOutcome",
    "SearchSyncError",
    "DocumentMissingError",
    "MalformedHitError",
]
