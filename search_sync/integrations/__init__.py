"""Слой интеграции с ORM.

Классы:
    SearchIndex
        Дескриптор, связывающий модель с индексом Elasticsearch.
    InstanceManager
        Операции с документом конкретного инстанса.
    SearchProxy
        Поиск и управление индексом на уровне класса модели.
"""

from search_sync.integrations.base import SearchIndex, InstanceManager
from search_sync.integrations.search_proxy import SearchProxy

__all__ = [
    "SearchIndex",
    "InstanceManager",
    "SearchProxy",
]
