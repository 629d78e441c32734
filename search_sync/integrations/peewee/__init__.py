"""Интеграция с Peewee ORM.

Классы:
    PeeweeAdapter
        Хуки save()/delete_instance() для синхронизации индекса.
    PeeweeEntityAdapter
        Адаптер моделей Peewee для ядра синхронизации.
"""

from search_sync.integrations.peewee.adapter import PeeweeAdapter, register_model
from search_sync.integrations.peewee.entity import PeeweeEntityAdapter

__all__ = [
    "PeeweeAdapter",
    "PeeweeEntityAdapter",
    "register_model",
]
