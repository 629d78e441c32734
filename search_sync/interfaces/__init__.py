"""Контракты (интерфейсы) слоя синхронизации.

Классы:
    BaseEntityAdapter
        Адаптер моделей конкретной ORM.
    LifecycleListener
        Обработчик событий сохранения/удаления.
"""

from search_sync.interfaces.entity import BaseEntityAdapter
from search_sync.interfaces.lifecycle import LifecycleListener

__all__ = [
    "BaseEntityAdapter",
    "LifecycleListener",
]
