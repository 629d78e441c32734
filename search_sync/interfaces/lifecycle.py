"""Интерфейс слушателя жизненного цикла сущностей.

Классы:
    LifecycleListener
        ABC для обработчиков событий сохранения и удаления.
"""

from abc import ABC, abstractmethod
from typing import Any


class LifecycleListener(ABC):
    """Получатель событий от слоя хранения.

    Слой хранения (например, адаптер Peewee) вызывает эти методы
    после того, как запись в БД завершилась успешно.
    """

    @abstractmethod
    def on_persisted(self, entity: Any) -> None:
        """Вызывается после создания или обновления записи."""
        raise NotImplementedError

    @abstractmethod
    def on_deleted(self, entity: Any) -> None:
        """Вызывается после удаления записи."""
        raise NotImplementedError
