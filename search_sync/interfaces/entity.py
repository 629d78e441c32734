"""Интерфейс адаптера сущностей ORM.

Классы:
    BaseEntityAdapter
        ABC, через который ядро работает с моделями конкретной ORM.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping


class BaseEntityAdapter(ABC):
    """Контракт между ядром синхронизации и ORM.

    Ядро (проектор, индексатор, запросы) не знает о конкретной ORM:
    все обращения к моделям идут через этот адаптер. Адаптер привязан
    к одному классу модели.
    """

    @abstractmethod
    def get_key(self, instance: Any) -> Any:
        """Возвращает первичный ключ инстанса (None, если ключа нет)."""
        raise NotImplementedError

    @abstractmethod
    def get_type_name(self) -> str:
        """Возвращает имя типа по умолчанию (имя таблицы модели)."""
        raise NotImplementedError

    @abstractmethod
    def to_document(self, instance: Any) -> dict[str, Any]:
        """Сериализует инстанс в плоский документ для индекса.

        Args:
            instance: Инстанс модели.

        Returns:
            Словарь атрибутов в том виде, в котором его отдаёт ORM.
        """
        raise NotImplementedError

    @abstractmethod
    def has_field(self, name: str) -> bool:
        """Есть ли у модели поле с таким именем."""
        raise NotImplementedError

    @abstractmethod
    def new_from_attributes(self, attributes: Mapping[str, Any]) -> Any:
        """Создаёт новый несохранённый инстанс с «сырыми» атрибутами.

        Атрибуты записываются как есть, без дефолтов полей и без
        пометки инстанса как изменённого. Ключи, которым нет поля
        в модели, пропускаются.

        Args:
            attributes: Значения атрибутов.

        Returns:
            Новый инстанс модели.
        """
        raise NotImplementedError

    @abstractmethod
    def exists(self, instance: Any) -> bool:
        """Проверяет, что инстанс соответствует сохранённой строке БД."""
        raise NotImplementedError

    @abstractmethod
    def fetch_all(self) -> Iterable[Any]:
        """Возвращает все строки таблицы модели."""
        raise NotImplementedError
