"""Адаптер моделей Peewee для ядра синхронизации.

Классы:
    PeeweeEntityAdapter
        Реализация BaseEntityAdapter поверх peewee.Model.
"""

from typing import Any, Iterable, Mapping

from peewee import ForeignKeyField, Model
from playhouse.shortcuts import model_to_dict

from search_sync.interfaces import BaseEntityAdapter


class PeeweeEntityAdapter(BaseEntityAdapter):
    """Адаптер одного класса Peewee модели.

    Документ по умолчанию: model_to_dict(instance). Модель может задать
    свою сериализацию методом to_index_document().

    Attributes:
        model: Класс Peewee модели.
        recurse: Разворачивать связанные (ForeignKey) объекты в документ.
        backrefs: Включать обратные связи в документ.
    """

    def __init__(self, model: type[Model], recurse: bool = False, backrefs: bool = False):
        self.model = model
        self.recurse = recurse
        self.backrefs = backrefs

    def get_key(self, instance: Model) -> Any:
        return instance.get_id()

    def get_type_name(self) -> str:
        return self.model._meta.table_name

    def to_document(self, instance: Model) -> dict[str, Any]:
        custom = getattr(instance, "to_index_document", None)
        if callable(custom):
            return dict(custom())
        return model_to_dict(instance, recurse=self.recurse, backrefs=self.backrefs)

    def has_field(self, name: str) -> bool:
        return name in self.model._meta.fields

    def new_from_attributes(self, attributes: Mapping[str, Any]) -> Model:
        """Создаёт инстанс без дефолтов и без пометки полей как изменённых.

        Значения полей модели пишутся напрямую в __data__, ключи без
        поля пропускаются (проектор хранит их в DocumentMeta.extra).
        Развёрнутый документ связанной модели (recurse=True)
        восстанавливается в связанный инстанс.
        """
        instance = self.model(__no_default__=True)
        fields = self.model._meta.fields

        for key, value in attributes.items():
            field = fields.get(key)
            if field is None:
                continue
            if isinstance(field, ForeignKeyField) and isinstance(value, Mapping):
                related = PeeweeEntityAdapter(field.rel_model).new_from_attributes(value)
                instance.__rel__[field.name] = related
                instance.__data__[field.name] = getattr(related, field.rel_field.name)
            else:
                instance.__data__[field.name] = value

        instance._dirty.clear()
        return instance

    def exists(self, instance: Model) -> bool:
        key = instance.get_id()
        if key is None:
            return False
        return self.model.select().where(self.model._meta.primary_key == key).exists()

    def fetch_all(self) -> Iterable[Model]:
        return self.model.select()
