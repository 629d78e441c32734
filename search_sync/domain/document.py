"""Метаданные документа из поисковой выдачи.

Классы:
    DocumentMeta
        Транзиентные метаданные инстанса, созданного из хита.

Функции:
    attach_document_meta(instance, meta) -> None
        Привязывает метаданные к инстансу.
    get_document_meta(instance) -> DocumentMeta
        Метаданные инстанса (RELATIONAL для записей из БД).
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Атрибут инстанса, в котором хранятся метаданные. Не является полем ORM,
# поэтому никогда не попадает в реляционную БД.
META_ATTRIBUTE = "__search_document__"


@dataclass(frozen=True)
class DocumentMeta:
    """Происхождение инстанса модели.

    Инстанс либо загружен из БД (is_document=False, score/version = None),
    либо построен из хита (is_document=True, score задан всегда).

    Attributes:
        is_document: Инстанс построен из документа Elasticsearch.
        score: Релевантность хита (_score).
        version: Версия документа в индексе (_version), если была в хите.
        extra: Ключи хита, которым нет поля в модели (на инстанс
            не пишутся).
    """

    is_document: bool = False
    score: Optional[float] = None
    version: Optional[int] = None
    extra: dict[str, Any] = field(default_factory=dict)


RELATIONAL = DocumentMeta()


def attach_document_meta(instance: Any, meta: DocumentMeta) -> None:
    """Привязывает метаданные к инстансу.

    Raises:
        ValueError: Если метаданные уже привязаны (происхождение не меняется).
    """
    if META_ATTRIBUTE in vars(instance):
        raise ValueError("Document metadata is already attached to this instance")
    setattr(instance, META_ATTRIBUTE, meta)


def get_document_meta(instance: Any) -> DocumentMeta:
    """Возвращает метаданные инстанса или RELATIONAL."""
    return vars(instance).get(META_ATTRIBUTE, RELATIONAL)
