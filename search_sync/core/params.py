"""Построение параметров для вызовов клиента Elasticsearch.

Функции:
    build_basic_params
        Собирает SearchParams из имени индекса, типа и ключа модели.
    is_numeric
        Проверка «числового» значения для size/from.
"""

from numbers import Number
from typing import Any, Optional

from search_sync.domain import SearchParams

SOURCE_FIELD = "_source"
TIMESTAMP_FIELD = "_timestamp"


def is_numeric(value: Any) -> bool:
    """Число или строка с числом. bool числом не считается."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Number):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def _has_key(key: Any) -> bool:
    # 0: допустимый первичный ключ, пустыми считаются только None и ""
    return key is not None and key != ""


def build_basic_params(
    index_name: str,
    type_name: str,
    key: Any = None,
    get_id: bool = True,
    get_source: bool = False,
    get_timestamp: bool = False,
    limit: Optional[Any] = None,
    offset: Optional[Any] = None,
) -> SearchParams:
    """Собирает параметры, нужные почти каждому вызову API.

    Args:
        index_name: Логическое имя индекса.
        type_name: Имя типа.
        key: Первичный ключ модели.
        get_id: Добавить id, если у модели есть ключ.
        get_source: Запросить `_source`.
        get_timestamp: Запросить `_timestamp`.
        limit: Размер выдачи (добавляется, только если числовой).
        offset: Смещение (добавляется, только если числовое).

    Returns:
        Новый SearchParams. Значения limit/offset не валидируются:
        отрицательные и нулевые передаются как есть.
    """
    fields: list[str] = []
    if get_source:
        fields.append(SOURCE_FIELD)
    if get_timestamp:
        fields.append(TIMESTAMP_FIELD)

    return SearchParams(
        index=index_name,
        doc_type=type_name,
        id=key if get_id and _has_key(key) else None,
        fields=",".join(fields) or None,
        size=limit if is_numeric(limit) else None,
        from_=offset if is_numeric(offset) else None,
    )

