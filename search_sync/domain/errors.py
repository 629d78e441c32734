"""Исключения search_sync.

Классы:
    SearchSyncError
        Базовое исключение библиотеки.
    DocumentMissingError
        Попытка проиндексировать запись, которой нет в БД.
    MalformedHitError
        Хит поисковой выдачи без обязательных полей.
"""


class SearchSyncError(Exception):
    """Базовое исключение search_sync."""

    pass


class DocumentMissingError(SearchSyncError):
    """Запись не сохранена в реляционной БД, индексировать нечего."""

    def __init__(self, message: str = "Document does not exist.") -> None:
        super().__init__(message)


class MalformedHitError(SearchSyncError, KeyError):
    """В хите нет `_source` или `_score`.

    Attributes:
        field: Имя отсутствующего поля.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Search hit has no '{field}'")

    def __str__(self) -> str:
        # KeyError оборачивает сообщение в кавычки
        return str(self.args[0])
