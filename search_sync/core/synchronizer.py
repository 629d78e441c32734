"""Синхронизация индекса по событиям жизненного цикла моделей.

Классы:
    LifecycleSynchronizer
        Слушатель save/delete, который обновляет индекс.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from search_sync.core.documents import DocumentIndexer
from search_sync.interfaces import LifecycleListener
from search_sync.utils.logger import get_logger

logger = get_logger(__name__)


class LifecycleSynchronizer(LifecycleListener):
    """Держит документы индекса в соответствии со строками БД.

    Сохранение (создание и обновление) всегда идёт через update с
    doc_as_upsert: один путь для новых и существующих записей.
    Удаление: через delete. Повторов нет, исключения клиента
    пробрасываются вызывающему save()/delete_instance().

    Attributes:
        indexer: DocumentIndexer модели.
        sync_enabled: Флаг синхронизации этого синхронизатора.
    """

    def __init__(self, indexer: DocumentIndexer, sync_enabled: bool = True):
        self.indexer = indexer
        self.sync_enabled = sync_enabled

    def enable(self) -> None:
        self.sync_enabled = True

    def disable(self) -> None:
        self.sync_enabled = False

    @contextmanager
    def paused(self) -> Iterator[None]:
        """Временно отключает синхронизацию.

        Пример:
            >>> with Article.search.synchronizer.paused():
            ...     Article.create(title="draft")  # в индекс не попадёт
        """
        previous = self.sync_enabled
        self.sync_enabled = False
        try:
            yield
        finally:
            self.sync_enabled = previous

    def on_persisted(self, entity: Any) -> None:
        if not self.sync_enabled:
            logger.trace("Sync disabled, skipping update", model=type(entity).__name__)
            return
        self.indexer.update_index(entity, upsert=True)

    def on_deleted(self, entity: Any) -> None:
        if not self.sync_enabled:
            logger.trace("Sync disabled, skipping delete", model=type(entity).__name__)
            return
        self.indexer.remove_from_index(entity)
