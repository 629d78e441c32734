"""Хуки Peewee для автоматической синхронизации индекса.

Использует паттерн "Explicit Hook Injection": оборачивает методы
save() и delete_instance() модели. Работает с обычной peewee.Model,
наследование от playhouse.signals.Model не требуется.

Классы:
    PeeweeAdapter
        Внедряет хуки и рассылает события слушателям.

Функции:
    register_model(model, listener) -> None
        Подписывает слушателя на события модели.
"""

from typing import Any

from peewee import Model

from search_sync.interfaces import LifecycleListener
from search_sync.utils.logger import get_logger

logger = get_logger(__name__)


# Реестр слушателей по классам моделей (несколько индексов на модель)
_MODEL_HOOKS: dict[type[Model], list[LifecycleListener]] = {}


class PeeweeAdapter:
    """Подключает слушателей жизненного цикла к Peewee модели.

    Слушатели вызываются после того, как оригинальный save() или
    delete_instance() отработал. Все сигналы playhouse.signals к этому
    моменту уже разосланы, поэтому в индекс попадают изменения,
    сделанные другими обработчиками.

    Attributes:
        model: Класс Peewee модели.
        listener: Слушатель событий.
    """

    def __init__(self, model: type[Model], listener: LifecycleListener):
        self.model = model
        self.listener = listener

    def _apply_hooks(self) -> None:
        """Регистрирует слушателя и патчит методы модели (один раз на модель)."""
        listeners = _MODEL_HOOKS.setdefault(self.model, [])
        listeners.append(self.listener)

        if len(listeners) == 1:
            self._patch_save()
            self._patch_delete()
            logger.debug("Lifecycle hooks installed", model=self.model.__name__)

    def _patch_save(self) -> None:
        original_save = self.model.save
        model_class = self.model

        def save_wrapper(instance: Model, *args: Any, **kwargs: Any) -> int:
            """save() + on_persisted для всех слушателей модели.

            Returns:
                Результат оригинального save() (количество изменённых строк).
            """
            result = original_save(instance, *args, **kwargs)

            # 0 строк: запись не менялась (например, only_save_dirty без изменений)
            if result:
                for listener in _MODEL_HOOKS.get(model_class, []):
                    listener.on_persisted(instance)

            return result

        self.model.save = save_wrapper

    def _patch_delete(self) -> None:
        original_delete = self.model.delete_instance
        model_class = self.model

        def delete_wrapper(instance: Model, *args: Any, **kwargs: Any) -> int:
            """delete_instance() + on_deleted для всех слушателей модели.

            ID инстанса после удаления не сбрасывается, поэтому документ
            удаляется по тому же ключу.

            Returns:
                Результат оригинального delete_instance().
            """
            result = original_delete(instance, *args, **kwargs)

            if result:
                for listener in _MODEL_HOOKS.get(model_class, []):
                    listener.on_deleted(instance)

            return result

        self.model.delete_instance = delete_wrapper


def register_model(model: type[Model], listener: LifecycleListener) -> None:
    """Подписывает слушателя на save()/delete_instance() модели.

    Args:
        model: Класс Peewee модели.
        listener: Слушатель событий (обычно дескриптор SearchIndex).
    """
    adapter = PeeweeAdapter(model=model, listener=listener)
    adapter._apply_hooks()
