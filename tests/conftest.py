"""
Конфигурация pytest для search_sync.

Определяет фикстуры для:
- In-memory SQLite базы (реальные строки Peewee)
- Mock клиента Elasticsearch
- Фабрики тестовых моделей с дескриптором SearchIndex
"""

from unittest.mock import MagicMock

import pytest
from peewee import SqliteDatabase

from search_sync.config import SyncConfig, reset_config
from search_sync.domain import IndexBinding
from search_sync.integrations.peewee import PeeweeEntityAdapter


@pytest.fixture(autouse=True)
def clean_config():
    """Сбрасывает кэш get_config() до и после каждого теста."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def in_memory_db():
    """In-memory SQLite база для тестов.

    Создает чистую БД для каждого теста.
    """
    db = SqliteDatabase(":memory:")
    db.connect()
    yield db
    db.close()


@pytest.fixture
def mock_es_client():
    """Mock клиента Elasticsearch.

    options() возвращает тот же mock, поэтому вызовы через
    client.options(ignore_status=404) видны на самом клиенте.
    """
    client = MagicMock(name="Elasticsearch")
    client.options.return_value = client
    client.search.return_value = {
        "took": 3,
        "timed_out": False,
        "hits": {"total": {"value": 0, "relation": "eq"}, "max_score": None, "hits": []},
    }
    return client


@pytest.fixture
def sync_config():
    """Конфигурация с тестовым индексом по умолчанию."""
    return SyncConfig(default_index="test", client={"hosts": ["http://es.test:9200"]})


@pytest.fixture
def binding():
    """Привязка к индексу "test" и типу "articles"."""
    return IndexBinding(
        index_name="test",
        type_name="articles",
        mapping_properties={"title": {"type": "text"}},
    )


@pytest.fixture
def create_test_model(in_memory_db, mock_es_client, sync_config):
    """Фабрика для создания тестовых Peewee моделей с SearchIndex.

    Использование:
        >>> Article = create_test_model(
        ...     fields={"title": CharField()},
        ...     index_config={"mapping_properties": {"title": {"type": "text"}}},
        ... )
    """
    from peewee import Model
    from search_sync import SearchIndex

    created_models = []

    def factory(fields: dict, index_config: dict | None = None, model_name: str = "Article"):
        """Создает динамическую модель Peewee с SearchIndex.

        __set_name__ вызывается самим type(), хуки save/delete
        подключаются при создании класса.

        Args:
            fields: Словарь {имя_поля: Field()}.
            index_config: Аргументы SearchIndex.
            model_name: Имя класса модели.

        Returns:
            Класс модели с дескриптором SearchIndex.
        """
        class_dict = {"__module__": __name__}
        class_dict.update(fields)

        class Meta:
            database = in_memory_db

        class_dict["Meta"] = Meta

        index_config = dict(index_config or {})
        index_config.setdefault("client", mock_es_client)
        index_config.setdefault("config", sync_config)
        class_dict["search"] = SearchIndex(**index_config)

        model = type(model_name, (Model,), class_dict)

        in_memory_db.create_tables([model])
        created_models.append(model)

        return model

    yield factory

    if created_models:
        in_memory_db.drop_tables(created_models, safe=True)


@pytest.fixture
def article_model(in_memory_db):
    """Простая модель без дескриптора для тестов ядра."""
    from peewee import CharField, IntegerField, Model

    class Article(Model):
        title = CharField()
        views = IntegerField(default=0)

        class Meta:
            database = in_memory_db
            table_name = "articles"

    in_memory_db.create_tables([Article])
    yield Article
    in_memory_db.drop_tables([Article], safe=True)


@pytest.fixture
def article_adapter(article_model):
    return PeeweeEntityAdapter(article_model)
