"""Integration-тесты для Descriptor Protocol SearchIndex.

Проверяет __set_name__, __get__, __set__ и ленивую сборку компонентов.
"""

from unittest.mock import MagicMock

import pytest
from peewee import CharField, IntegerField, Model

from search_sync import SearchIndex
from search_sync.config import SyncConfig
from search_sync.integrations.base import InstanceManager
from search_sync.integrations.search_proxy import SearchProxy


def test_descriptor_set_name(create_test_model):
    """name и owner устанавливаются при создании класса."""
    Article = create_test_model(fields={"title": CharField()})

    descriptor = Article.__dict__["search"]
    assert descriptor.name == "search"
    assert descriptor.owner is Article


def test_descriptor_class_access(create_test_model):
    Article = create_test_model(fields={"title": CharField()})

    proxy = Article.search
    assert isinstance(proxy, SearchProxy)
    assert proxy.model is Article


def test_descriptor_instance_access(create_test_model):
    Article = create_test_model(fields={"title": CharField()})

    article = Article.create(title="Hello")

    manager = article.search
    assert isinstance(manager, InstanceManager)
    assert manager.instance is article
    assert manager.descriptor is Article.__dict__["search"]


def test_descriptor_cannot_set(create_test_model):
    Article = create_test_model(fields={"title": CharField()})
    article = Article.create(title="Test")

    with pytest.raises(AttributeError, match="Cannot set attribute"):
        article.search = "something"


def test_default_index_and_type(create_test_model):
    """Индекс из конфигурации, тип из имени таблицы."""
    Article = create_test_model(fields={"title": CharField()}, model_name="Article")

    assert Article.search.get_index_name() == "test"
    assert Article.search.get_type_name() == "article"


def test_explicit_index_and_type(create_test_model):
    Article = create_test_model(
        fields={"title": CharField()},
        index_config={"index_name": "blog", "type_name": "posts"},
    )

    assert Article.search.get_index_name() == "blog"
    assert Article.search.get_type_name() == "posts"


def test_client_created_lazily_once(in_memory_db):
    """Фабрика клиента вызывается при первой операции и только один раз."""
    client = MagicMock(name="Elasticsearch")
    factory = MagicMock(return_value=client)
    config = SyncConfig(default_index="lazy")

    class Article(Model):
        title = CharField()

        search = SearchIndex(client_factory=factory, config=config)

        class Meta:
            database = in_memory_db

    in_memory_db.create_tables([Article])
    factory.assert_not_called()

    Article.search.index_exists()
    Article.search.get_mapping()

    factory.assert_called_once_with(config)
    assert Article.search.client is client


def test_sync_flag_defaults_to_config(in_memory_db):
    client = MagicMock(name="Elasticsearch")
    config = SyncConfig(default_index="test", sync_enabled=False)

    class Article(Model):
        title = CharField()

        search = SearchIndex(client=client, config=config)

        class Meta:
            database = in_memory_db

    in_memory_db.create_tables([Article])

    assert Article.search.synchronizer.sync_enabled is False
    Article.create(title="quiet")
    client.update.assert_not_called()


def test_multiple_descriptors_on_same_model(in_memory_db, mock_es_client, sync_config):
    """Две привязки одной модели: обе получают события."""

    class Article(Model):
        title = CharField()
        views = IntegerField(default=0)

        search = SearchIndex(client=mock_es_client, config=sync_config)
        archive = SearchIndex(index_name="archive", client=mock_es_client, config=sync_config)

        class Meta:
            database = in_memory_db

    in_memory_db.create_tables([Article])

    Article.create(title="twice")

    targets = sorted(c.kwargs["index"] for c in mock_es_client.update.call_args_list)
    assert targets == ["archive-article", "test-article"]


def test_instance_metadata_for_db_row(create_test_model):
    Article = create_test_model(fields={"title": CharField()})
    article = Article.create(title="db")

    assert article.search.is_document is False
    assert article.search.document_score is None
    assert article.search.document_version is None


def test_instance_metadata_for_hit(create_test_model):
    Article = create_test_model(fields={"title": CharField()})

    article = Article.search.new_from_hit({"_source": {"title": "hit"}, "_score": 2.5, "_version": 7})

    assert article.title == "hit"
    assert article.search.is_document is True
    assert article.search.document_score == 2.5
    assert article.search.document_version == 7
    assert article.search.extra_attributes == {}


def test_hit_keys_named_after_class_attributes(create_test_model):
    """Ключи search/save из документа не трогают дескриптор и методы."""
    Article = create_test_model(fields={"title": CharField()})

    article = Article.search.new_from_hit(
        {"_source": {"title": "t", "search": "x"}, "fields": {"save": "y"}, "_score": 1.0}
    )

    assert isinstance(article.search, InstanceManager)
    assert callable(article.save)
    assert article.search.extra_attributes == {"search": "x", "save": "y"}


def test_detached_descriptor_has_no_adapter():
    index = SearchIndex()

    with pytest.raises(RuntimeError):
        index.adapter
