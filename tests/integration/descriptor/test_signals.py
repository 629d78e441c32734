"""Integration-тесты синхронизации по save()/delete_instance()."""

import pytest
from peewee import CharField, IntegerField

from search_sync.domain import DocumentMissingError


@pytest.fixture
def Article(create_test_model):
    return create_test_model(
        fields={"title": CharField(), "views": IntegerField(default=0)},
        index_config={"mapping_properties": {"title": {"type": "text"}}},
    )


def test_create_upserts_document(Article, mock_es_client):
    """Новая запись идёт через update с doc_as_upsert."""
    article = Article.create(title="Hello")

    mock_es_client.update.assert_called_once_with(
        index="test-article",
        id=article.id,
        doc={"id": article.id, "title": "Hello", "views": 0},
        doc_as_upsert=True,
    )
    mock_es_client.index.assert_not_called()


def test_update_upserts_document(Article, mock_es_client):
    article = Article.create(title="Hello")
    mock_es_client.reset_mock()

    article.views = 10
    article.save()

    assert mock_es_client.update.call_args.kwargs["doc"]["views"] == 10
    assert mock_es_client.update.call_args.kwargs["doc_as_upsert"] is True


def test_delete_removes_document(Article, mock_es_client):
    article = Article.create(title="Bye")
    article_id = article.id

    article.delete_instance()

    mock_es_client.delete.assert_called_once_with(index="test-article", id=article_id)


def test_sync_disabled_makes_no_calls(Article, mock_es_client):
    Article.search.synchronizer.disable()

    article = Article.create(title="quiet")
    article.delete_instance()

    mock_es_client.update.assert_not_called()
    mock_es_client.delete.assert_not_called()


def test_paused_sync(Article, mock_es_client):
    with Article.search.synchronizer.paused():
        Article.create(title="draft")

    Article.create(title="published")

    assert mock_es_client.update.call_count == 1


def test_client_error_reaches_caller(Article, mock_es_client):
    """Строка записана, ошибка индекса пробрасывается из save()."""
    mock_es_client.update.side_effect = ConnectionError("es down")

    with pytest.raises(ConnectionError):
        Article.create(title="orphan")

    assert Article.select().count() == 1


def test_manual_add_to_index(Article, mock_es_client):
    article = Article.create(title="manual")

    article.search.add_to_index()

    mock_es_client.index.assert_called_once_with(
        index="test-article",
        id=article.id,
        document={"id": article.id, "title": "manual", "views": 0},
    )


def test_add_unsaved_raises(Article, mock_es_client):
    with pytest.raises(DocumentMissingError):
        Article(title="unsaved").search.add_to_index()


def test_instance_helpers(Article, mock_es_client):
    article = Article.create(title="helpers")

    assert article.search.get_index_document_data()["title"] == "helpers"

    params = article.search.get_basic_es_params(get_source=True)
    assert params.id == article.id
    assert params.fields == "_source"

    article.search.get_indexed_document()
    mock_es_client.get.assert_called_once_with(index="test-article", id=article.id)

    article.search.update_index(upsert=False)
    assert "doc_as_upsert" not in mock_es_client.update.call_args.kwargs

    article.search.remove_from_index()
    mock_es_client.delete.assert_called_once_with(index="test-article", id=article.id)
