"""Integration-тесты операций уровня класса через SearchProxy."""

from unittest.mock import MagicMock, patch

import pytest
from peewee import CharField

from search_sync.domain import DeleteOutcome, ResultCollection


@pytest.fixture
def Article(create_test_model):
    return create_test_model(
        fields={"title": CharField()},
        index_config={"mapping_properties": {"title": {"type": "text"}}},
    )


class TestSearch:
    def test_search_returns_models(self, Article, mock_es_client):
        mock_es_client.search.return_value = {
            "hits": {
                "total": {"value": 1, "relation": "eq"},
                "max_score": 0.9,
                "hits": [{"_id": "1", "_score": 0.9, "_source": {"id": 1, "title": "Found"}}],
            }
        }

        results = Article.search.search("found")

        assert isinstance(results, ResultCollection)
        assert results[0].title == "Found"
        assert results[0].search.is_document is True
        assert mock_es_client.search.call_args.kwargs["index"] == "test-article"

    def test_search_by_query_with_timestamps(self, Article, mock_es_client):
        Article.search.search_by_query({"query": {"match_all": {}}}, limit=5)

        kwargs = mock_es_client.search.call_args.kwargs
        assert kwargs["stored_fields"] == "_source,_timestamp"
        assert kwargs["size"] == 5

    def test_search_by_query_without_timestamps(self, Article, mock_es_client):
        Article.search.dont_use_timestamps_in_index()

        Article.search.search_by_query({"query": {"match_all": {}}})

        assert mock_es_client.search.call_args.kwargs["stored_fields"] == "_source"


class TestClassSettings:
    def test_timestamps_default_and_toggle(self, Article):
        assert Article.search.uses_timestamps_in_index() is True

        Article.search.dont_use_timestamps_in_index()
        assert Article.search.uses_timestamps_in_index() is False

        Article.search.use_timestamps_in_index()
        assert Article.search.uses_timestamps_in_index() is True

    def test_mapping_properties(self, Article):
        assert Article.search.get_mapping_properties() == {"title": {"type": "text"}}

        Article.search.set_mapping_properties({"title": {"type": "keyword"}})
        assert Article.search.get_mapping_properties() == {"title": {"type": "keyword"}}

    def test_basic_params_have_no_id(self, Article):
        params = Article.search.get_basic_es_params(limit=3)

        assert params.id is None
        assert params.size == 3
        assert params.target == "test-article"


class TestIndexAdministration:
    def test_rebuild_mapping(self, Article, mock_es_client):
        mock_es_client.indices.exists.return_value = False

        Article.search.rebuild_mapping(shards=1)

        mock_es_client.indices.create.assert_called_once_with(
            index="test-article", settings={"number_of_shards": 1}
        )
        mock_es_client.indices.put_mapping.assert_called_once_with(
            index="test-article",
            body={"_source": {"enabled": True}, "properties": {"title": {"type": "text"}}},
        )

    def test_index_and_type_exist(self, Article, mock_es_client):
        mock_es_client.indices.exists.return_value = True
        mock_es_client.indices.get_mapping.return_value = {
            "test-article": {"mappings": {"properties": {"title": {"type": "text"}}}}
        }

        assert Article.search.index_exists() is True
        assert Article.search.type_exists() is True
        assert Article.search.mapping_exists() is True

    def test_create_index_if_not_exists(self, Article, mock_es_client):
        mock_es_client.indices.exists.return_value = True

        assert Article.search.create_index_if_not_exists() is None

    def test_delete_mapping(self, Article, mock_es_client):
        assert Article.search.delete_mapping() is DeleteOutcome.DELETED
        mock_es_client.indices.delete.assert_called_once_with(index="test-article")


class TestBulk:
    def test_add_all_to_index(self, Article, mock_es_client):
        Article.search.synchronizer.disable()
        Article.create(title="a")
        Article.create(title="b")

        with patch("search_sync.core.bulk.bulk", return_value=(2, [])) as mock_bulk:
            result = Article.search.add_all_to_index()

        assert result.success == 2
        client_arg, actions = mock_bulk.call_args.args
        assert client_arg is mock_es_client
        assert [a["_source"]["title"] for a in actions] == ["a", "b"]

    def test_reindex_deletes_then_indexes(self, Article):
        Article.search.synchronizer.disable()
        Article.create(title="a")
        op_types = []

        def fake_bulk(client, actions, **kwargs):
            op_types.extend(a["_op_type"] for a in actions)
            return 1, []

        with patch("search_sync.core.bulk.bulk", side_effect=fake_bulk):
            Article.search.reindex()

        assert op_types == ["delete", "index"]

    def test_collection_helpers(self, Article):
        Article.search.synchronizer.disable()
        article = Article.create(title="a")

        with patch("search_sync.core.bulk.bulk", return_value=(1, [])) as mock_bulk:
            Article.search.add_to_index([article])
            Article.search.delete_from_index([article])
            Article.search.reindex_instances([article])

        assert mock_bulk.call_count == 4

    def test_delete_all_from_index(self, Article, mock_es_client):
        response = MagicMock()
        response.meta.status = 404
        mock_es_client.delete_by_query.return_value = response

        assert Article.search.delete_all_from_index() is DeleteOutcome.NOT_FOUND
