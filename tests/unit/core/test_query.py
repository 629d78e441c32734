"""Unit-тесты для QueryFacade."""

import pytest

from search_sync.core.projector import DocumentProjector
from search_sync.core.query import QueryFacade
from search_sync.domain import ResultCollection, get_document_meta


SEARCH_RESPONSE = {
    "took": 7,
    "timed_out": False,
    "_shards": {"total": 1, "successful": 1, "failed": 0},
    "hits": {
        "total": {"value": 2, "relation": "eq"},
        "max_score": 1.7,
        "hits": [
            {"_id": "1", "_score": 1.7, "_source": {"id": 1, "title": "First", "views": 5}},
            {
                "_id": "2",
                "_score": 0.4,
                "_version": 3,
                "_source": {"id": 2, "title": "Second", "views": 0},
            },
        ],
    },
}


@pytest.fixture
def facade(mock_es_client, binding, article_adapter):
    mock_es_client.search.return_value = SEARCH_RESPONSE
    return QueryFacade(mock_es_client, binding, DocumentProjector(article_adapter))


class TestSearch:
    def test_multi_match_over_all_fields(self, facade, mock_es_client):
        facade.search("python")

        mock_es_client.search.assert_called_once_with(
            index="test-articles",
            query={"multi_match": {"query": "python", "fields": ["*"], "lenient": True}},
        )

    def test_returns_hydrated_models(self, facade):
        results = facade.search("anything")

        assert isinstance(results, ResultCollection)
        assert [a.title for a in results] == ["First", "Second"]
        assert get_document_meta(results[0]).score == 1.7
        assert get_document_meta(results[1]).version == 3

    def test_response_metadata(self, facade):
        results = facade.search("anything")

        assert results.total_hits == 2
        assert results.max_score == 1.7
        assert results.took == 7
        assert results.timed_out is False
        assert results.shards["successful"] == 1
        assert len(results.hits) == 2


class TestSearchByQuery:
    def test_params_with_source_timestamp_and_paging(self, facade, mock_es_client):
        body = {"query": {"term": {"title": "first"}}}

        facade.search_by_query(body, limit=10, offset=20)

        mock_es_client.search.assert_called_once_with(
            index="test-articles",
            stored_fields="_source,_timestamp",
            size=10,
            from_=20,
            query={"term": {"title": "first"}},
        )

    def test_body_keys_win_over_paging(self, facade, mock_es_client):
        """size/from из тела запроса важнее limit/offset."""
        facade.search_by_query(
            {"query": {"match_all": {}}, "size": 3, "from": 6}, limit=10, offset=20
        )

        kwargs = mock_es_client.search.call_args.kwargs
        assert kwargs["size"] == 3
        assert kwargs["from_"] == 6
        assert "from" not in kwargs
        assert "body" not in kwargs

    def test_timestamp_dropped_when_disabled(self, facade, mock_es_client, binding):
        binding.dont_use_timestamps_in_index()

        facade.search_by_query({"query": {"match_all": {}}})

        assert mock_es_client.search.call_args.kwargs["stored_fields"] == "_source"

    def test_non_numeric_paging_ignored(self, facade, mock_es_client):
        facade.search_by_query(None, limit="many", offset=None)

        mock_es_client.search.assert_called_once_with(
            index="test-articles", stored_fields="_source,_timestamp"
        )

    def test_empty_response(self, facade, mock_es_client):
        mock_es_client.search.return_value = {"hits": {"total": 0, "hits": []}}

        results = facade.search_by_query({"query": {"match_all": {}}})

        assert len(results) == 0
        assert results.total_hits == 0
        assert results.aggregations == {}
