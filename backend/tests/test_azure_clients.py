"""Tests for the Azure AI Search and Azure OpenAI HTTP clients"""

from unittest.mock import MagicMock

import pytest
import requests

from ragapp.chat.generation import AzureOpenAIClient
from ragapp.chat.search import AzureSearchClient
from ragapp.shared.errors import UpstreamServiceError


def mock_session(payload=None, error=None, status_error=None):
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.post.side_effect = error
        return session

    response = MagicMock()
    response.json.return_value = payload
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    session.post.return_value = response
    return session


class TestAzureSearchClient:
    def make_client(self, session):
        return AzureSearchClient(
            endpoint="https://search.example.net/",
            api_key="search-key",
            index_name="documents",
            session=session,
            timeout=5,
        )

    def test_search_posts_semantic_vector_query(self):
        session = mock_session({"value": []})

        self.make_client(session).search("revenue", top=5)

        args, kwargs = session.post.call_args
        assert args[0] == "https://search.example.net/indexes/documents/docs/search"
        assert kwargs["params"] == {"api-version": "2023-11-01"}
        assert kwargs["headers"]["api-key"] == "search-key"
        assert kwargs["timeout"] == 5
        payload = kwargs["json"]
        assert payload["search"] == "revenue"
        assert payload["queryType"] == "semantic"
        assert payload["semanticConfiguration"] == "default"
        assert payload["top"] == 5
        assert payload["vectorQueries"] == [
            {"kind": "text", "text": "revenue", "fields": "embedding", "k": 5}
        ]

    def test_search_maps_documents_to_hits(self):
        session = mock_session({
            "value": [
                {"id": "c1", "content": "text", "title": "Doc", "source": "s3://x", "pageNumber": 2},
                {"id": "c2", "content": None, "title": "Empty"},
            ]
        })

        hits = self.make_client(session).search("q")

        assert hits[0].id == "c1"
        assert hits[0].page_number == 2
        assert hits[0].source == "s3://x"
        assert hits[1].content == ""
        assert hits[1].page_number is None

    def test_connection_error_is_upstream_error(self):
        session = mock_session(error=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(UpstreamServiceError):
            self.make_client(session).search("q")

    def test_http_error_is_upstream_error(self):
        session = mock_session({}, status_error=requests.exceptions.HTTPError("503"))

        with pytest.raises(UpstreamServiceError):
            self.make_client(session).search("q")

    def test_malformed_response_is_upstream_error(self):
        with pytest.raises(UpstreamServiceError):
            self.make_client(mock_session({"unexpected": True})).search("q")

    def test_unconfigured_endpoint_is_upstream_error(self):
        client = AzureSearchClient(endpoint="", api_key="", index_name="", session=mock_session())

        with pytest.raises(UpstreamServiceError):
            client.search("q")


class TestAzureOpenAIClient:
    def make_client(self, session):
        return AzureOpenAIClient(
            endpoint="https://foundry.example.net",
            api_key="gen-key",
            deployment="gpt-4",
            session=session,
        )

    def test_complete_returns_first_choice(self):
        session = mock_session({"choices": [{"message": {"role": "assistant", "content": "Answer"}}]})
        messages = [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}]

        answer = self.make_client(session).complete(messages, temperature=0.7, max_tokens=800)

        assert answer == "Answer"
        args, kwargs = session.post.call_args
        assert args[0] == "https://foundry.example.net/openai/deployments/gpt-4/chat/completions"
        assert kwargs["params"] == {"api-version": "2023-05-15"}
        assert kwargs["headers"]["api-key"] == "gen-key"
        assert kwargs["json"] == {"messages": messages, "temperature": 0.7, "max_tokens": 800}

    def test_timeout_is_upstream_error(self):
        session = mock_session(error=requests.exceptions.Timeout())

        with pytest.raises(UpstreamServiceError, match="timed out"):
            self.make_client(session).complete([])

    def test_missing_choices_is_upstream_error(self):
        with pytest.raises(UpstreamServiceError):
            self.make_client(mock_session({"choices": []})).complete([])

    def test_invalid_json_is_upstream_error(self):
        session = mock_session()
        session.post.return_value.json.side_effect = ValueError("not json")

        with pytest.raises(UpstreamServiceError):
            self.make_client(session).complete([])
