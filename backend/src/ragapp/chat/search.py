"""Document retrieval via Azure AI Search"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from ..shared.errors import UpstreamServiceError
from .models import SearchHit

logger = logging.getLogger(__name__)

SERVICE_NAME = "Azure AI Search"


class SearchService(ABC):
    """Semantic search over the indexed document chunks."""

    @abstractmethod
    def search(self, query: str, top: int = 5) -> List[SearchHit]:
        """
        Return the best matching snippets for a query, best first.

        Raises:
            UpstreamServiceError: If the search call fails
        """
        pass


def _to_hit(doc: Dict[str, Any]) -> SearchHit:
    page_number = doc.get("pageNumber")
    return SearchHit(
        id=doc.get("id"),
        content=doc.get("content") or "",
        title=doc.get("title"),
        source=doc.get("source"),
        page_number=page_number if page_number not in (None, "") else None,
    )


class AzureSearchClient(SearchService):
    """Hybrid semantic + vector query against an Azure AI Search index."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        index_name: str,
        api_version: str = "2023-11-01",
        semantic_configuration: str = "default",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.index_name = index_name
        self.api_version = api_version
        self.semantic_configuration = semantic_configuration
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.endpoint}/indexes/{self.index_name}/docs/search"

    def build_payload(self, query: str, top: int) -> Dict[str, Any]:
        return {
            "search": query,
            "queryType": "semantic",
            "semanticConfiguration": self.semantic_configuration,
            "top": top,
            "vectorQueries": [
                {
                    "kind": "text",
                    "text": query,
                    "fields": "embedding",
                    "k": top,
                }
            ],
        }

    def search(self, query: str, top: int = 5) -> List[SearchHit]:
        if not self.endpoint or not self.index_name:
            raise UpstreamServiceError(SERVICE_NAME, "search endpoint or index not configured")

        logger.info(f"Searching index {self.index_name}: top={top}")

        try:
            response = self._session.post(
                self.url,
                params={"api-version": self.api_version},
                headers={"Content-Type": "application/json", "api-key": self.api_key},
                json=self.build_payload(query, top),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            raise UpstreamServiceError(SERVICE_NAME, "request timed out")
        except requests.exceptions.RequestException as e:
            raise UpstreamServiceError(SERVICE_NAME, str(e)) from e
        except ValueError as e:
            raise UpstreamServiceError(SERVICE_NAME, f"invalid JSON response: {e}") from e

        values = data.get("value") if isinstance(data, dict) else None
        if not isinstance(values, list):
            raise UpstreamServiceError(SERVICE_NAME, "response has no 'value' list")

        hits = [_to_hit(doc) for doc in values if isinstance(doc, dict)]
        logger.info(f"Search returned {len(hits)} result(s)")
        return hits
