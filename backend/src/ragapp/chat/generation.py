"""Answer generation via Azure OpenAI chat completions"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from ..shared.errors import UpstreamServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "Azure OpenAI"


class GenerationService(ABC):
    """Large-language-model completion over a list of chat messages."""

    @abstractmethod
    def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 800,
    ) -> str:
        """
        Return the assistant reply for the given messages.

        Raises:
            UpstreamServiceError: If the completion call fails
        """
        pass


class AzureOpenAIClient(GenerationService):
    """Chat completions against an Azure OpenAI / AI Foundry deployment."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        deployment: str = "gpt-4",
        api_version: str = "2023-05-15",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.deployment = deployment
        self.api_version = api_version
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.endpoint}/openai/deployments/{self.deployment}/chat/completions"

    def complete(self, messages, temperature=0.7, max_tokens=800) -> str:
        if not self.endpoint:
            raise UpstreamServiceError(SERVICE_NAME, "generation endpoint not configured")

        logger.info(
            f"Requesting completion from {self.deployment}: "
            f"{len(messages)} message(s), temperature={temperature}, max_tokens={max_tokens}"
        )

        try:
            response = self._session.post(
                self.url,
                params={"api-version": self.api_version},
                headers={"Content-Type": "application/json", "api-key": self.api_key},
                json={
                    "messages": messages,
                    "temperature": temperature,
                    "max_tokens": max_tokens,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            data: Dict[str, Any] = response.json()
        except requests.exceptions.Timeout:
            raise UpstreamServiceError(SERVICE_NAME, "request timed out")
        except requests.exceptions.RequestException as e:
            raise UpstreamServiceError(SERVICE_NAME, str(e)) from e
        except ValueError as e:
            raise UpstreamServiceError(SERVICE_NAME, f"invalid JSON response: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise UpstreamServiceError(SERVICE_NAME, f"unexpected response shape: {e}") from e

        if not isinstance(content, str):
            raise UpstreamServiceError(SERVICE_NAME, "completion has no text content")

        return content
