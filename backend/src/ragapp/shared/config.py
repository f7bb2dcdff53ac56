"""Runtime configuration for the ragapp Lambda functions

Settings are read once from the environment when a Lambda container starts
and then passed explicitly into the services, so tests can build their own.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 25 * 1024 * 1024  # 25MB

DEFAULT_ALLOWED_MIME_TYPES = (
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/msword",
    "text/plain",
)


def _get_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using default {default}")
        return default


def _get_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {name}: {raw!r}, using default {default}")
        return default


def _get_list(environ: Mapping[str, str], name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = environ.get(name)
    if not raw:
        return default
    values = tuple(part.strip().lower() for part in raw.split(",") if part.strip())
    return values or default


@dataclass(frozen=True)
class Settings:
    """Configuration shared by the upload and chat handlers."""

    # Upload pipeline
    bucket_name: str = "ragapp-documents"
    queue_url: str = ""
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    documents_table: str = "ragapp-documents"
    allowed_mime_types: Tuple[str, ...] = DEFAULT_ALLOWED_MIME_TYPES

    # Chat pipeline
    conversations_table: str = "ragapp-conversations"
    search_endpoint: str = ""
    search_key: str = field(default="", repr=False)
    search_index: str = ""
    search_api_version: str = "2023-11-01"
    search_semantic_configuration: str = "default"
    search_top_k: int = 5
    generation_endpoint: str = ""
    generation_key: str = field(default="", repr=False)
    generation_model: str = "gpt-4"
    generation_api_version: str = "2023-05-15"
    temperature: float = 0.7
    max_tokens: int = 800
    http_timeout: float = 30.0

    # Runtime
    aws_region: str = "us-east-1"
    log_level: str = "INFO"

    @property
    def max_file_size_mb(self) -> int:
        """Maximum upload size in whole megabytes, for error messages."""
        return max(self.max_file_size // (1024 * 1024), 1)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance with defaults applied for missing values
        """
        env = os.environ if environ is None else environ

        return cls(
            bucket_name=env.get("S3_BUCKET_NAME") or cls.bucket_name,
            queue_url=env.get("SQS_QUEUE_URL", ""),
            max_file_size=_get_int(env, "MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE),
            documents_table=env.get("DOCUMENTS_TABLE_NAME") or cls.documents_table,
            allowed_mime_types=_get_list(env, "ALLOWED_MIME_TYPES", DEFAULT_ALLOWED_MIME_TYPES),
            conversations_table=env.get("CONVERSATIONS_TABLE_NAME") or cls.conversations_table,
            search_endpoint=env.get("AZURE_SEARCH_ENDPOINT", "").rstrip("/"),
            search_key=env.get("AZURE_SEARCH_KEY", ""),
            search_index=env.get("AZURE_SEARCH_INDEX", ""),
            search_api_version=env.get("AZURE_SEARCH_API_VERSION") or cls.search_api_version,
            search_semantic_configuration=(
                env.get("AZURE_SEARCH_SEMANTIC_CONFIG") or cls.search_semantic_configuration
            ),
            search_top_k=_get_int(env, "SEARCH_TOP_K", 5),
            generation_endpoint=env.get("AZURE_FOUNDRY_ENDPOINT", "").rstrip("/"),
            generation_key=env.get("AZURE_FOUNDRY_KEY", ""),
            generation_model=env.get("AZURE_OPENAI_MODEL") or cls.generation_model,
            generation_api_version=env.get("AZURE_OPENAI_API_VERSION") or cls.generation_api_version,
            temperature=_get_float(env, "GENERATION_TEMPERATURE", 0.7),
            max_tokens=_get_int(env, "GENERATION_MAX_TOKENS", 800),
            http_timeout=_get_float(env, "HTTP_TIMEOUT_SECONDS", 30.0),
            aws_region=env.get("AWS_REGION", env.get("AWS_DEFAULT_REGION", "us-east-1")),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
