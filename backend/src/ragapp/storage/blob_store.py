"""Blob storage abstraction for uploaded document files."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.errors import PersistenceError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Abstract interface for key-addressed binary object storage."""

    @abstractmethod
    def put_object(
        self,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Store an object.

        Args:
            key: Object key
            body: Raw object bytes
            content_type: MIME type stored with the object
            metadata: User metadata; every value must already be a string
        """
        pass

    @abstractmethod
    def get_object(self, key: str) -> Optional[bytes]:
        """Return the object bytes, or None if the key does not exist."""
        pass


@dataclass
class StoredBlob:
    body: bytes
    content_type: str
    metadata: Dict[str, str] = field(default_factory=dict)


class InMemoryBlobStore(BlobStore):
    """In-memory blob storage (for local development and tests)."""

    def __init__(self):
        self.objects: Dict[str, StoredBlob] = {}

    def put_object(self, key, body, content_type, metadata=None) -> None:
        self.objects[key] = StoredBlob(body=body, content_type=content_type, metadata=dict(metadata or {}))

    def get_object(self, key: str) -> Optional[bytes]:
        blob = self.objects.get(key)
        return blob.body if blob else None


class S3BlobStore(BlobStore):
    """S3-backed blob storage."""

    def __init__(self, bucket_name: str, client=None, region: Optional[str] = None):
        """
        Initialize S3 blob store.

        Args:
            bucket_name: Target bucket
            client: Optional pre-built boto3 S3 client
            region: AWS region used when no client is given
        """
        self.bucket_name = bucket_name
        self._client = client or boto3.client("s3", region_name=region)

    def put_object(self, key, body, content_type, metadata=None) -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=body,
                ContentType=content_type,
                Metadata=metadata or {},
            )
            logger.info(f"Uploaded s3://{self.bucket_name}/{key} ({len(body)} bytes)")
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload s3://{self.bucket_name}/{key}: {e}")
            raise PersistenceError(f"Failed to upload object {key}: {e}") from e

    def get_object(self, key: str) -> Optional[bytes]:
        try:
            response = self._client.get_object(Bucket=self.bucket_name, Key=key)
            return response["Body"].read()
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                return None
            logger.error(f"Failed to read s3://{self.bucket_name}/{key}: {e}")
            raise PersistenceError(f"Failed to read object {key}: {e}") from e
        except BotoCoreError as e:
            logger.error(f"Failed to read s3://{self.bucket_name}/{key}: {e}")
            raise PersistenceError(f"Failed to read object {key}: {e}") from e
