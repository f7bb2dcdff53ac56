"""Record storage abstraction for document and conversation records."""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.errors import PersistenceError

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Abstract interface for a key-addressed table of attribute documents."""

    @abstractmethod
    def put_item(self, item: Dict[str, Any]) -> None:
        """Create or wholesale overwrite the item stored under its key."""
        pass

    @abstractmethod
    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the item for a key, or None if it does not exist."""
        pass


class InMemoryRecordStore(RecordStore):
    """In-memory record storage (for local development and tests)."""

    def __init__(self, key_attributes: Sequence[str]):
        """
        Args:
            key_attributes: Attribute names that form the primary key
        """
        self.key_attributes = tuple(key_attributes)
        self.items: Dict[Tuple[Any, ...], Dict[str, Any]] = {}

    def _key(self, item: Dict[str, Any]) -> Tuple[Any, ...]:
        try:
            return tuple(item[name] for name in self.key_attributes)
        except KeyError as e:
            raise PersistenceError(f"Missing key attribute {e}") from e

    def put_item(self, item: Dict[str, Any]) -> None:
        self.items[self._key(item)] = copy.deepcopy(item)

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        item = self.items.get(self._key(key))
        return copy.deepcopy(item) if item is not None else None


class DynamoDBRecordStore(RecordStore):
    """DynamoDB-backed record storage."""

    def __init__(self, table_name: str, region: Optional[str] = None, table=None):
        """
        Initialize DynamoDB record store.

        Args:
            table_name: DynamoDB table name
            region: AWS region used when no table is given
            table: Optional pre-built boto3 Table resource
        """
        self.table_name = table_name
        if table is None:
            dynamodb = boto3.resource("dynamodb", region_name=region)
            table = dynamodb.Table(table_name)
        self._table = table

    def put_item(self, item: Dict[str, Any]) -> None:
        try:
            self._table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to write item to {self.table_name}: {e}")
            raise PersistenceError(f"Failed to write item to {self.table_name}: {e}") from e

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            response = self._table.get_item(Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to read item from {self.table_name}: {e}")
            raise PersistenceError(f"Failed to read item from {self.table_name}: {e}") from e
        return response.get("Item")
