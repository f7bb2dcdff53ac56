"""Work queue abstraction for handing documents to the processing worker."""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.errors import PersistenceError

logger = logging.getLogger(__name__)


class WorkQueue(ABC):
    """Abstract interface for an at-least-once JSON message queue."""

    @abstractmethod
    def send_message(self, body: Dict[str, Any]) -> str:
        """
        Enqueue a JSON message.

        Returns:
            Message id assigned by the queue
        """
        pass


class InMemoryWorkQueue(WorkQueue):
    """In-memory queue (for local development and tests)."""

    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    def send_message(self, body: Dict[str, Any]) -> str:
        # Round-trip through JSON so tests see exactly what would be sent
        self.messages.append(json.loads(json.dumps(body)))
        return str(uuid.uuid4())


class SQSWorkQueue(WorkQueue):
    """SQS-backed work queue."""

    def __init__(self, queue_url: str, client=None, region: Optional[str] = None):
        self.queue_url = queue_url
        self._client = client or boto3.client("sqs", region_name=region)

    def send_message(self, body: Dict[str, Any]) -> str:
        try:
            response = self._client.send_message(
                QueueUrl=self.queue_url,
                MessageBody=json.dumps(body),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to send message to {self.queue_url}: {e}")
            raise PersistenceError(f"Failed to queue message: {e}") from e

        message_id = response.get("MessageId", "")
        logger.info(f"Queued message {message_id}")
        return message_id
