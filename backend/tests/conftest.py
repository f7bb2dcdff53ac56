"""Pytest configuration for test suite."""

import base64
import json
import sys
from pathlib import Path

import pytest

# Add backend/src to Python path for imports
# This file is in backend/tests/, so we need to go up one level to backend/
BACKEND_DIR = Path(__file__).parent.parent
SRC_DIR = BACKEND_DIR / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from ragapp.shared.config import Settings  # noqa: E402
from ragapp.storage import InMemoryBlobStore, InMemoryRecordStore, InMemoryWorkQueue  # noqa: E402

BOUNDARY = "----ragappTestBoundary7MA4YWxkTrZu0gW"


def build_multipart_body(files=(), fields=None, boundary=BOUNDARY) -> bytes:
    """
    Build a multipart/form-data body.

    Args:
        files: Iterable of (field_name, filename, content_type, content_bytes)
        fields: Mapping of plain form fields
    """
    lines = []
    for name, value in (fields or {}).items():
        lines.append(f"--{boundary}\r\n".encode())
        lines.append(f'Content-Disposition: form-data; name="{name}"\r\n\r\n'.encode())
        lines.append(value.encode("utf-8") + b"\r\n")
    for field_name, filename, content_type, content in files:
        lines.append(f"--{boundary}\r\n".encode())
        lines.append(
            f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'.encode()
        )
        lines.append(f"Content-Type: {content_type}\r\n\r\n".encode())
        lines.append(content + b"\r\n")
    lines.append(f"--{boundary}--\r\n".encode())
    return b"".join(lines)


def api_event(body=b"", headers=None, user_id="u1", method="POST", base64_encoded=True) -> dict:
    """Build an API Gateway REST proxy event with Cognito authorizer claims."""
    if isinstance(body, str):
        body = body.encode("utf-8")

    event = {
        "httpMethod": method,
        "headers": headers or {},
        "isBase64Encoded": base64_encoded,
        "body": base64.b64encode(body).decode("ascii") if base64_encoded else body.decode("utf-8"),
        "requestContext": {},
    }
    if user_id is not None:
        event["requestContext"]["authorizer"] = {"claims": {"sub": user_id, "email": f"{user_id}@example.com"}}
    return event


def upload_event(files=(), fields=None, user_id="u1") -> dict:
    return api_event(
        body=build_multipart_body(files, fields),
        headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
        user_id=user_id,
    )


def chat_event(payload, user_id="u1") -> dict:
    return api_event(
        body=json.dumps(payload),
        headers={"content-type": "application/json"},
        user_id=user_id,
        base64_encoded=False,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bucket_name="test-bucket",
        queue_url="https://sqs.us-east-1.amazonaws.com/123456789012/test-queue",
        documents_table="test-documents",
        conversations_table="test-conversations",
    )


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def documents_table() -> InMemoryRecordStore:
    return InMemoryRecordStore(key_attributes=("id",))


@pytest.fixture
def conversations_table() -> InMemoryRecordStore:
    return InMemoryRecordStore(key_attributes=("userId", "conversationId"))


@pytest.fixture
def work_queue() -> InMemoryWorkQueue:
    return InMemoryWorkQueue()
