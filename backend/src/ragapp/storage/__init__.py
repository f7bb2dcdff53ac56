"""Storage adapters for blobs, records and queued work"""

from .blob_store import BlobStore, InMemoryBlobStore, S3BlobStore
from .record_store import DynamoDBRecordStore, InMemoryRecordStore, RecordStore
from .work_queue import InMemoryWorkQueue, SQSWorkQueue, WorkQueue

__all__ = [
    "BlobStore",
    "InMemoryBlobStore",
    "S3BlobStore",
    "RecordStore",
    "InMemoryRecordStore",
    "DynamoDBRecordStore",
    "WorkQueue",
    "InMemoryWorkQueue",
    "SQSWorkQueue",
]
