"""Document upload module

Accepts multipart uploads, stores the file in S3, records it in DynamoDB
and queues it for the downstream processing worker.
"""

from .handler import handle_upload_event
from .models import (
    Document,
    DocumentResponse,
    DocumentStatus,
    DocumentType,
    UploadedFile,
    UploadResult,
    WorkItem,
)
from .service import DocumentUploadService

__all__ = [
    'handle_upload_event',
    'Document',
    'DocumentResponse',
    'DocumentStatus',
    'DocumentType',
    'UploadedFile',
    'UploadResult',
    'WorkItem',
    'DocumentUploadService',
]
