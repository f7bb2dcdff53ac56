"""Document upload service layer

Stores an uploaded file, records it in the documents table and queues it
for the processing worker.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..shared.config import Settings
from ..shared.ids import generate_document_id
from ..shared.results import ServiceWarning
from ..storage import BlobStore, RecordStore, WorkQueue
from .models import Document, DocumentStatus, UploadedFile, UploadResult, WorkItem
from .validation import build_storage_key, get_file_type, stringify_metadata, validate_file

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class DocumentUploadService:
    """
    Upload pipeline: validate -> blob -> record -> queue.

    The three writes are not transactional. A failure after the blob upload
    leaves an orphaned object; a failure after the record write leaves a
    record that is never queued for processing.
    """

    def __init__(
        self,
        settings: Settings,
        blob_store: BlobStore,
        documents: RecordStore,
        work_queue: WorkQueue,
    ):
        self.settings = settings
        self.blob_store = blob_store
        self.documents = documents
        self.work_queue = work_queue

    def upload(
        self,
        user_id: str,
        file: UploadedFile,
        metadata: Optional[Dict[str, Any]] = None,
        warnings: Optional[List[ServiceWarning]] = None,
    ) -> UploadResult:
        """
        Validate and store an uploaded file.

        Args:
            user_id: Authenticated owner
            file: The uploaded file part
            metadata: Parsed free-form metadata
            warnings: Warnings already raised while reading the request

        Returns:
            UploadResult with the created document record

        Raises:
            PayloadTooLargeError, UnsupportedFileTypeError: Validation failed;
                nothing has been written
            PersistenceError: A storage or queue write failed
        """
        metadata = metadata or {}
        validate_file(file, self.settings)

        document_id = generate_document_id()
        file_type = get_file_type(file)
        s3_key = build_storage_key(user_id, document_id, file.filename)

        self.blob_store.put_object(
            key=s3_key,
            body=file.content,
            content_type=file.content_type,
            metadata=stringify_metadata({
                **metadata,
                # Ownership keys cannot be overridden by client metadata
                "userId": user_id,
                "documentId": document_id,
                "originalName": file.filename,
            }),
        )

        title = metadata.get("title")
        document = Document(
            id=document_id,
            user_id=user_id,
            filename=file.filename,
            type=file_type,
            size=file.size,
            title=title if isinstance(title, str) and title else file.filename,
            uploaded=_utc_now_iso(),
            s3_key=s3_key,
            status=DocumentStatus.PROCESSING,
            metadata=metadata,
        )
        self.documents.put_item(document.to_dict())

        work_item = WorkItem(
            document_id=document_id,
            user_id=user_id,
            s3_key=s3_key,
            file_type=file_type,
            timestamp=_utc_now_iso(),
        )
        self.work_queue.send_message(work_item.to_message())

        logger.info(
            f"📄 Uploaded document {document_id} for user {user_id}: "
            f"{file.filename} ({file_type.value}, {file.size} bytes)"
        )
        return UploadResult(document=document, warnings=list(warnings or []))
