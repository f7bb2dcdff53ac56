"""Document upload data models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ..shared.results import ServiceWarning


class DocumentType(str, Enum):
    """Normalized document type"""
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"


class DocumentStatus(str, Enum):
    """Processing status; only PROCESSING is written by the upload handler"""
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"


@dataclass
class UploadedFile:
    """A file part from a multipart/form-data request."""

    field_name: str
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1].lower()


@dataclass
class MultipartForm:
    """Parsed multipart/form-data body: plain fields and file parts in order."""

    fields: Dict[str, str] = field(default_factory=dict)
    files: List[UploadedFile] = field(default_factory=list)


@dataclass
class Document:
    """Document record as stored in the documents table."""

    id: str
    user_id: str
    filename: str
    type: DocumentType
    size: int
    title: str
    uploaded: str
    s3_key: str
    status: DocumentStatus = DocumentStatus.PROCESSING
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for DynamoDB storage."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "filename": self.filename,
            "type": self.type.value,
            "size": self.size,
            "title": self.title,
            "uploaded": self.uploaded,
            "status": self.status.value,
            "s3Key": self.s3_key,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        """Create from dictionary (DynamoDB item)."""
        return cls(
            id=data["id"],
            user_id=data["userId"],
            filename=data["filename"],
            type=DocumentType(data["type"]),
            size=int(data["size"]),
            title=data.get("title") or data["filename"],
            uploaded=data["uploaded"],
            s3_key=data["s3Key"],
            status=DocumentStatus(data.get("status", DocumentStatus.PROCESSING.value)),
            metadata=data.get("metadata") or {},
        )

    def to_response(self) -> "DocumentResponse":
        return DocumentResponse(
            id=self.id,
            filename=self.filename,
            type=self.type,
            size=self.size,
            title=self.title,
            uploaded=self.uploaded,
            status=self.status,
        )


class DocumentResponse(BaseModel):
    """Client-facing view of a document; storage key and metadata are omitted"""
    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="Document identifier")
    filename: str = Field(..., description="Original filename")
    type: DocumentType = Field(..., description="Normalized document type")
    size: int = Field(..., description="Size in bytes")
    title: str = Field(..., description="Display title")
    uploaded: str = Field(..., description="ISO 8601 upload timestamp")
    status: DocumentStatus = Field(..., description="Processing status")


class WorkItem(BaseModel):
    """Message queued for the document processing worker"""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    document_id: str = Field(..., alias="documentId")
    user_id: str = Field(..., alias="userId")
    s3_key: str = Field(..., alias="s3Key")
    file_type: DocumentType = Field(..., alias="fileType")
    timestamp: str = Field(..., description="ISO 8601 enqueue timestamp")

    def to_message(self) -> dict:
        return self.model_dump(by_alias=True)


@dataclass
class UploadResult:
    """Outcome of a successful upload, with any degraded-mode warnings."""

    document: Document
    warnings: List[ServiceWarning] = field(default_factory=list)
