"""Upload validation and normalization helpers"""

import json
import logging
import string
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from ..shared.config import Settings
from ..shared.errors import PayloadTooLargeError, UnsupportedFileTypeError
from ..shared.results import ServiceWarning, WarningCode
from .models import DocumentType, UploadedFile

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"pdf", "docx", "doc", "txt"}

EXTENSION_TYPES = {
    "pdf": DocumentType.PDF,
    "docx": DocumentType.DOCX,
    "doc": DocumentType.DOCX,
    "txt": DocumentType.TXT,
}

MIME_TYPES = {
    "application/pdf": DocumentType.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentType.DOCX,
    "application/msword": DocumentType.DOCX,
    "text/plain": DocumentType.TXT,
}


def _base_mime_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def is_valid_file_type(file: UploadedFile, allowed_mime_types) -> bool:
    """A file is accepted when either its MIME type or its extension is allowed"""
    if _base_mime_type(file.content_type) in allowed_mime_types:
        return True
    return file.extension in ALLOWED_EXTENSIONS


def validate_file(file: UploadedFile, settings: Settings) -> None:
    """
    Check an uploaded file against the size limit and type allow-list.

    Raises:
        PayloadTooLargeError: File exceeds settings.max_file_size
        UnsupportedFileTypeError: Neither MIME type nor extension is allowed
    """
    if file.size > settings.max_file_size:
        raise PayloadTooLargeError(
            f"File too large, maximum size is {settings.max_file_size_mb}MB"
        )

    if not is_valid_file_type(file, settings.allowed_mime_types):
        raise UnsupportedFileTypeError("Invalid file type, supported formats: PDF, DOCX, TXT")


def get_file_type(file: UploadedFile) -> DocumentType:
    """Normalize a file to pdf/docx/txt by extension, then MIME type"""
    by_extension = EXTENSION_TYPES.get(file.extension)
    if by_extension:
        return by_extension
    return MIME_TYPES.get(_base_mime_type(file.content_type), DocumentType.TXT)


def _reject_constant(name: str) -> Any:
    # NaN/Infinity are not JSON and DynamoDB cannot store them
    raise ValueError(f"Unsupported JSON constant {name}")


def parse_metadata(raw: Optional[str]) -> Tuple[Dict[str, Any], List[ServiceWarning]]:
    """
    Parse the optional JSON metadata form field.

    Invalid metadata never fails the upload; it is dropped and reported as
    a warning instead. Numbers with a fraction are parsed as Decimal since
    DynamoDB rejects floats.

    Returns:
        Tuple of (metadata dict, warnings)
    """
    if not raw:
        return {}, []

    try:
        parsed = json.loads(raw, parse_float=Decimal, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning(f"Invalid metadata format, ignoring: {e}")
        return {}, [ServiceWarning(WarningCode.METADATA_INVALID, f"Invalid metadata JSON: {e}")]

    if not isinstance(parsed, dict):
        logger.warning(f"Metadata is not a JSON object ({type(parsed).__name__}), ignoring")
        return {}, [ServiceWarning(WarningCode.METADATA_INVALID, "Metadata must be a JSON object")]

    return parsed, []


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


# Printable ASCII other than "%" passes through, so encoded values decode with unquote
_METADATA_SAFE_CHARS = "".join(c for c in string.punctuation if c != "%") + " "


def encode_metadata_value(value: str) -> str:
    """Percent-encode a value for S3 user metadata, which only accepts ASCII"""
    return quote(value, safe=_METADATA_SAFE_CHARS)


def stringify_metadata(metadata: Dict[str, Any]) -> Dict[str, str]:
    """
    Convert metadata to S3 user metadata.

    Non-string values are JSON-encoded; keys and values are then
    percent-encoded where they are not plain ASCII.
    """
    result = {}
    for key, value in metadata.items():
        if not isinstance(value, str):
            value = json.dumps(value, default=_json_default)
        result[encode_metadata_value(str(key))] = encode_metadata_value(value)
    return result


def build_storage_key(user_id: str, document_id: str, filename: str) -> str:
    return f"{user_id}/{document_id}/{filename}"
