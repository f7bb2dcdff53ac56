"""multipart/form-data parsing for API Gateway upload events

Uses python-multipart's streaming parser with the same callback layout
Starlette uses for FastAPI form handling, collecting each part in memory.
"""

import logging
import posixpath
from typing import Any, Dict, List, Optional

import python_multipart
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import parse_options_header

from ..shared.errors import ClientInputError
from ..shared.http import get_body_bytes, get_header
from .models import MultipartForm, UploadedFile

logger = logging.getLogger(__name__)

DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


def _clean_filename(filename: str) -> str:
    # Browsers may send a client-side path; keep only the final component
    return posixpath.basename(filename.replace("\\", "/"))


class _PartCollector:
    """Accumulates headers and data for each part as the parser emits them."""

    def __init__(self, charset: str = "utf-8"):
        self.charset = charset
        self.form = MultipartForm()
        self._headers: Dict[bytes, bytes] = {}
        self._header_field = b""
        self._header_value = b""
        self._data = bytearray()

    def callbacks(self) -> Dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._data = bytearray()

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_field.lower()] = self._header_value
        self._header_field = b""
        self._header_value = b""

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data.extend(data[start:end])

    def on_part_end(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        name = options.get(b"name", b"").decode(self.charset)
        filename: Optional[bytes] = options.get(b"filename")

        if filename is None:
            self.form.fields[name] = bytes(self._data).decode(self.charset, errors="replace")
            return

        content_type = self._headers.get(b"content-type", b"").decode("latin-1").strip()
        self.form.files.append(
            UploadedFile(
                field_name=name,
                filename=_clean_filename(filename.decode(self.charset, errors="replace")),
                content_type=content_type or DEFAULT_FILE_CONTENT_TYPE,
                content=bytes(self._data),
            )
        )


def parse_multipart_event(event: Dict[str, Any]) -> MultipartForm:
    """
    Parse a multipart/form-data API Gateway event body.

    Args:
        event: API Gateway proxy event

    Returns:
        MultipartForm with plain fields and file parts in request order

    Raises:
        ClientInputError: If the body is not valid multipart/form-data
    """
    content_type_header = get_header(event, "content-type") or ""
    content_type, params = parse_options_header(content_type_header)

    if content_type.strip().lower() != b"multipart/form-data":
        raise ClientInputError("Expected a multipart/form-data request body")

    boundary = params.get(b"boundary")
    if not boundary:
        raise ClientInputError("Missing multipart boundary")

    charset = params.get(b"charset", b"utf-8").decode("latin-1")
    collector = _PartCollector(charset=charset)
    parser = python_multipart.MultipartParser(boundary, collector.callbacks())

    try:
        parser.write(get_body_bytes(event))
        parser.finalize()
    except MultipartParseError as e:
        logger.warning(f"Malformed multipart body: {e}")
        raise ClientInputError("Malformed multipart/form-data body")

    files: List[UploadedFile] = collector.form.files
    logger.info(
        f"Parsed multipart body: {len(collector.form.fields)} field(s), {len(files)} file(s)"
    )
    return collector.form
