"""Upload request handling for API Gateway events"""

import logging
from typing import Any, Dict

from ..shared.auth import get_current_user
from ..shared.errors import ClientInputError
from ..shared.http import (
    client_error_response,
    create_response,
    internal_error_response,
    is_preflight,
)
from .multipart import parse_multipart_event
from .service import DocumentUploadService
from .validation import parse_metadata

logger = logging.getLogger(__name__)

METADATA_FIELD = "metadata"


def handle_upload_event(event: Dict[str, Any], service: DocumentUploadService) -> Dict[str, Any]:
    """
    Handle a document upload request.

    Only the first file part with a filename is used. The metadata form
    field is optional JSON; if it cannot be parsed the upload still
    succeeds without it.

    Returns:
        API Gateway proxy response (201 on success)
    """
    if is_preflight(event):
        return create_response(200, {})

    try:
        user = get_current_user(event)
        form = parse_multipart_event(event)

        # An empty file input is sent as a part with filename=""
        files = [part for part in form.files if part.filename]
        if not files:
            raise ClientInputError("No file uploaded")

        file = files[0]
        if len(files) > 1:
            logger.info(f"Ignoring {len(files) - 1} extra file part(s)")

        metadata, warnings = parse_metadata(form.fields.get(METADATA_FIELD))
        result = service.upload(user.user_id, file, metadata, warnings)
        return create_response(201, result.document.to_response().model_dump())

    except ClientInputError as e:
        return client_error_response(e)
    except Exception as e:
        logger.error(f"Error processing upload request: {e}", exc_info=True)
        return internal_error_response(e)
