"""Chat request handling for API Gateway events"""

import json
import logging
from typing import Any, Dict

from pydantic import ValidationError

from ..shared.auth import get_current_user
from ..shared.errors import ClientInputError
from ..shared.http import (
    client_error_response,
    create_response,
    get_body_bytes,
    internal_error_response,
    is_preflight,
)
from .models import ChatRequest
from .service import ChatService

logger = logging.getLogger(__name__)


def parse_chat_request(event: Dict[str, Any]) -> ChatRequest:
    """
    Parse the JSON request body.

    Raises:
        ClientInputError: If the body is not a valid chat request
    """
    try:
        body = json.loads(get_body_bytes(event) or b"{}")
    except ValueError as e:
        raise ClientInputError(f"Invalid JSON body: {e}")

    if not isinstance(body, dict):
        raise ClientInputError("Request body must be a JSON object")

    try:
        return ChatRequest.model_validate(body)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ClientInputError(f"Invalid chat request: {errors}")


def handle_chat_event(event: Dict[str, Any], service: ChatService) -> Dict[str, Any]:
    """
    Handle a chat request.

    Returns:
        API Gateway proxy response (200 once auth and input validation pass)
    """
    if is_preflight(event):
        return create_response(200, {})

    try:
        user = get_current_user(event)
        request = parse_chat_request(event)
        result = service.chat(user.user_id, request)
        return create_response(200, result.to_body())

    except ClientInputError as e:
        return client_error_response(e)
    except Exception as e:
        logger.error(f"Error processing chat request: {e}", exc_info=True)
        return internal_error_response(e)
