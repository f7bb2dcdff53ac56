"""API Gateway proxy event and response helpers"""

import base64
import json
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from .errors import ClientInputError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "OPTIONS,POST,GET",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
}


def _json_default(value: Any) -> Any:
    # DynamoDB hands numbers back as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def create_response(status_code: int, body: Any) -> Dict[str, Any]:
    """Format an API Gateway proxy response with JSON body and CORS headers"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **CORS_HEADERS},
        "body": json.dumps(body, default=_json_default),
    }


def client_error_response(error: ClientInputError) -> Dict[str, Any]:
    """Format a 4xx response for a rejected request"""
    logger.info(f"Rejected request ({error.status_code}): {error.message}")
    detail = error.to_detail()
    return create_response(error.status_code, {"error": detail.message, "code": detail.code})


def internal_error_response(error: Exception) -> Dict[str, Any]:
    """Format a 500 response; the raw error text is attached for diagnostics"""
    return create_response(500, {"error": "Internal server error", "details": str(error)})


def get_method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod")
    if not method:
        # HTTP API (payload v2) puts the method under requestContext.http
        method = (event.get("requestContext") or {}).get("http", {}).get("method", "")
    return method.upper()


def is_preflight(event: Dict[str, Any]) -> bool:
    return get_method(event) == "OPTIONS"


def get_header(event: Dict[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup"""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_body_bytes(event: Dict[str, Any]) -> bytes:
    """Return the raw request body, decoding base64 payloads"""
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body)
        except (ValueError, TypeError) as e:
            raise ClientInputError(f"Invalid base64 request body: {e}")
    if isinstance(body, bytes):
        return body
    return body.encode("utf-8")
