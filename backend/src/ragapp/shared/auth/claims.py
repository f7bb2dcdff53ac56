"""Caller identity extraction from API Gateway authorizer claims."""

import logging
from typing import Any, Dict, Optional

from ..errors import UnauthorizedError
from .models import User

logger = logging.getLogger(__name__)


def _get_claims(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}

    # REST API Cognito authorizer
    claims = authorizer.get("claims")
    if claims:
        return claims

    # HTTP API JWT authorizer
    jwt = authorizer.get("jwt") or {}
    return jwt.get("claims")


def get_current_user(event: Dict[str, Any]) -> User:
    """
    Resolve the authenticated user for a request.

    Args:
        event: API Gateway proxy event

    Returns:
        User built from the authorizer claims

    Raises:
        UnauthorizedError: If no subject claim is present
    """
    claims = _get_claims(event) or {}
    user_id = claims.get("sub")

    if not user_id:
        logger.warning("Request has no authenticated subject claim")
        raise UnauthorizedError()

    return User(
        user_id=user_id,
        email=claims.get("email"),
        name=claims.get("name") or claims.get("cognito:username"),
    )
