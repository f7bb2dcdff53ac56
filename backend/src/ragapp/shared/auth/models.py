"""Authentication models shared across handlers."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """Authenticated caller taken from the API Gateway authorizer claims."""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
