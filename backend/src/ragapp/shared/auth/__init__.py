"""Shared authentication module for ragapp handlers."""

from .claims import get_current_user
from .models import User

__all__ = [
    "get_current_user",
    "User",
]
