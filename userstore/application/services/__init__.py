"""Service orchestrators."""

from .user_service import LIMIT, UserService

__all__ = [
    "LIMIT",
    "UserService",
]
