"""
CRUD operations for database models.

Exports base CRUD class and the user CRUD implementation with a
pre-instantiated singleton for direct use.

Usage:
    from userstore.boundary.db.CRUD import user_crud

    with session_factory() as session:
        users = user_crud.query_users_older_than(session, 30, 10)
"""

from userstore.boundary.db.CRUD.base_crud import BaseCRUD
from userstore.boundary.db.CRUD.user_crud import (
    UserCRUD,
    decode_settings_key,
    to_user,
    user_crud,
)

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "decode_settings_key",
    "to_user",
]
