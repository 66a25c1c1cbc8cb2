"""
Database boundary layer: ORM model, CRUD operations, and connection management.

Exports:
  - Base: Declarative base for ORM models
  - get_engine(), get_session_factory(): Lazily created shared connection handles
  - shares_connection(): Whether a factory hands out one static connection
  - UserModel: Users table ORM model
  - user_crud, UserCRUD, BaseCRUD: Gateway primitives

Dependencies: sqlalchemy, userstore.configs
System role: Data gateway owning the single database handle of the process
"""

from userstore.boundary.db.base import Base
from userstore.boundary.db.connection import get_engine, get_session_factory, shares_connection
from userstore.boundary.db.models.user_model import UserModel
from userstore.boundary.db.CRUD import BaseCRUD, UserCRUD, user_crud

__all__ = [
    "Base",
    "get_engine",
    "get_session_factory",
    "shares_connection",
    "UserModel",
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
]
