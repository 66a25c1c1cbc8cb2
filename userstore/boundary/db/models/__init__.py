"""
Database models package.

Exports:
  - UserModel: Users table ORM model

Dependencies: sqlalchemy, userstore.boundary.db.base
System role: Database model definitions for domain entities
"""

from userstore.boundary.db.models.user_model import UserModel

__all__ = ["UserModel"]
