"""
SQLAlchemy declarative base.

Provides the base class for all ORM models so they register with a
single metadata object.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass
