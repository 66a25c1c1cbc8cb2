"""
Base CRUD operations for SQLAlchemy models.

Provides generic create and read operations that can be inherited and
extended by model-specific CRUD classes. Operations flush but never
commit; transaction boundaries belong to the caller.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from userstore.boundary.db.base import Base
from userstore.core.exceptions import StoreError

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    Every SQLAlchemyError is re-raised as StoreError with the original
    exception chained as ``__cause__``.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    def _store_error(self, operation: str, exc: SQLAlchemyError) -> StoreError:
        return StoreError(
            f"{self.model.__name__}.{operation} failed: {type(exc).__name__}",
            operation=operation,
            details={"table": self.model.__tablename__},
        )

    def create(self, session: Session, **kwargs: Any) -> ModelT:
        """
        Insert a new record and flush so the store assigns its primary key.

        Args:
            session: Database session (transaction owned by the caller)
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID

        Raises:
            StoreError: If the insert fails (constraint violation, lost connection)
        """
        instance = self.model(**kwargs)
        session.add(instance)
        try:
            session.flush()
        except SQLAlchemyError as exc:
            raise self._store_error("create", exc) from exc
        return instance

    def count(self, session: Session) -> int:
        """
        Count all records of the model.

        Args:
            session: Database session

        Returns:
            Number of rows in the table
        """
        stmt = select(func.count()).select_from(self.model)
        try:
            return session.execute(stmt).scalar_one()
        except SQLAlchemyError as exc:
            raise self._store_error("count", exc) from exc
