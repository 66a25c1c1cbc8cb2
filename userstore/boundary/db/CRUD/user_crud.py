"""
User CRUD operations.

Read and insert primitives for the Users table. Every value reaches the
database as a bound parameter, including LIMIT. Rows are translated into
the ``User`` domain model, with the ``key`` field unwrapped from the
serialized settings document.

Dependencies: sqlalchemy, json, userstore.boundary.db.models
System role: User persistence operations
"""

import json

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from userstore.boundary.db.CRUD.base_crud import BaseCRUD
from userstore.boundary.db.models.user_model import UserModel
from userstore.core.exceptions import ValidationError
from userstore.models.user import SettingsKey, User
from userstore.observability.logger import get_logger

logger = get_logger(__name__)

SETTINGS_KEY = "key"


def decode_settings_key(raw: str | None) -> SettingsKey:
    """
    Extract the ``key`` field from a serialized settings document.

    Args:
        raw: Settings column value (JSON text or NULL)

    Returns:
        The scalar stored under ``key``, or None when the document is
        missing, malformed, not an object, lacks the field, or holds a
        nested value there
    """
    if raw is None:
        return None
    try:
        document = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring malformed settings document (%d chars)", len(str(raw)))
        return None

    if not isinstance(document, dict):
        return None
    value = document.get(SETTINGS_KEY)
    if isinstance(value, (dict, list)):
        return None
    return value


def to_user(row: UserModel) -> User:
    """Convert an ORM row into the User result shape."""
    return User(
        id=row.id,
        name=row.name,
        last_name=row.last_name,
        origin=row.origin,
        age=row.age,
        key=decode_settings_key(row.settings),
    )


class UserCRUD(BaseCRUD[UserModel]):
    """
    CRUD operations for UserModel.

    Extends BaseCRUD with the age-threshold query, exact name lookup and
    single-row insert used by the user service.
    """

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    def query_users_older_than(
        self,
        session: Session,
        age_from: int,
        limit: int,
    ) -> list[User]:
        """
        Retrieve users strictly older than ``age_from``.

        Args:
            session: Database session
            age_from: Exclusive lower age bound
            limit: Maximum number of rows to return

        Returns:
            Up to ``limit`` users ordered by id; empty when none match

        Raises:
            ValidationError: If limit is negative
            StoreError: If the query fails
        """
        if limit < 0:
            raise ValidationError("limit must not be negative", field="limit")

        stmt = (
            select(UserModel)
            .where(UserModel.age > age_from)
            .order_by(UserModel.id)
            .limit(limit)
        )
        try:
            rows = session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise self._store_error("query_users_older_than", exc) from exc
        return [to_user(row) for row in rows]

    def query_user_by_name(self, session: Session, name: str) -> User | None:
        """
        Retrieve the user with exactly this name.

        Args:
            session: Database session
            name: Name to match verbatim

        Returns:
            The lowest-id matching user, or None when no row matches
        """
        stmt = (
            select(UserModel)
            .where(UserModel.name == name)
            .order_by(UserModel.id)
            .limit(1)
        )
        try:
            row = session.execute(stmt).scalars().first()
        except SQLAlchemyError as exc:
            raise self._store_error("query_user_by_name", exc) from exc
        if row is None:
            return None
        return to_user(row)

    def insert_user(
        self,
        session: Session,
        name: str,
        last_name: str,
        age: int,
    ) -> int:
        """
        Insert one user and return the id assigned by the store.

        The row is flushed, not committed.

        Args:
            session: Database session inside the caller's transaction
            name: First name
            last_name: Family name
            age: Age in years

        Returns:
            int: Store-assigned primary key

        Raises:
            StoreError: If the insert fails
        """
        user = self.create(session, name=name, last_name=last_name, age=age)
        return user.id


user_crud = UserCRUD()
