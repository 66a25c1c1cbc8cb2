"""
User service orchestrator.

Business-level operations over the Users gateway: age-threshold listing,
lookup by a list of names, and the all-or-nothing batch insert.

Dependencies: userstore.boundary.db, userstore.configs, pydantic
System role: User use case orchestration
"""

import logging
import threading
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from time import monotonic
from typing import Any

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from userstore.boundary.db.connection import get_session_factory, shares_connection
from userstore.boundary.db.CRUD.user_crud import user_crud
from userstore.configs import get_settings
from userstore.core.exceptions import (
    BatchInsertError,
    StoreError,
    TransactionTimeoutError,
    ValidationError,
)
from userstore.models.user import NewUser, User
from userstore.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
)
from userstore.observability.logger import get_logger

logger = get_logger(__name__)

LIMIT = 10

# Batches run one at a time so two callers never share a transaction.
# On a single shared connection reads take it too.
_transaction_lock = threading.Lock()


class UserService:
    """
    User service orchestrator.

    Each read runs in its own short session. Each batch insert runs in its
    own session and transaction, committed only after every element was
    inserted. When the factory hands every session the same connection,
    reads wait for any open batch so they never see or discard its rows.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        transaction_timeout: float | None = None,
    ) -> None:
        """
        Initialize user service.

        Args:
            session_factory: Session factory; defaults to the shared one
            transaction_timeout: Seconds a batch insert may take, including
                                 the wait for its transaction slot
        """
        self.session_factory = session_factory or get_session_factory()
        if transaction_timeout is None:
            transaction_timeout = get_settings().database.transaction_timeout
        self.transaction_timeout = transaction_timeout
        self._serialize_reads = shares_connection(self.session_factory)

    def get_users(self, age_from: int) -> list[User]:
        """
        List up to LIMIT users strictly older than ``age_from``.

        Args:
            age_from: Exclusive lower age bound

        Returns:
            list[User]: Matching users ordered by id

        Raises:
            TransactionTimeoutError: If a batch holds the shared connection
                                     past the transaction timeout
        """
        with self._read_session() as session:
            return user_crud.query_users_older_than(session, age_from, LIMIT)

    def get_by_names(self, names: Sequence[str]) -> list[User | None]:
        """
        Look up users by exact name.

        Args:
            names: Names to look up

        Returns:
            One entry per input name in input order; None where no user
            has that name

        Raises:
            ValidationError: If names is a bare string
            TransactionTimeoutError: If a batch holds the shared connection
                                     past the transaction timeout
        """
        if isinstance(names, (str, bytes)):
            raise ValidationError("names must be a sequence of strings", field="names")

        with self._read_session() as session:
            return [user_crud.query_user_by_name(session, name) for name in names]

    def add_users(self, users: Sequence[NewUser | Mapping[str, Any]]) -> list[int]:
        """
        Insert a batch of users atomically.

        Args:
            users: Elements with name, lastName and age

        Returns:
            list[int]: Store-assigned ids in input order

        Raises:
            ValidationError: If an element is malformed; nothing is written
            BatchInsertError: If the batch was rolled back; nothing is persisted
        """
        batch = self._validate_batch(users)
        if not batch:
            return []

        started = monotonic()
        if not _transaction_lock.acquire(timeout=self.transaction_timeout):
            elapsed = monotonic() - started
            timeout_error = TransactionTimeoutError(elapsed, self.transaction_timeout)
            raise BatchInsertError(
                len(batch), None, "timed out waiting for transaction slot"
            ) from timeout_error
        try:
            return self._insert_batch(batch, started)
        finally:
            _transaction_lock.release()

    @contextmanager
    def _read_session(self) -> Iterator[Session]:
        if not self._serialize_reads:
            with self.session_factory() as session:
                yield session
            return

        started = monotonic()
        if not _transaction_lock.acquire(timeout=self.transaction_timeout):
            raise TransactionTimeoutError(monotonic() - started, self.transaction_timeout)
        try:
            with self.session_factory() as session:
                yield session
        finally:
            _transaction_lock.release()

    def _validate_batch(self, users: Sequence[NewUser | Mapping[str, Any]]) -> list[NewUser]:
        if isinstance(users, (str, bytes, Mapping)):
            raise ValidationError("users must be a sequence of user entries", field="users")

        batch = []
        for index, item in enumerate(users):
            if isinstance(item, NewUser):
                batch.append(item)
                continue
            try:
                batch.append(NewUser.model_validate(item))
            except pydantic.ValidationError as exc:
                raise ValidationError(
                    f"Invalid user entry at position {index}",
                    field=f"users[{index}]",
                    details={"errors": exc.errors(include_url=False)},
                ) from exc
        return batch

    def _insert_batch(self, batch: list[NewUser], started: float) -> list[int]:
        ids: list[int] = []
        with self.session_factory() as session:
            session.begin()
            log_with_context(
                logger, logging.INFO, "Batch transaction open",
                state="TransactionOpen", batch_size=len(batch),
            )

            for index, new_user in enumerate(batch):
                try:
                    ids.append(
                        user_crud.insert_user(
                            session, new_user.name, new_user.last_name, new_user.age
                        )
                    )
                    elapsed = monotonic() - started
                    if elapsed > self.transaction_timeout:
                        raise TransactionTimeoutError(elapsed, self.transaction_timeout)
                except StoreError as exc:
                    self._rollback(session, exc, failed_index=index, batch_size=len(batch))
                    raise BatchInsertError(len(batch), index, exc.message) from exc

            try:
                session.commit()
            except SQLAlchemyError as exc:
                self._rollback(session, exc, failed_index=None, batch_size=len(batch))
                raise BatchInsertError(
                    len(batch), None, f"commit failed: {type(exc).__name__}"
                ) from exc

        log_with_context(
            logger, logging.INFO, "Batch insert committed",
            state="Committed", batch_size=len(batch),
        )
        return ids

    def _rollback(
        self,
        session: Session,
        cause: Exception,
        failed_index: int | None,
        batch_size: int,
    ) -> None:
        log_with_context(
            logger, logging.WARNING, "Rolling back batch insert",
            state="RolledBackReported", batch_size=batch_size,
            failed_index=failed_index, error_type=type(cause).__name__,
        )
        try:
            session.rollback()
        except SQLAlchemyError as exc:
            # Closing the session still discards the uncommitted transaction
            log_exception_with_context(
                logger, "Rollback failed", exc, batch_size=batch_size,
            )
