"""
Exception hierarchy for the Users data-access layer.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class UserStoreException(Exception):
    """Base exception for all userstore errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(UserStoreException):
    """Raised when caller input has the wrong shape or type."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class StoreError(UserStoreException):
    """Raised when a statement or the connection to the store fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Gateway operation that failed (insert, query_by_name, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class TransactionTimeoutError(StoreError):
    """Raised when a batch transaction runs past its deadline."""

    def __init__(self, elapsed: float, timeout: float) -> None:
        super().__init__(
            f"Transaction exceeded {timeout:.2f}s (elapsed {elapsed:.2f}s)",
            operation="transaction",
            details={"elapsed": round(elapsed, 3), "timeout": timeout},
        )
        self.elapsed = elapsed
        self.timeout = timeout


class BatchInsertError(StoreError):
    """
    Raised when a batch insert was rolled back.

    Nothing from the batch is persisted when this is raised. The original
    failure is available as ``__cause__``.

    Attributes:
        failed_index: Position of the element being processed when the batch
                      failed, or None when no element was at fault (commit
                      failure, waiting for the transaction slot)
        attempted: Number of elements in the batch
        rolled_back: Always True; the transaction was rolled back
        persisted_count: Always 0
    """

    def __init__(
        self,
        attempted: int,
        failed_index: int | None,
        reason: str,
    ) -> None:
        super().__init__(
            f"Batch insert of {attempted} users rolled back: {reason}",
            operation="add_users",
            details={"attempted": attempted, "failed_index": failed_index},
        )
        self.attempted = attempted
        self.failed_index = failed_index
        self.rolled_back = True
        self.persisted_count = 0
