"""
Core module.

Contains the exception hierarchy shared by the gateway and service layers.
"""

from userstore.core.exceptions import (
    BatchInsertError,
    StoreError,
    TransactionTimeoutError,
    UserStoreException,
    ValidationError,
)

__all__ = [
    "UserStoreException",
    "ValidationError",
    "StoreError",
    "TransactionTimeoutError",
    "BatchInsertError",
]
