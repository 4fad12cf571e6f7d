"""Stream and JavaScript transactions."""

from .stream import (
    TRANSACTION_HEADER,
    TransactionAPI,
    TransactionHandle,
    TransactionOptions,
    TransactionStatus,
)

__all__ = [
    "TRANSACTION_HEADER",
    "TransactionAPI",
    "TransactionHandle",
    "TransactionOptions",
    "TransactionStatus",
]
