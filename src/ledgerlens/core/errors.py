"""
Error classes for ledgerlens.

This module defines the exceptions raised by the balancing engine and the
document loader. Looking up an account that a transaction does not touch is
not an error: it yields a zero value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .transaction import Transaction


class LedgerError(Exception):
    """Base class for all ledgerlens errors."""


class BalanceError(LedgerError):
    """
    Raised when a transaction cannot be balanced.

    This happens exactly when more than one non-comment expense line has no
    amount, so the missing value is ambiguous. The error is recoverable: callers
    are expected to surface it so the source ledger entry can be fixed.

    Attributes:
        transaction: The offending transaction
        message: Human-readable description without the transaction prefix
    """

    def __init__(self, transaction: Transaction, message: str):
        self.transaction = transaction
        self.message = message
        super().__init__(self._fmt(message))

    def _fmt(self, msg: str) -> str:
        """Prefix the message with the transaction date and payee."""
        tx = self.transaction
        return f"[{tx.date} {tx.payee}] {msg}"


class LoadError(LedgerError, ValueError):
    """Raised when a ledger document cannot be parsed or validated."""
