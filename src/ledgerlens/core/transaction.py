"""
Transaction data model for ledgerlens.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

import numpy as np

from .currency import to_decimal


def normalize_date(value: Any) -> np.datetime64:
    """
    Normalize a transaction date to day-precision numpy datetime64.

    Accepts: str | date | datetime | np.datetime64
    Returns: np.datetime64 with 'D' precision for consistent comparison

    Ledger-style strings using slashes (``2024/01/05``) are accepted as well.
    """
    if isinstance(value, np.datetime64):
        return value.astype("datetime64[D]")
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return np.datetime64(value.isoformat(), "D")
    return np.datetime64(str(value).strip().replace("/", "-")).astype("datetime64[D]")


@dataclass
class ExpenseLine:
    """
    A single line (posting) of a transaction.

    Attributes:
        account: Colon-delimited account path, empty for a comment-only line
        amount: Signed amount, or None when the amount is unknown and must be inferred
        currency: Currency symbol used on this line, if any
        dealiased_account: Account path after alias substitution, once computed
        comment: Free-form line comment
        reconcile: Reconciliation marker ("", "*" or "!")
    """

    account: str = ""
    amount: Optional[Decimal] = None
    currency: Optional[str] = None
    dealiased_account: Optional[str] = None
    comment: Optional[str] = None
    reconcile: str = ""

    def __post_init__(self):
        self.amount = to_decimal(self.amount)

    @property
    def is_comment(self) -> bool:
        """A comment line has neither an account nor an amount."""
        return not self.account and self.amount is None

    def matches(self, account: str) -> bool:
        """Check if the raw or dealiased account equals ``account``."""
        return bool(
            (self.account and self.account == account)
            or (self.dealiased_account and self.dealiased_account == account)
        )


@dataclass
class Transaction:
    """
    A double-entry ledger transaction.

    The order of ``expenselines`` matters: the last line is the balancing line
    whose value is always implied by the others.

    Attributes:
        date: Transaction date (date, datetime, ISO string or np.datetime64)
        payee: Display name of the payee
        expenselines: Lines of the transaction
        comment: Free-form transaction comment
    """

    date: Any
    payee: str
    expenselines: list[ExpenseLine] = field(default_factory=list)
    comment: Optional[str] = None

    @property
    def last_line(self) -> Optional[ExpenseLine]:
        return self.expenselines[-1] if self.expenselines else None

    def accounts(self) -> list[str]:
        """Distinct accounts touched by this transaction, in line order."""
        seen: list[str] = []
        for line in self.expenselines:
            name = line.dealiased_account or line.account
            if name and name not in seen:
                seen.append(name)
        return seen

    def __str__(self) -> str:
        return f"{self.date} {self.payee} ({len(self.expenselines)} lines)"


def clone_transaction(tx: Transaction) -> Transaction:
    """Return a deep copy so a transaction can be resolved without aliasing."""
    return deepcopy(tx)


def first_date(txs: Iterable[Transaction], today: Optional[date] = None) -> date:
    """
    Return the date of the earliest transaction.

    The result is never later than ``today`` (the current date by default), so an
    empty list yields ``today``.
    """
    earliest = normalize_date(today or date.today())
    for tx in txs:
        current = normalize_date(tx.date)
        if current <= earliest:
            earliest = current
    return earliest.astype(object)
