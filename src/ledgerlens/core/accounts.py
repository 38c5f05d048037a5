"""
Account values and alias resolution for ledgerlens.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

from .balance import total_as_number
from .currency import ZERO
from .transaction import Transaction

ACCOUNT_SEPARATOR = ":"


def line_value(tx: Transaction, index: int) -> Decimal:
    """
    Return the signed value attributed to the line at ``index``.

    The last line's value is always implied by the rest of the transaction,
    whether or not it carries a stored amount. An unresolved non-last line
    contributes zero.
    """
    lines = tx.expenselines
    if index < 0:
        index += len(lines)
    if index == len(lines) - 1:
        return -total_as_number(tx)
    amount = lines[index].amount
    return amount if amount is not None else ZERO


def value_for_account(tx: Transaction, account: str) -> Decimal:
    """
    Return the value of ``account`` within a transaction.

    The first line whose account or dealiased account equals ``account`` is used.
    A transaction that does not touch the account contributes zero.

    Args:
        tx: Transaction to inspect
        account: Exact account name (raw or dealiased)

    Returns:
        Signed value for the account, ``Decimal("0")`` if not present
    """
    for i, line in enumerate(tx.expenselines):
        if line.matches(account):
            return line_value(tx, i)
    return ZERO


def dealias_account(account: str, aliases: Mapping[str, str]) -> str:
    """
    Rewrite the top-level segment of ``account`` using ``aliases``.

    Only the first segment is considered and the replacement is not aliased
    again.

    Example:
        >>> dealias_account("Exp:Food", {"Exp": "Expenses"})
        'Expenses:Food'
        >>> dealias_account("Cash", {"Cash": "Assets:Cash"})
        'Assets:Cash'
    """
    prefix, sep, rest = account.partition(ACCOUNT_SEPARATOR)
    if sep:
        if prefix and prefix in aliases:
            return aliases[prefix] + sep + rest
    elif account in aliases:
        return aliases[account]
    return account


def apply_aliases(txs: Iterable[Transaction], aliases: Mapping[str, str]) -> None:
    """Set ``dealiased_account`` on every line that names an account."""
    for tx in txs:
        for line in tx.expenselines:
            if line.account:
                line.dealiased_account = dealias_account(line.account, aliases)
