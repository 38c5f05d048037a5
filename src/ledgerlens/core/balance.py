"""
Balance resolution for ledger transactions.

By double-entry convention any single line of a transaction may omit its
amount; the value is inferred from the remaining lines. The last line is the
balancing line: its value is the inverse of the sum of the others.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ledgerlens.logging_config import get_logger

from .currency import ZERO, format_amount
from .errors import BalanceError
from .transaction import Transaction, clone_transaction

logger = get_logger(__name__)

MULTIPLE_MISSING_MESSAGE = (
    "Transaction has multiple expense lines without an amount. "
    "At most one is allowed."
)


def total_as_number(tx: Transaction) -> Decimal:
    """
    Return the total value of the transaction.

    If the last line carries an amount, the total is its negation. Otherwise the
    amounts of every other line are summed, treating unknown amounts as zero.
    This never fails; resolve missing non-last amounts first for a meaningful
    result.
    """
    lines = tx.expenselines
    if not lines:
        return ZERO

    last = lines[-1]
    if last.amount is not None:
        return -last.amount

    total = ZERO
    for line in lines[:-1]:
        if line.amount is not None:
            total += line.amount
    return total


def currency_of(tx: Transaction, default_currency: str) -> str:
    """
    Return the currency symbol used in this transaction.

    This is the currency of the first expense line that has one, or
    ``default_currency`` when no line specifies a currency.
    """
    for line in tx.expenselines:
        if line.currency:
            return line.currency
    return default_currency


def total(tx: Transaction, default_currency: str) -> str:
    """
    Return the display total of the transaction, e.g. ``"$42.50"``.

    All lines are assumed to use the same currency.
    """
    return currency_of(tx, default_currency) + format_amount(total_as_number(tx))


def fill_missing_amount(tx: Transaction) -> None:
    """
    Infer the single missing amount of a transaction, in place.

    Comment lines (no account, no amount) are never considered missing. When the
    last line is missing, it becomes the inverse of the other lines. When another
    line is missing, it becomes the total minus every remaining line except the
    last line and comment lines. A transaction with no missing amount is left
    untouched, so calling this twice is harmless.

    Args:
        tx: Transaction to repair

    Raises:
        BalanceError: If more than one non-comment line has no amount
    """
    lines = tx.expenselines
    comment_lines: set[int] = set()
    missing_index = -1

    for i, line in enumerate(lines):
        if line.amount is not None:
            continue
        if not line.account:
            comment_lines.add(i)
            continue
        if missing_index != -1:
            raise BalanceError(tx, MULTIPLE_MISSING_MESSAGE)
        missing_index = i

    if missing_index == -1:
        return

    tx_total = total_as_number(tx)
    if missing_index == len(lines) - 1:
        lines[missing_index].amount = -tx_total
    else:
        amount = tx_total
        for i, line in enumerate(lines):
            if i == missing_index or i == len(lines) - 1 or i in comment_lines:
                continue
            amount -= line.amount
        lines[missing_index].amount = amount

    logger.debug(
        "Inferred amount %s for %r on %s %s",
        lines[missing_index].amount,
        lines[missing_index].account,
        tx.date,
        tx.payee,
    )


def resolve_transaction(tx: Transaction) -> Transaction:
    """
    Return a resolved copy of ``tx``, leaving the original untouched.

    Raises:
        BalanceError: If more than one non-comment line has no amount
    """
    resolved = clone_transaction(tx)
    try:
        fill_missing_amount(resolved)
    except BalanceError as exc:
        # Report the caller's transaction, not the private copy
        raise BalanceError(tx, exc.message) from None
    return resolved


def resolve_transactions(
    txs: Iterable[Transaction],
) -> tuple[list[Transaction], list[BalanceError]]:
    """
    Resolve every transaction in place, collecting failures.

    Returns:
        Tuple of (resolved transactions in input order, errors for rejected ones)
    """
    resolved: list[Transaction] = []
    errors: list[BalanceError] = []
    for tx in txs:
        try:
            fill_missing_amount(tx)
        except BalanceError as exc:
            logger.warning("Rejected transaction: %s", exc)
            errors.append(exc)
            continue
        resolved.append(tx)
    return resolved, errors


def is_balanced(tx: Transaction) -> bool:
    """Check that every non-comment line has an amount and they sum to zero."""
    running = ZERO
    for line in tx.expenselines:
        if line.is_comment:
            continue
        if line.amount is None:
            return False
        running += line.amount
    return running == 0
