"""
Transaction filters.

A filter is a plain predicate over a transaction. :func:`filter_transactions`
keeps the transactions matched by *any* of the supplied filters; to require
*all* of them, narrow the list one filter at a time with
:func:`narrow_transactions`.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from .transaction import Transaction, normalize_date

Filter = Callable[[Transaction], bool]

__all__ = [
    "Filter",
    "filter_by_account",
    "filter_by_payee_exact",
    "filter_by_start_date",
    "filter_by_end_date",
    "filter_transactions",
    "narrow_transactions",
]


def filter_by_account(account: str) -> Filter:
    """
    Match transactions with a line whose account starts with ``account``.

    Both the raw and the dealiased account names are checked. The match is a
    plain string prefix, so ``"Exp"`` also matches ``"Expenses:Food"``.
    """

    def _matches(tx: Transaction) -> bool:
        return any(
            (line.account and line.account.startswith(account))
            or (line.dealiased_account and line.dealiased_account.startswith(account))
            for line in tx.expenselines
        )

    return _matches


def filter_by_payee_exact(payee: str) -> Filter:
    """Match transactions whose payee equals ``payee`` exactly."""

    def _matches(tx: Transaction) -> bool:
        return tx.payee == payee

    return _matches


def filter_by_start_date(start: Any) -> Filter:
    """Match transactions dated on or after ``start``."""
    bound = normalize_date(start)

    def _matches(tx: Transaction) -> bool:
        return bool(bound <= normalize_date(tx.date))

    return _matches


def filter_by_end_date(end: Any) -> Filter:
    """Match transactions dated on or before ``end``."""
    bound = normalize_date(end)

    def _matches(tx: Transaction) -> bool:
        return bool(bound >= normalize_date(tx.date))

    return _matches


def filter_transactions(
    txs: Sequence[Transaction], *filters: Filter
) -> Sequence[Transaction]:
    """
    Keep the transactions matched by at least one filter.

    With no filters the input is returned unchanged: an empty filter set means
    no restriction. Relative order is preserved.
    """
    if not filters:
        return txs
    return [tx for tx in txs if any(fn(tx) for fn in filters)]


def narrow_transactions(
    txs: Sequence[Transaction], *filters: Filter
) -> Sequence[Transaction]:
    """Keep the transactions matched by every filter."""
    for fn in filters:
        txs = filter_transactions(txs, fn)
    return txs
