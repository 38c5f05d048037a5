"""
Aggregated views of ledger transactions as pandas objects.

Values are kept as ``Decimal`` (object dtype) so that totals are exact; format
them with :func:`ledgerlens.core.currency.format_amount` for display.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

import pandas as pd

from ledgerlens.core.accounts import ACCOUNT_SEPARATOR, line_value
from ledgerlens.core.currency import ZERO
from ledgerlens.core.transaction import Transaction, normalize_date
from ledgerlens.core.tree import natural_key

POSTING_COLUMNS = ["date", "payee", "account", "value", "currency"]


def postings_frame(txs: Iterable[Transaction]) -> pd.DataFrame:
    """
    Flatten transactions into one row per posting.

    Comment lines are skipped. The ``account`` column holds the dealiased name
    when one is known and ``value`` is the signed value of the line, with the
    last line of each transaction implied from the others.

    Returns:
        DataFrame with columns date, payee, account, value, currency
    """
    records = []
    for tx in txs:
        tx_date = normalize_date(tx.date).astype(object)
        for i, line in enumerate(tx.expenselines):
            if not line.account:
                continue
            records.append(
                {
                    "date": tx_date,
                    "payee": tx.payee,
                    "account": line.dealiased_account or line.account,
                    "value": line_value(tx, i),
                    "currency": line.currency,
                }
            )
    return pd.DataFrame.from_records(records, columns=POSTING_COLUMNS)


def _ancestors(account: str) -> list[str]:
    """Return ``account`` and every parent path, deepest last."""
    parts = account.split(ACCOUNT_SEPARATOR)
    return [ACCOUNT_SEPARATOR.join(parts[: i + 1]) for i in range(len(parts))]


def account_totals(txs: Iterable[Transaction], *, rollup: bool = True) -> pd.Series:
    """
    Sum posting values per account.

    Args:
        txs: Resolved transactions
        rollup: If True, every parent path also carries the sum of its descendants

    Returns:
        Series of Decimal totals indexed by account, in natural account order
    """
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for row in postings_frame(txs).itertuples(index=False):
        targets = _ancestors(row.account) if rollup else [row.account]
        for account in targets:
            totals[account] += row.value

    index = sorted(totals, key=natural_key)
    return pd.Series([totals[a] for a in index], index=index, dtype=object, name="total")


def period_totals(txs: Iterable[Transaction], freq: str = "M") -> pd.DataFrame:
    """
    Sum posting values per account and period.

    Args:
        txs: Resolved transactions
        freq: pandas period frequency ('M', 'Q', 'Y', ...)

    Returns:
        DataFrame indexed by ``pd.Period`` with one column per account; periods
        without activity for an account hold ``Decimal("0")``

    Example:
        >>> monthly = period_totals(txs, "M")
        >>> quarterly = period_totals(txs, "Q")
    """
    postings = postings_frame(txs)
    sums: dict[pd.Period, dict[str, Decimal]] = defaultdict(dict)
    for row in postings.itertuples(index=False):
        period = pd.Period(row.date, freq=freq)
        bucket = sums[period]
        bucket[row.account] = bucket.get(row.account, ZERO) + row.value

    accounts = sorted(set(postings["account"]), key=natural_key)
    periods = sorted(sums)
    data = {
        account: [sums[p].get(account, ZERO) for p in periods] for account in accounts
    }
    out = pd.DataFrame(data, index=pd.PeriodIndex(periods, freq=freq), columns=accounts)
    out.index.name = "period"
    return out
