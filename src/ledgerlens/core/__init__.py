"""
Core module for ledgerlens.

This module contains the balancing, filtering and aggregation engine that
operates on parsed ledger transactions.
"""

from .accounts import apply_aliases, dealias_account, line_value, value_for_account
from .balance import (
    currency_of,
    fill_missing_amount,
    is_balanced,
    resolve_transaction,
    resolve_transactions,
    total,
    total_as_number,
)
from .errors import BalanceError, LedgerError, LoadError
from .filters import (
    Filter,
    filter_by_account,
    filter_by_end_date,
    filter_by_payee_exact,
    filter_by_start_date,
    filter_transactions,
    narrow_transactions,
)
from .formatting import format_transaction
from .loader import LedgerDocument, LedgerSettings, load_ledger
from .transaction import (
    ExpenseLine,
    Transaction,
    clone_transaction,
    first_date,
    normalize_date,
)
from .tree import (
    AccountTreeNode,
    build_account_tree,
    insert_account,
    iter_tree,
    natural_key,
    sort_account_tree,
)

__all__ = [
    # Errors
    "LedgerError",
    "BalanceError",
    "LoadError",
    # Data model
    "ExpenseLine",
    "Transaction",
    "clone_transaction",
    "first_date",
    "normalize_date",
    # Balance resolution
    "total_as_number",
    "currency_of",
    "total",
    "fill_missing_amount",
    "resolve_transaction",
    "resolve_transactions",
    "is_balanced",
    # Accounts and aliases
    "line_value",
    "value_for_account",
    "dealias_account",
    "apply_aliases",
    # Filters
    "Filter",
    "filter_by_account",
    "filter_by_payee_exact",
    "filter_by_start_date",
    "filter_by_end_date",
    "filter_transactions",
    "narrow_transactions",
    # Account tree
    "AccountTreeNode",
    "insert_account",
    "sort_account_tree",
    "build_account_tree",
    "iter_tree",
    "natural_key",
    # Formatting
    "format_transaction",
    # Loading
    "LedgerDocument",
    "LedgerSettings",
    "load_ledger",
]
