"""
ledgerlens - Balancing and Aggregation Engine for Plain-Text Ledger Transactions

ledgerlens works on transactions that have already been parsed from a
ledger/hledger style journal. It infers the amount a posting leaves out, filters
transactions, resolves account aliases and builds sorted account hierarchies
for aggregated reports.

Key Features:
- **Balance Inference**: Any single expense line may omit its amount; the value
  is inferred from the other lines
- **Exact Arithmetic**: Amounts are ``Decimal`` values, rounded only for display
- **Composable Filters**: Account, payee and date predicates, combined as a union
- **Account Trees**: Colon-delimited accounts grouped into a naturally sorted tree
- **Aliases**: Top-level account segments rewritten through an alias table
- **Reports**: Per-account and per-period totals as pandas objects

Quick Start:
    ```python
    from datetime import date
    from ledgerlens import ExpenseLine, Transaction, fill_missing_amount, total

    tx = Transaction(
        date=date(2024, 1, 5),
        payee="Grocer",
        expenselines=[
            ExpenseLine(account="Expenses:Food", amount="30"),
            ExpenseLine(account="Assets:Cash"),
        ],
    )
    fill_missing_amount(tx)
    total(tx, "$")  # "$30.00"
    ```
"""

# Version information
__version__ = "0.1.0"
__description__ = "Balancing and aggregation engine for plain-text ledger transactions"

from .core import (
    AccountTreeNode,
    BalanceError,
    ExpenseLine,
    Filter,
    LedgerDocument,
    LedgerError,
    LedgerSettings,
    LoadError,
    Transaction,
    apply_aliases,
    build_account_tree,
    currency_of,
    dealias_account,
    fill_missing_amount,
    filter_by_account,
    filter_by_end_date,
    filter_by_payee_exact,
    filter_by_start_date,
    filter_transactions,
    first_date,
    format_transaction,
    insert_account,
    is_balanced,
    iter_tree,
    load_ledger,
    narrow_transactions,
    resolve_transaction,
    resolve_transactions,
    sort_account_tree,
    total,
    total_as_number,
    value_for_account,
)
from .report import account_totals, period_totals, postings_frame

__all__ = [
    # Data model
    "Transaction",
    "ExpenseLine",
    "AccountTreeNode",
    "first_date",
    # Errors
    "LedgerError",
    "BalanceError",
    "LoadError",
    # Balance resolution
    "total_as_number",
    "currency_of",
    "total",
    "fill_missing_amount",
    "resolve_transaction",
    "resolve_transactions",
    "is_balanced",
    # Accounts
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
    "insert_account",
    "sort_account_tree",
    "build_account_tree",
    "iter_tree",
    # Formatting
    "format_transaction",
    # Loading
    "LedgerDocument",
    "LedgerSettings",
    "load_ledger",
    # Reports
    "postings_frame",
    "account_totals",
    "period_totals",
    # Version info
    "__version__",
    "__description__",
]
