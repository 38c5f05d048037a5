"""
Load a small household ledger, resolve it and print a few reports.
"""

from __future__ import annotations

from pathlib import Path

from ledgerlens import (
    account_totals,
    build_account_tree,
    filter_by_account,
    filter_transactions,
    format_transaction,
    iter_tree,
    load_ledger,
    period_totals,
    resolve_transactions,
)

LEDGER = Path(__file__).with_name("household.yaml")


def main() -> None:
    doc = load_ledger(LEDGER)
    currency = doc.settings.default_currency

    txs, errors = resolve_transactions(doc.transactions)
    for err in errors:
        print(f"Skipping: {err}")

    print("Accounts")
    accounts = sorted({name for tx in txs for name in tx.accounts()})
    for depth, node in iter_tree(build_account_tree(accounts)):
        print("  " * depth + node.account)

    print("\nBalances")
    totals = account_totals(txs)
    for account, value in totals.items():
        print(f"{currency}{value:>12.2f}  {account}")

    print("\nFood spending per month")
    food = filter_transactions(txs, filter_by_account("Expenses:Food"))
    print(period_totals(food).filter(like="Expenses:Food"))

    print("\nLedger text")
    for tx in txs:
        print(format_transaction(tx, currency))


if __name__ == "__main__":
    main()
