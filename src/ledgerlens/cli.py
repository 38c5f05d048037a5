"""
Command-line interface for ledgerlens.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal

from ledgerlens import __version__
from ledgerlens.core import (
    BalanceError,
    LedgerDocument,
    LoadError,
    Transaction,
    build_account_tree,
    filter_by_account,
    filter_by_end_date,
    filter_by_payee_exact,
    filter_by_start_date,
    filter_transactions,
    format_transaction,
    iter_tree,
    load_ledger,
    resolve_transactions,
)
from ledgerlens.core.currency import format_amount
from ledgerlens.logging_config import configure_logging, get_logger
from ledgerlens.report import account_totals, postings_frame

logger = get_logger(__name__)


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal amounts and dates."""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return format_amount(obj)
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


def _dump_json(data) -> None:
    json.dump(data, sys.stdout, indent=2, cls=DecimalEncoder)
    sys.stdout.write("\n")


def _load(args) -> LedgerDocument:
    return load_ledger(args.input, format=args.format)


def _select(args, txs: list[Transaction]) -> list[Transaction]:
    """
    Apply the command-line filters.

    Account and payee filters are a union; date bounds narrow the result further.
    """
    matchers = [filter_by_account(a) for a in args.account or []]
    matchers += [filter_by_payee_exact(p) for p in args.payee or []]
    selected = filter_transactions(txs, *matchers)
    if args.start:
        selected = filter_transactions(selected, filter_by_start_date(args.start))
    if args.end:
        selected = filter_transactions(selected, filter_by_end_date(args.end))
    return list(selected)


def _resolved(args) -> tuple[LedgerDocument, list[Transaction]]:
    doc = _load(args)
    resolved, errors = resolve_transactions(doc.transactions)
    for err in errors:
        print(f"Skipping: {err}", file=sys.stderr)
    return doc, _select(args, resolved)


def cmd_accounts(args) -> int:
    """Print the sorted account tree."""
    _, txs = _resolved(args)
    tree = build_account_tree(a for tx in txs for a in tx.accounts())

    if args.json:
        _dump_json([node.to_dict() for node in tree])
    else:
        for depth, node in iter_tree(tree):
            print(f"{'  ' * depth}{node.account}")
    return 0


def cmd_balance(args) -> int:
    """Print the account tree with rolled-up totals."""
    doc, txs = _resolved(args)
    totals = account_totals(txs)
    tree = build_account_tree(totals.index)
    symbol = doc.settings.default_currency

    if args.json:
        _dump_json({account: value for account, value in totals.items()})
        return 0

    for depth, node in iter_tree(tree):
        amount = f"{symbol}{format_amount(totals[node.id])}"
        print(f"{amount:>16}  {'  ' * depth}{node.account}")
    return 0


def cmd_print(args) -> int:
    """Print the selected transactions as ledger text."""
    doc, txs = _resolved(args)
    for tx in txs:
        print(
            format_transaction(
                tx, doc.settings.default_currency, preserve_details=args.details
            )
        )
    return 0


def cmd_register(args) -> int:
    """Print one row per posting."""
    doc, txs = _resolved(args)
    frame = postings_frame(txs)

    if args.json:
        _dump_json(frame.to_dict("records"))
        return 0

    symbol = doc.settings.default_currency
    for row in frame.itertuples(index=False):
        amount = f"{row.currency or symbol}{format_amount(row.value)}"
        print(f"{row.date} {row.payee[:24]:<24} {row.account:<36} {amount:>14}")
    return 0


def cmd_validate(args) -> int:
    """Check that every transaction can be balanced."""
    doc = _load(args)
    errors: list[BalanceError] = resolve_transactions(doc.transactions)[1]

    if args.json:
        _dump_json(
            {
                "source": doc.source,
                "transactions": len(doc.transactions),
                "errors": [
                    {
                        "date": err.transaction.date,
                        "payee": err.transaction.payee,
                        "message": err.message,
                    }
                    for err in errors
                ],
            }
        )
    elif errors:
        for err in errors:
            print(f"❌ {err}")
    else:
        print(f"✅ {len(doc.transactions)} transactions balance")
    return 1 if errors else 0


def _add_common(parser: argparse.ArgumentParser, *, filters: bool = True) -> None:
    parser.add_argument("-i", "--input", required=True, help="Ledger YAML/JSON file")
    parser.add_argument(
        "--format", choices=["yaml", "json"], help="Input format (default: by suffix)"
    )
    parser.add_argument("--json", action="store_true", help="Output in JSON format")
    if not filters:
        return
    parser.add_argument(
        "--account",
        action="append",
        help="Keep transactions touching an account with this prefix (repeatable)",
    )
    parser.add_argument(
        "--payee", action="append", help="Keep transactions with this exact payee"
    )
    parser.add_argument("--start", help="Earliest date, inclusive (YYYY-MM-DD)")
    parser.add_argument("--end", help="Latest date, inclusive (YYYY-MM-DD)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ledgerlens",
        description="ledgerlens - balance, filter and aggregate ledger transactions",
    )
    parser.add_argument(
        "--version", action="version", version=f"ledgerlens {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log verbosity"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    accounts_parser = subparsers.add_parser("accounts", help="Show the account tree")
    _add_common(accounts_parser)
    accounts_parser.set_defaults(func=cmd_accounts)

    balance_parser = subparsers.add_parser(
        "balance", help="Show per-account totals rolled up the account tree"
    )
    _add_common(balance_parser)
    balance_parser.set_defaults(func=cmd_balance)

    print_parser = subparsers.add_parser("print", help="Print transactions as ledger text")
    _add_common(print_parser)
    print_parser.add_argument(
        "--details",
        action="store_true",
        help="Keep comments, per-line currencies and reconciliation markers",
    )
    print_parser.set_defaults(func=cmd_print)

    register_parser = subparsers.add_parser("register", help="List postings")
    _add_common(register_parser)
    register_parser.set_defaults(func=cmd_register)

    validate_parser = subparsers.add_parser(
        "validate", help="Check that every transaction balances"
    )
    _add_common(validate_parser, filters=False)
    validate_parser.set_defaults(func=cmd_validate)
    validate_parser.epilog = """
A transaction may leave at most one expense line without an amount; the
value is inferred from the other lines. Comment lines never count.
    """

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    configure_logging(level=level)

    try:
        return args.func(args)
    except (FileNotFoundError, LoadError) as e:
        logger.debug("Failed to load %s", args.input, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
