"""
Render transactions back to ledger-file text.
"""

from __future__ import annotations

from .currency import format_amount
from .transaction import ExpenseLine, Transaction

INDENT = "    "
AMOUNT_GAP = "    "


def format_transaction(
    tx: Transaction, currency_symbol: str, *, preserve_details: bool = False
) -> str:
    """
    Convert a transaction into the text stored in a ledger file.

    The result starts with a blank line. Every line but the last is written with
    its amount; the last line's amount is implied and never printed. Lines that
    are still unresolved are written without an amount.

    By default comments, per-line currency symbols and reconciliation markers are
    dropped, and comment lines are left out. Pass ``preserve_details=True`` to
    keep them.

    Example:
        >>> print(format_transaction(tx, "$"))
        <BLANKLINE>
        2024-01-05 Grocer
            Expenses:Food    $30.00
            Assets:Cash
    """
    header = f"{tx.date} {tx.payee}"
    if preserve_details and tx.comment:
        header += f"  ; {tx.comment}"

    lines = tx.expenselines
    rendered = []
    for i, line in enumerate(lines):
        is_last = i == len(lines) - 1
        if preserve_details:
            rendered.append(_format_detailed_line(line, currency_symbol, is_last))
        elif line.is_comment:
            continue
        elif is_last or line.amount is None:
            rendered.append(f"{INDENT}{line.account}")
        else:
            rendered.append(
                f"{INDENT}{line.account}{AMOUNT_GAP}{currency_symbol}"
                f"{format_amount(line.amount)}"
            )
    return "\n" + header + "\n" + "\n".join(rendered)


def _format_detailed_line(line: ExpenseLine, currency_symbol: str, is_last: bool) -> str:
    if line.is_comment:
        return f"{INDENT}; {line.comment or ''}".rstrip()

    text = INDENT
    if line.reconcile:
        text += f"{line.reconcile} "
    text += line.account
    if not is_last and line.amount is not None:
        text += f"{AMOUNT_GAP}{line.currency or currency_symbol}{format_amount(line.amount)}"
    if line.comment:
        text += f"  ; {line.comment}"
    return text
