"""
Tests for balance resolution: totals, currencies and missing amounts.
"""

from datetime import date
from decimal import Decimal

import pytest

from ledgerlens.core.accounts import value_for_account
from ledgerlens.core.balance import (
    currency_of,
    fill_missing_amount,
    is_balanced,
    resolve_transaction,
    resolve_transactions,
    total,
    total_as_number,
)
from ledgerlens.core.errors import BalanceError
from ledgerlens.core.transaction import ExpenseLine, Transaction


def _tx(*lines, payee="Grocer"):
    return Transaction(date=date(2024, 1, 5), payee=payee, expenselines=list(lines))


class TestTotalAsNumber:
    """Test the transaction total."""

    def test_negates_last_line_when_present(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12.50")),
            ExpenseLine("Expenses:Drinks", Decimal("7.50")),
            ExpenseLine("Assets:Cash", Decimal("-20")),
        )
        assert total_as_number(tx) == Decimal("20")

    def test_sums_other_lines_when_last_missing(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12.50")),
            ExpenseLine("Expenses:Drinks", Decimal("7.50")),
            ExpenseLine("Assets:Cash"),
        )
        assert total_as_number(tx) == Decimal("20.00")

    def test_absent_amounts_count_as_zero(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12.50")),
            ExpenseLine("Expenses:Drinks"),
            ExpenseLine("Assets:Cash"),
        )
        assert total_as_number(tx) == Decimal("12.50")

    def test_zero_last_amount_is_known(self):
        """A stored zero is an amount, not a missing value."""
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("5")),
            ExpenseLine("Assets:Cash", Decimal("0")),
        )
        assert total_as_number(tx) == 0

    def test_no_float_drift(self):
        tx = _tx(
            ExpenseLine("A", Decimal("0.1")),
            ExpenseLine("B", Decimal("0.2")),
            ExpenseLine("C"),
        )
        assert total_as_number(tx) == Decimal("0.3")

    def test_empty_transaction(self):
        assert total_as_number(_tx()) == 0


class TestCurrencyAndTotal:
    """Test currency lookup and display totals."""

    def test_first_line_with_currency_wins(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("10")),
            ExpenseLine("Expenses:Fees", Decimal("1"), currency="€"),
            ExpenseLine("Assets:Cash", currency="£"),
        )
        assert currency_of(tx, "$") == "€"

    def test_default_currency(self):
        tx = _tx(ExpenseLine("Expenses:Food", Decimal("10")), ExpenseLine("Assets:Cash"))
        assert currency_of(tx, "$") == "$"

    def test_total_has_two_decimals(self):
        tx = _tx(ExpenseLine("Expenses:Food", Decimal("30")), ExpenseLine("Assets:Cash"))
        assert total(tx, "$") == "$30.00"

    def test_total_rounds_only_for_display(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("10.005")),
            ExpenseLine("Assets:Cash"),
        )
        assert total(tx, "$") == "$10.01"
        assert total_as_number(tx) == Decimal("10.005")

    def test_zero_total_is_not_negative(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("0")),
            ExpenseLine("Assets:Cash", Decimal("0")),
        )
        assert total(tx, "$") == "$0.00"


class TestFillMissingAmount:
    """Test inference of the single missing amount."""

    def test_last_line_missing(self):
        tx = _tx(ExpenseLine("Exp", Decimal("30")), ExpenseLine("Cash"))
        fill_missing_amount(tx)
        assert tx.expenselines[1].amount == Decimal("-30")

    def test_last_line_missing_multiple_lines(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12.25")),
            ExpenseLine("Expenses:Drinks", Decimal("7.75")),
            ExpenseLine("Assets:Cash"),
        )
        fill_missing_amount(tx)
        assert tx.expenselines[2].amount == Decimal("-20.00")
        assert is_balanced(tx)

    def test_middle_line_missing(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12")),
            ExpenseLine("Expenses:Drinks"),
            ExpenseLine("Assets:Cash", Decimal("-20")),
        )
        fill_missing_amount(tx)
        assert tx.expenselines[1].amount == Decimal("8")
        assert is_balanced(tx)

    def test_first_line_missing(self):
        tx = _tx(
            ExpenseLine("Expenses:Food"),
            ExpenseLine("Expenses:Drinks", Decimal("5")),
            ExpenseLine("Assets:Cash", Decimal("-20")),
        )
        fill_missing_amount(tx)
        assert tx.expenselines[0].amount == Decimal("15")

    def test_comment_lines_are_skipped(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12")),
            ExpenseLine("", comment="split with Bob"),
            ExpenseLine("Expenses:Drinks"),
            ExpenseLine("Assets:Cash", Decimal("-20")),
        )
        fill_missing_amount(tx)
        assert tx.expenselines[1].amount is None
        assert tx.expenselines[2].amount == Decimal("8")

    def test_comment_line_does_not_count_as_missing(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12")),
            ExpenseLine(""),
            ExpenseLine("Assets:Cash"),
        )
        fill_missing_amount(tx)
        assert tx.expenselines[2].amount == Decimal("-12")

    def test_trailing_comment_line_is_still_last(self):
        """
        A comment line at the end takes the balancing position.

        The missing line is then treated as a middle line and resolves to zero,
        so the account values of this transaction do not sum to zero.
        """
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("30")),
            ExpenseLine("Assets:Cash"),
            ExpenseLine("", comment="receipt lost"),
        )
        fill_missing_amount(tx)

        assert tx.expenselines[1].amount == 0
        assert tx.expenselines[2].amount is None
        values = [value_for_account(tx, account) for account in tx.accounts()]
        assert values == [Decimal("30"), Decimal("0")]
        assert sum(values) == Decimal("30")

    def test_multiple_missing_raises(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12")),
            ExpenseLine("Expenses:Drinks"),
            ExpenseLine("Assets:Cash"),
        )
        with pytest.raises(BalanceError, match="multiple expense lines") as excinfo:
            fill_missing_amount(tx)
        assert excinfo.value.transaction is tx
        assert "Grocer" in str(excinfo.value)
        # Nothing was modified
        assert tx.expenselines[1].amount is None
        assert tx.expenselines[2].amount is None

    def test_nothing_missing_is_noop(self):
        tx = _tx(ExpenseLine("Exp", Decimal("30")), ExpenseLine("Cash", Decimal("-30")))
        fill_missing_amount(tx)
        assert [line.amount for line in tx.expenselines] == [Decimal("30"), Decimal("-30")]

    def test_idempotent(self):
        tx = _tx(ExpenseLine("Exp", Decimal("30")), ExpenseLine("Cash"))
        fill_missing_amount(tx)
        fill_missing_amount(tx)
        assert tx.expenselines[1].amount == Decimal("-30")

    def test_both_total_paths_agree(self):
        tx = _tx(
            ExpenseLine("Expenses:Food", Decimal("12.34")),
            ExpenseLine("Expenses:Drinks"),
            ExpenseLine("Assets:Cash", Decimal("-20")),
        )
        fill_missing_amount(tx)
        non_last = sum(line.amount for line in tx.expenselines[:-1])
        assert non_last == total_as_number(tx)


class TestResolveTransactions:
    """Test the pure and batch resolution helpers."""

    def test_resolve_transaction_leaves_original_untouched(self):
        tx = _tx(ExpenseLine("Exp", Decimal("30")), ExpenseLine("Cash"))
        resolved = resolve_transaction(tx)
        assert resolved is not tx
        assert resolved.expenselines[1].amount == Decimal("-30")
        assert tx.expenselines[1].amount is None

    def test_resolve_transaction_error_references_original(self):
        tx = _tx(ExpenseLine("Exp"), ExpenseLine("Cash"))
        with pytest.raises(BalanceError) as excinfo:
            resolve_transaction(tx)
        assert excinfo.value.transaction is tx

    def test_batch_collects_errors(self, caplog):
        good = _tx(ExpenseLine("Exp", Decimal("30")), ExpenseLine("Cash"), payee="Good")
        bad = _tx(ExpenseLine("Exp"), ExpenseLine("Cash"), payee="Bad")

        with caplog.at_level("WARNING", logger="ledgerlens"):
            resolved, errors = resolve_transactions([good, bad])

        assert resolved == [good]
        assert len(errors) == 1
        assert errors[0].transaction is bad
        assert "Rejected transaction" in caplog.text

    def test_is_balanced_requires_amounts(self):
        tx = _tx(ExpenseLine("Exp", Decimal("30")), ExpenseLine("Cash"))
        assert not is_balanced(tx)
        fill_missing_amount(tx)
        assert is_balanced(tx)
