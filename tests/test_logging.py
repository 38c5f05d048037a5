"""
Tests for the ledgerlens logging setup.
"""

import io
import logging
from datetime import date

import pytest

from ledgerlens.core.balance import fill_missing_amount
from ledgerlens.core.transaction import ExpenseLine, Transaction
from ledgerlens.logging_config import configure_logging, get_logger, reset_logging


@pytest.fixture(autouse=True)
def _isolate_logging():
    reset_logging()
    yield
    reset_logging()


def test_get_logger_namespaces():
    assert get_logger("cli").name == "ledgerlens.cli"
    assert get_logger("ledgerlens.core.balance").name == "ledgerlens.core.balance"


def test_configure_logging_is_idempotent():
    stream = io.StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    configure_logging(level=logging.DEBUG, stream=stream)
    assert len(logging.getLogger("ledgerlens").handlers) == 1


def test_debug_log_on_inferred_amount():
    stream = io.StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    tx = Transaction(date(2024, 1, 5), "Grocer", [ExpenseLine("Exp", 30), ExpenseLine("Cash")])
    fill_missing_amount(tx)

    output = stream.getvalue()
    assert "DEBUG ledgerlens.core.balance" in output
    assert "Inferred amount -30 for 'Cash'" in output


def test_reset_restores_propagation():
    configure_logging(stream=io.StringIO())
    reset_logging()
    root = logging.getLogger("ledgerlens")
    assert root.propagate
    assert not root.handlers
