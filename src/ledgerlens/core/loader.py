"""Utilities for loading parsed ledger transactions from YAML/JSON sources."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from ledgerlens.logging_config import get_logger

from .accounts import apply_aliases
from .currency import to_decimal
from .errors import LoadError
from .transaction import ExpenseLine, Transaction

__all__ = [
    "LoadError",
    "LedgerSettings",
    "LedgerDocument",
    "load_ledger",
    "DEFAULT_CURRENCY",
]

logger = get_logger(__name__)

DEFAULT_CURRENCY = "$"
_RECONCILE_MARKERS = {"", "*", "!"}


@dataclass(slots=True)
class LedgerSettings:
    """Per-document configuration consumed by the engine."""

    default_currency: str = DEFAULT_CURRENCY
    aliases: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class LedgerDocument:
    """Transactions and settings read from one source."""

    transactions: list[Transaction]
    settings: LedgerSettings = field(default_factory=LedgerSettings)
    source: str = "<memory>"


def load_ledger(
    source: str | Path | dict[str, Any], *, format: str | None = None
) -> LedgerDocument:
    """
    Read transactions from YAML/JSON/dict into a :class:`LedgerDocument`.

    A missing or null ``amount`` stays unknown (``None``); an explicit ``0`` stays
    zero. Aliases from the settings are applied to every line.

    Raises:
        FileNotFoundError: If ``source`` is a path that does not exist
        LoadError: If the document is malformed
    """
    mapping, label = _read_source(source, format=format)
    settings = _normalize_settings(mapping.get("settings"), label)
    transactions = _normalize_transactions(mapping.get("transactions"), label)
    apply_aliases(transactions, settings.aliases)
    logger.info("Loaded %d transactions from %s", len(transactions), label)
    return LedgerDocument(transactions=transactions, settings=settings, source=label)


def _read_source(
    source: str | Path | dict[str, Any], *, format: str | None
) -> tuple[dict[str, Any], str]:
    if isinstance(source, dict):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    try:
        if fmt in {"yaml", "yml", ""}:
            data = yaml.safe_load(text)
        elif fmt == "json":
            data = json.loads(text)
        else:
            raise LoadError(f"Unsupported ledger format '{fmt}' for {path}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise LoadError(f"{path}: could not parse document: {exc}") from exc

    if not isinstance(data, dict):
        raise LoadError(f"Ledger document root must be a mapping (source={path})")
    return data, str(path)


def _normalize_settings(raw: Any, label: str) -> LedgerSettings:
    ctx = f"{label}::settings"
    settings = _ensure_dict(raw, ctx)
    currency = settings.get("default_currency")
    if currency is None:
        currency = DEFAULT_CURRENCY
    elif not isinstance(currency, str):
        raise LoadError(f"{ctx}.default_currency: expected a string")

    aliases = _ensure_dict(settings.get("aliases"), f"{ctx}.aliases")
    for key, value in aliases.items():
        if not isinstance(key, str) or not key.strip():
            raise LoadError(f"{ctx}.aliases: keys must be non-empty strings")
        if not isinstance(value, str) or not value.strip():
            raise LoadError(f"{ctx}.aliases[{key}]: expected non-empty string")
    return LedgerSettings(default_currency=currency, aliases=aliases)


def _normalize_transactions(raw: Any, label: str) -> list[Transaction]:
    entries = _ensure_list(raw, f"{label}::transactions")

    transactions: list[Transaction] = []
    for idx, entry in enumerate(entries):
        ctx = f"{label}::transactions[{idx}]"
        data = _ensure_dict(entry, ctx)
        payee = data.get("payee")
        if not isinstance(payee, str):
            raise LoadError(f"{ctx}: 'payee' is required")
        tx_date = _coerce_date(data.get("date"), f"{ctx}.date")
        lines = [
            _normalize_line(line, f"{ctx}.lines[{line_idx}]")
            for line_idx, line in enumerate(_ensure_list(data.get("lines"), f"{ctx}.lines"))
        ]
        if not lines:
            raise LoadError(f"{ctx}: transaction must have at least one line")
        transactions.append(
            Transaction(
                date=tx_date,
                payee=payee,
                expenselines=lines,
                comment=_coerce_optional_str(data.get("comment"), f"{ctx}.comment"),
            )
        )
    return transactions


def _normalize_line(raw: Any, ctx: str) -> ExpenseLine:
    data = _ensure_dict(raw, ctx)
    account = data.get("account") or ""
    if not isinstance(account, str):
        raise LoadError(f"{ctx}.account: expected a string")
    try:
        amount = to_decimal(data.get("amount"))
    except ValueError as exc:
        raise LoadError(f"{ctx}.amount: {exc}") from exc
    reconcile = data.get("reconcile") or ""
    if reconcile not in _RECONCILE_MARKERS:
        raise LoadError(f"{ctx}.reconcile: expected one of '*', '!' or empty")
    return ExpenseLine(
        account=account,
        amount=amount,
        currency=_coerce_optional_str(data.get("currency"), f"{ctx}.currency"),
        dealiased_account=_coerce_optional_str(
            data.get("dealiased_account"), f"{ctx}.dealiased_account"
        ),
        comment=_coerce_optional_str(data.get("comment"), f"{ctx}.comment"),
        reconcile=reconcile,
    )


def _coerce_date(value: Any, ctx: str) -> date:
    if value is None:
        raise LoadError(f"{ctx}: 'date' is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip().replace("/", "-"))
        except ValueError as exc:
            raise LoadError(f"{ctx}: invalid ISO date '{value}'") from exc
    raise LoadError(f"{ctx}: expected ISO date string")


def _coerce_optional_str(value: Any, ctx: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise LoadError(f"{ctx}: expected a string")
    return value


def _ensure_dict(value: Any, ctx: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise LoadError(f"{ctx}: expected a mapping")
    return deepcopy(value)


def _ensure_list(value: Any, ctx: str) -> list[Any]:
    if value is None:
        raise LoadError(f"{ctx}: expected a list")
    if not isinstance(value, list):
        raise LoadError(f"{ctx}: expected a list")
    return list(value)
