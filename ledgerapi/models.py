"""Domain records and monetary value handling."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


class MoneyError(ValueError):
    """Raised when a value cannot be read as an amount of money."""


def parse_money(value: Any) -> Decimal:
    """Parse a decimal string such as ``"100.00"`` into a ``Decimal``."""
    if not isinstance(value, str):
        raise MoneyError(f"invalid money value: expected a string, got {type(value).__name__}")
    try:
        if not value or value != value.strip() or "_" in value:
            raise InvalidOperation
        amount = Decimal(value)
        if not amount.is_finite():
            raise InvalidOperation
    except InvalidOperation as exc:
        raise MoneyError(f"invalid money value: can't convert {value!r} to decimal") from exc
    return amount


def money_to_json(amount: Decimal) -> str:
    """Render an amount in plain notation with trailing fractional zeros removed."""
    if not amount.is_finite():
        raise MoneyError(f"invalid money value: {amount}")
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass
class Account:
    """An account and its current balance, kept as stored text."""

    account_id: int
    balance: str

    def to_dict(self) -> dict[str, Any]:
        return {"account_id": self.account_id, "balance": self.balance}


@dataclass
class Transaction:
    """A transfer of money between two accounts."""

    source_account_id: int
    destination_account_id: int
    amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_account_id": self.source_account_id,
            "destination_account_id": self.destination_account_id,
            "amount": money_to_json(self.amount),
        }