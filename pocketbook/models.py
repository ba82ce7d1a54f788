"""Data models for the pocketbook ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Union

from .validators import (
    CATEGORIES,
    normalize_amount,
    parse_date,
    quantize_cents,
    validate_enum,
    validate_required_str,
)

__all__ = ["Expense", "Goal", "decimal_from_json", "decimal_to_json"]

Number = Union[int, float]


def decimal_to_json(value: Decimal) -> Number:
    """Render a Decimal as a JSON number, keeping whole values integral.

    Amounts are bounded cents (see MAX_AMOUNT), which a float represents exactly.
    """
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def decimal_from_json(value: Any, field: str) -> Decimal:
    """Read a JSON number back into a Decimal."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TypeError(f"{field} must be a number")
    # str() first so floats keep their shortest repr instead of binary noise.
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"{field} must be finite")
    return amount


def _read_id(data: Dict[str, Any]) -> str:
    value = data["id"]
    if not isinstance(value, str) or not value:
        raise TypeError("id must be a non-empty string")
    return value


@dataclass(frozen=True)
class Expense:
    id: str
    description: str
    amount: Decimal
    date: date
    category: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to the stored JSON shape."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": decimal_to_json(self.amount),
            "date": self.date.isoformat(),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Hydrate an Expense from its stored JSON shape."""
        amount = normalize_amount(decimal_from_json(data["amount"], "amount"), "amount")
        raw_date = data["date"]
        if not isinstance(raw_date, str):
            raise TypeError("date must be a string")
        return cls(
            id=_read_id(data),
            description=validate_required_str(data["description"], "description"),
            amount=amount,
            date=parse_date(raw_date),
            category=validate_enum(data["category"], "category", CATEGORIES),
        )


@dataclass(frozen=True)
class Goal:
    id: str
    description: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")

    @property
    def remaining(self) -> Decimal:
        return self.target_amount - self.current_amount

    @property
    def progress(self) -> Decimal:
        """Percentage of the target reached, between 0 and 100."""
        return self.current_amount / self.target_amount * 100

    @property
    def is_complete(self) -> bool:
        return self.current_amount >= self.target_amount

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the goal to the stored JSON shape."""
        return {
            "id": self.id,
            "description": self.description,
            "targetAmount": decimal_to_json(self.target_amount),
            "currentAmount": decimal_to_json(self.current_amount),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        """Hydrate a Goal, rejecting records outside 0 <= current <= target."""
        target = normalize_amount(decimal_from_json(data["targetAmount"], "targetAmount"), "targetAmount")
        current = decimal_from_json(data["currentAmount"], "currentAmount")
        if not Decimal("0") <= current <= target:
            raise ValueError("currentAmount must lie between zero and targetAmount")
        return cls(
            id=_read_id(data),
            description=validate_required_str(data["description"], "description"),
            target_amount=target,
            current_amount=quantize_cents(current),
        )
