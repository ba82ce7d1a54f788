"""Validation helpers shared by the ledger and its front ends."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional

from .exceptions import ValidationError

CATEGORIES = (
    "food",
    "transport",
    "utilities",
    "entertainment",
    "shopping",
    "other",
)

DEFAULT_CATEGORY = "food"

CENT = Decimal("0.01")
# Amounts stay below 15 significant digits, so a JSON float holds them exactly.
MAX_AMOUNT = Decimal("1000000000000")

# Locale form written by the browser widget (toLocaleDateString, en-US).
LEGACY_DATE_FORMAT = "%m/%d/%Y"


def _to_decimal(raw: object) -> Optional[Decimal]:
    """Return a finite Decimal for raw input, or None when it is not a number."""
    if raw is None or isinstance(raw, bool):
        return None
    text = raw.strip() if isinstance(raw, str) else str(raw)
    if not text:
        return None
    try:
        amount = Decimal(text)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def quantize_cents(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def normalize_amount(amount: Decimal, field: str) -> Decimal:
    """Bound a positive amount and round it to whole cents."""
    # Check the bound first, quantize traps on values beyond the context precision.
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field} must not exceed {MAX_AMOUNT:,}")
    amount = quantize_cents(amount)
    if amount <= 0:
        raise ValidationError(f"{field} must be at least {CENT}")
    return amount


def parse_amount(raw: object, field: str) -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError(f"{field} cannot be empty")
    amount = _to_decimal(raw)
    if amount is None:
        raise ValidationError(f"{field} must be a numeric value")
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return normalize_amount(amount, field)


def parse_contribution(raw: object) -> Decimal:
    """Parse a goal contribution; anything but a positive number counts as zero."""
    amount = _to_decimal(raw)
    if amount is None or amount <= 0:
        return Decimal("0")
    # No goal can need more than MAX_AMOUNT, larger input is capped before rounding.
    return quantize_cents(min(amount, MAX_AMOUNT))


def validate_required_str(value: object, field: str, max_length: Optional[int] = None) -> str:
    if value is None:
        raise ValidationError(f"{field} cannot be empty")
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if max_length is not None and len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def validate_enum(value: object, field: str, allowed: Iterable[str]) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    canonical = value.strip().lower()
    if canonical not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(sorted(allowed))}")
    return canonical


def parse_date(value: str) -> date:
    """Parse an ISO date, falling back to the widget's M/D/YYYY form."""
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.strptime(value, LEGACY_DATE_FORMAT).date()
