# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")


D = lambda v: Decimal(str(v)) if v is not None else ZERO


def parse_decimal(value: Any) -> Decimal | None:
    """Lenient number parse; None for absent, blank, non-numeric or non-finite input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    s = str(value).strip().replace(",", "")
    if not s:
        return None
    try:
        x = Decimal(s)
    except InvalidOperation:
        return None
    return x if x.is_finite() else None


def money(value: Any) -> Decimal:
    """Round to paise. Presentation only."""
    return D(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_float(value: Any) -> float:
    return float(money(value))


def day_key(value: Any) -> str:
    """YYYY-MM-DD key for a date, datetime or ISO string."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    s = str(value or "").strip()
    return s[:10]


def parse_day(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value or "").strip()[:10])
    except ValueError:
        return None


def parse_month(value: Any) -> str | None:
    """Normalized YYYY-MM or None."""
    s = str(value or "").strip()
    try:
        y, m = map(int, s.split("-"))
    except ValueError:
        return None
    if not (1 <= m <= 12) or y < 1:
        return None
    return f"{y:04d}-{m:02d}"
