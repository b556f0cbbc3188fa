# -*- coding: utf-8 -*-
"""Manager's non-fuel daily sales (oil, tyres, car wash ...)."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from .errors import FieldError, ValidationError, INVALID_AMOUNT, INVALID_DATE, NO_ITEMS, REQUIRED
from .numbers import ZERO, day_key, parse_day, parse_decimal
from .records import DailySale, SaleItem
from .stores import SalesStore

COMMON_ITEMS = [
    "Engine Oil (1L)",
    "Engine Oil (5L)",
    "Brake Oil",
    "Coolant",
    "Car Tyre",
    "Bike Tyre",
    "Battery",
    "Air Freshener",
    "Car Wash",
    "Puncture Repair",
]


def build_items(rows: Iterable[dict]) -> tuple[SaleItem, ...]:
    errors: list[FieldError] = []
    items: list[SaleItem] = []
    for i, row in enumerate(rows):
        name = str(row.get("name") or "").strip()
        qty = parse_decimal(row.get("quantity"))
        price = parse_decimal(row.get("price"))
        bad = False
        if not name:
            errors.append(FieldError("name", REQUIRED, f"item {i + 1}: name is required", index=i))
            bad = True
        if qty is None or qty <= 0:
            errors.append(FieldError("quantity", INVALID_AMOUNT, f"item {i + 1}: quantity must be greater than 0", index=i))
            bad = True
        if price is None or price < 0:
            errors.append(FieldError("price", INVALID_AMOUNT, f"item {i + 1}: price must be a non-negative number", index=i))
            bad = True
        if not bad:
            items.append(SaleItem(name=name, quantity=qty, price=price))
    if errors:
        raise ValidationError(errors)
    if not items:
        raise ValidationError.single("items", NO_ITEMS, "Please add at least one sale item")
    return tuple(items)


def record_daily_sales(store: SalesStore, station_id: str, rows: Iterable[dict], on_date: Any = None,
                       created_by: str | None = None, notes: str = "",
                       now: datetime | None = None) -> DailySale:
    now = now or datetime.now()
    d = parse_day(on_date) if on_date is not None else now.date()
    if d is None:
        raise ValidationError.single("date", INVALID_DATE, "date must be YYYY-MM-DD")
    sale = DailySale(
        id=None,
        station_id=station_id,
        date=day_key(d),
        items=build_items(rows),
        created_by=created_by,
        created_at=now,
        notes=notes or "",
    )
    return store.add(sale)


def sales_total(sales: Iterable[DailySale]) -> Decimal:
    return sum((s.total for s in sales), ZERO)
