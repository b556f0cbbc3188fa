# -*- coding: utf-8 -*-
"""
Boundary normalization.

Clients send pump readings, payments and worker rows under several field
names (camelCase, snake_case, older short names). They are mapped here once;
nothing past this module looks at raw dicts.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from .errors import ValidationError, INVALID_RECORD
from .records import Payments, PumpInput, WorkerRef

PUMP_ALIASES = {
    "pump_number": ("pumpNumber", "pump_number", "pump_no"),
    "fuel_type": ("fuelType", "fuel_type", "fuel"),
    "opening": ("opening", "opening_reading"),
    "closing": ("closing", "closing_reading"),
}

PAYMENT_ALIASES = {
    "cash": ("cash", "cashAmount", "cash_amount"),
    "card": ("card", "cardAmount", "card_amount"),
    "online": ("online", "onlineAmount", "online_amount"),
    "credit": ("credit", "creditAmount", "credit_amount"),
    "testing": ("testing", "testingAmount", "testing_amount"),
}


def pick(raw: Mapping[str, Any], names: tuple[str, ...], default: Any = None) -> Any:
    """First non-null value among ``names``."""
    for n in names:
        v = raw.get(n)
        if v is not None:
            return v
    return default


def normalize_pump(raw: Mapping[str, Any]) -> PumpInput:
    return PumpInput(
        pump_number=str(pick(raw, PUMP_ALIASES["pump_number"], "") or "").strip(),
        fuel_type=pick(raw, PUMP_ALIASES["fuel_type"]),
        opening=pick(raw, PUMP_ALIASES["opening"]),
        closing=pick(raw, PUMP_ALIASES["closing"]),
    )


def normalize_pumps(raw: Any) -> list[PumpInput]:
    """A list of pump dicts, or the same list JSON-encoded."""
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise ValidationError.single("pumps", INVALID_RECORD, "pump readings are not valid JSON")
    if not isinstance(raw, list):
        raise ValidationError.single("pumps", INVALID_RECORD, "pump readings must be a list")
    out = []
    for i, row in enumerate(raw):
        if not isinstance(row, Mapping):
            raise ValidationError.single("pumps", INVALID_RECORD, f"pump {i + 1} must be an object", index=i)
        out.append(normalize_pump(row))
    return out


def normalize_payments(raw: Mapping[str, Any] | None) -> Payments:
    if not isinstance(raw, Mapping):
        raw = {}
    # payments may be nested under "payments" or flat on the body
    if isinstance(raw.get("payments"), Mapping):
        raw = raw["payments"]
    return Payments.of(**{k: pick(raw, names) for k, names in PAYMENT_ALIASES.items()})


def normalize_worker(raw: Mapping[str, Any]) -> WorkerRef:
    active = pick(raw, ("active", "is_active"), True)
    return WorkerRef(
        id=str(raw.get("id")),
        station_id=str(pick(raw, ("stationId", "station_id"), "")),
        name=str(raw.get("name") or ""),
        duty_type=pick(raw, ("dutyType", "duty_type")),
        base_salary=pick(raw, ("baseSalary", "base_salary"), 0),
        position=str(raw.get("position") or "cashier"),
        active=bool(active),
    )
