# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any

from .errors import (
    FieldError, ValidationError, MISSING_READING, INVALID_RANGE, INVALID_FUEL_TYPE, INVALID_AMOUNT, INVALID_PRICE,
)
from .numbers import ZERO, parse_decimal
from .records import FuelType, Prices, PumpReading


def pump_errors(pump_number: Any, fuel_type: Any, opening: Any, closing: Any) -> list[FieldError]:
    """Every problem with one pump entry, in field order."""
    label = str(pump_number or "").strip() or "?"
    errors: list[FieldError] = []

    if FuelType.parse(fuel_type) is None:
        errors.append(FieldError("fuelType", INVALID_FUEL_TYPE,
                                 f"Pump {label}: fuel type must be Petrol or Diesel", pump=label))

    o = parse_decimal(opening)
    c = parse_decimal(closing)
    for name, raw, x in (("opening", opening, o), ("closing", closing, c)):
        if x is None:
            errors.append(FieldError(name, MISSING_READING,
                                     f"Pump {label}: please enter a numeric {name} reading", pump=label))
        elif x < 0:
            errors.append(FieldError(name, INVALID_AMOUNT,
                                     f"Pump {label}: {name} reading cannot be negative", pump=label))

    if o is not None and c is not None and c < o:
        errors.append(FieldError("closing", INVALID_RANGE,
                                 f"Pump {label}: closing reading cannot be less than opening", pump=label))
    return errors


def validate_pump_reading(pump_number: Any, fuel_type: Any, opening: Any, closing: Any,
                          price: Any) -> PumpReading:
    """
    Check one opening/closing pair and price it.

    liters = closing - opening, amount = liters * price. Nothing is rounded here.
    Raises ValidationError listing every bad field of this pump.
    """
    errors = pump_errors(pump_number, fuel_type, opening, closing)
    p = parse_decimal(price)
    if p is None or p <= 0:
        label = str(pump_number or "").strip() or "?"
        errors.append(FieldError("price", INVALID_PRICE,
                                 f"Pump {label}: no valid price for this fuel", pump=label))
    if errors:
        raise ValidationError(errors)

    o = parse_decimal(opening)
    c = parse_decimal(closing)
    liters = max(ZERO, c - o)
    return PumpReading(
        pump_number=str(pump_number).strip(),
        fuel_type=FuelType.parse(fuel_type),
        opening=o,
        closing=c,
        liters=liters,
        amount=liters * p,
    )


def price_pump(pump_number: Any, fuel_type: Any, opening: Any, closing: Any,
               prices: Prices) -> PumpReading:
    """Same as validate_pump_reading, taking the price from a station snapshot."""
    ft = FuelType.parse(fuel_type)
    if ft is None:
        # report fuel and reading problems together
        raise ValidationError(pump_errors(pump_number, fuel_type, opening, closing))
    return validate_pump_reading(pump_number, ft, opening, closing, prices.for_fuel(ft))
