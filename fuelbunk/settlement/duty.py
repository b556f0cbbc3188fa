# -*- coding: utf-8 -*-
"""Duty calculator: open a shift with pump readings, close it with payments."""
from __future__ import annotations

from datetime import date as date_cls, datetime
from typing import Iterable

from .errors import (
    FieldError, NotFoundError, StateError, ValidationError,
    NO_PUMPS, NO_PAYMENT, NOT_OPEN, INVALID_DATE,
)
from .numbers import day_key, parse_day
from .pumps import price_pump
from .records import DutySettlement, DutyState, Payments, Prices, PumpInput, PumpReading, WorkerRef
from .stores import DutyStore


def price_pumps(readings: Iterable[PumpInput], prices: Prices) -> tuple[PumpReading, ...]:
    """Validate and price every pump; one ValidationError carrying all bad pumps."""
    readings = list(readings)
    if not readings:
        raise ValidationError.single("pumps", NO_PUMPS, "Add at least one pump reading")

    priced: list[PumpReading] = []
    errors: list[FieldError] = []
    for i, r in enumerate(readings):
        number = str(r.pump_number or "").strip() or str(i + 1)
        try:
            priced.append(price_pump(number, r.fuel_type, r.opening, r.closing, prices))
        except ValidationError as e:
            errors.extend(FieldError(x.field, x.code, x.message, pump=x.pump, index=i) for x in e.errors)
    if errors:
        raise ValidationError(errors)
    return tuple(priced)


def open_duty(store: DutyStore, worker: WorkerRef, readings: Iterable[PumpInput], prices: Prices,
              on_date: date_cls | str | None = None, now: datetime | None = None) -> DutySettlement:
    """
    Create an opened duty for ``worker``.

    ``prices`` is the station's price snapshot at submission time; later price
    edits never reach this duty. ``on_date`` defaults to the day of ``now``.
    """
    now = now or datetime.now()
    if on_date is None:
        key = now.date().isoformat()
    else:
        d = parse_day(on_date)
        if d is None:
            raise ValidationError.single("date", INVALID_DATE, "date must be YYYY-MM-DD")
        key = day_key(d)

    pumps = price_pumps(readings, prices)
    duty = DutySettlement(
        id=None,
        station_id=worker.station_id,
        worker_id=worker.id,
        worker_name=worker.name,
        duty_type=worker.duty_type,
        date=key,
        pumps=pumps,
        prices=prices,
        state=DutyState.OPENED,
        opened_at=now,
    )
    return store.add(duty)


def get_duty(store: DutyStore, duty_id: str) -> DutySettlement:
    duty = store.get(duty_id)
    if duty is None:
        raise NotFoundError("duty", duty_id)
    return duty


def close_duty(store: DutyStore, duty_id: str, payments: Payments,
               now: datetime | None = None) -> DutySettlement:
    """
    Add payments to an opened duty and make it final.

    The state is checked here and again by the store when writing, so two
    racing closes of one duty cannot both succeed.
    """
    duty = get_duty(store, duty_id)
    if duty.state is not DutyState.OPENED:
        raise StateError(f"duty {duty_id} is already {duty.state.value}", NOT_OPEN,
                         duty_id=duty_id, state=duty.state.value)
    if not payments.has_revenue:
        raise ValidationError.single("payments", NO_PAYMENT, "Please enter at least one payment amount")

    closed = duty.closed(payments, now or datetime.now())
    return store.close(closed)


def submit_duty(store: DutyStore, worker: WorkerRef, readings: Iterable[PumpInput], prices: Prices,
                payments: Payments, on_date: date_cls | str | None = None,
                now: datetime | None = None) -> DutySettlement:
    """Open and close in one go, the way the duty entry form submits."""
    if not payments.has_revenue:
        # fail before anything is written
        raise ValidationError.single("payments", NO_PAYMENT, "Please enter at least one payment amount")
    duty = open_duty(store, worker, readings, prices, on_date=on_date, now=now)
    return close_duty(store, duty.id, payments, now=now)
