# -*- coding: utf-8 -*-
"""Typed records the settlement engine works on.

Everything here is immutable. Anything loosely shaped coming from HTTP or the
database goes through ``normalize`` first.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from .errors import FieldError, ValidationError, INVALID_PRICE, INVALID_AMOUNT
from .numbers import ZERO, money_float, parse_decimal


class FuelType(str, Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"

    @classmethod
    def parse(cls, value: Any) -> "FuelType | None":
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().lower()
        for ft in cls:
            if ft.value.lower() == s:
                return ft
        return None


class DutyState(str, Enum):
    OPENED = "opened"
    CLOSED = "closed"


@dataclass(frozen=True)
class Prices:
    """Per-liter price snapshot taken when a duty is opened."""

    petrol: Decimal
    diesel: Decimal

    @classmethod
    def of(cls, petrol: Any, diesel: Any) -> "Prices":
        errors = []
        values = {}
        for name, raw in (("petrol", petrol), ("diesel", diesel)):
            x = parse_decimal(raw)
            if x is None or x <= 0:
                errors.append(FieldError(name, INVALID_PRICE, f"{name} price must be a number greater than 0"))
            values[name] = x
        if errors:
            raise ValidationError(errors)
        return cls(petrol=values["petrol"], diesel=values["diesel"])

    def for_fuel(self, fuel_type: FuelType) -> Decimal:
        return self.petrol if fuel_type is FuelType.PETROL else self.diesel

    def to_dict(self) -> dict[str, float]:
        return {"petrol": money_float(self.petrol), "diesel": money_float(self.diesel)}


@dataclass(frozen=True)
class PumpInput:
    """Raw pump entry as typed by the worker; numbers may still be strings or blank."""

    pump_number: str
    fuel_type: Any
    opening: Any
    closing: Any


@dataclass(frozen=True)
class PumpReading:
    pump_number: str
    fuel_type: FuelType
    opening: Decimal
    closing: Decimal
    liters: Decimal
    amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "pumpNumber": self.pump_number,
            "fuelType": self.fuel_type.value,
            "opening": float(self.opening),
            "closing": float(self.closing),
            "liters": money_float(self.liters),
            "amount": money_float(self.amount),
        }

    def to_store(self) -> dict[str, str]:
        # exact decimals as strings
        return {
            "pumpNumber": self.pump_number,
            "fuelType": self.fuel_type.value,
            "opening": str(self.opening),
            "closing": str(self.closing),
            "liters": str(self.liters),
            "amount": str(self.amount),
        }


PAYMENT_FIELDS = ("cash", "card", "online", "credit", "testing")
REVENUE_FIELDS = ("cash", "card", "online", "credit")


@dataclass(frozen=True)
class Payments:
    cash: Decimal = ZERO
    card: Decimal = ZERO
    online: Decimal = ZERO
    credit: Decimal = ZERO
    testing: Decimal = ZERO

    @classmethod
    def of(cls, **raw: Any) -> "Payments":
        """Absent or blank amounts count as zero; garbage and negatives are rejected."""
        errors = []
        values: dict[str, Decimal] = {}
        for name in PAYMENT_FIELDS:
            v = raw.get(name)
            if v is None or (isinstance(v, str) and not v.strip()):
                values[name] = ZERO
                continue
            x = parse_decimal(v)
            if x is None or x < 0:
                errors.append(FieldError(name, INVALID_AMOUNT, f"{name} must be a non-negative number"))
                continue
            values[name] = x
        if errors:
            raise ValidationError(errors)
        return cls(**values)

    @property
    def revenue(self) -> Decimal:
        return self.cash + self.card + self.online + self.credit

    @property
    def total_received(self) -> Decimal:
        # testing fuel is given away, not sold
        return self.revenue - self.testing

    @property
    def has_revenue(self) -> bool:
        return any(getattr(self, f) != 0 for f in REVENUE_FIELDS)

    def to_dict(self) -> dict[str, float]:
        return {f: money_float(getattr(self, f)) for f in PAYMENT_FIELDS}


@dataclass(frozen=True)
class WorkerRef:
    """What the engine needs to know about a worker from the directory."""

    id: str
    station_id: str
    name: str
    duty_type: str | None = None
    base_salary: Any = None
    position: str = "cashier"
    active: bool = True


@dataclass(frozen=True)
class DutySettlement:
    id: str | None
    station_id: str
    worker_id: str
    worker_name: str
    duty_type: str | None
    date: str
    pumps: tuple[PumpReading, ...]
    prices: Prices
    state: DutyState = DutyState.OPENED
    opened_at: datetime | None = None
    payments: Payments | None = None
    submitted_at: datetime | None = None

    # --- derived totals ---

    @property
    def petrol_total(self) -> Decimal:
        return sum((p.amount for p in self.pumps if p.fuel_type is FuelType.PETROL), ZERO)

    @property
    def diesel_total(self) -> Decimal:
        return sum((p.amount for p in self.pumps if p.fuel_type is FuelType.DIESEL), ZERO)

    @property
    def total_sales(self) -> Decimal:
        return self.petrol_total + self.diesel_total

    @property
    def total_liters(self) -> Decimal:
        return sum((p.liters for p in self.pumps), ZERO)

    @property
    def total_received(self) -> Decimal | None:
        return self.payments.total_received if self.payments is not None else None

    @property
    def difference(self) -> Decimal | None:
        """Received minus sales. Negative is a shortage, positive an excess."""
        if self.payments is None:
            return None
        return self.payments.total_received - self.total_sales

    @property
    def is_closed(self) -> bool:
        return self.state is DutyState.CLOSED

    @property
    def shortage(self) -> Decimal:
        d = self.difference
        return -d if d is not None and d < 0 else ZERO

    @property
    def excess(self) -> Decimal:
        d = self.difference
        return d if d is not None and d > 0 else ZERO

    def with_id(self, duty_id: str) -> "DutySettlement":
        return replace(self, id=duty_id)

    def closed(self, payments: Payments, submitted_at: datetime) -> "DutySettlement":
        return replace(self, state=DutyState.CLOSED, payments=payments, submitted_at=submitted_at)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "stationId": self.station_id,
            "workerId": self.worker_id,
            "workerName": self.worker_name,
            "dutyType": self.duty_type,
            "date": self.date,
            "state": self.state.value,
            "pumps": [p.to_dict() for p in self.pumps],
            "prices": self.prices.to_dict(),
            "petrolTotal": money_float(self.petrol_total),
            "dieselTotal": money_float(self.diesel_total),
            "totalSales": money_float(self.total_sales),
            "totalLiters": money_float(self.total_liters),
            "openedAt": self.opened_at.isoformat() if self.opened_at else None,
            "payments": None,
            "totalReceived": None,
            "difference": None,
            "submittedAt": None,
        }
        if self.payments is not None:
            out["payments"] = self.payments.to_dict()
            out["totalReceived"] = money_float(self.total_received)
            out["difference"] = money_float(self.difference)
            out["submittedAt"] = self.submitted_at.isoformat() if self.submitted_at else None
        return out


@dataclass(frozen=True)
class MonthlySalaryRecord:
    worker_id: str
    worker_name: str
    month: str
    base_salary: Decimal
    duties_count: int
    total_shortage: Decimal
    total_excess: Decimal

    @property
    def final_salary(self) -> Decimal:
        return self.base_salary - self.total_shortage + self.total_excess

    def to_dict(self) -> dict[str, Any]:
        return {
            "workerId": self.worker_id,
            "workerName": self.worker_name,
            "month": self.month,
            "baseSalary": money_float(self.base_salary),
            "dutiesCount": self.duties_count,
            "totalShortage": money_float(self.total_shortage),
            "totalExcess": money_float(self.total_excess),
            "finalSalary": money_float(self.final_salary),
        }


WORKER_TYPES = ("worker", "helper")


@dataclass(frozen=True)
class AttendanceRecord:
    station_id: str
    date: str
    worker_type: str
    worker_id: str
    present: bool
    source: str = "manual"  # auto|manual
    login_time: datetime | None = None

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (self.station_id, self.date, self.worker_type, self.worker_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stationId": self.station_id,
            "date": self.date,
            "workerType": self.worker_type,
            "workerId": self.worker_id,
            "present": self.present,
            "source": self.source,
            "loginTime": self.login_time.isoformat() if self.login_time else None,
        }


@dataclass(frozen=True)
class SaleItem:
    name: str
    quantity: Decimal
    price: Decimal

    @property
    def total(self) -> Decimal:
        return self.quantity * self.price

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": float(self.quantity),
            "price": money_float(self.price),
            "total": money_float(self.total),
        }


@dataclass(frozen=True)
class DailySale:
    id: str | None
    station_id: str
    date: str
    items: tuple[SaleItem, ...]
    created_by: str | None = None
    created_at: datetime | None = None
    notes: str = ""

    @property
    def total(self) -> Decimal:
        return sum((i.total for i in self.items), ZERO)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "stationId": self.station_id,
            "date": self.date,
            "items": [i.to_dict() for i in self.items],
            "total": money_float(self.total),
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "notes": self.notes,
        }
