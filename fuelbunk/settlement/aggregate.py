# -*- coding: utf-8 -*-
"""Dashboard folds over persisted duties. Read-only."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Any, Iterable

from .errors import ValidationError, INVALID_DATE
from .numbers import ZERO, day_key, money_float, parse_day
from .records import DutySettlement

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


@dataclass
class WorkerStat:
    worker_id: str
    name: str
    duties: int = 0
    sales: Decimal = ZERO
    shortage: Decimal = ZERO
    excess: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "workerId": self.worker_id,
            "name": self.name,
            "duties": self.duties,
            "sales": money_float(self.sales),
            "shortage": money_float(self.shortage),
            "excess": money_float(self.excess),
        }


@dataclass
class DailyStats:
    date: str
    total_sales: Decimal = ZERO
    petrol_sales: Decimal = ZERO
    diesel_sales: Decimal = ZERO
    total_shortage: Decimal = ZERO
    total_excess: Decimal = ZERO
    duties_count: int = 0
    payments: dict[str, Decimal] = field(default_factory=lambda: {
        "cash": ZERO, "card": ZERO, "online": ZERO, "credit": ZERO, "testing": ZERO,
    })
    workers: dict[str, WorkerStat] = field(default_factory=dict)

    @property
    def worker_stats(self) -> list[WorkerStat]:
        return list(self.workers.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "totalSales": money_float(self.total_sales),
            "petrolSales": money_float(self.petrol_sales),
            "dieselSales": money_float(self.diesel_sales),
            "totalShortage": money_float(self.total_shortage),
            "totalExcess": money_float(self.total_excess),
            "dutiesCount": self.duties_count,
            "paymentBreakdown": {k: money_float(v) for k, v in self.payments.items() if k != "testing"},
            "testingFuel": money_float(self.payments["testing"]),
            "workerStats": [w.to_dict() for w in self.worker_stats],
        }


@dataclass(frozen=True)
class TrendPoint:
    date: str
    day: str
    petrol: Decimal
    diesel: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "day": self.day,
            "petrol": money_float(self.petrol),
            "diesel": money_float(self.diesel),
        }


def _key(on_date) -> str:
    d = parse_day(on_date)
    if d is None:
        raise ValidationError.single("date", INVALID_DATE, "date must be YYYY-MM-DD")
    return day_key(d)


def settled(duties: Iterable[DutySettlement]) -> list[DutySettlement]:
    """Closed duties only; an opened duty has no payments to reconcile yet."""
    return [d for d in duties if d.is_closed]


def daily_stats(duties: Iterable[DutySettlement], on_date) -> DailyStats:
    key = _key(on_date)
    stats = DailyStats(date=key)
    for d in settled(duties):
        if d.date != key:
            continue
        stats.duties_count += 1
        stats.petrol_sales += d.petrol_total
        stats.diesel_sales += d.diesel_total
        stats.total_sales += d.total_sales
        stats.total_shortage += d.shortage
        stats.total_excess += d.excess
        for k in stats.payments:
            stats.payments[k] += getattr(d.payments, k)

        # same worker twice in a day: add up
        ws = stats.workers.get(d.worker_id)
        if ws is None:
            ws = stats.workers[d.worker_id] = WorkerStat(worker_id=d.worker_id, name=d.worker_name)
        ws.duties += 1
        ws.sales += d.total_sales
        ws.shortage += d.shortage
        ws.excess += d.excess
    return stats


def weekly_trend(duties: Iterable[DutySettlement], end_date) -> list[TrendPoint]:
    """Seven days ending at ``end_date``, oldest first, zero-filled."""
    end = parse_day(end_date)
    if end is None:
        raise ValidationError.single("date", INVALID_DATE, "date must be YYYY-MM-DD")
    duties = settled(duties)
    points = []
    for i in range(6, -1, -1):
        day = end - timedelta(days=i)
        s = daily_stats(duties, day)
        points.append(TrendPoint(date=day.isoformat(), day=DAY_NAMES[day.weekday()],
                                 petrol=s.petrol_sales, diesel=s.diesel_sales))
    return points
