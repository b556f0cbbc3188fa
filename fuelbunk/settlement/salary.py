# -*- coding: utf-8 -*-
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from .errors import ValidationError, INVALID_MONTH
from .numbers import ZERO, money_float, parse_decimal, parse_month
from .records import DutySettlement, MonthlySalaryRecord, WorkerRef


def safe_base_salary(value: Any) -> Decimal:
    """Missing, garbage or negative base salary counts as 0."""
    x = parse_decimal(value)
    return x if x is not None and x > 0 else ZERO


def _month(month: Any) -> str:
    m = parse_month(month)
    if m is None:
        raise ValidationError.single("month", INVALID_MONTH, "month must be YYYY-MM")
    return m


def monthly_salary(worker_id: str, base_salary: Any, duties: Iterable[DutySettlement], month: Any,
                   worker_name: str = "") -> MonthlySalaryRecord | None:
    """
    Month-end pay for one worker.

    final = base - shortages + excesses over the worker's closed duties in
    ``month``. Returns None when there is nothing to pay and nothing to show
    (no duties and zero base).
    """
    m = _month(month)
    base = safe_base_salary(base_salary)
    count = 0
    shortage = ZERO
    excess = ZERO
    name = worker_name
    for d in duties:
        if d.worker_id != worker_id or d.date[:7] != m or not d.is_closed:
            continue
        count += 1
        shortage += d.shortage
        excess += d.excess
        name = name or d.worker_name

    if count == 0 and base == 0:
        return None
    return MonthlySalaryRecord(
        worker_id=worker_id,
        worker_name=name,
        month=m,
        base_salary=base,
        duties_count=count,
        total_shortage=shortage,
        total_excess=excess,
    )


def salary_report(workers: Iterable[WorkerRef], duties: Iterable[DutySettlement],
                  month: Any) -> list[MonthlySalaryRecord]:
    m = _month(month)
    month_duties = [d for d in duties if d.date[:7] == m]
    out = []
    for w in workers:
        rec = monthly_salary(w.id, w.base_salary, month_duties, m, worker_name=w.name)
        if rec is not None:
            out.append(rec)
    return out


def report_totals(records: Iterable[MonthlySalaryRecord]) -> dict[str, float]:
    base = shortage = excess = final = ZERO
    for r in records:
        base += r.base_salary
        shortage += r.total_shortage
        excess += r.total_excess
        final += r.final_salary
    return {
        "baseSalary": money_float(base),
        "totalShortage": money_float(shortage),
        "totalExcess": money_float(excess),
        "finalSalary": money_float(final),
    }
