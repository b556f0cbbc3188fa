# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Mapping

from .errors import FieldError, NotFoundError, ValidationError, INVALID_DATE, INVALID_MONTH, INVALID_RECORD, DUPLICATE_RECORD
from .numbers import day_key, parse_day, parse_month
from .records import AttendanceRecord, WORKER_TYPES
from .stores import AttendanceStore


def _truthy(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(v)


def _day(on_date: Any) -> str:
    d = parse_day(on_date)
    if d is None:
        raise ValidationError.single("date", INVALID_DATE, "date must be YYYY-MM-DD")
    return day_key(d)


def mark_auto_present(store: AttendanceStore, station_id: str, worker_id: str, on_date: Any = None,
                      now: datetime | None = None, worker_type: str = "worker") -> AttendanceRecord:
    """First login of the day marks the worker present. Later logins change nothing."""
    now = now or datetime.now()
    key = _day(on_date if on_date is not None else now.date())
    existing = store.get(station_id, key, worker_type, worker_id)
    if existing is not None:
        return existing
    rec = AttendanceRecord(
        station_id=station_id,
        date=key,
        worker_type=worker_type,
        worker_id=worker_id,
        present=True,
        source="auto",
        login_time=now,
    )
    return store.add_if_absent(rec)


def build_sheet(station_id: str, on_date: Any, rows: Iterable[dict],
                known: set[tuple[str, str]] | None = None) -> list[AttendanceRecord]:
    """Check a manual sheet: known worker types, ids present, no person twice.

    With ``known`` given, every (workerType, workerId) must be in it.
    """
    key = _day(on_date)
    errors: list[FieldError] = []
    seen: set[tuple[str, str]] = set()
    out: list[AttendanceRecord] = []
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            errors.append(FieldError("attendance", INVALID_RECORD, f"row {i + 1}: must be an object", index=i))
            continue
        wtype = str(row.get("workerType") or row.get("worker_type") or "").strip().lower()
        wid = str(row.get("workerId") or row.get("worker_id") or "").strip()
        if wtype not in WORKER_TYPES:
            errors.append(FieldError("workerType", INVALID_RECORD, f"row {i + 1}: workerType must be worker or helper", index=i))
            continue
        if not wid:
            errors.append(FieldError("workerId", INVALID_RECORD, f"row {i + 1}: workerId is required", index=i))
            continue
        if (wtype, wid) in seen:
            errors.append(FieldError("workerId", DUPLICATE_RECORD, f"row {i + 1}: {wtype} {wid} listed twice", index=i))
            continue
        if known is not None and (wtype, wid) not in known:
            raise NotFoundError(wtype, wid)
        seen.add((wtype, wid))
        out.append(AttendanceRecord(
            station_id=station_id,
            date=key,
            worker_type=wtype,
            worker_id=wid,
            present=_truthy(row.get("present")),
            source="manual",
        ))
    if errors:
        raise ValidationError(errors)
    return out


def save_manual_sheet(store: AttendanceStore, station_id: str, on_date: Any,
                      rows: Iterable[dict], known: set[tuple[str, str]] | None = None) -> list[AttendanceRecord]:
    """Replace the whole day's attendance with ``rows``. No partial updates."""
    records = build_sheet(station_id, on_date, rows, known)
    store.replace_day(station_id, _day(on_date), records)
    return records


def monthly_presence(records: Iterable[AttendanceRecord], month: Any) -> dict[tuple[str, str], int]:
    """Present-day count per (workerType, workerId) in a month."""
    m = parse_month(month)
    if m is None:
        raise ValidationError.single("month", INVALID_MONTH, "month must be YYYY-MM")
    days: dict[tuple[str, str], set[str]] = {}
    for r in records:
        if r.present and r.date[:7] == m:
            days.setdefault((r.worker_type, r.worker_id), set()).add(r.date)
    return {k: len(v) for k, v in days.items()}
