# -*- coding: utf-8 -*-
"""Store contracts the engine writes through, plus in-memory versions.

The SQLAlchemy implementations live in ``fuelbunk.stores``.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Protocol
from uuid import uuid4

from .errors import StateError, NOT_OPEN
from .records import AttendanceRecord, DailySale, DutySettlement, DutyState


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


def _match(d: DutySettlement, station_id, worker_id, date, month, date_from=None, date_to=None) -> bool:
    if station_id is not None and d.station_id != station_id:
        return False
    if worker_id is not None and d.worker_id != worker_id:
        return False
    if date is not None and d.date != date:
        return False
    if month is not None and d.date[:7] != month:
        return False
    if date_from is not None and d.date < date_from:
        return False
    if date_to is not None and d.date > date_to:
        return False
    return True


class DutyStore(Protocol):
    def add(self, duty: DutySettlement) -> DutySettlement: ...

    def get(self, duty_id: str) -> DutySettlement | None: ...

    def close(self, duty: DutySettlement) -> DutySettlement:
        """Persist a closed duty only if the stored one is still opened, else StateError."""
        ...

    def list(self, station_id: str | None = None, *, worker_id: str | None = None,
             date: str | None = None, month: str | None = None,
             date_from: str | None = None, date_to: str | None = None) -> list[DutySettlement]:
        """``date_from``/``date_to`` bound the YYYY-MM-DD date, both ends inclusive."""
        ...


class AttendanceStore(Protocol):
    def get(self, station_id: str, date: str, worker_type: str, worker_id: str) -> AttendanceRecord | None: ...

    def add_if_absent(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert unless the key exists; return whichever record is stored."""
        ...

    def replace_day(self, station_id: str, date: str, records: Iterable[AttendanceRecord]) -> None: ...

    def list(self, station_id: str, *, date: str | None = None,
             month: str | None = None) -> list[AttendanceRecord]: ...


class SalesStore(Protocol):
    def add(self, sale: DailySale) -> DailySale: ...

    def list(self, station_id: str, *, date: str | None = None) -> list[DailySale]: ...


# --- in-memory ---------------------------------------------------------------

class MemoryDutyStore:
    def __init__(self, duties: Iterable[DutySettlement] = ()):
        self._rows: dict[str, DutySettlement] = {}
        for d in duties:
            self.add(d)

    def add(self, duty: DutySettlement) -> DutySettlement:
        if duty.id is None:
            duty = duty.with_id(new_id("duty"))
        self._rows[duty.id] = duty
        return duty

    def get(self, duty_id: str) -> DutySettlement | None:
        return self._rows.get(duty_id)

    def close(self, duty: DutySettlement) -> DutySettlement:
        cur = self._rows.get(duty.id)
        if cur is None or cur.state is not DutyState.OPENED:
            raise StateError(f"duty {duty.id} is not open", NOT_OPEN, duty_id=duty.id)
        self._rows[duty.id] = duty
        return duty

    def list(self, station_id=None, *, worker_id=None, date=None, month=None,
             date_from=None, date_to=None) -> list[DutySettlement]:
        return [d for d in self._rows.values()
                if _match(d, station_id, worker_id, date, month, date_from, date_to)]


class MemoryAttendanceStore:
    def __init__(self):
        self._rows: dict[tuple[str, str, str, str], AttendanceRecord] = {}

    def get(self, station_id, date, worker_type, worker_id) -> AttendanceRecord | None:
        return self._rows.get((station_id, date, worker_type, worker_id))

    def add_if_absent(self, record: AttendanceRecord) -> AttendanceRecord:
        return self._rows.setdefault(record.key, record)

    def replace_day(self, station_id, date, records) -> None:
        records = list(records)
        keep = {k: v for k, v in self._rows.items() if not (k[0] == station_id and k[1] == date)}
        for r in records:
            keep[r.key] = r
        self._rows = keep

    def list(self, station_id, *, date=None, month=None) -> list[AttendanceRecord]:
        out = []
        for r in self._rows.values():
            if r.station_id != station_id:
                continue
            if date is not None and r.date != date:
                continue
            if month is not None and r.date[:7] != month:
                continue
            out.append(r)
        return sorted(out, key=lambda r: (r.date, r.worker_type, r.worker_id))


class MemorySalesStore:
    def __init__(self):
        self._rows: list[DailySale] = []

    def add(self, sale: DailySale) -> DailySale:
        if sale.id is None:
            sale = replace(sale, id=new_id("sale"))
        self._rows.append(sale)
        return sale

    def list(self, station_id, *, date=None) -> list[DailySale]:
        rows = [s for s in self._rows if s.station_id == station_id and (date is None or s.date == date)]
        return sorted(rows, key=lambda s: s.date, reverse=True)
