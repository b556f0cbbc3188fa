# -*- coding: utf-8 -*-
"""SQLAlchemy-backed implementations of the settlement store protocols."""
from __future__ import annotations

import json
from decimal import Decimal

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError

from .extensions import db
from .models import Attendance, DailySales, Duty
from .settlement import (
    AttendanceRecord, DailySale, DutySettlement, DutyState, FuelType, Payments, Prices,
    PumpReading, SaleItem, StateError,
)
from .settlement.errors import NOT_OPEN
from .settlement.numbers import D


def _int(v) -> int | None:
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


# ------------ duties ----------------------------------------------------------
def duty_to_record(row: Duty) -> DutySettlement:
    pumps = tuple(
        PumpReading(
            pump_number=p["pumpNumber"],
            fuel_type=FuelType(p["fuelType"]),
            opening=Decimal(p["opening"]),
            closing=Decimal(p["closing"]),
            liters=Decimal(p["liters"]),
            amount=Decimal(p["amount"]),
        )
        for p in json.loads(row.pumps_json or "[]")
    )
    state = DutyState(row.state)
    payments = None
    if state is DutyState.CLOSED:
        payments = Payments(cash=D(row.cash), card=D(row.card), online=D(row.online),
                            credit=D(row.credit), testing=D(row.testing))
    return DutySettlement(
        id=str(row.id),
        station_id=str(row.station_id),
        worker_id=str(row.worker_id),
        worker_name=row.worker_name or "",
        duty_type=row.duty_type,
        date=row.date,
        pumps=pumps,
        prices=Prices(petrol=D(row.petrol_price), diesel=D(row.diesel_price)),
        state=state,
        opened_at=row.opened_at,
        payments=payments,
        submitted_at=row.submitted_at,
    )


class SqlDutyStore:
    def add(self, duty: DutySettlement) -> DutySettlement:
        row = Duty(
            station_id=int(duty.station_id),
            worker_id=int(duty.worker_id),
            worker_name=duty.worker_name,
            duty_type=duty.duty_type,
            date=duty.date,
            state=duty.state.value,
            pumps_json=json.dumps([p.to_store() for p in duty.pumps]),
            petrol_price=duty.prices.petrol,
            diesel_price=duty.prices.diesel,
            petrol_total=duty.petrol_total,
            diesel_total=duty.diesel_total,
            total_sales=duty.total_sales,
            opened_at=duty.opened_at,
        )
        db.session.add(row)
        db.session.commit()
        return duty.with_id(str(row.id))

    def get(self, duty_id: str) -> DutySettlement | None:
        pk = _int(duty_id)
        if pk is None:
            return None
        row = db.session.get(Duty, pk)
        return duty_to_record(row) if row else None

    def close(self, duty: DutySettlement) -> DutySettlement:
        p = duty.payments
        # conditional write: only an opened row may be closed
        res = db.session.execute(
            update(Duty)
            .where(Duty.id == int(duty.id), Duty.state == DutyState.OPENED.value)
            .values(
                state=DutyState.CLOSED.value,
                cash=p.cash, card=p.card, online=p.online, credit=p.credit, testing=p.testing,
                total_received=duty.total_received,
                difference=duty.difference,
                submitted_at=duty.submitted_at,
            )
            .execution_options(synchronize_session=False)
        )
        if res.rowcount != 1:
            db.session.rollback()
            raise StateError(f"duty {duty.id} is not open", NOT_OPEN, duty_id=duty.id)
        db.session.commit()
        return duty

    def list(self, station_id=None, *, worker_id=None, date=None, month=None,
             date_from=None, date_to=None) -> list[DutySettlement]:
        q = Duty.query
        if station_id is not None:
            q = q.filter(Duty.station_id == _int(station_id))
        if worker_id is not None:
            q = q.filter(Duty.worker_id == _int(worker_id))
        if date is not None:
            q = q.filter(Duty.date == date)
        if month is not None:
            q = q.filter(Duty.date.like(f"{month}-%"))
        # YYYY-MM-DD strings sort as dates
        if date_from is not None:
            q = q.filter(Duty.date >= date_from)
        if date_to is not None:
            q = q.filter(Duty.date <= date_to)
        rows = q.order_by(Duty.date.desc(), Duty.id.desc()).all()
        return [duty_to_record(r) for r in rows]

    def count_by_worker(self, station_id) -> dict[str, int]:
        rows = (
            db.session.query(Duty.worker_id, func.count(Duty.id))
            .filter(Duty.station_id == _int(station_id))
            .group_by(Duty.worker_id)
            .all()
        )
        return {str(w): n for w, n in rows}


# ------------ attendance ------------------------------------------------------
def attendance_to_record(row: Attendance) -> AttendanceRecord:
    return AttendanceRecord(
        station_id=str(row.station_id),
        date=row.date,
        worker_type=row.worker_type,
        worker_id=row.worker_id,
        present=bool(row.present),
        source=row.source or "manual",
        login_time=row.login_time,
    )


def _attendance_row(r: AttendanceRecord) -> Attendance:
    return Attendance(
        station_id=int(r.station_id),
        date=r.date,
        worker_type=r.worker_type,
        worker_id=r.worker_id,
        present=r.present,
        source=r.source,
        login_time=r.login_time,
    )


class SqlAttendanceStore:
    def get(self, station_id, date, worker_type, worker_id) -> AttendanceRecord | None:
        row = Attendance.query.filter_by(
            station_id=_int(station_id), date=date, worker_type=worker_type, worker_id=str(worker_id)
        ).first()
        return attendance_to_record(row) if row else None

    def add_if_absent(self, record: AttendanceRecord) -> AttendanceRecord:
        existing = self.get(record.station_id, record.date, record.worker_type, record.worker_id)
        if existing is not None:
            return existing
        db.session.add(_attendance_row(record))
        try:
            db.session.commit()
        except IntegrityError:
            # another login got there first
            db.session.rollback()
            return self.get(record.station_id, record.date, record.worker_type, record.worker_id)
        return record

    def replace_day(self, station_id, date, records) -> None:
        Attendance.query.filter_by(station_id=_int(station_id), date=date).delete(synchronize_session=False)
        db.session.add_all([_attendance_row(r) for r in records])
        db.session.commit()

    def list(self, station_id, *, date=None, month=None) -> list[AttendanceRecord]:
        q = Attendance.query.filter(Attendance.station_id == _int(station_id))
        if date is not None:
            q = q.filter(Attendance.date == date)
        if month is not None:
            q = q.filter(Attendance.date.like(f"{month}-%"))
        rows = q.order_by(Attendance.date, Attendance.worker_type, Attendance.worker_id).all()
        return [attendance_to_record(r) for r in rows]


# ------------ daily sales -----------------------------------------------------
def sale_to_record(row: DailySales) -> DailySale:
    items = tuple(
        SaleItem(name=i["name"], quantity=Decimal(i["quantity"]), price=Decimal(i["price"]))
        for i in json.loads(row.items_json or "[]")
    )
    return DailySale(
        id=str(row.id),
        station_id=str(row.station_id),
        date=row.date,
        items=items,
        created_by=str(row.created_by) if row.created_by is not None else None,
        created_at=row.created_at,
        notes=row.notes or "",
    )


class SqlSalesStore:
    def add(self, sale: DailySale) -> DailySale:
        row = DailySales(
            station_id=int(sale.station_id),
            date=sale.date,
            items_json=json.dumps([
                {"name": i.name, "quantity": str(i.quantity), "price": str(i.price)} for i in sale.items
            ]),
            total=sale.total,
            notes=sale.notes,
            created_by=_int(sale.created_by),
            created_at=sale.created_at,
        )
        db.session.add(row)
        db.session.commit()
        return sale_to_record(row)

    def list(self, station_id, *, date=None) -> list[DailySale]:
        q = DailySales.query.filter(DailySales.station_id == _int(station_id))
        if date is not None:
            q = q.filter(DailySales.date == date)
        rows = q.order_by(DailySales.date.desc(), DailySales.id.desc()).all()
        return [sale_to_record(r) for r in rows]
