# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from datetime import date

from flask import Blueprint, jsonify, request
from flask_login import current_user

from ...acl import station_helpers, station_id_for, station_workers
from ...security import json_object, roles_required
from ...settlement import monthly_presence, save_manual_sheet
from ...settlement.numbers import parse_day, parse_month
from ...stores import SqlAttendanceStore

bp = Blueprint("attendance", __name__, url_prefix="/attendance")
logger = logging.getLogger(__name__)


@bp.get("/")
@roles_required("admin")
def index():
    sid = str(station_id_for(current_user))
    store = SqlAttendanceStore()
    month_raw = (request.args.get("month") or "").strip()
    date_raw = (request.args.get("date") or "").strip()

    if month_raw and not date_raw:
        month = parse_month(month_raw)
        if month is None:
            return jsonify({"ok": False, "error": "invalid_month"}), 400
        records = store.list(sid, month=month)
        presence = monthly_presence(records, month)
        return jsonify({
            "ok": True,
            "month": month,
            "attendance": [r.to_dict() for r in records],
            "presentDays": [
                {"workerType": t, "workerId": w, "days": n} for (t, w), n in sorted(presence.items())
            ],
        })

    day = parse_day(date_raw) if date_raw else date.today()
    if day is None:
        return jsonify({"ok": False, "error": "invalid_date"}), 400
    records = store.list(sid, date=day.isoformat())
    return jsonify({"ok": True, "date": day.isoformat(), "attendance": [r.to_dict() for r in records]})


@bp.get("/sheet")
@roles_required("admin")
def sheet():
    """Everyone who can appear on the manual sheet, with the day's flags."""
    sid = station_id_for(current_user)
    day = parse_day((request.args.get("date") or "").strip() or date.today())
    if day is None:
        return jsonify({"ok": False, "error": "invalid_date"}), 400
    marked = {(r.worker_type, r.worker_id): r.present
              for r in SqlAttendanceStore().list(str(sid), date=day.isoformat())}
    rows = [
        {"workerType": "worker", "workerId": str(u.id), "name": u.name, "dutyType": u.duty_type,
         "present": marked.get(("worker", str(u.id)), False)}
        for u in station_workers(sid) if u.is_active
    ] + [
        {"workerType": "helper", "workerId": str(h.id), "name": h.name, "dutyType": h.duty_type,
         "present": marked.get(("helper", str(h.id)), False)}
        for h in station_helpers(sid)
    ]
    return jsonify({"ok": True, "date": day.isoformat(), "rows": rows})


@bp.post("/manual")
@roles_required("admin")
def save_manual():
    payload = json_object()
    day = payload.get("date")
    rows = payload.get("attendance")
    if not day or rows is None:
        return jsonify({"ok": False, "error": "Date and attendance are required"}), 400
    if not isinstance(rows, list):
        return jsonify({"ok": False, "error": "attendance must be a list"}), 400

    station = station_id_for(current_user)
    sid = str(station)
    known = {("worker", str(u.id)) for u in station_workers(station)}
    known |= {("helper", str(h.id)) for h in station_helpers(station)}
    saved = save_manual_sheet(SqlAttendanceStore(), sid, day, rows, known)
    logger.info("manual attendance for station %s on %s: %d rows", sid, day, len(saved))
    return jsonify({"ok": True, "saved": len(saved)})
