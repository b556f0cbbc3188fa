# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_login import current_user

from ...acl import station_id_for, station_workers
from ...security import roles_required
from ...settlement import report_totals, salary_report
from ...settlement.numbers import parse_month
from ...stores import SqlDutyStore

bp = Blueprint("payroll", __name__, url_prefix="/payroll")

MONTHS_EN = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@bp.get("/")
@roles_required("admin")
def index():
    raw = (request.args.get("m") or request.args.get("month") or "").strip()
    if not raw:
        return jsonify({"ok": False, "error": "Month parameter required"}), 400
    month = parse_month(raw)
    if month is None:
        return jsonify({"ok": False, "error": "invalid_month"}), 400

    sid = station_id_for(current_user)
    workers = [u.to_ref() for u in station_workers(sid)]
    duties = SqlDutyStore().list(str(sid), month=month)
    report = salary_report(workers, duties, month)

    y, m = map(int, month.split("-"))
    return jsonify({
        "ok": True,
        "month": month,
        "monthLabel": f"{MONTHS_EN[m - 1]} {y}",
        "salaryReport": [r.to_dict() for r in report],
        "totals": report_totals(report),
    })
