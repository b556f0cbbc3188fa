# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, timedelta

from flask import Blueprint, jsonify, request
from flask_login import current_user

from ...acl import station_id_for
from ...security import roles_required
from ...settlement import daily_stats, weekly_trend
from ...settlement.numbers import parse_day
from ...stores import SqlDutyStore

bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


def _target_day() -> date | None:
    raw = (request.args.get("date") or "").strip()
    return parse_day(raw) if raw else date.today()


@bp.get("/stats")
@roles_required("admin")
def stats():
    day = _target_day()
    if day is None:
        return jsonify({"ok": False, "error": "invalid_date"}), 400

    # one read covers the target day and the six before it
    start = day - timedelta(days=6)
    duties = SqlDutyStore().list(
        str(station_id_for(current_user)), date_from=start.isoformat(), date_to=day.isoformat()
    )
    body = daily_stats(duties, day).to_dict()
    body["weeklySales"] = [p.to_dict() for p in weekly_trend(duties, day)]
    body["ok"] = True
    return jsonify(body)
