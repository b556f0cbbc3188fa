# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from flask import Blueprint, abort, jsonify, request
from flask_login import current_user

from ...acl import can_close_duty, can_view_duty, current_station, station_id_for
from ...security import json_object, roles_required
from ...settlement import close_duty, get_duty, open_duty
from ...settlement.normalize import normalize_payments, normalize_pumps
from ...stores import SqlDutyStore

bp = Blueprint("duty", __name__, url_prefix="/duty")
logger = logging.getLogger(__name__)


def _visible(duty_id: str):
    """Load a duty the current user may see; 404 otherwise (no station leaking)."""
    duty = get_duty(SqlDutyStore(), duty_id)
    if not can_view_duty(current_user, int(duty.station_id), int(duty.worker_id)):
        abort(404)
    return duty


# ------------ worker flow -----------------------------------------------------
@bp.post("/open")
@roles_required("worker")
def open_():
    payload = json_object()
    station = current_station(current_user)
    readings = normalize_pumps(payload.get("pumps") if "pumps" in payload else payload.get("pump_readings"))
    duty = open_duty(
        SqlDutyStore(),
        current_user.to_ref(),
        readings,
        station.price_snapshot(),
        on_date=payload.get("date") or None,
    )
    logger.info("duty %s opened by worker %s (%d pumps)", duty.id, duty.worker_id, len(duty.pumps))
    return jsonify({"ok": True, "duty": duty.to_dict()}), 201


@bp.post("/<duty_id>/close")
@roles_required("worker")
def close(duty_id: str):
    duty = _visible(duty_id)
    if not can_close_duty(current_user, int(duty.worker_id)):
        abort(403)
    payments = normalize_payments(json_object())
    closed = close_duty(SqlDutyStore(), duty_id, payments)
    logger.info("duty %s closed: sales=%s received=%s diff=%s",
                closed.id, closed.total_sales, closed.total_received, closed.difference)
    return jsonify({"ok": True, "duty": closed.to_dict()})


@bp.get("/")
@roles_required("worker")
def mine():
    date = (request.args.get("date") or "").strip() or None
    duties = SqlDutyStore().list(str(station_id_for(current_user)), worker_id=str(current_user.id), date=date)
    return jsonify({"ok": True, "duties": [d.to_dict() for d in duties]})


@bp.get("/<duty_id>")
@roles_required("worker", "admin")
def view(duty_id: str):
    return jsonify({"ok": True, "duty": _visible(duty_id).to_dict()})


# ------------ admin -----------------------------------------------------------
@bp.get("/all")
@roles_required("admin")
def all_():
    date = (request.args.get("date") or "").strip() or None
    worker_id = (request.args.get("worker_id") or request.args.get("workerId") or "").strip() or None
    duties = SqlDutyStore().list(str(station_id_for(current_user)), worker_id=worker_id, date=date)
    return jsonify({"ok": True, "duties": [d.to_dict() for d in duties]})
