# -*- coding: utf-8 -*-
import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from ..extensions import db
from ..models import Station, User
from ..settlement import mark_auto_present
from ..stores import SqlAttendanceStore

auth_bp = Blueprint("auth", __name__)
logger = logging.getLogger(__name__)

def _payload():
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form

def _session_body(u: User):
    station = db.session.get(Station, u.station_id)
    return {"ok": True, "user": u.to_dict(), "station": station.to_dict() if station else None}

@auth_bp.route("/login", methods=["POST"])
def login():
    f = _payload()
    email = (f.get("email") or "").strip().lower()
    password = (f.get("password") or "").strip()
    if not email or not password:
        return jsonify({"ok": False, "error": "Email and password required"}), 400
    u = User.query.filter_by(email=email).first()
    if not u or not u.check_password(password):
        return jsonify({"ok": False, "error": "Invalid credentials"}), 401
    if not u.is_active:
        return jsonify({"ok": False, "error": "Account is disabled"}), 403

    login_user(u, remember=True)
    if u.role == "worker":
        rec = mark_auto_present(SqlAttendanceStore(), str(u.station_id), str(u.id))
        logger.info("login: worker %s present on %s (%s)", u.id, rec.date, rec.source)
    return jsonify(_session_body(u))

@auth_bp.route("/me")
@login_required
def me():
    return jsonify(_session_body(current_user))

@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"ok": True})
