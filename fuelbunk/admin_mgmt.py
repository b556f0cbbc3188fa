# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_user

from .acl import current_station, station_helpers, station_id_for, station_worker, station_workers
from .extensions import db
from .models import Helper, Station, User
from .security import json_object, roles_required
from .settlement import Prices, ValidationError
from .settlement.errors import FieldError, INVALID_AMOUNT, REQUIRED, DUPLICATE_RECORD
from .settlement.normalize import normalize_worker, pick
from .settlement.numbers import parse_decimal

bp = Blueprint("admin_mgmt", __name__)
logger = logging.getLogger(__name__)

POSITIONS = ("cashier", "manager", "helper")
DUTY_TYPES = ("Day", "Night")

# ---------- helpers ----------
def _text(raw: dict, *names: str) -> str:
    return str(pick(raw, names, "") or "").strip()

def _require(raw: dict, fields: dict[str, tuple[str, ...]]) -> dict[str, str]:
    """Trimmed values for ``fields``; one REQUIRED error per blank field."""
    values = {k: _text(raw, *names) for k, names in fields.items()}
    missing = [FieldError(k, REQUIRED, f"{k} is required") for k, v in values.items() if not v]
    if missing:
        raise ValidationError(missing, "All fields are required")
    return values

def _non_negative(field: str, value) -> Decimal:
    x = parse_decimal(value) if value not in (None, "") else Decimal("0")
    if x is None or x < 0:
        raise ValidationError.single(field, INVALID_AMOUNT, f"{field} must be a non-negative number")
    return x

def _duty_type(value) -> Optional[str]:
    s = str(value or "").strip().capitalize()
    return s if s in DUTY_TYPES else None

def _email_taken(email: str) -> bool:
    return User.query.filter_by(email=email).first() is not None

def brand_theme(brand: str, custom_color: Optional[str] = None) -> tuple[str, str]:
    themes = current_app.config["BRAND_THEMES"]
    if brand in themes:
        return themes[brand]
    primary, secondary = current_app.config["DEFAULT_THEME"]
    return (custom_color or primary), secondary

# ---------- station ----------
@bp.post("/register-station")
def register_station():
    f = json_object()
    v = _require(f, {
        "stationName": ("stationName", "station_name", "name"),
        "brand": ("brand",),
        "address": ("address",),
        "adminName": ("adminName", "admin_name"),
        "email": ("email",),
        "password": ("password",),
    })
    email = v["email"].lower()
    if _email_taken(email):
        raise ValidationError.single("email", DUPLICATE_RECORD, "A user with this email already exists")

    primary, secondary = brand_theme(v["brand"], _text(f, "customColor", "custom_color") or None)
    prices = Prices.of(current_app.config["DEFAULT_PETROL_PRICE"], current_app.config["DEFAULT_DIESEL_PRICE"])
    station = Station(
        name=v["stationName"],
        brand=v["brand"],
        address=v["address"],
        primary_color=primary,
        secondary_color=secondary,
        petrol_price=prices.petrol,
        diesel_price=prices.diesel,
    )
    db.session.add(station)
    db.session.flush()

    admin = User(station_id=station.id, name=v["adminName"], email=email, role="admin", position="cashier")
    admin.set_password(v["password"])
    db.session.add(admin)
    db.session.commit()
    logger.info("station %s registered (%s), admin %s", station.id, station.brand, admin.id)

    login_user(admin, remember=True)
    return jsonify({"ok": True, "station": station.to_dict(), "user": admin.to_dict()}), 201

@bp.get("/admin/station")
@roles_required("admin")
def station_info():
    return jsonify({"ok": True, "station": current_station(current_user).to_dict()})

@bp.post("/admin/prices")
@roles_required("admin")
def update_prices():
    f = json_object()
    prices = Prices.of(pick(f, ("petrol", "petrolPrice", "petrol_price")),
                       pick(f, ("diesel", "dieselPrice", "diesel_price")))
    station = current_station(current_user)
    station.petrol_price = prices.petrol
    station.diesel_price = prices.diesel
    db.session.commit()
    logger.info("station %s prices: petrol=%s diesel=%s", station.id, prices.petrol, prices.diesel)
    return jsonify({"ok": True, "station": station.to_dict()})

# ---------- workers ----------
@bp.get("/admin/workers")
@roles_required("admin")
def workers():
    rows = station_workers(station_id_for(current_user))
    return jsonify({"ok": True, "workers": [u.to_dict() for u in rows]})

@bp.post("/admin/workers")
@roles_required("admin")
def create_worker():
    f = json_object()
    v = _require(f, {"name": ("name",), "email": ("email",), "password": ("password",)})
    email = v["email"].lower()
    if _email_taken(email):
        raise ValidationError.single("email", DUPLICATE_RECORD, "A user with this email already exists")

    ref = normalize_worker(f)
    position = ref.position if ref.position in POSITIONS else "cashier"
    u = User(
        station_id=station_id_for(current_user),
        name=v["name"],
        email=email,
        role="worker",
        position=position,
        duty_type=_duty_type(ref.duty_type),
        base_salary=_non_negative("baseSalary", ref.base_salary),
        is_active=True,
    )
    u.set_password(v["password"])
    db.session.add(u)
    db.session.commit()
    logger.info("worker %s created at station %s (%s)", u.id, u.station_id, u.position)
    return jsonify({"ok": True, "worker": u.to_dict()}), 201

@bp.post("/admin/workers/<worker_id>/toggle")
@roles_required("admin")
def toggle_worker(worker_id):
    u = station_worker(station_id_for(current_user), worker_id)
    u.is_active = not bool(u.is_active)
    db.session.commit()
    logger.info("worker %s active=%s", u.id, u.is_active)
    return jsonify({"ok": True, "worker": u.to_dict()})

# ---------- helpers (staff without login) ----------
@bp.get("/admin/helpers")
@roles_required("admin")
def helpers():
    rows = station_helpers(station_id_for(current_user))
    return jsonify({"ok": True, "helpers": [h.to_dict() for h in rows]})

@bp.post("/admin/helpers")
@roles_required("admin")
def create_helper():
    f = json_object()
    v = _require(f, {"name": ("name",)})
    h = Helper(
        station_id=station_id_for(current_user),
        name=v["name"],
        phone_number=_text(f, "phoneNumber", "phone_number", "phone"),
        monthly_salary=_non_negative("monthlySalary", pick(f, ("monthlySalary", "monthly_salary", "salary"))),
        duty_type=_duty_type(pick(f, ("dutyType", "duty_type"))),
    )
    db.session.add(h)
    db.session.commit()
    logger.info("helper %s created at station %s", h.id, h.station_id)
    return jsonify({"ok": True, "helper": h.to_dict()}), 201
