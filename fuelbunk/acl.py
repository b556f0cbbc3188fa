# -*- coding: utf-8 -*-
from __future__ import annotations
from flask import abort
from .extensions import db
from .models import Helper, Station, User
from .settlement import NotFoundError

# --- station of the logged-in user ---
def station_id_for(user) -> int:
    sid = getattr(user, "station_id", None)
    if not sid:
        abort(403)
    return int(sid)

def current_station(user) -> Station:
    st = db.session.get(Station, station_id_for(user))
    if not st or not st.is_active:
        raise NotFoundError("station", getattr(user, "station_id", None))
    return st

# --- lookups scoped to one station ---
def station_worker(station_id: int, worker_id) -> User:
    try:
        uid = int(worker_id)
    except (TypeError, ValueError):
        raise NotFoundError("worker", worker_id)
    u = db.session.get(User, uid)
    if not u or u.station_id != station_id or u.role != "worker":
        raise NotFoundError("worker", worker_id)
    return u

def station_workers(station_id: int) -> list[User]:
    return (
        User.query.filter(User.station_id == station_id, User.role == "worker")
        .order_by(User.name)
        .all()
    )

def station_helpers(station_id: int) -> list[Helper]:
    return Helper.query.filter(Helper.station_id == station_id).order_by(Helper.name).all()

# --- may this user see / close this duty ---
def can_view_duty(user, duty_station_id: int, duty_worker_id: int) -> bool:
    if int(duty_station_id) != station_id_for(user):
        return False
    if getattr(user, "role", "") == "admin":
        return True
    if getattr(user, "position", "") == "manager":
        return True
    return int(duty_worker_id) == int(getattr(user, "id", 0))

def can_close_duty(user, duty_worker_id: int) -> bool:
    return int(duty_worker_id) == int(getattr(user, "id", 0))
