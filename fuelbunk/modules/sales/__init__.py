# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user

from ...acl import station_id_for, station_workers
from ...security import json_object, position_required
from ...settlement import record_daily_sales, sales_total
from ...settlement.numbers import money_float
from ...settlement.sales import COMMON_ITEMS
from ...stores import SqlDutyStore, SqlSalesStore

bp = Blueprint("sales", __name__, url_prefix="/sales")
logger = logging.getLogger(__name__)


@bp.post("/")
@position_required("manager")
def create():
    payload = json_object()
    items = payload.get("items")
    if not isinstance(items, list):
        items = []
    sale = record_daily_sales(
        SqlSalesStore(),
        str(station_id_for(current_user)),
        items,
        on_date=payload.get("date") or None,
        created_by=str(current_user.id),
        notes=(payload.get("notes") or "").strip(),
    )
    logger.info("daily sales %s recorded by %s: %d items, total %s",
                sale.id, sale.created_by, len(sale.items), sale.total)
    return jsonify({"ok": True, "sale": sale.to_dict()}), 201


@bp.get("/")
@position_required("manager")
def history():
    date = (request.args.get("date") or "").strip() or None
    sales = SqlSalesStore().list(str(station_id_for(current_user)), date=date)
    return jsonify({
        "ok": True,
        "sales": [s.to_dict() for s in sales],
        "grandTotal": money_float(sales_total(sales)),
    })


@bp.get("/items")
@position_required("manager")
def items():
    return jsonify({"ok": True, "items": COMMON_ITEMS})


@bp.get("/cashiers")
@position_required("manager")
def cashiers():
    sid = station_id_for(current_user)
    counts = SqlDutyStore().count_by_worker(sid)
    rows = []
    for u in station_workers(sid):
        if (u.position or "cashier") != "cashier":
            continue
        body = u.to_dict()
        body["dutiesCount"] = counts.get(str(u.id), 0)
        rows.append(body)
    return jsonify({"ok": True, "cashiers": rows})
