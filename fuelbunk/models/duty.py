# -*- coding: utf-8 -*-
from __future__ import annotations

from decimal import Decimal
from sqlalchemy import case, func
from sqlalchemy.ext.hybrid import hybrid_property

from ..extensions import db
from ..settlement.numbers import D


class Duty(db.Model):
    __tablename__ = "duty"

    id = db.Column(db.Integer, primary_key=True)

    station_id = db.Column(db.Integer, db.ForeignKey("station.id"), nullable=False, index=True)
    worker_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    worker_name = db.Column(db.String(128), default="")
    duty_type = db.Column(db.String(16), nullable=True)  # Day|Night

    date = db.Column(db.String(10), nullable=False, index=True)  # YYYY-MM-DD
    state = db.Column(db.String(16), nullable=False, default="opened")  # opened|closed

    # pump readings with exact decimals as strings
    pumps_json = db.Column(db.Text, nullable=False, default="[]")

    # price snapshot at open
    petrol_price = db.Column(db.Numeric(12, 4), nullable=False)
    diesel_price = db.Column(db.Numeric(12, 4), nullable=False)

    # payments, set on close
    cash = db.Column(db.Numeric(14, 4), nullable=True)
    card = db.Column(db.Numeric(14, 4), nullable=True)
    online = db.Column(db.Numeric(14, 4), nullable=True)
    credit = db.Column(db.Numeric(14, 4), nullable=True)
    testing = db.Column(db.Numeric(14, 4), nullable=True)

    # totals copied out of the engine for SQL reporting
    petrol_total = db.Column(db.Numeric(18, 6), default=0)
    diesel_total = db.Column(db.Numeric(18, 6), default=0)
    total_sales = db.Column(db.Numeric(18, 6), default=0)
    total_received = db.Column(db.Numeric(18, 6), nullable=True)
    difference = db.Column(db.Numeric(18, 6), nullable=True)

    opened_at = db.Column(db.DateTime, server_default=func.now())
    submitted_at = db.Column(db.DateTime, nullable=True)

    # --- derived ---

    @hybrid_property
    def shortage(self) -> Decimal:
        d = D(self.difference)
        return -d if d < 0 else Decimal("0")

    @shortage.expression
    def shortage(cls):
        return case((cls.difference < 0, -cls.difference), else_=0)

    @hybrid_property
    def excess(self) -> Decimal:
        d = D(self.difference)
        return d if d > 0 else Decimal("0")

    @excess.expression
    def excess(cls):
        return case((cls.difference > 0, cls.difference), else_=0)
