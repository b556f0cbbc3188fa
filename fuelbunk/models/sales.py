from ..extensions import db


class DailySales(db.Model):
    """Manager-recorded non-fuel sales for one day."""

    __tablename__ = "daily_sales"

    id = db.Column(db.Integer, primary_key=True)
    station_id = db.Column(db.Integer, db.ForeignKey("station.id"), nullable=False, index=True)
    date = db.Column(db.String(10), nullable=False, index=True)
    items_json = db.Column(db.Text, nullable=False, default="[]")
    total = db.Column(db.Numeric(14, 4), default=0)
    notes = db.Column(db.Text, default="")
    created_by = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
