from ..extensions import db


class Attendance(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    station_id = db.Column(db.Integer, db.ForeignKey("station.id"), nullable=False, index=True)
    date = db.Column(db.String(10), nullable=False, index=True)   # YYYY-MM-DD
    worker_type = db.Column(db.String(16), nullable=False)        # worker|helper
    worker_id = db.Column(db.String(64), nullable=False)
    present = db.Column(db.Boolean, default=False)
    source = db.Column(db.String(16), default="manual")           # auto|manual
    login_time = db.Column(db.DateTime, nullable=True)
    __table_args__ = (
        db.UniqueConstraint("station_id", "date", "worker_type", "worker_id", name="uq_attendance_day"),
    )
