from datetime import datetime
from ..extensions import db


class Helper(db.Model):
    """Attendance/payroll-only staff; never logs in."""

    id = db.Column(db.Integer, primary_key=True)
    station_id = db.Column(db.Integer, db.ForeignKey("station.id"), nullable=False, index=True)
    name = db.Column(db.String(128), nullable=False)
    phone_number = db.Column(db.String(32), default="")
    monthly_salary = db.Column(db.Numeric(12, 2), default=0)
    duty_type = db.Column(db.String(16), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stationId": self.station_id,
            "name": self.name,
            "phoneNumber": self.phone_number,
            "monthlySalary": float(self.monthly_salary or 0),
            "dutyType": self.duty_type,
        }
