from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash
from ..extensions import db, login_manager
from ..settlement import WorkerRef

class User(db.Model, UserMixin):
    id = db.Column(db.Integer, primary_key=True)
    station_id = db.Column(db.Integer, db.ForeignKey("station.id"), nullable=False, index=True)
    name = db.Column(db.String(128), default="")
    email = db.Column(db.String(160), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(16), default="worker")         # admin|worker
    position = db.Column(db.String(16), default="cashier")    # cashier|manager|helper
    duty_type = db.Column(db.String(16), nullable=True)       # Day|Night
    base_salary = db.Column(db.Numeric(12, 2), default=0)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_ref(self) -> WorkerRef:
        return WorkerRef(
            id=str(self.id),
            station_id=str(self.station_id),
            name=self.name or self.email,
            duty_type=self.duty_type,
            base_salary=self.base_salary,
            position=self.position or "cashier",
            active=bool(self.is_active),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "position": self.position,
            "dutyType": self.duty_type,
            "baseSalary": float(self.base_salary or 0),
            "active": bool(self.is_active),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))
