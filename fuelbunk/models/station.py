from datetime import datetime
from ..extensions import db
from ..settlement import Prices


class Station(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(160), nullable=False)
    brand = db.Column(db.String(64), nullable=False)
    address = db.Column(db.String(255), default="")
    primary_color = db.Column(db.String(16), default="#1e40af")
    secondary_color = db.Column(db.String(16), default="#f59e0b")
    # current per-liter prices; duties keep their own copy
    petrol_price = db.Column(db.Numeric(12, 4), nullable=False)
    diesel_price = db.Column(db.Numeric(12, 4), nullable=False)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def price_snapshot(self) -> Prices:
        return Prices.of(self.petrol_price, self.diesel_price)

    @property
    def theme(self) -> dict:
        return {"primaryColor": self.primary_color, "secondaryColor": self.secondary_color}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "address": self.address,
            "theme": self.theme,
            "prices": {"petrol": float(self.petrol_price or 0), "diesel": float(self.diesel_price or 0)},
        }
