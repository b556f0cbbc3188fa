# -*- coding: utf-8 -*-
"""
Full reset of the SQLite database plus a demo station, with verbose output.

Run from the project root:
  python scripts/recreate_db.py
"""

from __future__ import annotations
import sys, traceback
from decimal import Decimal
from pathlib import Path
from typing import Optional
from sqlalchemy import text

# --- project path ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

print(f"[recreate] ROOT={ROOT}")
if not (ROOT / "fuelbunk" / "__init__.py").exists():
    raise SystemExit("[recreate] error: fuelbunk/__init__.py not found next to scripts/")

print("[recreate] importing app...")
from fuelbunk import create_app  # type: ignore
from fuelbunk.extensions import db  # type: ignore

print("[recreate] importing models...")
from fuelbunk.models import Helper, Station, User  # type: ignore

DEMO_PASSWORD = "fuel1234"


def _db_path_from_uri(uri: str) -> Optional[Path]:
    if uri.startswith("sqlite:///"):
        return Path(uri.replace("sqlite:///", "")).resolve()
    return None


def _cnt(table: str) -> int:
    try:
        return int(db.session.execute(text(f'SELECT COUNT(*) FROM "{table}"')).scalar() or 0)
    except Exception:
        return -1


def _worker(station: Station, name: str, email: str, position: str,
            duty_type: Optional[str], base_salary: str) -> User:
    u = User(
        station_id=station.id, name=name, email=email, role="worker",
        position=position, duty_type=duty_type, base_salary=Decimal(base_salary),
    )
    u.set_password(DEMO_PASSWORD)
    return u


def main() -> int:
    print("[recreate] create_app()...")
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[recreate] SQLALCHEMY_DATABASE_URI = {uri}")

        db_path = _db_path_from_uri(uri)
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            if db_path.exists():
                print(f"[recreate] removing database file: {db_path}")
                db.engine.dispose()
                db_path.unlink()
            else:
                print(f"[recreate] database file does not exist yet: {db_path}")
        else:
            print("[recreate] not sqlite, dropping tables instead")
            db.drop_all()

        print("[recreate] creating tables from models...")
        db.create_all()
        print("[recreate] ok")

        # --- station ---
        print("[recreate] adding demo station...")
        primary, secondary = app.config["BRAND_THEMES"]["Indian Oil"]
        station = Station(
            name="Demo Fuels", brand="Indian Oil", address="NH 44, Km 12",
            primary_color=primary, secondary_color=secondary,
            petrol_price=Decimal(app.config["DEFAULT_PETROL_PRICE"]),
            diesel_price=Decimal(app.config["DEFAULT_DIESEL_PRICE"]),
        )
        db.session.add(station)
        db.session.commit()
        print(f"[recreate] station rows={_cnt('station')}  -> id={station.id}")

        # --- users ---
        print("[recreate] creating users...")
        admin = User(station_id=station.id, name="Station Admin", email="admin@demo.fuel", role="admin")
        admin.set_password(DEMO_PASSWORD)
        users = [
            admin,
            _worker(station, "Meena Manager", "manager@demo.fuel", "manager", None, "22000"),
            _worker(station, "Ravi Day", "ravi@demo.fuel", "cashier", "Day", "15000"),
            _worker(station, "Kiran Night", "kiran@demo.fuel", "cashier", "Night", "16000"),
        ]
        db.session.add_all(users)
        db.session.add(Helper(station_id=station.id, name="Suresh", phone_number="9000000000",
                              monthly_salary=Decimal("9000"), duty_type="Day"))
        db.session.commit()
        print(f"[recreate] user rows={_cnt('user')}, helper rows={_cnt('helper')}")

        print("\n[recreate] Done.")
        print(f"Logins (password {DEMO_PASSWORD}):")
        for u in users:
            print(f"  {u.email:<20} {u.role}/{u.position}")
        if db_path:
            print(f"\nDatabase file: {db_path}")
        return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        print("\n[recreate] ERROR:")
        traceback.print_exc()
        sys.exit(1)
