import pytest
from datetime import datetime
from decimal import Decimal

from fuelbunk import create_app
from fuelbunk.config import TestConfig
from fuelbunk.extensions import db
from fuelbunk.models import Helper, Station, User
from fuelbunk.settlement import (
    MemoryAttendanceStore, MemoryDutyStore, MemorySalesStore, Prices, PumpInput, WorkerRef,
)

PASSWORD = "secret123"


# ---------- engine fixtures ----------

@pytest.fixture
def prices():
    return Prices.of("100", "90")

@pytest.fixture
def worker():
    return WorkerRef(id="w1", station_id="s1", name="Ravi", duty_type="Day", base_salary="15000")

@pytest.fixture
def duty_store():
    return MemoryDutyStore()

@pytest.fixture
def attendance_store():
    return MemoryAttendanceStore()

@pytest.fixture
def sales_store():
    return MemorySalesStore()

@pytest.fixture
def petrol_pump():
    return PumpInput(pump_number="1", fuel_type="Petrol", opening="1000", closing="1050")

@pytest.fixture
def noon():
    return datetime(2025, 3, 14, 12, 0)


# ---------- app fixtures ----------
# Requests run without an outer app context so that the logged-in user
# cached on ``g`` never leaks between test clients.

@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()

@pytest.fixture
def seed(app):
    """Station with an admin, two cashiers, a manager and a helper. Returns ids."""
    with app.app_context():
        station = Station(
            name="Highway Fuels", brand="HP", address="NH 48",
            primary_color="#0066cc", secondary_color="#e31e24",
            petrol_price=Decimal("100"), diesel_price=Decimal("90"),
        )
        db.session.add(station)
        db.session.flush()

        def user(name, email, role="worker", position="cashier", duty_type="Day", base="15000"):
            u = User(station_id=station.id, name=name, email=email, role=role, position=position,
                     duty_type=duty_type, base_salary=Decimal(base))
            u.set_password(PASSWORD)
            db.session.add(u)
            return u

        rows = {
            "admin": user("Admin", "admin@fuel.test", role="admin", duty_type=None, base="0"),
            "cashier": user("Ravi", "ravi@fuel.test"),
            "other": user("Kiran", "kiran@fuel.test", duty_type="Night", base="16000"),
            "manager": user("Meena", "meena@fuel.test", position="manager", duty_type=None, base="22000"),
            "helper": Helper(station_id=station.id, name="Suresh", monthly_salary=Decimal("9000"), duty_type="Day"),
        }
        db.session.add(rows["helper"])
        db.session.commit()
        ids = {k: v.id for k, v in rows.items()}
        ids["station"] = station.id
    return ids


def login(app, email):
    client = app.test_client()
    resp = client.post("/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.get_json()
    return client

@pytest.fixture
def as_admin(app, seed):
    return login(app, "admin@fuel.test")

@pytest.fixture
def as_cashier(app, seed):
    return login(app, "ravi@fuel.test")

@pytest.fixture
def as_other(app, seed):
    return login(app, "kiran@fuel.test")

@pytest.fixture
def as_manager(app, seed):
    return login(app, "meena@fuel.test")
