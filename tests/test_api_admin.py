from fuelbunk.extensions import db
from fuelbunk.models import Station

STATION = {
    "stationName": "Ring Road Fuels",
    "brand": "Indian Oil",
    "address": "Ring Road 5",
    "adminName": "Owner",
    "email": "owner@ring.test",
    "password": "pw12345",
}


def test_register_station_applies_brand_theme(app):
    client = app.test_client()
    resp = client.post("/register-station", json=STATION)
    assert resp.status_code == 201
    station = resp.get_json()["station"]
    assert station["theme"] == {"primaryColor": "#003c7e", "secondaryColor": "#ff6600"}
    assert station["prices"] == {"petrol": 106.5, "diesel": 94.8}
    # the new admin is logged in
    assert client.get("/me").get_json()["user"]["role"] == "admin"


def test_register_custom_brand_color(app):
    body = dict(STATION, brand="Local Fuels", customColor="#123456")
    station = app.test_client().post("/register-station", json=body).get_json()["station"]
    assert station["theme"] == {"primaryColor": "#123456", "secondaryColor": "#f59e0b"}


def test_register_requires_all_fields(app):
    resp = app.test_client().post("/register-station", json=dict(STATION, address=" "))
    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "address"


def test_register_duplicate_email(app, seed):
    resp = app.test_client().post("/register-station", json=dict(STATION, email="ravi@fuel.test"))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "duplicate_record"


def test_prices_must_be_positive(app, as_admin, seed):
    resp = as_admin.post("/admin/prices", json={"petrol": "0", "diesel": "abc"})
    assert resp.status_code == 400
    assert {e["field"] for e in resp.get_json()["errors"]} == {"petrol", "diesel"}
    with app.app_context():
        assert float(db.session.get(Station, seed["station"]).petrol_price) == 100.0


def test_worker_cannot_change_prices(as_cashier):
    assert as_cashier.post("/admin/prices", json={"petrol": 1, "diesel": 1}).status_code == 403


def test_create_worker_and_login(app, as_admin):
    resp = as_admin.post("/admin/workers", json={
        "name": "Anil", "email": "Anil@Fuel.test", "password": "pw", "duty_type": "night",
        "base_salary": "14000", "position": "cashier",
    })
    assert resp.status_code == 201
    worker = resp.get_json()["worker"]
    assert worker["email"] == "anil@fuel.test"
    assert worker["dutyType"] == "Night"
    assert worker["baseSalary"] == 14000.0

    client = app.test_client()
    assert client.post("/login", json={"email": "anil@fuel.test", "password": "pw"}).status_code == 200


def test_create_worker_duplicate_email(as_admin):
    resp = as_admin.post("/admin/workers", json={"name": "X", "email": "ravi@fuel.test", "password": "pw"})
    assert resp.status_code == 400


def test_create_worker_negative_salary(as_admin):
    resp = as_admin.post("/admin/workers", json={
        "name": "X", "email": "x@fuel.test", "password": "pw", "baseSalary": -1,
    })
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_amount"


def test_toggle_worker_blocks_login(app, as_admin, seed):
    resp = as_admin.post(f"/admin/workers/{seed['other']}/toggle")
    assert resp.get_json()["worker"]["active"] is False
    resp = app.test_client().post("/login", json={"email": "kiran@fuel.test", "password": "secret123"})
    assert resp.status_code == 403


def test_toggle_unknown_worker(as_admin):
    assert as_admin.post("/admin/workers/9999/toggle").status_code == 404


def test_helpers(as_admin):
    resp = as_admin.post("/admin/helpers", json={"name": "Raju", "monthlySalary": "8000", "phoneNumber": "98"})
    assert resp.status_code == 201
    names = [h["name"] for h in as_admin.get("/admin/helpers").get_json()["helpers"]]
    assert names == ["Raju", "Suresh"]


def test_workers_list_scoped_to_station(app, as_admin):
    app.test_client().post("/register-station", json=STATION)
    names = [w["name"] for w in as_admin.get("/admin/workers").get_json()["workers"]]
    assert names == ["Kiran", "Meena", "Ravi"]


def test_body_must_be_an_object(as_admin):
    resp = as_admin.post("/admin/prices", json=["petrol", 120])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_record"
