import pytest
from decimal import Decimal

from fuelbunk.settlement import ValidationError
from fuelbunk.settlement.normalize import normalize_payments, normalize_pump, normalize_pumps, normalize_worker


def test_pump_aliases():
    a = normalize_pump({"pumpNumber": 1, "fuelType": "Petrol", "opening": "10", "closing": "20"})
    b = normalize_pump({"pump_no": "1", "fuel": "petrol", "opening_reading": "10", "closing_reading": "20"})
    assert a.pump_number == b.pump_number == "1"
    assert (a.opening, a.closing) == ("10", "20")
    assert b.fuel_type == "petrol"


def test_pumps_from_json_string():
    pumps = normalize_pumps('[{"pump_number": "2", "fuel_type": "Diesel", "opening": 1, "closing": 2}]')
    assert len(pumps) == 1
    assert pumps[0].pump_number == "2"


def test_pumps_bad_json():
    with pytest.raises(ValidationError):
        normalize_pumps("[{")


def test_payments_nested_and_aliases():
    p = normalize_payments({"payments": {"cashAmount": "100", "card_amount": 50, "testing": ""}})
    assert p.cash == Decimal("100")
    assert p.card == 50
    assert p.testing == 0


def test_payments_flat():
    p = normalize_payments({"cash": "1,200.50", "online": 10})
    assert p.cash == Decimal("1200.50")
    assert p.online == 10


def test_worker_aliases():
    w = normalize_worker({"id": 7, "station_id": 3, "name": "Ravi", "base_salary": "15000",
                          "duty_type": "Day", "is_active": False})
    assert w.id == "7"
    assert w.station_id == "3"
    assert w.base_salary == "15000"
    assert w.duty_type == "Day"
    assert w.active is False


def test_payments_ignore_non_object_body():
    p = normalize_payments([1, 2])
    assert p.total_received == 0
