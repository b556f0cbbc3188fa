import pytest
from decimal import Decimal

from fuelbunk.settlement import FuelType, ValidationError, validate_pump_reading
from fuelbunk.settlement.errors import INVALID_FUEL_TYPE, INVALID_PRICE, INVALID_RANGE, MISSING_READING


def test_liters_and_amount():
    r = validate_pump_reading("1", "Petrol", "1000", "1050", "100")
    assert r.fuel_type is FuelType.PETROL
    assert r.liters == Decimal("50")
    assert r.amount == Decimal("5000")


def test_fractional_readings_are_exact():
    r = validate_pump_reading("2", "diesel", "1000.10", "1000.30", "94.80")
    assert r.liters == Decimal("0.20")
    assert r.amount == Decimal("0.20") * Decimal("94.80")
    assert r.to_dict()["amount"] == 18.96


def test_equal_readings_give_zero():
    r = validate_pump_reading("3", "Petrol", 500, 500, 100)
    assert r.liters == 0
    assert r.amount == 0


def test_closing_below_opening_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_pump_reading("4", "Petrol", "1050", "1000", "100")
    assert exc.value.code == INVALID_RANGE
    assert exc.value.pumps == ["4"]


@pytest.mark.parametrize("opening, closing", [("", "10"), ("abc", "10"), (None, "10"), ("10", "nan")])
def test_missing_or_garbage_reading(opening, closing):
    with pytest.raises(ValidationError) as exc:
        validate_pump_reading("1", "Petrol", opening, closing, "100")
    assert MISSING_READING in {e.code for e in exc.value.errors}


def test_unknown_fuel_and_bad_price_reported_together():
    with pytest.raises(ValidationError) as exc:
        validate_pump_reading("7", "Kerosene", "1", "2", "0")
    codes = {e.code for e in exc.value.errors}
    assert codes == {INVALID_FUEL_TYPE, INVALID_PRICE}
    assert exc.value.code == "validation_error"
