import pytest
from datetime import datetime
from decimal import Decimal

from fuelbunk.settlement import (
    DutyState, NotFoundError, Payments, Prices, PumpInput, StateError, ValidationError,
    close_duty, get_duty, open_duty, submit_duty,
)
from fuelbunk.settlement.errors import INVALID_RANGE, NO_PAYMENT, NO_PUMPS


def test_open_records_price_snapshot(duty_store, worker, prices, petrol_pump, noon):
    duty = open_duty(duty_store, worker, [petrol_pump], prices, now=noon)
    assert duty.id is not None
    assert duty.state is DutyState.OPENED
    assert duty.date == "2025-03-14"
    assert duty.prices == prices
    assert duty.total_sales == Decimal("5000")
    assert duty.difference is None
    assert duty_store.get(duty.id) == duty


def test_excess_scenario(duty_store, worker, prices, petrol_pump, noon):
    duty = open_duty(duty_store, worker, [petrol_pump], prices, now=noon)
    closed = close_duty(duty_store, duty.id, Payments.of(cash="5200"), now=noon)
    assert closed.pumps[0].liters == 50
    assert closed.total_sales == 5000
    assert closed.total_received == 5200
    assert closed.difference == 200
    assert closed.excess == 200 and closed.shortage == 0
    assert closed.submitted_at == noon


def test_shortage_scenario(duty_store, worker, prices, petrol_pump, noon):
    closed = submit_duty(duty_store, worker, [petrol_pump], prices, Payments.of(cash=4800), now=noon)
    assert closed.difference == -200
    assert closed.shortage == 200


def test_totals_are_consistent(duty_store, worker, noon):
    prices = Prices.of("106.50", "94.80")
    pumps = [
        PumpInput("1", "Petrol", "1000.25", "1123.75"),
        PumpInput("2", "Diesel", "2000", "2210.40"),
        PumpInput("3", "Petrol", "300", "300.05"),
    ]
    payments = Payments.of(cash="20000.10", card="9000", online="4200.55", credit="1000", testing="532.50")
    d = submit_duty(duty_store, worker, pumps, prices, payments, now=noon)
    assert d.total_sales == d.petrol_total + d.diesel_total
    assert d.total_received == Decimal("20000.10") + 9000 + Decimal("4200.55") + 1000 - Decimal("532.50")
    assert d.difference == d.total_received - d.total_sales


def test_testing_fuel_is_subtracted(duty_store, worker, prices, petrol_pump, noon):
    d = submit_duty(duty_store, worker, [petrol_pump], prices, Payments.of(cash=5100, testing=100), now=noon)
    assert d.total_received == 5000
    assert d.difference == 0


def test_zero_sales_shift_is_excess(duty_store, worker, prices, noon):
    pumps = [PumpInput("1", "Petrol", "10", "10")]
    d = submit_duty(duty_store, worker, pumps, prices, Payments.of(card=50), now=noon)
    assert d.total_sales == 0
    assert d.excess == 50


def test_close_twice_fails(duty_store, worker, prices, petrol_pump, noon):
    d = submit_duty(duty_store, worker, [petrol_pump], prices, Payments.of(cash=5000), now=noon)
    with pytest.raises(StateError):
        close_duty(duty_store, d.id, Payments.of(cash=1))
    with pytest.raises(StateError):
        close_duty(duty_store, d.id, Payments.of(online=99999))
    assert get_duty(duty_store, d.id).total_received == 5000


def test_store_refuses_close_of_closed_duty(duty_store, worker, prices, petrol_pump, noon):
    d = open_duty(duty_store, worker, [petrol_pump], prices, now=noon)
    closed = d.closed(Payments.of(cash=1), noon)
    duty_store.close(closed)
    with pytest.raises(StateError):
        duty_store.close(closed)


def test_close_unknown_duty(duty_store):
    with pytest.raises(NotFoundError):
        close_duty(duty_store, "nope", Payments.of(cash=1))


def test_close_needs_revenue(duty_store, worker, prices, petrol_pump, noon):
    d = open_duty(duty_store, worker, [petrol_pump], prices, now=noon)
    with pytest.raises(ValidationError) as exc:
        close_duty(duty_store, d.id, Payments.of(testing=10))
    assert exc.value.code == NO_PAYMENT
    assert get_duty(duty_store, d.id).state is DutyState.OPENED


def test_negative_payment_rejected():
    with pytest.raises(ValidationError):
        Payments.of(cash="-5")


def test_open_without_pumps(duty_store, worker, prices):
    with pytest.raises(ValidationError) as exc:
        open_duty(duty_store, worker, [], prices)
    assert exc.value.code == NO_PUMPS


def test_all_bad_pumps_reported(duty_store, worker, prices):
    pumps = [
        PumpInput("1", "Petrol", "100", "50"),
        PumpInput("2", "Diesel", "10", "20"),
        PumpInput("3", "Diesel", "500", "499"),
    ]
    with pytest.raises(ValidationError) as exc:
        open_duty(duty_store, worker, pumps, prices)
    assert exc.value.pumps == ["1", "3"]
    assert {e.code for e in exc.value.errors} == {INVALID_RANGE}
    assert [e.index for e in exc.value.errors] == [0, 2]
    assert duty_store.list() == []


def test_invalid_date(duty_store, worker, prices, petrol_pump):
    with pytest.raises(ValidationError):
        open_duty(duty_store, worker, [petrol_pump], prices, on_date="14/03/2025")


def test_opened_at_defaults_to_now(duty_store, worker, prices, petrol_pump):
    before = datetime.now()
    d = open_duty(duty_store, worker, [petrol_pump], prices)
    assert d.opened_at >= before
