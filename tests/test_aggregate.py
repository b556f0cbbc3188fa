import pytest
from datetime import date, datetime
from decimal import Decimal

from fuelbunk.settlement import (
    Payments, PumpInput, ValidationError, WorkerRef, daily_stats, open_duty, submit_duty, weekly_trend,
)


@pytest.fixture
def duties(duty_store, prices):
    ravi = WorkerRef(id="w1", station_id="s1", name="Ravi")
    kiran = WorkerRef(id="w2", station_id="s1", name="Kiran")
    now = datetime(2025, 3, 14, 20, 0)

    def shift(w, day, petrol, diesel, **pay):
        pumps = [PumpInput("1", "Petrol", 0, petrol), PumpInput("2", "Diesel", 0, diesel)]
        return submit_duty(duty_store, w, pumps, prices, Payments.of(**pay), on_date=day, now=now)

    shift(ravi, "2025-03-14", 50, 10, cash=5500, testing=100)     # sales 5900, diff -500
    shift(ravi, "2025-03-14", 10, 0, card=1100)                   # sales 1000, diff +100
    shift(kiran, "2025-03-14", 20, 20, online=3800)               # sales 3800, diff 0
    shift(kiran, "2025-03-12", 5, 0, cash=600)                    # sales 500, diff +100
    shift(kiran, "2025-03-01", 5, 0, cash=500)                    # outside the week
    # still open: never counted
    open_duty(duty_store, ravi, [PumpInput("1", "Petrol", 0, 1000)], prices, on_date="2025-03-14", now=now)
    return duty_store.list("s1")


def test_daily_totals(duties):
    s = daily_stats(duties, "2025-03-14")
    assert s.duties_count == 3
    assert s.petrol_sales == Decimal("8000")
    assert s.diesel_sales == Decimal("2700")
    assert s.total_sales == s.petrol_sales + s.diesel_sales
    assert s.total_shortage == 500
    assert s.total_excess == 100
    assert s.payments["cash"] == 5500
    assert s.payments["card"] == 1100
    assert s.payments["online"] == 3800
    assert s.payments["testing"] == 100


def test_same_worker_twice_is_summed(duties):
    s = daily_stats(duties, date(2025, 3, 14))
    ravi = s.workers["w1"]
    assert ravi.duties == 2
    assert ravi.sales == Decimal("6900")
    assert ravi.shortage == 500
    assert ravi.excess == 100
    assert {w.worker_id for w in s.worker_stats} == {"w1", "w2"}


def test_payment_breakdown_excludes_testing(duties):
    body = daily_stats(duties, "2025-03-14").to_dict()
    assert set(body["paymentBreakdown"]) == {"cash", "card", "online", "credit"}
    assert body["testingFuel"] == 100.0


def test_empty_day(duties):
    s = daily_stats(duties, "2025-02-01")
    assert s.duties_count == 0
    assert s.total_sales == 0
    assert s.worker_stats == []


def test_weekly_trend_shape(duties):
    trend = weekly_trend(duties, "2025-03-14")
    assert len(trend) == 7
    assert [p.date for p in trend] == [f"2025-03-{d:02d}" for d in range(8, 15)]
    assert trend[-1].day == "Fri"
    assert trend[-1].petrol == 8000
    assert trend[4].petrol == 500          # 2025-03-12
    assert trend[0].petrol == 0 and trend[0].diesel == 0


def test_weekly_trend_without_duties():
    trend = weekly_trend([], "2025-01-03")
    assert [p.date for p in trend][0] == "2024-12-28"
    assert all(p.petrol == 0 and p.diesel == 0 for p in trend)


def test_bad_date():
    with pytest.raises(ValidationError):
        daily_stats([], "yesterday")


def test_store_date_range_is_inclusive(duties, duty_store):
    week = duty_store.list("s1", date_from="2025-03-08", date_to="2025-03-14")
    assert sorted({d.date for d in week}) == ["2025-03-12", "2025-03-14"]
    assert len(week) == 5
    assert duty_store.list("s1", date_from="2025-03-13", date_to="2025-03-13") == []
