import pytest
from datetime import datetime
from decimal import Decimal

from fuelbunk.settlement import ValidationError, record_daily_sales, sales_total
from fuelbunk.settlement.errors import INVALID_AMOUNT, NO_ITEMS


def test_sale_total_is_sum_of_items(sales_store):
    sale = record_daily_sales(sales_store, "s1", [
        {"name": "Engine Oil (1L)", "quantity": 2, "price": "450.50"},
        {"name": "Car Wash", "quantity": "1", "price": 200},
    ], on_date="2025-03-14", created_by="m1", now=datetime(2025, 3, 14, 18, 0))
    assert sale.id is not None
    assert sale.items[0].total == Decimal("901.00")
    assert sale.total == Decimal("1101.00")
    assert sale.to_dict()["total"] == 1101.0


def test_needs_items(sales_store):
    with pytest.raises(ValidationError) as exc:
        record_daily_sales(sales_store, "s1", [])
    assert exc.value.code == NO_ITEMS


def test_bad_item_rows_reported(sales_store):
    with pytest.raises(ValidationError) as exc:
        record_daily_sales(sales_store, "s1", [
            {"name": "Coolant", "quantity": 0, "price": 10},
            {"name": "Battery", "quantity": 1, "price": -1},
        ])
    assert exc.value.code == INVALID_AMOUNT
    assert [e.index for e in exc.value.errors] == [0, 1]
    assert sales_store.list("s1") == []


def test_history_newest_first_and_total(sales_store):
    for day in ("2025-03-12", "2025-03-14", "2025-03-13"):
        record_daily_sales(sales_store, "s1", [{"name": "Brake Oil", "quantity": 1, "price": 100}], on_date=day)
    rows = sales_store.list("s1")
    assert [s.date for s in rows] == ["2025-03-14", "2025-03-13", "2025-03-12"]
    assert sales_total(rows) == 300
