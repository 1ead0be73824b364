from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from analytics import (
    payment_method_stats,
    period_key,
    sales_by_period,
    sales_report_csv,
    summarize,
    top_products,
)


def order(day, total, status="delivered", payment="cash", items=()):
    return SimpleNamespace(
        created_at=day,
        total_amount=Decimal(total),
        status=status,
        payment_method=payment,
        items=[SimpleNamespace(name=n, quantity=q, total_price=Decimal(t)) for n, q, t in items],
    )


@pytest.fixture
def orders():
    return [
        order(datetime(2026, 10, 4, 12), "20", items=[("Burger", 2, "20")]),        # Sunday
        order(datetime(2026, 10, 6, 13), "12.50", payment="transfer",
              items=[("Burger", 1, "10"), ("Cola", 1, "2.50")]),
        order(datetime(2026, 10, 6, 20), "5", items=[("Cola", 2, "5")]),
        order(datetime(2026, 11, 2, 9), "28.70", payment="transfer", items=[("Pizza", 2, "28.70")]),
        order(datetime(2026, 10, 6, 21), "99", status="cancelled", items=[("Pizza", 9, "99")]),
    ]


def test_period_keys():
    tuesday = datetime(2026, 10, 6, 10)
    assert period_key(tuesday, "daily") == "2026-10-06"
    assert period_key(tuesday, "weekly") == "Week of 2026-10-04"
    assert period_key(datetime(2026, 10, 4), "weekly") == "Week of 2026-10-04"
    assert period_key(tuesday, "monthly") == "2026-10"
    with pytest.raises(ValueError):
        period_key(tuesday, "yearly")


def test_sales_by_day_only_counts_delivered(orders):
    rows = sales_by_period(orders, "daily")
    assert [r["period"] for r in rows] == ["2026-10-04", "2026-10-06", "2026-11-02"]
    assert rows[1]["sales"] == 2
    assert rows[1]["revenue"] == Decimal("17.50")


def test_sales_by_week_and_month(orders):
    weeks = sales_by_period(orders, "weekly")
    assert weeks[0] == {"period": "Week of 2026-10-04", "sales": 3, "revenue": Decimal("37.50")}
    months = sales_by_period(orders, "monthly")
    assert [(m["period"], m["sales"]) for m in months] == [("2026-10", 3), ("2026-11", 1)]


def test_sales_by_period_keeps_last_ten():
    many = [order(datetime(2026, 1, d), "1") for d in range(1, 16)]
    rows = sales_by_period(many, "daily")
    assert len(rows) == 10
    assert rows[0]["period"] == "2026-01-06"


def test_top_products_by_revenue(orders):
    top = top_products(orders, limit=2)
    assert [p["name"] for p in top] == ["Burger", "Pizza"]
    assert top[0]["sales"] == 3
    assert top[0]["revenue"] == Decimal("30")


def test_payment_method_stats(orders):
    assert payment_method_stats(orders) == {"cash": 2, "transfer": 2}


def test_summary_and_csv(orders):
    rows = sales_by_period(orders, "monthly")
    summary = summarize(rows)
    assert summary["total_sales"] == 4
    assert summary["total_revenue"] == Decimal("66.20")
    assert summary["average_order_value"] == Decimal("16.55")

    text = sales_report_csv(rows)
    lines = text.splitlines()
    assert lines[0] == "Period,Sales,Revenue"
    assert lines[1] == "2026-10,3,37.50"
    assert "Average order value,16.55" in lines


def test_summary_of_nothing():
    assert summarize([]) == {
        "total_sales": 0,
        "total_revenue": Decimal("0"),
        "average_order_value": Decimal("0.00"),
    }
