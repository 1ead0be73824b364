"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Sales statistics for the back office: revenue per period, best sellers,
payment method split and a downloadable CSV report. Only delivered orders
count as sales.
"""

from __future__ import annotations

import csv
import io
from datetime import timedelta
from decimal import Decimal

PERIODS = ("daily", "weekly", "monthly")
MAX_PERIODS = 10


def delivered(orders):
    return [o for o in orders if o.status == "delivered"]


def period_key(moment, period):
    if period == "daily":
        return moment.date().isoformat()
    if period == "weekly":
        # weeks start on Sunday
        start = moment.date() - timedelta(days=(moment.weekday() + 1) % 7)
        return f"Week of {start.isoformat()}"
    if period == "monthly":
        return moment.strftime("%Y-%m")
    raise ValueError(f"Unknown period {period!r}; expected one of {', '.join(PERIODS)}")


def sales_by_period(orders, period="daily"):
    grouped = {}
    for o in delivered(orders):
        key = period_key(o.created_at, period)
        grouped.setdefault(key, {"period": key, "sales": 0, "revenue": Decimal("0")})
        grouped[key]["sales"] += 1
        grouped[key]["revenue"] += o.total_amount
    rows = sorted(grouped.values(), key=lambda x: x["period"])
    return rows[-MAX_PERIODS:]


def top_products(orders, limit=5):
    stats = {}
    for o in delivered(orders):
        for item in o.items:
            stats.setdefault(item.name, {"name": item.name, "sales": 0, "revenue": Decimal("0")})
            stats[item.name]["sales"] += item.quantity
            stats[item.name]["revenue"] += item.total_price
    return sorted(stats.values(), key=lambda x: x["revenue"], reverse=True)[:limit]


def payment_method_stats(orders):
    stats = {"cash": 0, "transfer": 0}
    for o in delivered(orders):
        if o.payment_method in stats:
            stats[o.payment_method] += 1
    return stats


def summarize(rows):
    total_sales = sum(r["sales"] for r in rows)
    total_revenue = sum((r["revenue"] for r in rows), Decimal("0"))
    average = (total_revenue / total_sales).quantize(Decimal("0.01")) if total_sales else Decimal("0.00")
    return {"total_sales": total_sales, "total_revenue": total_revenue, "average_order_value": average}


def sales_report_csv(rows):
    summary = summarize(rows)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Period", "Sales", "Revenue"])
    for r in rows:
        writer.writerow([r["period"], r["sales"], r["revenue"]])
    writer.writerow([])
    writer.writerow(["Summary"])
    writer.writerow(["Total sales", summary["total_sales"]])
    writer.writerow(["Total revenue", summary["total_revenue"]])
    writer.writerow(["Average order value", summary["average_order_value"]])
    return buf.getvalue()
