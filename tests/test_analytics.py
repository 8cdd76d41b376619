from datetime import datetime, timedelta, timezone

import pytest

from analytics import build_analytics, filter_orders, newest_first, order_stats

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _order(order_id, status, total, days_ago=0, product_id="p1", **extra):
    order = {
        "id": order_id,
        "product_id": product_id,
        "customer_name": extra.pop("customer_name", "Rahim"),
        "phone": extra.pop("phone", "01700000000"),
        "quantity": extra.pop("quantity", 1),
        "status": status,
        "total_price": total,
        "created_at": (NOW - timedelta(days=days_ago)).isoformat(),
    }
    order.update(extra)
    return order


ORDERS = [
    _order("a1", "delivered", 1200, days_ago=0),
    _order("a2", "delivered", 2600, days_ago=2, quantity=2),
    _order("a3", "pending", 1200, days_ago=1, customer_name="Karim", phone="01811111111"),
    _order("a4", "cancelled", 1200, days_ago=3),
    _order("a5", "delivered", 500, days_ago=1, product_id="gone"),
    _order("a6", "delivered", 9999, days_ago=40),
]


def test_newest_first():
    assert [o["id"] for o in newest_first(ORDERS)] == ["a1", "a3", "a5", "a2", "a4", "a6"]


def test_newest_first_accepts_zulu_timestamps():
    orders = [
        {"id": "old", "created_at": "2026-01-01T00:00:00.000Z"},
        {"id": "new", "created_at": "2026-02-01T00:00:00+00:00"},
    ]
    assert [o["id"] for o in newest_first(orders)] == ["new", "old"]


def test_filter_by_search_and_status():
    assert [o["id"] for o in filter_orders(ORDERS, search="karim")] == ["a3"]
    assert [o["id"] for o in filter_orders(ORDERS, search="0181")] == ["a3"]
    assert [o["id"] for o in filter_orders(ORDERS, search="A4")] == ["a4"]
    assert [o["id"] for o in filter_orders(ORDERS, status="cancelled")] == ["a4"]
    assert filter_orders(ORDERS, search="rahim", status="pending") == []
    assert filter_orders(ORDERS) == ORDERS


def test_order_stats_counts_delivered_revenue():
    stats = order_stats(ORDERS)
    assert stats == {
        "total_orders": 6,
        "pending_orders": 1,
        "completed_orders": 4,
        "cancelled_orders": 1,
        "total_revenue": 1200 + 2600 + 500 + 9999,
    }


def test_analytics_window_and_rates():
    report = build_analytics(ORDERS, [{"id": "p1", "name": "কাস্টম জার্সি"}], days=7, now=NOW)
    assert report["total_orders"] == 5
    assert report["completed_orders"] == 3
    assert report["total_revenue"] == 4300
    assert report["conversion_rate"] == pytest.approx(60)
    assert report["average_order_value"] == pytest.approx(4300 / 3)


def test_analytics_daily_sales():
    report = build_analytics(ORDERS, [], days=7, now=NOW)
    daily = report["daily_sales"]
    assert len(daily) == 7
    assert daily[-1] == {"date": "Oct 19", "revenue": 1200, "orders": 1}
    assert daily[-2]["revenue"] == 500
    assert daily[-3]["revenue"] == 2600
    assert daily[0]["date"] == "Oct 13"


def test_analytics_top_products():
    report = build_analytics(ORDERS, [{"id": "p1", "name": "কাস্টম জার্সি"}], days=7, now=NOW)
    assert report["top_products"] == [
        {"id": "p1", "name": "কাস্টম জার্সি", "quantity": 3, "revenue": 3800},
        {"id": "gone", "name": "Unknown Product", "quantity": 1, "revenue": 500},
    ]


def test_analytics_empty():
    report = build_analytics([], [], days=30, now=NOW)
    assert report["conversion_rate"] == 0
    assert report["average_order_value"] == 0
    assert report["top_products"] == []


def test_orders_without_timestamp_sort_last():
    orders = [{"id": "bare", "status": "pending"}, _order("a1", "pending", 1200)]
    assert [o["id"] for o in newest_first(orders)] == ["a1", "bare"]
    assert build_analytics(orders, [], days=7, now=NOW)["total_orders"] == 1
