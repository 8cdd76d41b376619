"""Admin order listing, dashboard counters and the sales analytics report."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

UNKNOWN_PRODUCT = "Unknown Product"


def parse_created_at(value: Optional[str]) -> datetime:
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    created = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created


def newest_first(orders: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(orders, key=lambda o: parse_created_at(o.get("created_at")), reverse=True)


def filter_orders(orders: List[Dict[str, Any]], search: str = "", status: str = "all") -> List[Dict[str, Any]]:
    """Match the search term against id, customer name (case-insensitive) or phone."""
    filtered = orders
    if search:
        term = search.lower()
        filtered = [
            o for o in filtered
            if term in o.get("id", "").lower()
            or term in o.get("customer_name", "").lower()
            or search in o.get("phone", "")
        ]
    if status != "all":
        filtered = [o for o in filtered if o.get("status") == status]
    return filtered


def _delivered(orders):
    return [o for o in orders if o.get("status") == "delivered"]


def order_stats(orders: List[Dict[str, Any]]) -> Dict[str, Any]:
    delivered = _delivered(orders)
    return {
        "total_orders": len(orders),
        "pending_orders": sum(1 for o in orders if o.get("status") == "pending"),
        "completed_orders": len(delivered),
        "cancelled_orders": sum(1 for o in orders if o.get("status") == "cancelled"),
        "total_revenue": sum(o.get("total_price", 0) for o in delivered),
    }


def build_analytics(orders: List[Dict[str, Any]], products: List[Dict[str, Any]],
                    days: int = 7, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=days)
    recent = [o for o in orders if parse_created_at(o.get("created_at")) >= cutoff]

    stats = order_stats(recent)
    total, completed, revenue = stats["total_orders"], stats["completed_orders"], stats["total_revenue"]
    stats["conversion_rate"] = completed / total * 100 if total else 0
    stats["average_order_value"] = revenue / completed if completed else 0

    delivered = _delivered(recent)

    # last 7 calendar days, oldest first
    daily_sales = []
    for offset in range(6, -1, -1):
        day = (now - timedelta(days=offset)).date()
        day_orders = [o for o in delivered if parse_created_at(o.get("created_at")).astimezone(now.tzinfo).date() == day]
        daily_sales.append({
            "date": f"{day:%b} {day.day}",
            "revenue": sum(o.get("total_price", 0) for o in day_orders),
            "orders": len(day_orders),
        })
    stats["daily_sales"] = daily_sales

    sales: Dict[str, Dict[str, float]] = {}
    for order in delivered:
        entry = sales.setdefault(order.get("product_id"), {"quantity": 0, "revenue": 0})
        entry["quantity"] += order.get("quantity", 0)
        entry["revenue"] += order.get("total_price", 0)
    names = {p.get("id"): p.get("name") for p in products}
    top = [
        {"id": pid, "name": names.get(pid) or UNKNOWN_PRODUCT, **data}
        for pid, data in sales.items()
    ]
    top.sort(key=lambda p: p["revenue"], reverse=True)
    stats["top_products"] = top[:5]
    return stats
