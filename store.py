"""
Reads and writes against the ``products`` and ``orders`` collections.

Reads log failures and fall back to ``None`` / ``[]``; writes log and re-raise
so the route can answer with a user-facing message. There is no validation,
retry or concurrency control: the last write wins.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId

import database
from tracking import apply_status, initial_tracking_steps

logger = logging.getLogger("rfap.store")

PRODUCTS = "products"
ORDERS = "orders"

DEMO_PRODUCTS = [
    {
        "id": "p1",
        "name": "কাস্টম জার্সি",
        "price": 1200,
        "description": (
            "<p>উচ্চ মানের কাস্টম জার্সি। যেকোনো ডিজাইন এবং নাম্বার প্রিন্ট করা যায়।</p>"
            "<ul><li>১০০% পলিয়েস্টার</li><li>ড্রাই ফিট ম্যাটেরিয়াল</li><li>কাস্টম নাম এবং নাম্বার</li></ul>"
        ),
        "images": [
            "https://images.pexels.com/photos/114296/pexels-photo-114296.jpeg",
            "https://images.pexels.com/photos/1618932/pexels-photo-1618932.jpeg",
        ],
        "video": "https://sample-videos.com/zip/10/mp4/SampleVideo_1280x720_1mb.mp4",
        "category": "জার্সি",
        "stock": 50,
        "extra_fields": {"delivery_note": ""},
        "addons": [{"name": "সামনে নাম্বার প্রিন্ট", "price": 100}],
    }
]


def _strip(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    doc = dict(doc)
    key = doc.pop("_id", None)
    doc.setdefault("id", str(key) if key is not None else None)
    return doc


def _find_one(collection: str, key: str) -> Optional[Dict[str, Any]]:
    return _strip(database.get_db()[collection].find_one({"_id": key}))


def _find_all(collection: str) -> List[Dict[str, Any]]:
    return database.get_documents(collection)


def _set(collection: str, key: str, record: Dict[str, Any]) -> None:
    doc = {**record, "_id": key}
    database.get_db()[collection].replace_one({"_id": key}, doc, upsert=True)


def _update(collection: str, key: str, fields: Dict[str, Any], upsert: bool = True) -> None:
    fields = {k: v for k, v in fields.items() if k not in ("_id", "id")}
    if fields:
        database.get_db()[collection].update_one({"_id": key}, {"$set": fields}, upsert=upsert)


def _remove(collection: str, key: str) -> None:
    database.get_db()[collection].delete_one({"_id": key})


# ---------------------- Products ----------------------

def initialize_demo_data() -> None:
    try:
        if database.get_db()[PRODUCTS].find_one({}, {"_id": 1}) is not None:
            return
        for product in DEMO_PRODUCTS:
            _set(PRODUCTS, product["id"], product)
        logger.info("Seeded %d demo product(s)", len(DEMO_PRODUCTS))
    except Exception:
        logger.exception("Error initializing demo data")


def get_product(product_id: str) -> Optional[Dict[str, Any]]:
    try:
        return _find_one(PRODUCTS, product_id)
    except Exception:
        logger.exception("Error getting product %s", product_id)
        return None


def get_all_products() -> List[Dict[str, Any]]:
    try:
        return _find_all(PRODUCTS)
    except Exception:
        logger.exception("Error getting products")
        return []


def create_product(product: Dict[str, Any]) -> None:
    try:
        _set(PRODUCTS, product["id"], product)
    except Exception:
        logger.exception("Error creating product %s", product.get("id"))
        raise


def update_product(product_id: str, updates: Dict[str, Any]) -> None:
    try:
        _update(PRODUCTS, product_id, updates)
    except Exception:
        logger.exception("Error updating product %s", product_id)
        raise


def delete_product(product_id: str) -> None:
    try:
        _remove(PRODUCTS, product_id)
    except Exception:
        logger.exception("Error deleting product %s", product_id)
        raise


# ---------------------- Orders ----------------------

def create_order(order: Dict[str, Any]) -> str:
    """Store a new order under a generated key with its timestamp and tracking checklist."""
    try:
        order_id = str(ObjectId())
        now = datetime.now(timezone.utc)
        record = {
            **order,
            "id": order_id,
            "created_at": now.isoformat(),
            "tracking_steps": initial_tracking_steps(now.date()),
        }
        database.create_document(ORDERS, record)
        logger.info("Created order %s for product %s", order_id, order.get("product_id"))
        return order_id
    except Exception:
        logger.exception("Error creating order")
        raise


def get_order(order_id: str) -> Optional[Dict[str, Any]]:
    try:
        return _find_one(ORDERS, order_id)
    except Exception:
        logger.exception("Error getting order %s", order_id)
        return None


def get_all_orders() -> List[Dict[str, Any]]:
    try:
        return _find_all(ORDERS)
    except Exception:
        logger.exception("Error getting orders")
        return []


def update_order(order_id: str, updates: Dict[str, Any]) -> None:
    try:
        # an order only comes into being through create_order
        _update(ORDERS, order_id, updates, upsert=False)
    except Exception:
        logger.exception("Error updating order %s", order_id)
        raise


def delete_order(order_id: str) -> None:
    try:
        _remove(ORDERS, order_id)
    except Exception:
        logger.exception("Error deleting order %s", order_id)
        raise


def update_order_status(order: Dict[str, Any], status: str) -> Dict[str, Any]:
    steps = apply_status(order.get("tracking_steps") or [], status)
    update_order(order["id"], {"status": status, "tracking_steps": steps})
    return {**order, "status": status, "tracking_steps": steps}
