import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

import database
import store
from analytics import build_analytics, filter_orders, newest_first, order_stats
from auth import LOGIN_COOKIE, LOGIN_FAILED_MESSAGE, check_credentials, require_admin
from imgbb import ImageUploadError, upload_to_imgbb
from order_form import build_order, stage_order
from pricing import DELIVERY_CHARGE, remaining_amount
from schemas import (
    AdminLogin, OrderDraft, OrderReceipt, Product, ProductUpdate, StagedOrder, StatusUpdate
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("rfap.api")

PRODUCT_NOT_FOUND = "প্রোডাক্ট পাওয়া যায়নি"
ORDER_NOT_FOUND = "অর্ডার পাওয়া যায়নি"
UNKNOWN = "Unknown"


@asynccontextmanager
async def lifespan(app: FastAPI):
    store.initialize_demo_data()
    yield


app = FastAPI(title="Rahela Fashion & Printing API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": "Rahela Fashion & Printing backend is running"}


@app.get("/schema")
def schema_registry():
    # Expose schemas so the DB viewer can use them
    from schemas import SCHEMAS_REGISTRY
    return SCHEMAS_REGISTRY


# Storefront
@app.get("/api/products", response_model=List[Product])
def list_products():
    return store.get_all_products()


@app.get("/api/products/{product_id}", response_model=Product)
def get_product(product_id: str):
    product = store.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return product


@app.post("/api/orders/stage", response_model=StagedOrder)
def stage(draft: OrderDraft):
    """Price the order form; the client holds the result until payment."""
    product = store.get_product(draft.product_id)
    if not product:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return stage_order(product, draft)


@app.post("/api/orders", status_code=201)
def submit_payment(
    order_data: Optional[str] = Form(None),
    sender_number: str = Form(""),
    screenshot: Optional[UploadFile] = File(None),
):
    """
    Payment step: upload the screenshot, then create the order from the staged form.
    Without a staged order there is nothing to pay for, so send the client home.
    """
    try:
        staged = StagedOrder.model_validate_json(order_data) if order_data else None
    except ValidationError:
        logger.warning("Discarding malformed staged order")
        staged = None
    if staged is None:
        return RedirectResponse("/", status_code=303)

    if screenshot is None or not screenshot.filename:
        raise HTTPException(status_code=400, detail="পেমেন্ট স্ক্রিনশট আপলোড করুন")

    try:
        screenshot_url = upload_to_imgbb(screenshot.file.read(), screenshot.filename)
    except ImageUploadError as e:
        raise HTTPException(status_code=502, detail=e.message)

    product = store.get_product(staged.product_id) or {}
    try:
        order_id = store.create_order(build_order(staged, product, sender_number, screenshot_url))
    except Exception:
        # the uploaded screenshot stays on the image host
        raise HTTPException(status_code=500, detail="অর্ডার তৈরি করতে সমস্যা হয়েছে। আবার চেষ্টা করুন।")
    return {"id": order_id}


@app.get("/api/orders/{order_id}", response_model=OrderReceipt)
def get_order(order_id: str):
    order = store.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=ORDER_NOT_FOUND)
    product = store.get_product(order.get("product_id", ""))
    return {
        "order": order,
        "product_name": product["name"] if product else UNKNOWN,
        "delivery_charge": DELIVERY_CHARGE,
        "remaining_amount": remaining_amount(order["total_price"], order["security_charge"]),
    }


# Admin
@app.post("/api/admin/login")
def admin_login(creds: AdminLogin, response: Response):
    if not check_credentials(creds.username, creds.password):
        raise HTTPException(status_code=401, detail=LOGIN_FAILED_MESSAGE)
    # only logout clears the flag
    response.set_cookie(LOGIN_COOKIE, "true", max_age=10 * 365 * 24 * 3600)
    return {"ok": True}


@app.post("/api/admin/logout")
def admin_logout(response: Response):
    response.delete_cookie(LOGIN_COOKIE)
    return {"ok": True}


def _with_product_names(orders):
    names = {p["id"]: p.get("name") for p in store.get_all_products()}
    return [{**o, "product_name": names.get(o.get("product_id")) or UNKNOWN} for o in orders]


@app.get("/api/admin/dashboard")
def dashboard(_=Depends(require_admin)):
    orders = newest_first(store.get_all_orders())
    return {"stats": order_stats(orders), "recent_orders": _with_product_names(orders[:5])}


@app.get("/api/admin/orders")
def admin_orders(search: str = "", status: str = "all", _=Depends(require_admin)):
    orders = filter_orders(newest_first(store.get_all_orders()), search=search, status=status)
    return _with_product_names(orders)


@app.put("/api/admin/orders/{order_id}/status")
def update_status(order_id: str, payload: StatusUpdate, _=Depends(require_admin)):
    order = store.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=ORDER_NOT_FOUND)
    try:
        return store.update_order_status(order, payload.status)
    except Exception:
        raise HTTPException(status_code=500, detail="অর্ডার আপডেট করতে সমস্যা হয়েছে")


@app.delete("/api/admin/orders/{order_id}")
def delete_order(order_id: str, _=Depends(require_admin)):
    try:
        store.delete_order(order_id)
    except Exception:
        raise HTTPException(status_code=500, detail="অর্ডার মুছতে সমস্যা হয়েছে")
    return {"ok": True}


@app.get("/api/admin/products", response_model=List[Product])
def admin_products(_=Depends(require_admin)):
    return store.get_all_products()


@app.post("/api/admin/products", status_code=201)
def create_product(product: Product, _=Depends(require_admin)):
    data = product.model_dump()
    if not data["extra_fields"]:
        data["extra_fields"] = {"delivery_note": ""}
    try:
        store.create_product(data)
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to save product")
    return {"id": product.id}


@app.put("/api/admin/products/{product_id}", response_model=Product)
def update_product(product_id: str, payload: ProductUpdate, _=Depends(require_admin)):
    if not store.get_product(product_id):
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    try:
        store.update_product(product_id, payload.model_dump(exclude_unset=True))
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to save product")
    return store.get_product(product_id)


@app.delete("/api/admin/products/{product_id}")
def delete_product(product_id: str, _=Depends(require_admin)):
    try:
        store.delete_product(product_id)
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to delete product")
    return {"ok": True}


@app.post("/api/admin/images")
def upload_image(file: UploadFile = File(...), _=Depends(require_admin)):
    try:
        return {"url": upload_to_imgbb(file.file.read(), file.filename)}
    except ImageUploadError:
        raise HTTPException(status_code=502, detail="Image upload failed")


@app.get("/api/admin/analytics")
def analytics(days: int = 7, _=Depends(require_admin)):
    return build_analytics(store.get_all_orders(), store.get_all_products(), days=days)


# Utility/test endpoints
@app.get("/test")
def test_database():
    response = {"backend": "✅ Running", "database": "❌ Not configured", "collections": []}
    if database.db is None:
        return response
    try:
        names = set(database.db.list_collection_names())
        response["database"] = "✅ Connected"
        response["collections"] = sorted(names & {store.PRODUCTS, store.ORDERS})
    except Exception as e:
        logger.error("Database check failed: %s", e)
        response["database"] = f"❌ Error: {str(e)[:80]}"
    return response


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
