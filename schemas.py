"""
Database Schemas for Rahela Fashion & Printing

Each Pydantic model below is either a stored collection record (``products``,
``orders``) or a request/response body of the storefront API.
"""
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

OrderStatus = Literal["pending", "confirmed", "processing", "shipped", "delivered", "cancelled"]


# Catalog
class Addon(BaseModel):
    name: str = Field(..., description="Add-on label e.g. 'সামনে নাম্বার প্রিন্ট'")
    price: float = Field(0, ge=0, description="Surcharge per unit")

class Product(BaseModel):
    id: str = Field(..., description="Caller supplied product key")
    name: str
    category: str = ""
    description: str = Field("", description="Raw HTML markup")
    price: float = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    video: Optional[str] = Field(None, description="Optional video URL")
    images: List[str] = Field(default_factory=list, description="Image URLs, first is primary")
    addons: List[Addon] = Field(default_factory=list)
    extra_fields: Dict[str, Any] = Field(default_factory=dict, description="Custom-order hints")

class ProductUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    video: Optional[str] = None
    images: Optional[List[str]] = None
    addons: Optional[List[Addon]] = None
    extra_fields: Optional[Dict[str, Any]] = None


# Orders
class JerseyDetail(BaseModel):
    name: str = ""
    number: str = ""
    size: str = ""

class OrderExtraFields(BaseModel):
    delivery_note: str = ""
    jersey_details: List[JerseyDetail] = Field(default_factory=list)

class TrackingStep(BaseModel):
    step: str
    completed: bool = False
    date: Optional[str] = None

class Order(BaseModel):
    id: str
    product_id: str
    customer_name: str
    phone: str
    address: str
    sender_number: str = ""
    quantity: int = Field(1, ge=1)
    extra_fields: OrderExtraFields = Field(default_factory=OrderExtraFields)
    addons: List[Addon] = Field(default_factory=list, description="Add-ons as priced at order time")
    total_price: float = Field(..., ge=0)
    security_charge: float = Field(..., ge=0)
    payment_screenshot: Optional[str] = None
    status: OrderStatus = "pending"
    tracking_steps: List[TrackingStep] = Field(default_factory=list)
    created_at: str = Field(..., description="ISO timestamp")


# Order form -> payment
class OrderDraft(BaseModel):
    product_id: str
    name: str
    phone: str
    address: str
    quantity: int = Field(1, ge=1)
    delivery_note: str = ""
    jersey_details: List[JerseyDetail] = Field(default_factory=list)
    addons: List[str] = Field(default_factory=list, description="Selected add-on names")

class StagedOrder(OrderDraft):
    total_price: float = Field(..., ge=0)
    security_charge: float = Field(..., ge=0)
    delivery_charge: float = Field(..., ge=0)
    remaining_amount: float

class OrderReceipt(BaseModel):
    order: Order
    product_name: str
    delivery_charge: float
    remaining_amount: float


# Admin
class AdminLogin(BaseModel):
    username: str
    password: str

class StatusUpdate(BaseModel):
    status: OrderStatus

# The Flames database viewer reads from GET /schema
SCHEMAS_REGISTRY = {
    "product": Product.model_json_schema(),
    "order": Order.model_json_schema(),
    "orderdraft": OrderDraft.model_json_schema(),
    "stagedorder": StagedOrder.model_json_schema(),
}
