"""
Order form and payment step.

The form produces a ``StagedOrder`` that the client keeps until the payment
screenshot is submitted; only then is an order record built and stored.
"""
from typing import Any, Dict, List

from pricing import (
    DELIVERY_CHARGE,
    calculate_total,
    remaining_amount,
    security_charge,
    snapshot_addons,
)
from schemas import JerseyDetail, OrderDraft, StagedOrder


def resize_jersey_details(details: List[JerseyDetail], quantity: int) -> List[JerseyDetail]:
    """One jersey record per unit: pad with blanks or drop the surplus."""
    details = list(details[:quantity])
    details.extend(JerseyDetail() for _ in range(quantity - len(details)))
    return details


def stage_order(product: Dict[str, Any], draft: OrderDraft) -> StagedOrder:
    total = calculate_total(product, draft.quantity, draft.addons)
    security = security_charge(draft.quantity)
    data = draft.model_dump()
    data.update(
        product_id=product["id"],
        jersey_details=resize_jersey_details(draft.jersey_details, draft.quantity),
        total_price=total,
        security_charge=security,
        delivery_charge=DELIVERY_CHARGE,
        remaining_amount=remaining_amount(total, security),
    )
    return StagedOrder(**data)


def build_order(staged: StagedOrder, product: Dict[str, Any], sender_number: str,
                screenshot_url: str) -> Dict[str, Any]:
    """Order record minus the key, timestamp and tracking steps the store assigns."""
    # priced from the catalog; the staged total only stands in for a deleted product
    total = calculate_total(product, staged.quantity, staged.addons) if product else staged.total_price
    return {
        "product_id": staged.product_id,
        "customer_name": staged.name,
        "phone": staged.phone,
        "address": staged.address,
        "quantity": staged.quantity,
        "extra_fields": {
            "delivery_note": staged.delivery_note,
            "jersey_details": [d.model_dump() for d in staged.jersey_details],
        },
        "addons": snapshot_addons(product, staged.addons),
        "total_price": total,
        "security_charge": security_charge(staged.quantity),
        "payment_screenshot": screenshot_url,
        "sender_number": sender_number,
        "status": "pending",
    }
