"""Order pricing: unit price and add-ons per unit, advance security charge, delivery."""
from typing import Any, Dict, Iterable, List

SECURITY_CHARGE_PER_UNIT = 150
DELIVERY_CHARGE = 110


def _addons(product: Dict[str, Any]) -> List[Dict[str, Any]]:
    return product.get("addons") or []


def calculate_total(product: Dict[str, Any], quantity: int, selected_addons: Iterable[str]) -> float:
    selected = set(selected_addons)
    total = product["price"] * quantity
    for addon in _addons(product):
        if addon["name"] in selected:
            total += addon["price"] * quantity
    return total


def security_charge(quantity: int) -> float:
    return SECURITY_CHARGE_PER_UNIT * quantity


def remaining_amount(total_price: float, security: float) -> float:
    """Amount due on delivery after the advance."""
    return total_price + DELIVERY_CHARGE - security


def snapshot_addons(product: Dict[str, Any], selected_addons: Iterable[str]) -> List[Dict[str, Any]]:
    # names the product no longer offers are kept at price 0
    prices = {a["name"]: a["price"] for a in _addons(product)}
    return [{"name": name, "price": prices.get(name, 0)} for name in selected_addons]
