# storefront/cart.py
"""Pure cart transitions and the aggregates derived from a cart.

Every function takes the current cart as read-only input and returns a new
list. Lines are frozen ``CartLine`` values, so sharing them between the old
and the new cart is safe.
"""
from typing import Any, Dict, Iterable, List, Sequence

from .models import CartLine, Product

Cart = List[CartLine]


def add(cart: Sequence[CartLine], product_id: str) -> Cart:
    if any(line.id == product_id for line in cart):
        return increment(cart, product_id)
    return [*cart, CartLine(id=product_id, qty=1)]


def increment(cart: Sequence[CartLine], product_id: str) -> Cart:
    return [
        line.model_copy(update={"qty": line.qty + 1}) if line.id == product_id else line
        for line in cart
    ]


def decrement(cart: Sequence[CartLine], product_id: str) -> Cart:
    out: Cart = []
    for line in cart:
        if line.id != product_id:
            out.append(line)
        elif line.qty > 1:
            out.append(line.model_copy(update={"qty": line.qty - 1}))
        # a line at qty 1 is dropped rather than kept at 0
    return out


def remove(cart: Sequence[CartLine], product_id: str) -> Cart:
    return [line for line in cart if line.id != product_id]


# ---------------------------
# Aggregation
# ---------------------------
def _prices(inventory: Iterable[Product]) -> Dict[str, int]:
    return {p.id: p.price for p in inventory}


def cart_item_count(cart: Sequence[CartLine]) -> int:
    return sum(line.qty for line in cart)


def cart_total(cart: Sequence[CartLine], inventory: Iterable[Product]) -> int:
    """Sum of qty * price; lines whose product is gone contribute 0."""
    prices = _prices(inventory)
    return sum(line.qty * prices.get(line.id, 0) for line in cart)


def cart_lines(cart: Sequence[CartLine], inventory: Iterable[Product]) -> List[Dict[str, Any]]:
    """Cart lines joined with their products, in cart order."""
    by_id = {p.id: p for p in inventory}
    items = []
    for line in cart:
        prod = by_id.get(line.id)
        if prod is None:
            items.append({"product_id": line.id, "product": None, "qty": line.qty,
                          "line_total": 0, "available": False})
            continue
        items.append({"product_id": line.id, "product": prod, "qty": line.qty,
                      "line_total": prod.price * line.qty, "available": True})
    return items
