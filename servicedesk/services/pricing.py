"""Catalog pricing: discount resolution and cart totals.

Both functions are pure. Malformed amounts contribute nothing instead of
raising, so one bad catalog record can't break a whole cart.
"""

from __future__ import annotations

from decimal import Decimal

from servicedesk.models import to_decimal
from servicedesk.models.cart import Cart
from servicedesk.models.catalog import Discount, DiscountType

ZERO = Decimal("0")


def resolve_effective_price(base_price: Decimal, discount: Discount | None = None) -> Decimal:
    """Apply ``discount`` to ``base_price``; the result is never negative.

    A missing discount, a falsy value, or an unknown type leaves the price as is.
    """
    if discount is None:
        return base_price
    value = to_decimal(discount.value)
    if not value:
        return base_price

    if discount.type == DiscountType.PERCENTAGE:
        effective = base_price - base_price * value / 100
    elif discount.type == DiscountType.FIXED:
        effective = base_price - value
    else:
        return base_price
    return max(ZERO, effective)


def compute_cart_total(cart: Cart | None) -> Decimal:
    if cart is None or not isinstance(cart.lines, list):
        return ZERO

    total = ZERO
    for line in cart.lines:
        service = line.service
        if service is None or service.price is None:
            continue
        total += resolve_effective_price(service.price, service.discount)
    return total
