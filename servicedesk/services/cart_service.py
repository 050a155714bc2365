from __future__ import annotations

import logging
from decimal import Decimal

from servicedesk.models.cart import Cart, CartLineStatus
from servicedesk.repositories.base import CartRepository
from servicedesk.services.pricing import compute_cart_total

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, repo: CartRepository) -> None:
        self.repo = repo

    def get_cart(self, user_id: str) -> Cart | None:
        result = self.repo.get_by_user(user_id)
        logger.debug(
            "get_cart user=%s lines=%d",
            user_id,
            len(result.lines) if result is not None else 0,
        )
        return result

    def cart_total(self, user_id: str) -> Decimal:
        return compute_cart_total(self.get_cart(user_id))

    def add_service(self, user_id: str, service_id: str) -> Cart:
        if not user_id or not service_id:
            raise ValueError("Both a user id and a service id are required")
        cart = self.repo.get_by_user(user_id)
        if cart is not None and cart.has_service(service_id):
            raise ValueError("This service is already in your cart")
        result = self.repo.add_service(user_id, service_id)
        logger.info("Cart updated: user=%s added=%s lines=%d", user_id, service_id, len(result.lines))
        return result

    def remove_service(self, user_id: str, service_id: str) -> Cart:
        result = self.repo.remove_service(user_id, service_id)
        logger.info("Cart updated: user=%s removed=%s lines=%d", user_id, service_id, len(result.lines))
        return result

    def clear_cart(self, user_id: str) -> Cart:
        if not user_id:
            raise ValueError("A user id is required")
        result = self.repo.clear(user_id)
        logger.info("Cart cleared: user=%s", user_id)
        return result

    def update_line_status(self, line_id: str, status: CartLineStatus | str) -> Cart:
        if not line_id:
            raise ValueError("A cart line id is required")
        try:
            status = CartLineStatus(status)
        except ValueError:
            raise ValueError(f"Unknown cart line status: {status}") from None
        result = self.repo.update_line_status(line_id, status)
        logger.info("Cart line updated: line=%s status=%s", line_id, status.value)
        return result
