from __future__ import annotations

from datetime import date

from servicedesk.api.client import ApiClient
from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.cart import Cart, CartLineStatus
from servicedesk.models.history import BillingHistoryPage, BillingStats, PaymentStatus
from servicedesk.repositories.base import BillingRepository, CartRepository


class HTTPBillingRepository(BillingRepository):
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_assignments(self) -> list[ServiceAssignment]:
        return self.client.get_billing_info()

    def list_history(
        self,
        status: PaymentStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> BillingHistoryPage:
        return self.client.get_billing_history(
            status=status, start_date=start_date, end_date=end_date, page=page, limit=limit
        )

    def get_stats(self) -> BillingStats:
        return self.client.get_billing_stats()


class HTTPCartRepository(CartRepository):
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def get_by_user(self, user_id: str) -> Cart | None:
        return self.client.get_cart(user_id)

    def add_service(self, user_id: str, service_id: str) -> Cart:
        return self.client.add_to_cart(user_id, service_id)

    def remove_service(self, user_id: str, service_id: str) -> Cart:
        return self.client.remove_from_cart(user_id, service_id)

    def clear(self, user_id: str) -> Cart:
        return self.client.clear_cart(user_id)

    def update_line_status(self, line_id: str, status: CartLineStatus) -> Cart:
        return self.client.update_cart_line_status(line_id, status)
