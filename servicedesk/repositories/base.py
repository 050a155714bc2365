from abc import ABC, abstractmethod
from datetime import date

from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.cart import Cart, CartLineStatus
from servicedesk.models.history import BillingHistoryPage, BillingStats, PaymentStatus


class BillingRepository(ABC):
    @abstractmethod
    def list_assignments(self) -> list[ServiceAssignment]: ...

    @abstractmethod
    def list_history(
        self,
        status: PaymentStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> BillingHistoryPage: ...

    @abstractmethod
    def get_stats(self) -> BillingStats: ...


class CartRepository(ABC):
    @abstractmethod
    def get_by_user(self, user_id: str) -> Cart | None: ...

    @abstractmethod
    def add_service(self, user_id: str, service_id: str) -> Cart: ...

    @abstractmethod
    def remove_service(self, user_id: str, service_id: str) -> Cart: ...

    @abstractmethod
    def clear(self, user_id: str) -> Cart: ...

    @abstractmethod
    def update_line_status(self, line_id: str, status: CartLineStatus) -> Cart: ...
