from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class RowSource(str, Enum):
    SERVICE = "service"
    RENEWAL = "renewal"


class InvoiceStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
    OVERDUE = "overdue"


class StatusFilter(str, Enum):
    ALL = "all"
    PAID = "paid"
    UNPAID = "unpaid"
    OVERDUE = "overdue"


def status_bucket(paid: bool, is_overdue: bool) -> InvoiceStatus:
    if is_overdue:
        return InvoiceStatus.OVERDUE
    if not paid:
        return InvoiceStatus.UNPAID
    return InvoiceStatus.PAID


class BillableRow(BaseModel):
    """One invoice-like line derived from an assignment; never persisted."""

    source: RowSource
    service_id: str = ""
    invoice_id: str = ""
    renewal_id: str | None = None
    service_name: str = ""
    currency: str = "USD"
    issue_date: datetime | None = None
    due_date: datetime | None = None
    amount: Decimal = Decimal("0")
    paid: bool = False
    is_overdue: bool = False

    @property
    def status(self) -> InvoiceStatus:
        return status_bucket(self.paid, self.is_overdue)

    @property
    def reference(self) -> str:
        """The text the invoice search matches against."""
        return self.invoice_id or self.service_id or self.service_name or ""
