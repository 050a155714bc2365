from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from servicedesk.models.assignment import BillingCycle


class StatementLine(BaseModel):
    label: str
    date: datetime | None = None
    amount: Decimal = Decimal("0")


class InvoiceStatement(BaseModel):
    """Printable view of one assignment: base service line plus paid renewals."""

    assignment_id: str
    invoice_number: str
    client_name: str = ""
    email: str = ""
    service_name: str = ""
    currency: str = "USD"
    cycle: BillingCycle = BillingCycle.NONE
    issue_date: datetime | None = None
    period_start: datetime | None = None
    period_end: datetime | None = None
    lines: list[StatementLine] = []
    subtotal: Decimal = Decimal("0")
    next_renewal_date: datetime | None = None
