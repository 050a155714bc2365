from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class RenewalReminder(BaseModel):
    assignment_id: str
    renewal_id: str = ""
    client_name: str = ""
    email: str = ""
    service_name: str = ""
    renewal_label: str = ""
    renewal_date: datetime
    renewal_price: Decimal | None = None
    currency: str = "USD"
    days_until_due: int
