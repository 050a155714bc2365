from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from servicedesk.models import to_currency, to_datetime, to_decimal, to_text


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class BillingHistoryRecord(BaseModel):
    """One renewal payment attempt, as listed by ``/billing/history``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    user_email: str = ""
    assign_service_id: str = ""
    renewal_id: str = ""
    invoice_id: str = ""
    service_name: str = ""
    amount: Decimal = Decimal("0")
    currency: str = Field(default="", validate_default=True)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str = ""
    payment_date: datetime | None = None
    failure_reason: str = ""
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator(
        "id",
        "user_email",
        "assign_service_id",
        "renewal_id",
        "invoice_id",
        "service_name",
        "payment_method",
        "failure_reason",
        mode="before",
    )
    @classmethod
    def _text(cls, value: object) -> str:
        return to_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value: object) -> Decimal:
        result = to_decimal(value)
        return result if result is not None else Decimal("0")

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, value: object, info: ValidationInfo) -> str:
        return to_currency(value, info)

    @field_validator("payment_status", mode="before")
    @classmethod
    def _status(cls, value: object) -> PaymentStatus:
        try:
            return PaymentStatus(value)
        except (TypeError, ValueError):
            return PaymentStatus.PENDING

    @field_validator("payment_date", "created_at", mode="before")
    @classmethod
    def _date(cls, value: object) -> datetime | None:
        return to_datetime(value)


class Pagination(BaseModel):
    total: int = 0
    page: int = 1
    limit: int = 10
    pages: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class BillingHistoryPage(BaseModel):
    records: list[BillingHistoryRecord] = []
    pagination: Pagination = Pagination()


class PaymentStatusTotal(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: PaymentStatus | None = Field(default=None, alias="_id")
    count: int = 0
    total_amount: Decimal = Field(default=Decimal("0"), alias="totalAmount")

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: object) -> PaymentStatus | None:
        try:
            return PaymentStatus(value)
        except (TypeError, ValueError):
            return None

    @field_validator("total_amount", mode="before")
    @classmethod
    def _amount(cls, value: object) -> Decimal:
        result = to_decimal(value)
        return result if result is not None else Decimal("0")


class BillingStats(BaseModel):
    totals: list[PaymentStatusTotal] = []
    total_paid: Decimal = Decimal("0")

    def for_status(self, status: PaymentStatus) -> PaymentStatusTotal:
        return next((t for t in self.totals if t.status == status), PaymentStatusTotal(status=status))
