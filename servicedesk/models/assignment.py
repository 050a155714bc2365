from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from servicedesk.models import to_currency, to_datetime, to_decimal, to_text


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"
    NONE = "none"


class AcceptanceStatus(str, Enum):
    ACCEPTED = "accepted"
    PENDING = "pending"
    REJECTED = "rejected"


class RenewalDate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    label: str = ""
    date: datetime | None = None
    price: Decimal | None = None
    has_paid: bool = Field(default=False, alias="haspaid")

    @field_validator("id", "label", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return to_text(value)

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: object) -> datetime | None:
        return to_datetime(value)

    @field_validator("price", mode="before")
    @classmethod
    def _amount(cls, value: object) -> Decimal | None:
        return to_decimal(value)

    @field_validator("has_paid", mode="before")
    @classmethod
    def _flag(cls, value: object) -> bool:
        return bool(value)


class ServiceAssignment(BaseModel):
    """A client's subscription to a catalog service, as returned by ``/billing/info``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    invoice_id: str = ""
    client_id: str = ""
    client_name: str = ""
    email: str = ""
    service_catalog_id: str = ""
    service_name: str = ""
    status: str = ""
    price: Decimal | None = None
    currency: str = Field(default="", validate_default=True)
    cycle: BillingCycle = BillingCycle.NONE
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
    renewal_dates: list[RenewalDate] = []
    is_accepted: AcceptanceStatus | None = Field(default=None, alias="isaccepted")

    @field_validator(
        "id",
        "invoice_id",
        "client_id",
        "client_name",
        "email",
        "service_catalog_id",
        "service_name",
        "status",
        mode="before",
    )
    @classmethod
    def _text(cls, value: object) -> str:
        return to_text(value)

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, value: object, info: ValidationInfo) -> str:
        return to_currency(value, info)

    @field_validator("price", mode="before")
    @classmethod
    def _amount(cls, value: object) -> Decimal | None:
        return to_decimal(value)

    @field_validator("start_date", "end_date", "created_at", mode="before")
    @classmethod
    def _date(cls, value: object) -> datetime | None:
        return to_datetime(value)

    @field_validator("cycle", mode="before")
    @classmethod
    def _cycle(cls, value: object) -> BillingCycle:
        try:
            return BillingCycle(value)
        except (TypeError, ValueError):
            return BillingCycle.NONE

    @field_validator("is_accepted", mode="before")
    @classmethod
    def _accepted(cls, value: object) -> AcceptanceStatus | None:
        try:
            return AcceptanceStatus(value)
        except (TypeError, ValueError):
            return None

    @field_validator("renewal_dates", mode="before")
    @classmethod
    def _renewals(cls, value: object) -> list:
        if not isinstance(value, list):
            return []
        return [r for r in value if isinstance(r, (dict, RenewalDate))]

    @property
    def is_paid(self) -> bool:
        return self.is_accepted == AcceptanceStatus.ACCEPTED

    @property
    def issue_date(self) -> datetime | None:
        return self.created_at or self.start_date
