from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from servicedesk.models import to_datetime, to_text
from servicedesk.models.catalog import ServiceCatalogItem


class CartLineStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DONE = "done"


class CartLineItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    service: ServiceCatalogItem | None = Field(default=None, alias="serviceId")
    status: CartLineStatus = CartLineStatus.PENDING
    confirmed_at: datetime | None = Field(default=None, alias="confirmedAt")

    @field_validator("id", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return to_text(value)

    @field_validator("service", mode="before")
    @classmethod
    def _populated_service(cls, value: object) -> object:
        # An unpopulated reference arrives as a bare id string.
        if isinstance(value, (dict, ServiceCatalogItem)):
            return value
        return None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: object) -> CartLineStatus:
        try:
            return CartLineStatus(value)
        except (TypeError, ValueError):
            return CartLineStatus.PENDING

    @field_validator("confirmed_at", mode="before")
    @classmethod
    def _date(cls, value: object) -> datetime | None:
        return to_datetime(value)


class Cart(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    user_id: str = Field(default="", alias="userid")
    lines: list[CartLineItem] = Field(default_factory=list, alias="Services")

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return to_text(value)

    @field_validator("lines", mode="before")
    @classmethod
    def _lines(cls, value: object) -> list:
        if not isinstance(value, list):
            return []
        return [line for line in value if isinstance(line, (dict, CartLineItem))]

    @property
    def total(self) -> Decimal:
        """Derived from the lines on every access; never stored."""
        from servicedesk.services.pricing import compute_cart_total

        return compute_cart_total(self)

    def has_service(self, service_id: str) -> bool:
        return any(line.service is not None and line.service.id == service_id for line in self.lines)
