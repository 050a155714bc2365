from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from servicedesk.models import to_currency, to_decimal, to_text


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class BillingType(str, Enum):
    ONE_TIME = "one_time"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    PAY_AS_YOU_GO = "pay_as_you_go"


class Discount(BaseModel):
    type: DiscountType
    value: Decimal


class ServiceCatalogItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    name: str = ""
    price: Decimal | None = None
    currency: str = Field(default="", validate_default=True)
    billing_type: BillingType | None = Field(default=None, alias="billingType")
    has_discount: bool = Field(default=False, alias="hasDiscount")
    discount_type: DiscountType | None = Field(default=None, alias="discountType")
    discount_value: Decimal | None = Field(default=None, alias="discountValue")

    @field_validator("id", "name", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return to_text(value)

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, value: object, info: ValidationInfo) -> str:
        return to_currency(value, info)

    @field_validator("price", "discount_value", mode="before")
    @classmethod
    def _amount(cls, value: object) -> Decimal | None:
        return to_decimal(value)

    @field_validator("has_discount", mode="before")
    @classmethod
    def _flag(cls, value: object) -> bool:
        return bool(value)

    @field_validator("discount_type", mode="before")
    @classmethod
    def _discount_type(cls, value: object) -> DiscountType | None:
        try:
            return DiscountType(value)
        except (TypeError, ValueError):
            return None

    @field_validator("billing_type", mode="before")
    @classmethod
    def _billing_type(cls, value: object) -> BillingType | None:
        try:
            return BillingType(value)
        except (TypeError, ValueError):
            return None

    @property
    def discount(self) -> Discount | None:
        """The active discount, or None when the item isn't discounted."""
        if not self.has_discount or self.discount_type is None or not self.discount_value:
            return None
        return Discount(type=self.discount_type, value=self.discount_value)
