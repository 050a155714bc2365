"""Response envelopes of the REST backend, validated once at the boundary."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from servicedesk.models import to_decimal
from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.cart import Cart
from servicedesk.models.history import BillingHistoryRecord, Pagination, PaymentStatusTotal


def _objects_only(value: object, model: type[BaseModel]) -> list:
    # A null or scalar entry is one bad record; the rest still render.
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (dict, model))]


class BillingInfoEnvelope(BaseModel):
    """``GET /billing/info`` → ``{"data": [assignment, ...], "message": ...}``"""

    model_config = ConfigDict(extra="ignore")

    data: list[ServiceAssignment] = []
    message: str = ""

    @field_validator("data", mode="before")
    @classmethod
    def _data(cls, value: object) -> list:
        return _objects_only(value, ServiceAssignment)


class CartEnvelope(BaseModel):
    """``GET /cart/:userId`` and ``POST /cart/add`` → ``{"cart": {...} | null, "message": ...}``"""

    model_config = ConfigDict(extra="ignore")

    cart: Cart | None = None
    message: str = ""


class BillingHistoryEnvelope(BaseModel):
    """``GET /billing/history`` → ``{"data": [...], "pagination": {...}, "message": ...}``"""

    model_config = ConfigDict(extra="ignore")

    data: list[BillingHistoryRecord] = []
    pagination: Pagination = Pagination()
    message: str = ""

    @field_validator("data", mode="before")
    @classmethod
    def _data(cls, value: object) -> list:
        return _objects_only(value, BillingHistoryRecord)

    @field_validator("pagination", mode="before")
    @classmethod
    def _pagination(cls, value: object) -> object:
        return value if isinstance(value, (dict, Pagination)) else Pagination()


class BillingStatsEnvelope(BaseModel):
    """``GET /billing/stats`` → ``{"stats": [{_id, count, totalAmount}], "totalPaid": n, ...}``"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    stats: list[PaymentStatusTotal] = []
    total_paid: Decimal = Field(default=Decimal("0"), alias="totalPaid")
    message: str = ""

    @field_validator("stats", mode="before")
    @classmethod
    def _stats(cls, value: object) -> list:
        return _objects_only(value, PaymentStatusTotal)

    @field_validator("total_paid", mode="before")
    @classmethod
    def _total_paid(cls, value: object) -> Decimal:
        result = to_decimal(value)
        return result if result is not None else Decimal("0")


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = ""
