from __future__ import annotations

import logging
from datetime import date
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from servicedesk.api.errors import ApiError, ApiErrorKind
from servicedesk.api.schemas import (
    BillingHistoryEnvelope,
    BillingInfoEnvelope,
    BillingStatsEnvelope,
    CartEnvelope,
    ErrorEnvelope,
)
from servicedesk.models import FALLBACK_CURRENCY
from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.cart import Cart, CartLineStatus
from servicedesk.models.history import BillingHistoryPage, BillingStats, PaymentStatus

logger = logging.getLogger(__name__)

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


class ApiClient:
    """Synchronous client for the service catalog REST backend.

    All failures are raised as :class:`ApiError`.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
        default_currency: str = FALLBACK_CURRENCY,
    ) -> None:
        # Records without a currency code are priced in this one.
        self._context = {"default_currency": default_currency}
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"Content-Type": "application/json", **(headers or {})},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, envelope: type[EnvelopeT], **kwargs: Any) -> EnvelopeT:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out: %s", method, path, exc)
            raise ApiError(ApiErrorKind.NETWORK, "The request timed out.") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(ApiErrorKind.NETWORK) from exc

        logger.debug("%s %s -> %d", method, path, response.status_code)

        if response.is_error:
            raise ApiError.from_status(response.status_code, _error_message(response))

        try:
            return envelope.model_validate(response.json(), context=self._context)
        except (ValueError, ValidationError) as exc:
            logger.warning("%s %s returned an unreadable body: %s", method, path, exc)
            raise ApiError(ApiErrorKind.INVALID_RESPONSE, status_code=response.status_code) from exc

    def get_billing_info(self) -> list[ServiceAssignment]:
        result = self._request("GET", "/billing/info", BillingInfoEnvelope)
        logger.debug("Fetched %d assignments", len(result.data))
        return result.data

    def get_cart(self, user_id: str) -> Cart | None:
        result = self._request("GET", f"/cart/{user_id}", CartEnvelope)
        return result.cart

    def add_to_cart(self, user_id: str, service_id: str) -> Cart:
        result = self._request(
            "POST",
            "/cart/add",
            CartEnvelope,
            json={"userid": user_id, "serviceId": service_id},
        )
        if result.cart is None:
            raise ApiError(ApiErrorKind.INVALID_RESPONSE, "The server did not return the updated cart.")
        logger.info("Service %s added to cart of user %s", service_id, user_id)
        return result.cart

    def remove_from_cart(self, user_id: str, service_id: str) -> Cart:
        # This endpoint answers with the bare cart document, not an envelope.
        cart = self._request(
            "POST",
            "/cart/remove",
            Cart,
            json={"userid": user_id, "serviceId": service_id},
        )
        logger.info("Service %s removed from cart of user %s", service_id, user_id)
        return cart

    def clear_cart(self, user_id: str) -> Cart:
        cart = self._request("POST", "/cart/clear", Cart, json={"userid": user_id})
        logger.info("Cart of user %s cleared", user_id)
        return cart

    def update_cart_line_status(self, line_id: str, status: CartLineStatus) -> Cart:
        """Move one cart line (by its own id, not the service id) to ``status``."""
        cart = self._request(
            "PATCH",
            "/cart/update-status",
            Cart,
            json={"serviceItemId": line_id, "status": CartLineStatus(status).value},
        )
        logger.info("Cart line %s set to %s", line_id, CartLineStatus(status).value)
        return cart

    def get_billing_history(
        self,
        status: PaymentStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> BillingHistoryPage:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if status is not None:
            params["status"] = PaymentStatus(status).value
        if start_date is not None:
            params["startDate"] = start_date.isoformat()
        if end_date is not None:
            params["endDate"] = end_date.isoformat()

        result = self._request("GET", "/billing/history", BillingHistoryEnvelope, params=params)
        logger.debug("Fetched %d billing history records (page %d)", len(result.data), result.pagination.page)
        return BillingHistoryPage(records=result.data, pagination=result.pagination)

    def get_billing_stats(self) -> BillingStats:
        result = self._request("GET", "/billing/stats", BillingStatsEnvelope)
        return BillingStats(totals=result.stats, total_paid=result.total_paid)


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorEnvelope.model_validate(response.json()).message
    except (ValueError, ValidationError):
        return ""
