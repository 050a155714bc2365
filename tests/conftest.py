"""Factories for backend-shaped billing and cart payloads."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.cart import Cart

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _assignment_payload(**overrides) -> dict:
    defaults = {
        "_id": "65a1f0c2e4b0a1b2c3d4e5f6",
        "invoice_id": "INV-1001",
        "client_id": "client-1",
        "client_name": "Jane Roe",
        "email": "jane@example.com",
        "service_catalog_id": "svc-1",
        "service_name": "Managed Hosting",
        "status": "active",
        "price": "100",
        "cycle": "monthly",
        "start_date": "2023-01-01T00:00:00.000Z",
        "end_date": "2023-12-31T00:00:00.000Z",
        "createdAt": "2022-12-20T10:00:00.000Z",
        "isaccepted": "pending",
        "renewal_dates": [],
    }
    defaults.update(overrides)
    return defaults


def _sample_assignment(**overrides) -> ServiceAssignment:
    return ServiceAssignment.model_validate(_assignment_payload(**overrides))


def _catalog_payload(**overrides) -> dict:
    defaults = {
        "_id": "svc-1",
        "name": "Managed Hosting",
        "price": 100,
        "currency": "USD",
        "billingType": "monthly",
        "hasDiscount": False,
    }
    defaults.update(overrides)
    return defaults


def _sample_cart(*services: dict, **overrides) -> Cart:
    payload = {
        "_id": "cart-1",
        "userid": "user-1",
        "Services": [
            {"_id": f"line-{i}", "serviceId": service, "status": "pending"}
            for i, service in enumerate(services)
        ],
    }
    payload.update(overrides)
    return Cart.model_validate(payload)


@pytest.fixture()
def now():
    return NOW


@pytest.fixture()
def assignment_payload():
    return _assignment_payload


@pytest.fixture()
def sample_assignment():
    return _sample_assignment


@pytest.fixture()
def catalog_payload():
    return _catalog_payload


@pytest.fixture()
def sample_cart():
    return _sample_cart
