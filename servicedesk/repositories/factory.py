from servicedesk.api.client import ApiClient
from servicedesk.repositories.base import BillingRepository, CartRepository


def get_api_client() -> ApiClient:
    from servicedesk.settings import settings

    return ApiClient(
        base_url=settings.api_url,
        headers=settings.auth_headers(),
        timeout=settings.api_timeout,
        default_currency=settings.default_currency,
    )


def get_billing_repository(client: ApiClient | None = None) -> BillingRepository:
    from servicedesk.repositories.http import HTTPBillingRepository

    return HTTPBillingRepository(client or get_api_client())


def get_cart_repository(client: ApiClient | None = None) -> CartRepository:
    from servicedesk.repositories.http import HTTPCartRepository

    return HTTPCartRepository(client or get_api_client())
