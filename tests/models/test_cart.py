from decimal import Decimal

from servicedesk.models.cart import Cart, CartLineItem, CartLineStatus


class TestCartLineItem:
    def test_populated_service(self, catalog_payload):
        line = CartLineItem.model_validate({"_id": "l1", "serviceId": catalog_payload(), "status": "confirmed"})
        assert line.service is not None
        assert line.service.name == "Managed Hosting"
        assert line.status == CartLineStatus.CONFIRMED

    def test_unpopulated_reference(self):
        line = CartLineItem.model_validate({"_id": "l1", "serviceId": "65a1f0c2e4b0a1b2c3d4e5f6"})
        assert line.service is None

    def test_unknown_status_is_pending(self):
        line = CartLineItem.model_validate({"serviceId": None, "status": "archived"})
        assert line.status == CartLineStatus.PENDING

    def test_confirmed_at(self):
        line = CartLineItem.model_validate({"confirmedAt": "2024-02-01T00:00:00Z"})
        assert line.confirmed_at.year == 2024


class TestCart:
    def test_aliases(self, sample_cart, catalog_payload):
        cart = sample_cart(catalog_payload())
        assert cart.id == "cart-1"
        assert cart.user_id == "user-1"
        assert len(cart.lines) == 1

    def test_non_list_lines(self):
        cart = Cart.model_validate({"userid": "u", "Services": {"serviceId": "x"}})
        assert cart.lines == []

    def test_non_object_lines_dropped(self, catalog_payload):
        cart = Cart.model_validate({"Services": ["junk", 3, {"serviceId": catalog_payload()}]})
        assert len(cart.lines) == 1

    def test_numeric_user_id(self):
        assert Cart.model_validate({"userid": 42}).user_id == "42"

    def test_total_is_derived(self, sample_cart, catalog_payload):
        cart = sample_cart(catalog_payload(price=30), catalog_payload(_id="svc-2", price=20))
        assert cart.total == Decimal("50")
        cart.lines.pop()
        assert cart.total == Decimal("30")

    def test_has_service(self, sample_cart, catalog_payload):
        cart = sample_cart(catalog_payload(_id="svc-9"))
        assert cart.has_service("svc-9") is True
        assert cart.has_service("svc-1") is False
