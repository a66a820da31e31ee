"""Application tests for stock policy during placement."""

import pytest
from ordering.catalogue.product import Product
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import InvalidOperationError


def _place(customer, as_of):
    return current_domain.process(PlaceOrder(customer_id=str(customer.id), as_of=as_of), asynchronous=False)


@pytest.fixture()
def scarce_cart(make_pincode, make_customer, make_product, fill_cart):
    """Phone has plenty of stock; only one Lamp is left but two are in the cart."""
    make_pincode()
    customer = make_customer()
    phone = make_product(name="Phone", quantity=10, discounted_price=100.0)
    lamp = make_product(name="Lamp", quantity=1, discounted_price=30.0)
    fill_cart(customer, (phone, 1), (lamp, 2))
    return {"customer": customer, "phone": phone, "lamp": lamp}


class TestRejectPolicy:
    def test_insufficient_stock_rejects_the_order(self, scarce_cart, as_of):
        with pytest.raises(InvalidOperationError):
            _place(scarce_cart["customer"], as_of)

        assert current_domain.repository_for(Order)._dao.query.all().items == []

    def test_earlier_withdrawals_are_restored(self, scarce_cart, as_of):
        with pytest.raises(InvalidOperationError):
            _place(scarce_cart["customer"], as_of)

        products = current_domain.repository_for(Product)
        assert products.get(scarce_cart["phone"].id).quantity == 10
        assert products.get(scarce_cart["lamp"].id).quantity == 1


class TestBackorderPolicy:
    def test_stock_may_go_negative(self, scarce_cart, as_of, monkeypatch):
        custom = dict(current_domain.config.get("custom", {}) or {})
        custom["stock_policy"] = "backorder"
        monkeypatch.setitem(current_domain.config, "custom", custom)

        order_id = _place(scarce_cart["customer"], as_of)

        assert current_domain.repository_for(Order).get(order_id) is not None
        assert current_domain.repository_for(Product).get(scarce_cart["lamp"].id).quantity == -1
