"""Application tests for CancelOrder — stock restoration and ownership."""

import pytest
from ordering.catalogue.product import Product
from ordering.order.cancellation import CancelOrder
from ordering.order.order import Order, OrderStatus
from ordering.order.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _place(customer, as_of):
    return current_domain.process(PlaceOrder(customer_id=str(customer.id), as_of=as_of), asynchronous=False)


def _cancel(customer_id, order_id):
    return current_domain.process(CancelOrder(customer_id=str(customer_id), order_id=order_id), asynchronous=False)


def _stock(product):
    return current_domain.repository_for(Product).get(product.id).quantity


class TestCancelOrder:
    def test_place_then_cancel_restores_stock(self, shopper, as_of):
        order_id = _place(shopper["customer"], as_of)
        assert _stock(shopper["phone"]) == 8

        _cancel(shopper["customer"].id, order_id)

        assert _stock(shopper["phone"]) == 10
        assert _stock(shopper["case"]) == 5

    def test_order_and_items_are_retired(self, shopper, as_of):
        order_id = _place(shopper["customer"], as_of)
        _cancel(shopper["customer"].id, order_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.CANCELLED.value
        assert order.deleted is True
        assert all(item.deleted for item in order.items)
        assert str(order.updated_by) == str(shopper["customer"].id)

    def test_restores_stock_of_retired_product(self, shopper, as_of):
        order_id = _place(shopper["customer"], as_of)
        current_domain.repository_for(Product)._dao.query.filter(id=str(shopper["case"].id)).update(deleted=True)

        _cancel(shopper["customer"].id, order_id)

        assert _stock(shopper["case"]) == 5


class TestCancelOrderRejections:
    def test_someone_elses_order_is_not_found(self, shopper, make_customer, as_of):
        order_id = _place(shopper["customer"], as_of)
        stranger = make_customer(name="Vikram Sen", mobile_number="+919800000002")

        with pytest.raises(ObjectNotFoundError):
            _cancel(stranger.id, order_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert _stock(shopper["phone"]) == 8

    def test_already_cancelled_order_is_not_found(self, shopper, as_of):
        order_id = _place(shopper["customer"], as_of)
        _cancel(shopper["customer"].id, order_id)

        with pytest.raises(ObjectNotFoundError):
            _cancel(shopper["customer"].id, order_id)

        # Stock is restored exactly once
        assert _stock(shopper["phone"]) == 10

    def test_unknown_order_is_not_found(self, shopper):
        with pytest.raises(ObjectNotFoundError):
            _cancel(shopper["customer"].id, "ord-missing")
