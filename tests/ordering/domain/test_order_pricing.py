"""Tests for Order assembly and cancellation on the aggregate."""

import json
from datetime import date

import pytest
from ordering.cart.snapshot import CartLine
from ordering.order.events import OrderCancelled, OrderPlaced
from ordering.order.order import Order, OrderStatus
from protean.exceptions import ValidationError

DELIVERY = date(2024, 1, 9)

LINES = (
    CartLine(product_id="prod-001", quantity=2, total_price=200.0),
    CartLine(product_id="prod-002", quantity=1, total_price=20.0),
)


def _place(**overrides):
    defaults = {
        "customer_id": "cust-001",
        "lines": LINES,
        "expected_delivery_date": DELIVERY,
    }
    defaults.update(overrides)
    return Order.place(**defaults)


class TestOrderPlacement:
    def test_items_mirror_cart_lines(self):
        order = _place()
        assert [(str(i.product_id), i.quantity, i.price) for i in order.items] == [
            ("prod-001", 2, 200.0),
            ("prod-002", 1, 20.0),
        ]

    def test_starts_pending_and_active(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value
        assert order.deleted is False

    def test_total_without_discount_is_subtotal(self):
        order = _place()
        assert order.subtotal == 220.0
        assert order.total_amount == 220.0
        assert order.coupon_applied is False
        assert order.offer_applied is False

    def test_total_is_subtotal_minus_discount(self):
        order = _place(discount_amount=22.0, discount_code="SAVE10", coupon_applied=True)
        assert order.total_amount == pytest.approx(sum(i.price for i in order.items) - order.discount_amount)
        assert order.discount_code == "SAVE10"

    def test_both_discount_mechanisms_are_rejected(self):
        with pytest.raises(ValidationError):
            _place(discount_amount=10.0, coupon_applied=True, offer_applied=True)

    def test_audit_fields_name_the_customer(self):
        order = _place()
        assert str(order.created_by) == "cust-001"
        assert all(str(item.created_by) == "cust-001" for item in order.items)

    def test_raises_order_placed(self):
        order = _place(discount_amount=44.0, discount_code="FEST20", offer_applied=True)

        placed = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(placed) == 1
        event = placed[0]
        assert event.order_id == str(order.id)
        assert event.total_amount == pytest.approx(176.0)
        assert event.expected_delivery_date == DELIVERY
        assert json.loads(event.items) == [
            {"product_id": "prod-001", "quantity": 2, "price": 200.0},
            {"product_id": "prod-002", "quantity": 1, "price": 20.0},
        ]


class TestOrderCancellation:
    def test_cancel_retires_order_and_items(self):
        order = _place()
        restored = order.cancel(cancelled_by="cust-001")

        assert order.status == OrderStatus.CANCELLED.value
        assert order.deleted is True
        assert all(item.deleted for item in order.items)
        assert [(str(i.product_id), i.quantity) for i in restored] == [("prod-001", 2), ("prod-002", 1)]

    def test_cancel_raises_order_cancelled(self):
        order = _place()
        order.cancel(cancelled_by="cust-001")

        cancelled = [e for e in order._events if isinstance(e, OrderCancelled)]
        assert len(cancelled) == 1
        assert json.loads(cancelled[0].items) == [
            {"product_id": "prod-001", "quantity": 2},
            {"product_id": "prod-002", "quantity": 1},
        ]

    def test_cancel_twice_is_rejected(self):
        order = _place()
        order.cancel(cancelled_by="cust-001")
        with pytest.raises(ValidationError):
            order.cancel(cancelled_by="cust-001")
