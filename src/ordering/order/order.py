"""Order aggregate — a committed purchase assembled from a cart snapshot.

Orders are created in ``Pending`` status together with their items during
placement. Cancellation is the only later transition: it soft-deletes the
order and its items and flips the status to ``Cancelled``. Orders are never
removed from storage.

Pricing is fixed at placement::

    total_amount = sum(item.price) - discount_amount

where the discount comes from exactly one coupon, exactly one offer, or
nothing.
"""

import json
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Date, DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced
from ordering.shared.clock import now
from ordering.shared.records import find_active_one


class OrderStatus(Enum):
    PENDING = "Pending"
    CANCELLED = "Cancelled"


@ordering.entity(part_of="Order")
class OrderItem:
    """One cart line frozen into the order.

    ``price`` is the line total (quantity times the unit price at the time
    of placement). ``quantity`` is exactly what was withdrawn from stock.
    """

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    deleted = Boolean(default=False)
    created_by = Identifier()
    created_at = DateTime()

    def as_line(self) -> dict:
        return {"product_id": str(self.product_id), "quantity": self.quantity, "price": self.price}


@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    subtotal = Float(default=0.0, min_value=0.0)
    discount_amount = Float(default=0.0, min_value=0.0)
    discount_code = String(max_length=100)
    coupon_applied = Boolean(default=False)
    offer_applied = Boolean(default=False)
    total_amount = Float(required=True, min_value=0.0)
    expected_delivery_date = Date(required=True)
    deleted = Boolean(default=False)
    created_by = Identifier()
    updated_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def at_most_one_discount_mechanism(self):
        if self.coupon_applied and self.offer_applied:
            raise ValidationError({"discount": ["Only one discount code (coupon or offer) can be applied"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        lines,
        expected_delivery_date,
        discount_amount=0.0,
        discount_code=None,
        coupon_applied=False,
        offer_applied=False,
    ):
        """Build a pending order from cart lines.

        Args:
            customer_id: The customer placing the order.
            lines: Cart lines with ``product_id``, ``quantity`` and ``total_price``.
            expected_delivery_date: Business-day delivery estimate.
            discount_amount: Amount taken off the subtotal.
            discount_code: The coupon or offer code that produced the discount.
        """
        timestamp = now()
        items = [
            OrderItem(
                product_id=line.product_id,
                quantity=line.quantity,
                price=line.total_price,
                created_by=customer_id,
                created_at=timestamp,
            )
            for line in lines
        ]
        subtotal = sum(item.price for item in items)

        order = cls(
            customer_id=customer_id,
            status=OrderStatus.PENDING.value,
            items=items,
            subtotal=subtotal,
            discount_amount=discount_amount,
            discount_code=discount_code,
            coupon_applied=coupon_applied,
            offer_applied=offer_applied,
            total_amount=subtotal - discount_amount,
            expected_delivery_date=expected_delivery_date,
            created_by=customer_id,
            updated_by=customer_id,
            created_at=timestamp,
            updated_at=timestamp,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                items=json.dumps([item.as_line() for item in order.items]),
                subtotal=order.subtotal,
                discount_amount=order.discount_amount,
                discount_code=order.discount_code,
                total_amount=order.total_amount,
                expected_delivery_date=order.expected_delivery_date,
                placed_at=timestamp,
            )
        )
        return order

    @property
    def active_items(self) -> list[OrderItem]:
        return [item for item in self.items if not item.deleted]

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def cancel(self, cancelled_by) -> list[OrderItem]:
        """Retire the order and its active items.

        Returns the items whose stock must go back to inventory.
        """
        if self.deleted or OrderStatus(self.status) == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["Order is already cancelled"]})

        timestamp = now()
        restored = self.active_items
        for item in restored:
            item.deleted = True

        self.deleted = True
        self.status = OrderStatus.CANCELLED.value
        self.updated_by = cancelled_by
        self.updated_at = timestamp

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                items=json.dumps([{"product_id": str(i.product_id), "quantity": i.quantity} for i in restored]),
                cancelled_by=str(cancelled_by),
                cancelled_at=timestamp,
            )
        )
        return restored


@ordering.repository(part_of=Order)
class OrderRepository:
    def owned_by(self, order_id, customer_id) -> Order | None:
        """The active order ``order_id`` if ``customer_id`` placed it."""
        return find_active_one(self._dao, id=str(order_id), customer_id=str(customer_id))
