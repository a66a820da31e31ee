"""Domain events for the Order aggregate.

Events are raised inside the placement and cancellation handlers and
dispatched to the notification handlers once the unit of work commits.
"""

from protean.fields import Date, DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into an order with stock and discount committed."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, price}
    subtotal = Float(required=True)
    discount_amount = Float(default=0.0)
    discount_code = String(max_length=100)
    total_amount = Float(required=True)
    expected_delivery_date = Date(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled and its stock returned to inventory."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of restored {product_id, quantity}
    cancelled_by = Identifier(required=True)
    cancelled_at = DateTime(required=True)
