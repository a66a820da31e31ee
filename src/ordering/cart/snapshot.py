"""Read a customer's cart as an immutable, ordered list of lines.

Placement prices the order from this snapshot, never from the cart's own
running totals or from anything the client sends.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int
    total_price: float


@dataclass(frozen=True)
class CartSnapshot:
    cart_id: str
    customer_id: str
    lines: tuple[CartLine, ...]

    @property
    def subtotal(self) -> float:
        return sum(line.total_price for line in self.lines)


def read_cart(customer_id) -> tuple[Cart, CartSnapshot]:
    """Load the customer's cart and snapshot its active lines.

    Raises ``ObjectNotFoundError`` when the customer has no cart and
    ``ValidationError`` when the cart holds no active lines.
    """
    cart = current_domain.repository_for(Cart).for_customer(customer_id)
    if cart is None:
        raise ObjectNotFoundError("Cart not found")

    items = cart.active_items
    if not items:
        raise ValidationError({"cart": ["Cart is empty"]})

    lines = tuple(
        CartLine(
            product_id=str(item.product_id),
            quantity=item.quantity_added,
            total_price=item.total_price,
        )
        for item in items
    )
    return cart, CartSnapshot(cart_id=str(cart.id), customer_id=str(customer_id), lines=lines)
