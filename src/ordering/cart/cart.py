"""Cart aggregate — one per customer, converted into an Order at placement.

Cart lines are never removed from storage. Clearing a cart soft-deletes its
lines and zeroes the running totals, so ``quantity_in_cart`` and
``final_price`` always describe the active lines only.
"""

from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer

from ordering.cart.events import CartCleared, CartItemAdded
from ordering.domain import ordering
from ordering.shared.clock import now
from ordering.shared.records import find_active, find_active_one


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True, min_value=1)
    total_price = Float(required=True, min_value=0.0)
    deleted = Boolean(default=False)
    created_by = Identifier()
    added_at = DateTime()


@ordering.aggregate
class Cart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    quantity_in_cart = Integer(default=0, min_value=0)
    final_price = Float(default=0.0, min_value=0.0)
    deleted = Boolean(default=False)
    created_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        timestamp = now()
        return cls(
            customer_id=customer_id,
            quantity_in_cart=0,
            final_price=0.0,
            created_by=customer_id,
            created_at=timestamp,
            updated_at=timestamp,
        )

    # -------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------
    @property
    def active_items(self) -> list[CartItem]:
        return [item for item in self.items if not item.deleted]

    def add_item(self, product_id, unit_price: float, quantity: int = 1):
        """Add ``quantity`` units of a product, merging with an existing active line."""
        timestamp = now()
        line_price = unit_price * quantity

        existing = next((i for i in self.active_items if str(i.product_id) == str(product_id)), None)
        if existing:
            existing.quantity_added += quantity
            existing.total_price += line_price
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    quantity_added=quantity,
                    total_price=line_price,
                    created_by=self.customer_id,
                    added_at=timestamp,
                )
            )

        self._recompute_totals()
        self.updated_at = timestamp

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity=quantity,
                total_price=line_price,
            )
        )

    def clear(self):
        """Retire every active line and reset the totals."""
        cleared = self.active_items
        for item in cleared:
            item.deleted = True

        self.quantity_in_cart = 0
        self.final_price = 0.0
        self.updated_at = now()

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                item_count=len(cleared),
            )
        )

    def _recompute_totals(self):
        active = self.active_items
        self.quantity_in_cart = sum(item.quantity_added for item in active)
        self.final_price = sum(item.total_price for item in active)


@ordering.repository(part_of=Cart)
class CartRepository:
    def for_customer(self, customer_id) -> Cart | None:
        return find_active_one(self._dao, customer_id=str(customer_id))

    def find_active(self, **filters) -> list[Cart]:
        return find_active(self._dao, **filters)
