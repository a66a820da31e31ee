"""Order placement — convert a customer's cart into a committed order.

Validation happens first and touches nothing: discount exclusivity,
customer, pincode deliverability, cart contents and the discount code.
Only then do the mutating steps run, as a saga inside the command's unit
of work:

    1. withdraw stock for every line     (undo: restore stock)
    2. redeem the coupon or offer usage  (undo: release the usage)
    3. persist the order
    4. clear the cart

If any step fails, the steps already completed are undone in reverse order
and the error propagates, rolling back the unit of work. The
``OrderPlaced`` event reaches the notification handlers only after commit.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.snapshot import CartSnapshot, read_cart
from ordering.customer.customer import Customer
from ordering.delivery.estimator import DeliveryEstimator
from ordering.discount.resolver import AppliedDiscount, DiscountResolver, ensure_single_discount
from ordering.domain import ordering
from ordering.inventory.ledger import InventoryLedger
from ordering.order.order import Order
from ordering.shared.clock import now

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    coupon_code = String(max_length=100)
    offer_code = String(max_length=100)
    as_of = DateTime()  # Optional: defaults to now


class PlacementSaga:
    """Runs the mutating placement steps, compensating completed ones on failure."""

    def __init__(self, ledger: InventoryLedger, resolver: DiscountResolver):
        self.ledger = ledger
        self.resolver = resolver
        self._compensations: list = []

    def run(self, snapshot: CartSnapshot, applied: AppliedDiscount, order: Order, cart: Cart, as_of) -> None:
        try:
            withdrawn = self.ledger.reserve(snapshot.lines)
            self._compensations.append(lambda: self.ledger.release(withdrawn))

            self.resolver.redeem(applied, as_of)
            self._compensations.append(lambda: self.resolver.release(applied))

            current_domain.repository_for(Order).add(order)

            cart.clear()
            current_domain.repository_for(Cart).add(cart)
        except Exception as exc:
            logger.warning(
                "Order placement failed, compensating",
                order_id=str(order.id),
                completed_steps=len(self._compensations),
                error=str(exc),
            )
            self._compensate()
            raise

    def _compensate(self) -> None:
        while self._compensations:
            undo = self._compensations.pop()
            try:
                undo()
            except Exception:
                logger.exception("Compensation step failed")


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        ensure_single_discount(command.coupon_code, command.offer_code)
        as_of = command.as_of or now()

        customer = current_domain.repository_for(Customer).find_active_one(id=str(command.customer_id))
        if customer is None:
            raise ObjectNotFoundError("Customer not found")

        estimate = DeliveryEstimator().estimate(customer.pincode, as_of)
        cart, snapshot = read_cart(customer.id)

        resolver = DiscountResolver()
        applied = resolver.resolve(
            snapshot.subtotal,
            coupon_code=command.coupon_code,
            offer_code=command.offer_code,
            as_of=as_of,
        )

        order = Order.place(
            customer_id=str(customer.id),
            lines=snapshot.lines,
            expected_delivery_date=estimate.expected_date,
            discount_amount=applied.amount or 0.0,
            discount_code=applied.code,
            coupon_applied=applied.is_coupon,
            offer_applied=applied.is_offer,
        )

        PlacementSaga(InventoryLedger(), resolver).run(snapshot, applied, order, cart, as_of)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(customer.id),
            line_count=len(snapshot.lines),
            subtotal=order.subtotal,
            discount_code=applied.code,
            discount_amount=order.discount_amount,
            total_amount=order.total_amount,
            expected_delivery_date=str(order.expected_delivery_date),
        )
        return str(order.id)
