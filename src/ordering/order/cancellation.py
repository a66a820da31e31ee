"""Order cancellation — return stock to inventory and retire the order."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.inventory.ledger import InventoryLedger
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        # Orders owned by someone else look exactly like missing ones
        order = repo.owned_by(command.order_id, command.customer_id)
        if order is None:
            raise ObjectNotFoundError("Order not found")

        restored = order.cancel(cancelled_by=command.customer_id)

        ledger = InventoryLedger()
        for item in restored:
            ledger.restore(item.product_id, item.quantity)

        repo.add(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            restored_items=len(restored),
        )
        return str(order.id)
