"""Inventory ledger — the only writer of ``Product.quantity``.

Stock moves through conditional updates guarded by the quantity that was
read, so two placements withdrawing the same product never overwrite each
other's decrement. A lost race re-reads the product and retries.

Whether stock may go negative is a business decision read from the
``custom.stock_policy`` setting:

* ``reject`` (default): a withdrawal that would leave negative stock fails.
* ``backorder``: the withdrawal goes through and stock goes negative.
"""

from enum import Enum

import structlog
from protean.exceptions import InvalidOperationError, ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product
from ordering.shared.records import MAX_UPDATE_ATTEMPTS, compare_and_set

logger = structlog.get_logger(__name__)


class StockPolicy(Enum):
    REJECT = "reject"
    BACKORDER = "backorder"


def stock_policy() -> StockPolicy:
    custom = current_domain.config.get("custom", {}) or {}
    return StockPolicy(custom.get("stock_policy", StockPolicy.REJECT.value))


class InventoryLedger:
    def __init__(self, policy: StockPolicy | None = None):
        self.products = current_domain.repository_for(Product)
        self.policy = policy or stock_policy()

    def withdraw(self, product_id, quantity: int) -> int:
        """Take ``quantity`` units out of stock. Returns the new stock level."""
        for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
            product = self.products.find_active_one(id=str(product_id))
            if product is None:
                raise ObjectNotFoundError(f"Product {product_id} not found")

            remaining = product.quantity - quantity
            if remaining < 0 and self.policy == StockPolicy.REJECT:
                raise InvalidOperationError(
                    f"Insufficient stock for product {product.name}: "
                    f"requested {quantity}, available {product.quantity}"
                )

            if compare_and_set(self.products._dao, str(product.id), "quantity", product.quantity, remaining):
                logger.info(
                    "Stock withdrawn",
                    product_id=str(product.id),
                    quantity=quantity,
                    remaining=remaining,
                )
                return remaining

            logger.info("Stock changed concurrently, retrying", product_id=str(product.id), attempt=attempt)

        raise InvalidOperationError(f"Stock for product {product_id} is changing concurrently, please retry")

    def restore(self, product_id, quantity: int) -> int:
        """Put ``quantity`` units back into stock, even for a retired product."""
        for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
            product = self.products.find_any(product_id)
            if product is None:
                raise ObjectNotFoundError(f"Product {product_id} not found")

            restored = product.quantity + quantity
            if compare_and_set(self.products._dao, str(product.id), "quantity", product.quantity, restored):
                logger.info("Stock restored", product_id=str(product.id), quantity=quantity, remaining=restored)
                return restored

            logger.info("Stock changed concurrently, retrying", product_id=str(product.id), attempt=attempt)

        raise InvalidOperationError(f"Stock for product {product_id} is changing concurrently, please retry")

    def reserve(self, lines) -> list[tuple[str, int]]:
        """Withdraw stock for every line, undoing earlier withdrawals if one fails.

        Returns the ``(product_id, quantity)`` pairs that were withdrawn so the
        caller can :meth:`release` them if a later step fails.
        """
        withdrawn: list[tuple[str, int]] = []
        try:
            for line in lines:
                self.withdraw(line.product_id, line.quantity)
                withdrawn.append((str(line.product_id), line.quantity))
        except Exception:
            self.release(withdrawn)
            raise
        return withdrawn

    def release(self, withdrawn) -> None:
        for product_id, quantity in reversed(list(withdrawn)):
            self.restore(product_id, quantity)
