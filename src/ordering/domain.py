"""Ordering bounded context — cart checkout, discounts, stock and delivery.

Converts a customer's cart into a committed order, applying at most one
discount mechanism, withdrawing stock, estimating delivery over business
days, and publishing the events that drive notification fan-out.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
