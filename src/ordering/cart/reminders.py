"""Cart reminders — email customers whose carts have sat idle with items in them.

Triggered periodically by an external scheduler (cron, K8s CronJob) via
the maintenance API endpoint. A cart qualifies when it has not been
touched for ``idle_threshold_hours`` and still holds active lines.
"""

from datetime import timedelta

import structlog
from notifications.channel import get_channel
from notifications.kinds import NotificationChannel, NotificationType
from notifications.templates import render
from protean import handle
from protean.fields import DateTime, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.shared.clock import now, utc

logger = structlog.get_logger(__name__)

DEFAULT_IDLE_THRESHOLD_HOURS = 1


@ordering.command(part_of="Cart")
class SendCartReminders:
    """Email the owners of idle, non-empty carts."""

    idle_threshold_hours = Integer(min_value=0)  # Optional: defaults to custom.cart_reminder_idle_hours
    as_of = DateTime()  # Optional: defaults to now


def _idle_threshold_hours(requested) -> int:
    if requested is not None:
        return requested
    custom = current_domain.config.get("custom", {}) or {}
    return custom.get("cart_reminder_idle_hours", DEFAULT_IDLE_THRESHOLD_HOURS)


@ordering.command_handler(part_of=Cart)
class SendCartRemindersHandler:
    @handle(SendCartReminders)
    def send_cart_reminders(self, command):
        as_of = utc(command.as_of or now())
        threshold_hours = _idle_threshold_hours(command.idle_threshold_hours)
        cutoff = as_of - timedelta(hours=threshold_hours)

        logger.info("Checking for idle carts", cutoff=cutoff.isoformat(), threshold_hours=threshold_hours)

        idle = [
            cart
            for cart in current_domain.repository_for(Cart).find_active()
            if cart.updated_at and utc(cart.updated_at) <= cutoff and cart.active_items
        ]
        if not idle:
            logger.info("No idle carts found")
            return 0

        customers = current_domain.repository_for(Customer)
        email = get_channel(NotificationChannel.EMAIL.value)
        sent = 0
        for cart in idle:
            customer = customers.find_active_one(id=str(cart.customer_id))
            if customer is None:
                logger.warning("Idle cart has no active owner", cart_id=str(cart.id))
                continue

            content = render(NotificationType.CART_REMINDER.value, {"item_count": len(cart.active_items)})
            try:
                result = email.send(to=customer.email, subject=content["subject"], body=content["body"])
            except Exception:
                logger.exception("Failed to send cart reminder", cart_id=str(cart.id))
                continue

            if result.get("status") == "sent":
                sent += 1
                logger.info("Cart reminder sent", cart_id=str(cart.id), customer_id=str(customer.id))
            else:
                logger.warning("Cart reminder delivery failed", cart_id=str(cart.id), error=result.get("error"))

        logger.info("Cart reminder sweep complete", reminders_sent=sent)
        return sent
