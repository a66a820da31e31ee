"""Notification fan-out for order lifecycle events.

Each delivery channel has its own handler so one failing channel never
stops the others. Handlers run after the placing (or cancelling) unit of
work has committed; failures are logged and never propagate back to the
order.
"""

import json

import structlog
from notifications.channel import get_channel
from notifications.document import get_renderer
from notifications.kinds import NotificationChannel, NotificationType
from notifications.templates import render
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def _customer(customer_id) -> Customer | None:
    return current_domain.repository_for(Customer).find_active_one(id=str(customer_id))


def _setting(key: str):
    custom = current_domain.config.get("custom", {}) or {}
    return custom.get(key)


def _placed_context(event: OrderPlaced) -> dict:
    return {
        "order_id": str(event.order_id),
        "total_amount": event.total_amount,
        "expected_delivery_date": str(event.expected_delivery_date),
    }


def _log_result(channel: str, event, result: dict) -> None:
    if result.get("status") == "sent":
        logger.info(
            "Notification sent",
            channel=channel,
            order_id=str(event.order_id),
            message_id=result.get("message_id"),
        )
    else:
        logger.warning(
            "Notification delivery failed",
            channel=channel,
            order_id=str(event.order_id),
            error=result.get("error"),
        )


@ordering.event_handler(part_of=Order)
class OrderPlacedRealtimeNotifier:
    @handle(OrderPlaced)
    def emit_order_placed(self, event: OrderPlaced) -> None:
        try:
            content = render(NotificationType.ORDER_PLACED.value, _placed_context(event))
            result = get_channel(NotificationChannel.REALTIME.value).emit(
                "orderPlaced",
                {
                    "message": content["realtime_message"],
                    "orderId": str(event.order_id),
                    "totalAmount": event.total_amount,
                    "expectedDeliveryDate": str(event.expected_delivery_date),
                },
            )
            _log_result(NotificationChannel.REALTIME.value, event, result)
        except Exception:
            logger.exception("Failed to emit orderPlaced event", order_id=str(event.order_id))


@ordering.event_handler(part_of=Order)
class OrderPlacedSMSNotifier:
    @handle(OrderPlaced)
    def send_order_sms(self, event: OrderPlaced) -> None:
        try:
            customer = _customer(event.customer_id)
            if customer is None or not customer.mobile_number:
                logger.warning("No mobile number for order SMS", order_id=str(event.order_id))
                return

            content = render(NotificationType.ORDER_PLACED.value, _placed_context(event))
            result = get_channel(NotificationChannel.SMS.value).send(
                to=customer.mobile_number,
                body=content["sms"],
                sender=_setting("sms_sender"),
            )
            _log_result(NotificationChannel.SMS.value, event, result)
        except Exception:
            logger.exception("Failed to send order SMS", order_id=str(event.order_id))


@ordering.event_handler(part_of=Order)
class OrderPlacedEmailNotifier:
    """Emails the order confirmation with the rendered order document attached."""

    @handle(OrderPlaced)
    def send_order_email(self, event: OrderPlaced) -> None:
        try:
            customer = _customer(event.customer_id)
            if customer is None or not customer.email:
                logger.warning("No email address for order confirmation", order_id=str(event.order_id))
                return

            context = _placed_context(event)
            content = render(NotificationType.ORDER_PLACED.value, context)
            document = get_renderer().render(context, json.loads(event.items))
            result = get_channel(NotificationChannel.EMAIL.value).send(
                to=customer.email,
                subject=content["subject"],
                body=content["body"],
                attachments=[document],
                sender=_setting("email_sender"),
            )
            _log_result(NotificationChannel.EMAIL.value, event, result)
        except Exception:
            logger.exception("Failed to send order confirmation email", order_id=str(event.order_id))


@ordering.event_handler(part_of=Order)
class OrderPlacedPushNotifier:
    @handle(OrderPlaced)
    def send_order_push(self, event: OrderPlaced) -> None:
        try:
            customer = _customer(event.customer_id)
            if customer is None or not customer.push_token:
                logger.warning("No push token for customer", customer_id=str(event.customer_id))
                return

            content = render(NotificationType.ORDER_PLACED.value, _placed_context(event))
            result = get_channel(NotificationChannel.PUSH.value).send(
                device_token=customer.push_token,
                title=content["push_title"],
                body=content["push_body"],
                data={"orderId": str(event.order_id)},
            )
            _log_result(NotificationChannel.PUSH.value, event, result)
        except Exception:
            logger.exception("Failed to send order push notification", order_id=str(event.order_id))


@ordering.event_handler(part_of=Order)
class OrderCancelledPushNotifier:
    @handle(OrderCancelled)
    def send_cancellation_push(self, event: OrderCancelled) -> None:
        try:
            customer = _customer(event.customer_id)
            if customer is None or not customer.push_token:
                logger.warning("No push token for customer", customer_id=str(event.customer_id))
                return

            content = render(NotificationType.ORDER_CANCELLATION.value, {"order_id": str(event.order_id)})
            result = get_channel(NotificationChannel.PUSH.value).send(
                device_token=customer.push_token,
                title=content["subject"],
                body=content["body"],
                data={"orderId": str(event.order_id)},
            )
            _log_result(NotificationChannel.PUSH.value, event, result)
        except Exception:
            logger.exception("Failed to send cancellation push notification", order_id=str(event.order_id))
