"""Order cancellation template — push notice when an order is cancelled."""

from notifications.kinds import NotificationChannel, NotificationType


class OrderCancellationTemplate:
    notification_type = NotificationType.ORDER_CANCELLATION.value
    default_channels = [NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        return {
            "subject": "Order Cancelled",
            "body": f"Your order with ID {order_id} has been cancelled.",
        }
