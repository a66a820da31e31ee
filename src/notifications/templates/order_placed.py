"""Order placed template — confirmation across every channel."""

from notifications.kinds import NotificationChannel, NotificationType


class OrderPlacedTemplate:
    notification_type = NotificationType.ORDER_PLACED.value
    default_channels = [
        NotificationChannel.REALTIME.value,
        NotificationChannel.SMS.value,
        NotificationChannel.EMAIL.value,
        NotificationChannel.PUSH.value,
    ]

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total_amount = context.get("total_amount", 0)
        return {
            "subject": "Order Placed",
            "body": "Order Placed Successfully.",
            "realtime_message": "Order placed successfully",
            "sms": f"Your order has been placed successfully. Order ID: {order_id}, Total: {total_amount}",
            "push_title": "Order Placed",
            "push_body": f"Your order with ID {order_id} has been placed successfully.",
        }
