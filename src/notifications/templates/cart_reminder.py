"""Cart reminder template — nudges customers who left items in their cart."""

from notifications.kinds import NotificationChannel, NotificationType


class CartReminderTemplate:
    notification_type = NotificationType.CART_REMINDER.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        item_count = context.get("item_count", 0)
        return {
            "subject": "Reminder: Items in Your Cart",
            "body": (
                "You have items in your cart. Complete your purchase before they run out!\n\n"
                f"Items waiting: {item_count}"
            ),
        }
