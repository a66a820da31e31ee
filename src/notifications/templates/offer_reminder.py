"""Offer reminder template — announces an offer that is about to start."""

from notifications.kinds import NotificationChannel, NotificationType


class OfferReminderTemplate:
    notification_type = NotificationType.OFFER_REMINDER.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        message = context.get("message", "Your offer starts soon:")
        offer_name = context.get("offer_name", "")
        return {
            "subject": "Upcoming Offer Notification",
            "body": f'Reminder: {message} "{offer_name}".',
        }
