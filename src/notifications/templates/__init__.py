"""Message templates, keyed by ``NotificationType`` value.

A template is a class with a static ``render(context) -> dict``; the
keys of the returned dict depend on which channels the message goes out on.
"""

from notifications.templates.cart_reminder import CartReminderTemplate
from notifications.templates.offer_reminder import OfferReminderTemplate
from notifications.templates.order_cancellation import OrderCancellationTemplate
from notifications.templates.order_placed import OrderPlacedTemplate

TEMPLATES: dict[str, type] = {
    template.notification_type: template
    for template in (OrderPlacedTemplate, OrderCancellationTemplate, CartReminderTemplate, OfferReminderTemplate)
}


def get_template(notification_type: str):
    try:
        return TEMPLATES[notification_type]
    except KeyError:
        raise ValueError(f"No template registered for notification type: {notification_type}") from None


def render(notification_type: str, context: dict) -> dict:
    return get_template(notification_type).render(context)
