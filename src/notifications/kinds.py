"""Notification channel and message kinds shared by the adapters and templates."""

from enum import Enum


class NotificationChannel(Enum):
    REALTIME = "Realtime"
    SMS = "SMS"
    PUSH = "Push"
    EMAIL = "Email"


class NotificationType(Enum):
    ORDER_PLACED = "OrderPlaced"
    ORDER_CANCELLATION = "OrderCancellation"
    CART_REMINDER = "CartReminder"
    OFFER_REMINDER = "OfferReminder"
