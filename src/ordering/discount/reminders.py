"""Offer reminders — announce offers that are about to start.

Triggered periodically by an external scheduler. Each run looks at three
start-date windows relative to ``as_of`` and emails every active customer
about each offer found:

* ``[as_of + 24h, as_of + 25h)``: the offer starts tomorrow
* ``[as_of + 12h, as_of + 13h)``: the offer starts in 12 hours
* ``[as_of, as_of + 24h)``: the offer starts today

The scheduler is expected to run hourly, so the one-hour windows catch
each offer once. An offer can fall into both the "today" window and one of
the narrower ones; it is announced for each window it matches.
"""

from datetime import timedelta

import structlog
from notifications.channel import get_channel
from notifications.kinds import NotificationChannel, NotificationType
from notifications.templates import render
from protean import handle
from protean.fields import DateTime
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.discount.offer import Offer
from ordering.domain import ordering
from ordering.shared.clock import now, utc

logger = structlog.get_logger(__name__)

# (window start offset, window end offset, message)
REMINDER_WINDOWS = (
    (timedelta(hours=24), timedelta(hours=25), "Your offer starts tomorrow:"),
    (timedelta(hours=12), timedelta(hours=13), "Your offer starts in 12 hours:"),
    (timedelta(0), timedelta(hours=24), "Your offer starts today:"),
)


@ordering.command(part_of="Offer")
class SendOfferReminders:
    as_of = DateTime()  # Optional: defaults to now


@ordering.command_handler(part_of=Offer)
class SendOfferRemindersHandler:
    @handle(SendOfferReminders)
    def send_offer_reminders(self, command):
        as_of = utc(command.as_of or now())
        offers = current_domain.repository_for(Offer)

        due = []
        for start_offset, end_offset, message in REMINDER_WINDOWS:
            for offer in offers.starting_between(as_of + start_offset, as_of + end_offset):
                due.append((offer, message))

        if not due:
            logger.info("No upcoming offers to announce", as_of=as_of.isoformat())
            return 0

        recipients = current_domain.repository_for(Customer).find_active()
        email = get_channel(NotificationChannel.EMAIL.value)
        sent = 0
        for offer, message in due:
            content = render(
                NotificationType.OFFER_REMINDER.value,
                {"message": message, "offer_name": offer.offer_name},
            )
            for customer in recipients:
                try:
                    result = email.send(to=customer.email, subject=content["subject"], body=content["body"])
                except Exception:
                    logger.exception("Failed to send offer reminder", offer_code=offer.offer_code)
                    continue

                if result.get("status") == "sent":
                    sent += 1
                else:
                    logger.warning(
                        "Offer reminder delivery failed",
                        offer_code=offer.offer_code,
                        customer_id=str(customer.id),
                        error=result.get("error"),
                    )

            logger.info("Offer announced", offer_code=offer.offer_code, message=message)

        logger.info("Offer reminder sweep complete", reminders_sent=sent)
        return sent
