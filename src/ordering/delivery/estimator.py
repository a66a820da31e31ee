"""Delivery estimate from the customer's pincode.

Delivery lead times are quoted in business days. Weekends never count
towards the lead time: stepping forward from a Thursday by three business
days lands on the following Tuesday.
"""

from datetime import date, datetime, timedelta

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Date, Integer, String
from protean.utils.globals import current_domain

from ordering.delivery.pincode import Pincode
from ordering.domain import ordering
from ordering.shared.clock import now, utc


def expected_delivery_date(start: date, delivery_days: int) -> date:
    """Advance ``start`` by ``delivery_days`` business days (Mon-Fri)."""
    current = start
    remaining = delivery_days
    while remaining > 0:
        current += timedelta(days=1)
        if current.weekday() < 5:
            remaining -= 1
    return current


@ordering.value_object
class DeliveryEstimate:
    pincode = String(required=True, max_length=10)
    delivery_days = Integer(required=True, min_value=0)
    expected_date = Date(required=True)


class DeliveryEstimator:
    def __init__(self):
        self.pincodes = current_domain.repository_for(Pincode)

    def estimate(self, pincode: str, as_of: datetime | None = None) -> DeliveryEstimate:
        record = self.pincodes.by_code(pincode)
        if record is None:
            raise ObjectNotFoundError("Pincode not found")
        if not record.deliverable:
            raise ValidationError({"pincode": ["Delivery not available for this pincode"]})

        start = utc(as_of or now()).date()
        return DeliveryEstimate(
            pincode=record.pincode,
            delivery_days=record.delivery_days,
            expected_date=expected_delivery_date(start, record.delivery_days),
        )
