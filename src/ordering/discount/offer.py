"""Offer — a time-boxed promotional discount gated by a minimum order value."""

from protean.exceptions import InvalidOperationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering
from ordering.shared.clock import utc
from ordering.shared.records import compare_and_set, find_active, find_active_one


@ordering.aggregate
class Offer:
    offer_name = String(required=True, max_length=255)
    offer_code = String(required=True, max_length=100)
    offer_percentage = Float(required=True, min_value=0.0, max_value=100.0)
    start_date = DateTime(required=True)
    end_date = DateTime(required=True)
    price_range = Float(required=True, min_value=0.0)
    category_id = Identifier()
    usage_count = Integer(default=0, min_value=0)
    deleted = Boolean(default=False)
    created_by = Identifier()

    def has_ended(self, as_of) -> bool:
        return utc(self.end_date) < utc(as_of)

    def assert_applicable(self, subtotal: float, as_of) -> None:
        if self.has_ended(as_of):
            raise InvalidOperationError("Offer has expired")
        if subtotal < self.price_range:
            raise InvalidOperationError(f"Total amount must be at least {self.price_range} to apply this offer")

    def discount_for(self, subtotal: float) -> float:
        return (self.offer_percentage / 100) * subtotal


@ordering.repository(part_of=Offer)
class OfferRepository:
    def by_code(self, offer_code: str) -> Offer | None:
        return find_active_one(self._dao, offer_code=offer_code)

    def starting_between(self, window_start, window_end) -> list[Offer]:
        """Active offers whose start date falls in ``[window_start, window_end)``."""
        start, end = utc(window_start), utc(window_end)
        return [offer for offer in find_active(self._dao) if start <= utc(offer.start_date) < end]

    def claim(self, offer: Offer) -> bool:
        return compare_and_set(self._dao, str(offer.id), "usage_count", offer.usage_count, offer.usage_count + 1)

    def unclaim(self, offer: Offer) -> bool:
        return compare_and_set(self._dao, str(offer.id), "usage_count", offer.usage_count, offer.usage_count - 1)
