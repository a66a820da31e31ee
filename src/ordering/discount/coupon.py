"""Coupon — a code-based percentage discount with a global usage budget."""

from protean.exceptions import InvalidOperationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from ordering.domain import ordering
from ordering.shared.clock import utc
from ordering.shared.records import compare_and_set, find_active_one


@ordering.aggregate
class Coupon:
    code = String(required=True, max_length=100, unique=True)
    discount = Float(required=True, min_value=0.0, max_value=100.0)
    expiry_date = DateTime(required=True)
    usage_limit = Integer(required=True, min_value=0)
    usage_count = Integer(default=0, min_value=0)
    description = Text()
    deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    def is_expired(self, as_of) -> bool:
        return utc(self.expiry_date) < utc(as_of)

    def is_exhausted(self) -> bool:
        return self.usage_count >= self.usage_limit

    def assert_redeemable(self, as_of) -> None:
        if self.is_expired(as_of):
            raise InvalidOperationError("Coupon has expired")
        if self.is_exhausted():
            raise InvalidOperationError("Coupon usage limit exceeded")

    def discount_for(self, subtotal: float) -> float:
        return (self.discount / 100) * subtotal


@ordering.repository(part_of=Coupon)
class CouponRepository:
    def by_code(self, code: str) -> Coupon | None:
        return find_active_one(self._dao, code=code)

    def claim(self, coupon: Coupon) -> bool:
        """Take one use of ``coupon`` if nobody else has since it was read."""
        return compare_and_set(self._dao, str(coupon.id), "usage_count", coupon.usage_count, coupon.usage_count + 1)

    def unclaim(self, coupon: Coupon) -> bool:
        """Give back one use of a freshly read ``coupon``."""
        return compare_and_set(self._dao, str(coupon.id), "usage_count", coupon.usage_count, coupon.usage_count - 1)
