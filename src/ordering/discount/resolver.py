"""Discount resolution — at most one of {coupon, offer} per order.

Resolution is split in two phases so validation never mutates state:

* :meth:`DiscountResolver.resolve` looks the code up, validates it against
  the recomputed cart subtotal and returns an :class:`AppliedDiscount`.
* :meth:`DiscountResolver.redeem` takes one use of the coupon or offer with
  a conditional update guarded by the usage count that was read, so two
  placements racing for the last use of a coupon cannot both win.
  :meth:`DiscountResolver.release` gives that use back when a later
  placement step fails.
"""

from enum import Enum

import structlog
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import Float, String
from protean.utils.globals import current_domain

from ordering.discount.coupon import Coupon
from ordering.discount.offer import Offer
from ordering.domain import ordering
from ordering.shared.clock import now
from ordering.shared.records import MAX_UPDATE_ATTEMPTS

logger = structlog.get_logger(__name__)


class DiscountKind(Enum):
    COUPON = "Coupon"
    OFFER = "Offer"


@ordering.value_object
class AppliedDiscount:
    """The outcome of discount resolution for one order."""

    kind = String(choices=DiscountKind)
    code = String(max_length=100)
    record_id = String(max_length=50)
    percentage = Float(default=0.0)
    amount = Float(default=0.0)

    @property
    def is_coupon(self) -> bool:
        return self.kind == DiscountKind.COUPON.value

    @property
    def is_offer(self) -> bool:
        return self.kind == DiscountKind.OFFER.value


def ensure_single_discount(coupon_code: str | None, offer_code: str | None) -> None:
    """Reject requests carrying both a coupon code and an offer code."""
    if coupon_code and offer_code:
        raise ValidationError({"discount": ["Only one discount code (coupon or offer) can be applied"]})


class DiscountResolver:
    def __init__(self):
        self.coupons = current_domain.repository_for(Coupon)
        self.offers = current_domain.repository_for(Offer)

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------
    def resolve(self, subtotal: float, coupon_code=None, offer_code=None, as_of=None) -> AppliedDiscount:
        ensure_single_discount(coupon_code, offer_code)
        as_of = as_of or now()

        if coupon_code:
            coupon = self._coupon(coupon_code)
            coupon.assert_redeemable(as_of)
            return AppliedDiscount(
                kind=DiscountKind.COUPON.value,
                code=coupon.code,
                record_id=str(coupon.id),
                percentage=coupon.discount,
                amount=coupon.discount_for(subtotal),
            )

        if offer_code:
            offer = self._offer(offer_code)
            offer.assert_applicable(subtotal, as_of)
            return AppliedDiscount(
                kind=DiscountKind.OFFER.value,
                code=offer.offer_code,
                record_id=str(offer.id),
                percentage=offer.offer_percentage,
                amount=offer.discount_for(subtotal),
            )

        return AppliedDiscount(amount=0.0)

    def _coupon(self, code) -> Coupon:
        coupon = self.coupons.by_code(code)
        if coupon is None:
            raise ValidationError({"coupon_code": ["Invalid coupon code"]})
        return coupon

    def _offer(self, code) -> Offer:
        offer = self.offers.by_code(code)
        if offer is None:
            raise ValidationError({"offer_code": ["Invalid offer code"]})
        return offer

    # -------------------------------------------------------------------
    # Usage counters
    # -------------------------------------------------------------------
    def redeem(self, applied: AppliedDiscount, as_of=None) -> None:
        """Take one use of the resolved coupon or offer."""
        if applied.is_coupon:
            self._redeem_coupon(applied, as_of or now())
        elif applied.is_offer:
            self._redeem_offer(applied)

    def _redeem_coupon(self, applied: AppliedDiscount, as_of) -> None:
        for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
            coupon = self._coupon(applied.code)
            # A racing placement may have taken the last use since resolve()
            coupon.assert_redeemable(as_of)
            if self.coupons.claim(coupon):
                logger.info(
                    "Coupon redeemed",
                    coupon_code=coupon.code,
                    usage_count=coupon.usage_count + 1,
                    usage_limit=coupon.usage_limit,
                )
                return
            logger.info("Coupon usage changed concurrently, retrying", coupon_code=coupon.code, attempt=attempt)

        raise InvalidOperationError("Coupon is being redeemed concurrently, please retry")

    def _redeem_offer(self, applied: AppliedDiscount) -> None:
        for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
            offer = self._offer(applied.code)
            if self.offers.claim(offer):
                logger.info("Offer redeemed", offer_code=offer.offer_code, usage_count=offer.usage_count + 1)
                return
            logger.info("Offer usage changed concurrently, retrying", offer_code=offer.offer_code, attempt=attempt)

        raise InvalidOperationError("Offer is being redeemed concurrently, please retry")

    def release(self, applied: AppliedDiscount) -> None:
        """Give back a use taken by :meth:`redeem`."""
        if applied.is_coupon:
            repo = self.coupons
        elif applied.is_offer:
            repo = self.offers
        else:
            return

        for _ in range(MAX_UPDATE_ATTEMPTS):
            record = repo.get(applied.record_id)
            if repo.unclaim(record):
                logger.info("Discount usage released", kind=applied.kind, code=applied.code)
                return

        logger.error("Could not release discount usage", kind=applied.kind, code=applied.code)
