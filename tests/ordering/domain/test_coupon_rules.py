"""Tests for Coupon redeemability rules."""

from datetime import UTC, datetime, timedelta

import pytest
from ordering.api.errors import error_message
from ordering.discount.coupon import Coupon
from protean.exceptions import InvalidOperationError

NOW = datetime(2024, 1, 4, 10, 0, tzinfo=UTC)


def _coupon(**overrides):
    defaults = {
        "code": "SAVE10",
        "discount": 10.0,
        "expiry_date": NOW + timedelta(days=1),
        "usage_limit": 2,
        "usage_count": 0,
    }
    defaults.update(overrides)
    return Coupon(**defaults)


class TestCouponExpiry:
    def test_not_expired_before_expiry_date(self):
        assert _coupon().is_expired(NOW) is False

    def test_expired_after_expiry_date(self):
        assert _coupon(expiry_date=NOW - timedelta(minutes=1)).is_expired(NOW) is True

    def test_naive_expiry_is_treated_as_utc(self):
        coupon = _coupon(expiry_date=datetime(2024, 1, 4, 9, 0))
        assert coupon.is_expired(NOW) is True


class TestCouponRedeemability:
    def test_fresh_coupon_is_redeemable(self):
        _coupon().assert_redeemable(NOW)

    def test_expired_coupon_is_rejected(self):
        with pytest.raises(InvalidOperationError) as exc:
            _coupon(expiry_date=NOW - timedelta(days=1)).assert_redeemable(NOW)
        assert error_message(exc.value) == "Coupon has expired"

    def test_exhausted_coupon_is_rejected(self):
        with pytest.raises(InvalidOperationError) as exc:
            _coupon(usage_limit=2, usage_count=2).assert_redeemable(NOW)
        assert error_message(exc.value) == "Coupon usage limit exceeded"

    def test_expiry_is_checked_before_usage(self):
        coupon = _coupon(expiry_date=NOW - timedelta(days=1), usage_limit=1, usage_count=1)
        with pytest.raises(InvalidOperationError) as exc:
            coupon.assert_redeemable(NOW)
        assert error_message(exc.value) == "Coupon has expired"


class TestCouponDiscount:
    def test_discount_is_percentage_of_subtotal(self):
        assert _coupon(discount=10.0).discount_for(220.0) == pytest.approx(22.0)

    def test_full_discount(self):
        assert _coupon(discount=100.0).discount_for(50.0) == pytest.approx(50.0)
