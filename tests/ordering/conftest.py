"""Shared fixtures for the ordering tests.

Reference data is written straight through the repositories; carts are
built through the ``AddToCart`` command so their totals are realistic.
Placement tests run against a fixed clock: Thursday 4 January 2024.
Discount codes stay valid relative to the real clock, since the HTTP
routes place orders as of now.
"""

from datetime import UTC, datetime, timedelta

import pytest
from ordering.cart.items import AddToCart
from ordering.catalogue.product import Product
from ordering.customer.customer import Customer
from ordering.delivery.pincode import Pincode
from ordering.discount.coupon import Coupon
from ordering.discount.offer import Offer
from ordering.shared.clock import now
from protean import current_domain
from protean.integrations.pytest import DomainFixture

THURSDAY = datetime(2024, 1, 4, 10, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def as_of():
    return THURSDAY


@pytest.fixture()
def make_pincode():
    def _make(code="560001", deliverable=True, delivery_days=3):
        pincode = Pincode(pincode=code, deliverable=deliverable, delivery_days=delivery_days)
        current_domain.repository_for(Pincode).add(pincode)
        return pincode

    return _make


@pytest.fixture()
def make_customer():
    def _make(name="Asha Rao", pincode="560001", push_token="device-token-001", **overrides):
        customer = Customer(
            name=name,
            email=overrides.pop("email", f"{name.split()[0].lower()}@example.com"),
            mobile_number=overrides.pop("mobile_number", "+919800000001"),
            address=overrides.pop("address", "12 MG Road, Bengaluru"),
            pincode=pincode,
            push_token=push_token,
            **overrides,
        )
        current_domain.repository_for(Customer).add(customer)
        return customer

    return _make


@pytest.fixture()
def make_product():
    def _make(name="Phone", quantity=10, discounted_price=100.0, **overrides):
        product = Product(
            name=name,
            code=overrides.pop("code", name.upper()[:10]),
            quantity=quantity,
            original_price=overrides.pop("original_price", discounted_price * 1.2),
            discounted_price=discounted_price,
            **overrides,
        )
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def make_coupon():
    def _make(code="SAVE10", discount=10.0, usage_limit=5, usage_count=0, expiry_date=None):
        coupon = Coupon(
            code=code,
            discount=discount,
            usage_limit=usage_limit,
            usage_count=usage_count,
            expiry_date=expiry_date or now() + timedelta(days=30),
        )
        current_domain.repository_for(Coupon).add(coupon)
        return coupon

    return _make


@pytest.fixture()
def make_offer():
    def _make(offer_code="FEST20", offer_percentage=20.0, price_range=100.0, start_date=None, end_date=None):
        offer = Offer(
            offer_name=f"{offer_code} Festival Sale",
            offer_code=offer_code,
            offer_percentage=offer_percentage,
            price_range=price_range,
            start_date=start_date or THURSDAY - timedelta(days=1),
            end_date=end_date or now() + timedelta(days=7),
        )
        current_domain.repository_for(Offer).add(offer)
        return offer

    return _make


@pytest.fixture()
def fill_cart():
    def _fill(customer, *lines):
        """Add ``(product, quantity)`` pairs to the customer's cart."""
        cart_id = None
        for product, quantity in lines:
            cart_id = current_domain.process(
                AddToCart(customer_id=str(customer.id), product_id=str(product.id), quantity=quantity),
                asynchronous=False,
            )
        return cart_id

    return _fill


@pytest.fixture()
def shopper(make_pincode, make_customer, make_product, fill_cart):
    """A customer in a deliverable pincode with two products in their cart.

    Cart: 2 x Phone @ 100.0 and 1 x Case @ 20.0, subtotal 220.0.
    """
    make_pincode()
    customer = make_customer()
    phone = make_product(name="Phone", quantity=10, discounted_price=100.0)
    case = make_product(name="Case", quantity=5, discounted_price=20.0)
    fill_cart(customer, (phone, 2), (case, 1))
    return {"customer": customer, "phone": phone, "case": case}
