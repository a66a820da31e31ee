"""Shared BDD step definitions for order placement."""

import pytest
from ordering.cart.cart import Cart
from ordering.catalogue.product import Product
from ordering.discount.coupon import Coupon
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def catalogue():
    """Products created in the scenario, by name."""
    return {}


@given(parsers.cfparse('the pincode "{code}" delivers in {days:d} business days'))
def _(make_pincode, code, days):
    make_pincode(code=code, delivery_days=days)


@given(parsers.cfparse('a customer living in pincode "{code}"'), target_fixture="customer")
def _(make_customer, code):
    return make_customer(pincode=code)


@given(parsers.cfparse('a product "{name}" priced at {price:f} with {quantity:d} in stock'))
def _(make_product, catalogue, name, price, quantity):
    catalogue[name] = make_product(name=name, discounted_price=price, quantity=quantity)


@given(parsers.cfparse('the customer has {quantity:d} "{name}" in the cart'))
def _(fill_cart, catalogue, customer, quantity, name):
    fill_cart(customer, (catalogue[name], quantity))


@given(parsers.cfparse('a coupon "{code}" worth {discount:d} percent with {uses:d} use left'))
def _(make_coupon, code, discount, uses):
    make_coupon(code=code, discount=float(discount), usage_limit=uses)


@given(parsers.cfparse('an offer "{code}" worth {percentage:d} percent above {threshold:f}'))
def _(make_offer, code, percentage, threshold):
    make_offer(offer_code=code, offer_percentage=float(percentage), price_range=threshold)


@then(parsers.cfparse('"{name}" has {quantity:d} in stock'))
def _(catalogue, name, quantity):
    assert current_domain.repository_for(Product).get(catalogue[name].id).quantity == quantity


@then(parsers.re(r'the coupon "(?P<code>[^"]+)" has been used (?P<count>\d+) times?'))
def _(code, count):
    assert current_domain.repository_for(Coupon).by_code(code).usage_count == int(count)


@then("the customer's cart is empty")
def _(customer):
    cart = current_domain.repository_for(Cart).for_customer(customer.id)
    assert cart.active_items == []
