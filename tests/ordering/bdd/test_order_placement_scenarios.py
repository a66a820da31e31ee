"""BDD tests for order placement and cancellation."""

from datetime import UTC, date, datetime

import pytest
from ordering.api.errors import error_message
from ordering.order.cancellation import CancelOrder
from ordering.order.order import Order, OrderStatus
from ordering.order.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_placement.feature")


def _on(day: str) -> datetime:
    return datetime.fromisoformat(day).replace(hour=10, tzinfo=UTC)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.re(r"the customer places an order on Thursday (?P<day>\d{4}-\d{2}-\d{2})"),
    target_fixture="order_id",
)
def _(customer, day):
    return current_domain.process(PlaceOrder(customer_id=str(customer.id), as_of=_on(day)), asynchronous=False)


@when(
    parsers.cfparse('the customer places an order on Thursday {day} with coupon "{code}"'),
    target_fixture="order_id",
)
def _(customer, day, code):
    return current_domain.process(
        PlaceOrder(customer_id=str(customer.id), coupon_code=code, as_of=_on(day)),
        asynchronous=False,
    )


@when(
    parsers.cfparse('the customer tries to place an order with coupon "{coupon}" and offer "{offer}"'),
    target_fixture="rejection",
)
def _(customer, coupon, offer):
    with pytest.raises(ValidationError) as exc:
        current_domain.process(
            PlaceOrder(customer_id=str(customer.id), coupon_code=coupon, offer_code=offer),
            asynchronous=False,
        )
    return exc.value


@when("the customer cancels the order")
def _(customer, order_id):
    current_domain.process(CancelOrder(customer_id=str(customer.id), order_id=order_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {total:f}"))
def _(order_id, total):
    assert current_domain.repository_for(Order).get(order_id).total_amount == pytest.approx(total)


@then(parsers.cfparse("the order is expected on {day}"))
def _(order_id, day):
    assert current_domain.repository_for(Order).get(order_id).expected_delivery_date == date.fromisoformat(day)


@then(parsers.cfparse('the placement is rejected with "{message}"'))
def _(rejection, message):
    assert error_message(rejection) == message


@then("the order is cancelled")
def _(order_id):
    assert current_domain.repository_for(Order).get(order_id).status == OrderStatus.CANCELLED.value
