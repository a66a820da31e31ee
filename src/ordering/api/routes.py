"""FastAPI routes for the Ordering domain — orders, cart, notifications and maintenance."""

from fastapi import APIRouter, Depends
from notifications.channel import get_channel
from notifications.kinds import NotificationChannel
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.api.auth import current_customer
from ordering.api.schemas import (
    AddToCartRequest,
    BroadcastRequest,
    CancelledOrderData,
    CancelledOrderEnvelope,
    CartData,
    CartEnvelope,
    CartRemindersRequest,
    Envelope,
    OfferRemindersRequest,
    OrderEnvelope,
    OrderSchema,
    PlaceOrderRequest,
    SweepData,
    SweepEnvelope,
)
from ordering.cart.items import AddToCart
from ordering.cart.reminders import SendCartReminders
from ordering.customer.customer import Customer
from ordering.discount.reminders import SendOfferReminders
from ordering.order.cancellation import CancelOrder
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder


def _owned_order(order_id: str, customer_id: str) -> Order:
    order = current_domain.repository_for(Order).owned_by(order_id, customer_id)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    return order


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderEnvelope)
async def place_order(
    body: PlaceOrderRequest | None = None,
    customer: Customer = Depends(current_customer),
) -> OrderEnvelope:
    """Place an order from the caller's cart.

    Notification handlers run when the placing unit of work commits. With the
    default `event_processing = "sync"` that happens inside this request, so
    the response waits for document rendering and every channel. Under
    `PROTEAN_ENV=production` events go through the broker and the Engine
    (`src/server.py`) delivers them after the response has been sent.
    """
    body = body or PlaceOrderRequest()
    command = PlaceOrder(
        customer_id=str(customer.id),
        coupon_code=body.coupon_code,
        offer_code=body.offer_code,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderEnvelope(message="Order placed successfully", data=OrderSchema.from_order(order))


@order_router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(order_id: str, customer: Customer = Depends(current_customer)) -> OrderEnvelope:
    order = _owned_order(order_id, str(customer.id))
    return OrderEnvelope(message="Order fetched successfully", data=OrderSchema.from_order(order))


@order_router.post("/{order_id}/cancel", response_model=CancelledOrderEnvelope)
async def cancel_order(order_id: str, customer: Customer = Depends(current_customer)) -> CancelledOrderEnvelope:
    command = CancelOrder(customer_id=str(customer.id), order_id=order_id)
    current_domain.process(command, asynchronous=False)
    return CancelledOrderEnvelope(
        message="Order cancelled successfully",
        data=CancelledOrderData(order_id=order_id),
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.post("/items", status_code=201, response_model=CartEnvelope)
async def add_to_cart(body: AddToCartRequest, customer: Customer = Depends(current_customer)) -> CartEnvelope:
    command = AddToCart(
        customer_id=str(customer.id),
        product_id=body.product_id,
        quantity=body.quantity,
    )
    cart_id = current_domain.process(command, asynchronous=False)
    return CartEnvelope(message="Product added to cart", data=CartData(cart_id=cart_id))


# ---------------------------------------------------------------------------
# Notification Router
# ---------------------------------------------------------------------------
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


@notification_router.post("/broadcast", response_model=Envelope)
async def broadcast(body: BroadcastRequest) -> Envelope:
    """Push a free-form message to every connected real-time client."""
    result = get_channel(NotificationChannel.REALTIME.value).emit("notification", {"message": body.message})
    if result.get("status") != "sent":
        return Envelope(success=False, message=result.get("error") or "Notification could not be sent")
    return Envelope(message="Notification sent")


# ---------------------------------------------------------------------------
# Maintenance Router
# ---------------------------------------------------------------------------
maintenance_router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@maintenance_router.post("/cart-reminders", response_model=SweepEnvelope)
async def send_cart_reminders(body: CartRemindersRequest | None = None) -> SweepEnvelope:
    """Email owners of idle carts.

    Designed to be called periodically by an external scheduler (e.g., hourly).
    """
    body = body or CartRemindersRequest()
    command = SendCartReminders(as_of=body.as_of, idle_threshold_hours=body.idle_threshold_hours)
    sent = current_domain.process(command, asynchronous=False)
    return SweepEnvelope(message="Cart reminders sent", data=SweepData(reminders_sent=sent or 0))


@maintenance_router.post("/offer-reminders", response_model=SweepEnvelope)
async def send_offer_reminders(body: OfferRemindersRequest | None = None) -> SweepEnvelope:
    """Announce offers starting soon. Designed to run hourly."""
    body = body or OfferRemindersRequest()
    sent = current_domain.process(SendOfferReminders(as_of=body.as_of), asynchronous=False)
    return SweepEnvelope(message="Offer reminders sent", data=SweepData(reminders_sent=sent or 0))
