"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Every response is wrapped in the envelope
``{"success": bool, "message": str, "data" | "error": ...}``.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------
class Envelope(BaseModel):
    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    error: Any = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    coupon_code: str | None = None
    offer_code: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"coupon_code": "WELCOME10"},
                {"offer_code": "DIWALI25"},
                {},
            ]
        }
    }


class OrderItemSchema(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: float


class OrderSchema(BaseModel):
    id: str
    customer_id: str
    status: str
    subtotal: float
    discount_amount: float
    discount_code: str | None = None
    coupon_applied: bool
    offer_applied: bool
    total_amount: float
    expected_delivery_date: date
    created_at: datetime | None = None
    items: list[OrderItemSchema]

    @classmethod
    def from_order(cls, order) -> "OrderSchema":
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            status=order.status,
            subtotal=order.subtotal,
            discount_amount=order.discount_amount,
            discount_code=order.discount_code,
            coupon_applied=order.coupon_applied,
            offer_applied=order.offer_applied,
            total_amount=order.total_amount,
            expected_delivery_date=order.expected_delivery_date,
            created_at=order.created_at,
            items=[
                OrderItemSchema(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.active_items
            ],
        )


class OrderEnvelope(Envelope):
    data: OrderSchema


class CancelledOrderData(BaseModel):
    order_id: str
    status: str = "Cancelled"


class CancelledOrderEnvelope(Envelope):
    data: CancelledOrderData


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class CartData(BaseModel):
    cart_id: str


class CartEnvelope(Envelope):
    data: CartData


# ---------------------------------------------------------------------------
# Notifications & maintenance
# ---------------------------------------------------------------------------
class BroadcastRequest(BaseModel):
    message: str = Field(min_length=1)


class CartRemindersRequest(BaseModel):
    as_of: datetime | None = None
    idle_threshold_hours: int | None = Field(default=None, ge=0)


class OfferRemindersRequest(BaseModel):
    as_of: datetime | None = None


class SweepData(BaseModel):
    reminders_sent: int


class SweepEnvelope(Envelope):
    data: SweepData
