# =============================================================================
# core/models/order.py - Order Placement Schemas
# =============================================================================
# These models define the API contract for POST /orders:
# - CustomerIn: Who is ordering (looked up / created by email)
# - OrderIn: Order header (totals, delivery estimate)
# - OrderItemIn: One line item
# - PlaceOrderRequest: The full checkout payload
# - PlaceOrderResult: What the workflow reports back
#
# Customer and order payloads accept extra keys; they are forwarded to the
# store unchanged so new columns need no code change here.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class CustomerIn(BaseModel):
    """
    Customer details sent with an order.

    `email` is the lookup key; at most one customer row exists per email.

    Example:
        {
            "email": "ada@example.com",
            "name": "Ada Lovelace",
            "address": "12 St James's Square, London",
            "phone": "+44 20 7946 0000"
        }
    """

    model_config = ConfigDict(extra="allow")

    email: EmailStr = Field(
        ...,
        description="Customer email (unique lookup key)"
    )

    name: str | None = None
    address: str | None = None
    phone: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Row payload for the customers table."""
        return self.model_dump(exclude_none=True)


class OrderIn(BaseModel):
    """
    Order header.

    `order_number` is generated by the workflow when omitted.
    """

    model_config = ConfigDict(extra="allow")

    order_number: str | None = None
    subtotal: float = Field(default=0, ge=0)
    shipping_cost: float = Field(default=0, ge=0)
    total_amount: float = Field(default=0, ge=0)
    estimated_delivery: str | None = None

    @field_validator("order_number")
    @classmethod
    def _no_control_characters(cls, value: str | None) -> str | None:
        # Ends up in the confirmation subject header
        if value is not None and any(ord(char) < 32 or ord(char) == 127 for char in value):
            raise ValueError("order_number must not contain control characters")
        return value

    def to_row(self, customer_id: Any, order_number: str) -> dict[str, Any]:
        """Row payload for the orders table, tagged with its customer."""
        row = self.model_dump(exclude_none=True)
        row["order_number"] = order_number
        row["customer_id"] = customer_id
        return row


class OrderItemIn(BaseModel):
    """One purchased product."""

    product_id: int | str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    product_name: str

    def to_row(self, order_id: Any) -> dict[str, Any]:
        """Row payload for the order_items table."""
        return {
            "order_id": order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price": self.price,
            "product_name": self.product_name,
        }


class PlaceOrderRequest(BaseModel):
    """Full checkout payload."""

    customer: CustomerIn
    order: OrderIn
    items: list[OrderItemIn] = Field(..., min_length=1)


class PlaceOrderResult(BaseModel):
    """
    Outcome of a persisted order.

    `notification_sent` is False when the order was stored but the
    confirmation email could not be delivered.
    """

    message: str = "Order placed successfully"
    order_id: Any
    order_number: str
    customer_id: Any
    notification_sent: bool
