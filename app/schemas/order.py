"""
HomeChef API - Order Schemas.

Pydantic schemas for order placement and fulfilment.
"""

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import AliasChoices, Field

from app.models.mongodb import OrderStatus
from app.schemas.base import CamelModel, DocumentResponse


class OrderCreate(CamelModel):
    """
    Schema for placing an order.

    Attributes:
        meal_id: Ordered meal.
        food_price: Unit price shown to the customer.
        quantity: Number of portions.
        user_address: Delivery address.
    """

    meal_id: str = Field(..., validation_alias=AliasChoices("mealId", "foodId", "meal_id"))
    food_price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    user_address: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    """New order status; values outside the enum are rejected with 400."""

    order_status: OrderStatus = Field(
        ...,
        validation_alias=AliasChoices("orderStatus", "order_status", "status"),
    )


class OrderResponse(DocumentResponse):
    """Schema for order response."""

    id: PydanticObjectId
    meal_id: str
    meal_name: Optional[str] = None
    chef_id: Optional[str] = None
    user_email: str
    user_address: Optional[str] = None
    quantity: int
    unit_price: float
    price: float
    order_status: str
    payment_status: str
    transaction_id: Optional[str] = None
    order_time: datetime
    payment_time: Optional[datetime] = None
