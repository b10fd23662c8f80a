"""
HomeChef API - Payment Schemas.

Pydantic schemas for hosted checkout and payment confirmation.
"""

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import AliasChoices, Field

from app.schemas.base import CamelModel, DocumentResponse


class CheckoutSessionRequest(CamelModel):
    """Order to pay for; meal, price and quantity are read from the order."""

    order_id: str


class CheckoutSessionResponse(CamelModel):
    url: str


class PaymentConfirmRequest(CamelModel):
    session_id: str = Field(
        ...,
        validation_alias=AliasChoices("sessionId", "session_id"),
    )


class PaymentConfirmResponse(CamelModel):
    """
    Result of confirming a checkout session.

    ``success`` is false when the transaction was already recorded.
    """

    success: bool
    message: str
    transaction_id: Optional[str] = None
    order_id: Optional[str] = None


class PaymentResponse(DocumentResponse):
    """Schema for payment history entries."""

    id: PydanticObjectId
    transaction_id: str
    order_id: str
    amount: float
    currency: str
    customer_email: Optional[str] = None
    chef_id: Optional[str] = None
    meal_id: Optional[str] = None
    meal_name: Optional[str] = None
    status: str
    paid_at: datetime
