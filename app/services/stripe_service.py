"""
HomeChef API - Stripe Service.

Handles Stripe Checkout Sessions for meal orders: creating the hosted
session and reading back the provider's authoritative payment data.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import stripe
from starlette.concurrency import run_in_threadpool

from app.utils.errors import PaymentProviderError
from settings import settings

logger = logging.getLogger(__name__)

METADATA_KEYS = ("orderId", "mealId", "customerEmail")


@dataclass(frozen=True)
class CheckoutLineItem:
    """Single meal line sent to the hosted checkout."""

    meal_id: str
    meal_name: str
    unit_price: float
    quantity: int

    @property
    def unit_amount(self) -> int:
        """Unit price in minor units (cents)."""
        return int(round(self.unit_price * 100))


@dataclass(frozen=True)
class CheckoutSessionInfo:
    """Provider-side view of a checkout session."""

    session_id: str
    payment_status: str
    transaction_id: Optional[str]
    amount: float
    currency: str
    customer_email: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)


class StripeService:
    """Service for handling Stripe Checkout operations."""

    def __init__(self, api_key: Optional[str] = None, client_url: Optional[str] = None):
        """
        Initialize Stripe client.

        Args:
            api_key: Stripe secret key. Falls back to settings if not provided.
            client_url: Frontend base URL for redirects.
        """
        self.api_key = api_key or settings.STRIPE_SECRET_KEY
        self.client_url = (client_url or settings.CLIENT_URL).rstrip("/")
        self.currency = settings.CURRENCY

    async def create_checkout_session(
        self,
        item: CheckoutLineItem,
        customer_email: str,
        order_id: str,
    ) -> str:
        """
        Create a Stripe Checkout Session for one order.

        Args:
            item: Meal line item (unit price in major units).
            customer_email: Verified caller email.
            order_id: Local order the session pays for.

        Returns:
            Hosted checkout redirect URL.

        Raises:
            PaymentProviderError: If the Stripe API call fails.
        """
        try:
            session = await run_in_threadpool(
                stripe.checkout.Session.create,
                api_key=self.api_key,
                mode="payment",
                payment_method_types=["card"],
                customer_email=customer_email,
                line_items=[
                    {
                        "price_data": {
                            "currency": self.currency,
                            "unit_amount": item.unit_amount,
                            "product_data": {"name": item.meal_name},
                        },
                        "quantity": item.quantity,
                    }
                ],
                metadata={
                    "orderId": order_id,
                    "mealId": item.meal_id,
                    "customerEmail": customer_email,
                },
                success_url=f"{self.client_url}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{self.client_url}/meals/{item.meal_id}",
            )
        except stripe.StripeError as e:
            logger.error(f"Error creating Checkout Session: {str(e)}")
            raise PaymentProviderError(detail=str(e))

        logger.info(f"Created Checkout Session {session.id} for order {order_id}")
        return session.url

    async def retrieve_session(self, session_id: str) -> CheckoutSessionInfo:
        """
        Retrieve a Checkout Session and normalise the fields we trust.

        Args:
            session_id: Stripe checkout session id.

        Returns:
            CheckoutSessionInfo with the payment intent id as transaction id
            and the total converted back to major units.

        Raises:
            PaymentProviderError: If the Stripe API call fails.
        """
        try:
            session = await run_in_threadpool(
                stripe.checkout.Session.retrieve,
                session_id,
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error(f"Error retrieving Checkout Session {session_id}: {str(e)}")
            raise PaymentProviderError(detail=str(e))

        # payment_intent is an id unless the session was retrieved expanded
        payment_intent = getattr(session, "payment_intent", None)
        if payment_intent is not None and not isinstance(payment_intent, str):
            payment_intent = payment_intent.id

        customer_details = getattr(session, "customer_details", None)
        metadata = getattr(session, "metadata", None)
        return CheckoutSessionInfo(
            session_id=getattr(session, "id", session_id),
            payment_status=getattr(session, "payment_status", None) or "unpaid",
            transaction_id=payment_intent,
            amount=(getattr(session, "amount_total", None) or 0) / 100,
            currency=getattr(session, "currency", None) or self.currency,
            customer_email=(
                getattr(session, "customer_email", None)
                or getattr(customer_details, "email", None)
            ),
            metadata={
                key: getattr(metadata, key)
                for key in METADATA_KEYS
                if getattr(metadata, key, None)
            },
        )


# Global instance
stripe_service = StripeService()


def get_stripe_service() -> StripeService:
    """Dependency returning the checkout provider client."""
    return stripe_service
