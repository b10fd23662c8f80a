"""
HomeChef Payment Reconciliation Workflow.

Hosted checkout for an order and idempotent confirmation once the
provider reports the session as paid.

The transaction id is the idempotency key. Confirmation inserts the
Payment first (the unique index on ``transaction_id`` rejects a racing
duplicate) and then sets the order's payment fields with a plain ``$set``,
which is safe to re-run. A duplicate confirmation re-applies that ``$set``
so an order left stale by an earlier crash still converges.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pymongo.errors import DuplicateKeyError

from app.dependencies import parse_object_id
from app.models.mongodb import OrderDocument, PaymentDocument, UserDocument, utcnow
from app.services.stripe_service import CheckoutLineItem, StripeService
from app.utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from database import Storage

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "duplicate payment blocked"


@dataclass
class ConfirmationResult:
    """Outcome of a confirmation call."""

    success: bool
    message: str
    transaction_id: Optional[str] = None
    order_id: Optional[str] = None


class PaymentReconciliationWorkflow:
    """
    Checkout and confirmation bound to a storage handle and a provider.

    Args:
        storage: Repositories for orders and payments.
        provider: Hosted checkout client.
    """

    def __init__(self, storage: Storage, provider: StripeService):
        self.storage = storage
        self.provider = provider

    async def create_checkout_session(self, user: UserDocument, order_id: str) -> str:
        """
        Start a hosted checkout for one of the caller's orders.

        Nothing is written locally; the session only exists at the provider.

        Returns:
            Redirect URL of the hosted checkout page.

        Raises:
            NotFoundError: 404 if the order does not exist.
            ForbiddenError: 403 if the order belongs to someone else.
            ConflictError: 409 if the order is already paid or cancelled.
        """
        order = await self.storage.orders.get(parse_object_id(order_id, "order id"))
        if not order:
            raise NotFoundError("order not found")
        if order.user_email != user.email:
            raise ForbiddenError()
        if order.payment_status == "paid":
            raise ConflictError("order is already paid")
        if order.order_status == "cancelled":
            raise ConflictError("order was cancelled")

        item = CheckoutLineItem(
            meal_id=order.meal_id,
            meal_name=order.meal_name or "Meal",
            unit_price=order.unit_price,
            quantity=order.quantity,
        )
        return await self.provider.create_checkout_session(
            item=item,
            customer_email=user.email,
            order_id=str(order.id),
        )

    async def confirm(self, session_id: str) -> ConfirmationResult:
        """
        Record the payment for a completed checkout session.

        Amount and transaction id come from the provider, never the client.

        Raises:
            ValidationError: 400 if the session is not paid or carries no
                order reference.
            NotFoundError: 404 if the referenced order does not exist.
        """
        session = await self.provider.retrieve_session(session_id)
        if session.payment_status != "paid" or not session.transaction_id:
            raise ValidationError("payment not completed")

        order_ref = session.metadata.get("orderId")
        if not order_ref:
            raise ValidationError("checkout session has no order reference")

        payments = self.storage.payments
        existing = await payments.find_one(payments.transaction_id == session.transaction_id)
        if existing:
            logger.info(f"Duplicate confirmation for {session.transaction_id} blocked")
            await self._mark_order_paid(existing)
            return ConfirmationResult(
                success=False,
                message=DUPLICATE_MESSAGE,
                transaction_id=existing.transaction_id,
                order_id=existing.order_id,
            )

        order = await self.storage.orders.get(parse_object_id(order_ref, "order id"))
        if not order:
            raise NotFoundError("order not found")

        payment = payments(
            transaction_id=session.transaction_id,
            order_id=str(order.id),
            session_id=session.session_id,
            amount=session.amount,
            currency=session.currency,
            customer_email=session.customer_email or order.user_email,
            chef_id=order.chef_id,
            meal_id=order.meal_id,
            meal_name=order.meal_name,
            status="paid",
            paid_at=utcnow(),
        )
        try:
            await payment.insert()
        except DuplicateKeyError:
            # Lost a race with a concurrent confirmation, or the order is
            # already paid under another transaction.
            logger.info(f"Payment insert for {session.transaction_id} hit unique index")
            return ConfirmationResult(
                success=False,
                message=DUPLICATE_MESSAGE,
                transaction_id=session.transaction_id,
                order_id=str(order.id),
            )

        await self._mark_order_paid(payment, order)
        logger.info(
            f"Recorded payment {payment.transaction_id} ({payment.amount} {payment.currency}) "
            f"for order {payment.order_id}"
        )
        return ConfirmationResult(
            success=True,
            message="payment recorded",
            transaction_id=payment.transaction_id,
            order_id=payment.order_id,
        )

    async def _mark_order_paid(
        self,
        payment: PaymentDocument,
        order: Optional[OrderDocument] = None,
    ) -> None:
        """Copy the payment onto its order; a no-op once already applied."""
        if order is None:
            order = await self.storage.orders.get(parse_object_id(payment.order_id, "order id"))
            if not order:
                logger.warning(f"Payment {payment.transaction_id} references missing order {payment.order_id}")
                return
        if order.payment_status == "paid" and order.transaction_id == payment.transaction_id:
            return
        await order.set({
            "payment_status": "paid",
            "payment_time": payment.paid_at,
            "transaction_id": payment.transaction_id,
        })
