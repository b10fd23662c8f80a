# app/routes/payments.py
"""
HomeChef API - Payment Routes.

Hosted checkout session creation and payment confirmation.
"""

from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import authorize
from app.models.mongodb import UserDocument
from app.schemas.payment import (
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    PaymentConfirmRequest,
    PaymentConfirmResponse,
    PaymentResponse,
)
from app.services.stripe_service import StripeService, get_stripe_service
from app.workflows.payment_reconciliation import PaymentReconciliationWorkflow
from database import Storage, get_storage

router = APIRouter()


def get_payment_workflow(
    storage: Storage = Depends(get_storage),
    provider: StripeService = Depends(get_stripe_service),
) -> PaymentReconciliationWorkflow:
    return PaymentReconciliationWorkflow(storage, provider)


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(
    payload: CheckoutSessionRequest,
    user: UserDocument = Depends(authorize("payments:checkout")),
    workflow: PaymentReconciliationWorkflow = Depends(get_payment_workflow),
) -> CheckoutSessionResponse:
    """Create a Stripe checkout session for one of the caller's orders."""
    url = await workflow.create_checkout_session(user, payload.order_id)
    return CheckoutSessionResponse(url=url)


@router.post("/payment-success", response_model=PaymentConfirmResponse)
async def confirm_payment(
    payload: PaymentConfirmRequest,
    _: UserDocument = Depends(authorize("payments:confirm")),
    workflow: PaymentReconciliationWorkflow = Depends(get_payment_workflow),
) -> PaymentConfirmResponse:
    """
    Confirm a completed checkout session.

    A transaction that was already recorded answers ``success: false``
    instead of an error.
    """
    result = await workflow.confirm(payload.session_id)
    return PaymentConfirmResponse(
        success=result.success,
        message=result.message,
        transaction_id=result.transaction_id,
        order_id=result.order_id,
    )


@router.get("/payments", response_model=List[PaymentResponse])
async def list_my_payments(
    user: UserDocument = Depends(authorize("payments:read_own")),
    storage: Storage = Depends(get_storage),
) -> List[PaymentResponse]:
    """Caller's payment history, newest first."""
    payments = storage.payments
    docs = await payments.find(payments.customer_email == user.email).sort("-paid_at").to_list()
    return [PaymentResponse.from_document(payment) for payment in docs]
