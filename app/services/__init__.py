"""HomeChef API - Services Package."""

from .identity_service import (
    CallerIdentity,
    IdentityService,
    identity_service,
    get_identity_service,
)
from .stripe_service import (
    CheckoutLineItem,
    CheckoutSessionInfo,
    StripeService,
    stripe_service,
    get_stripe_service,
)

__all__ = [
    "CallerIdentity",
    "IdentityService",
    "identity_service",
    "get_identity_service",
    "CheckoutLineItem",
    "CheckoutSessionInfo",
    "StripeService",
    "stripe_service",
    "get_stripe_service",
]
