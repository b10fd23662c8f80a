"""HomeChef API - Utilities Package."""

from app.utils.errors import (
    HomeChefException,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
    ConflictError,
    PaymentProviderError,
    register_exception_handlers,
)

__all__ = [
    "HomeChefException",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "PaymentProviderError",
    "register_exception_handlers",
]
