"""
HomeChef API - MongoDB Models Package.

Export all Beanie ODM models for MongoDB operations.
"""

from app.models.mongodb import (
    DOCUMENT_MODELS,
    UserDocument,
    MealDocument,
    OrderDocument,
    RoleRequestDocument,
    ReviewDocument,
    FavoriteDocument,
    PaymentDocument,
)

__all__ = [
    "DOCUMENT_MODELS",
    "UserDocument",
    "MealDocument",
    "OrderDocument",
    "RoleRequestDocument",
    "ReviewDocument",
    "FavoriteDocument",
    "PaymentDocument",
]
