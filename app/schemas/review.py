"""
HomeChef API - Review Schemas.

Pydantic schemas for meal reviews.
"""

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import AliasChoices, Field

from app.schemas.base import CamelModel, DocumentResponse


class ReviewCreate(CamelModel):
    """Review of a meal by the caller."""

    food_id: str = Field(..., validation_alias=AliasChoices("foodId", "mealId", "food_id"))
    rating: float = Field(..., ge=1, le=5)
    comment: str = ""


class ReviewUpdate(CamelModel):
    """Partial review update."""

    rating: Optional[float] = Field(None, ge=1, le=5)
    comment: Optional[str] = None


class ReviewResponse(DocumentResponse):
    """Schema for review response."""

    id: PydanticObjectId
    meal_id: str
    reviewer_email: str
    reviewer_name: Optional[str] = None
    reviewer_image: Optional[str] = None
    rating: float
    comment: str
    created_at: datetime
    updated_at: datetime
