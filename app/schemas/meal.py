"""
HomeChef API - Meal Schemas.

Pydantic schemas for meal publishing and browsing.
"""

from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import ConfigDict, Field

from app.schemas.base import CamelModel, DocumentResponse


class MealCreate(CamelModel):
    """
    Schema for publishing a meal.

    Owner email, chef name and chef id are stamped from the caller; the
    rating starts at 0.0 and follows the meal's reviews.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "foodName": "Chicken Biryani",
                "foodImage": "https://i.ibb.co/biryani.jpg",
                "price": 12.5,
                "ingredients": ["rice", "chicken", "saffron"],
                "estimatedDeliveryTime": "45 minutes",
                "chefExperience": "8 years",
            }
        }
    )

    food_name: str = Field(..., min_length=1)
    food_image: Optional[str] = None
    price: float = Field(..., ge=0)
    ingredients: List[str] = Field(default_factory=list)
    estimated_delivery_time: Optional[str] = None
    chef_experience: Optional[str] = None
    delivery_area: Optional[str] = None


class MealUpdate(CamelModel):
    """Partial meal update: only supplied fields change."""

    food_name: Optional[str] = Field(None, min_length=1)
    food_image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    ingredients: Optional[List[str]] = None
    estimated_delivery_time: Optional[str] = None
    chef_experience: Optional[str] = None
    delivery_area: Optional[str] = None


class MealResponse(DocumentResponse):
    """Schema for meal response."""

    id: PydanticObjectId
    food_name: str
    chef_name: Optional[str] = None
    chef_id: Optional[str] = None
    user_email: str
    food_image: Optional[str] = None
    price: float
    rating: float
    ingredients: List[str] = []
    estimated_delivery_time: Optional[str] = None
    chef_experience: Optional[str] = None
    delivery_area: Optional[str] = None
    created_at: datetime


class Pagination(CamelModel):
    """Page metadata for the meal listing."""

    current_page: int
    total_pages: int
    total_meals: int
    has_next_page: bool
    has_prev_page: bool


class MealPage(CamelModel):
    """One page of meals."""

    meals: List[MealResponse]
    pagination: Pagination
