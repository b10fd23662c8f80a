"""
HomeChef API - Favorite Schemas.
"""

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import AliasChoices, Field

from app.schemas.base import CamelModel, DocumentResponse


class FavoriteCreate(CamelModel):
    meal_id: str = Field(..., validation_alias=AliasChoices("mealId", "foodId", "meal_id"))


class FavoriteResponse(DocumentResponse):
    id: PydanticObjectId
    user_email: str
    meal_id: str
    meal_name: Optional[str] = None
    chef_name: Optional[str] = None
    price: Optional[float] = None
    created_at: datetime
