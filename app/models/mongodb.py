# app/models/mongodb.py
"""
HomeChef MongoDB Document Models.

Beanie ODM models for MongoDB Atlas.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from beanie import Document, Indexed
from pydantic import Field
from pymongo import ASCENDING, IndexModel


UserRole = Literal["user", "chef", "admin"]
UserStatus = Literal["active", "fraud"]
OrderStatus = Literal["pending", "accepted", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "paid"]
RequestType = Literal["chef", "admin"]
RequestStatus = Literal["pending", "approved", "rejected"]


def utcnow() -> datetime:
    """Timezone-aware current time used for every server-side timestamp."""
    return datetime.now(timezone.utc)


class UserDocument(Document):
    """User model for MongoDB."""

    email: Indexed(str, unique=True)
    name: Optional[str] = None
    photo_url: Optional[str] = None
    address: Optional[str] = None

    role: UserRole = "user"
    status: UserStatus = "active"
    chef_id: Optional[str] = None  # only set while role == "chef"

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    last_login_at: Optional[datetime] = None

    class Settings:
        name = "users"  # Collection name in MongoDB
        indexes = [
            "chef_id",
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "email": "maria@homechef.app",
                "name": "Maria Rossi",
                "role": "chef",
                "status": "active",
                "chef_id": "chef-4821",
            }
        }


class MealDocument(Document):
    """Meal published by a chef."""

    food_name: str
    chef_name: Optional[str] = None
    chef_id: Optional[str] = None
    user_email: Indexed(str)  # owner
    food_image: Optional[str] = None
    price: float = Field(..., ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)
    ingredients: List[str] = Field(default_factory=list)
    estimated_delivery_time: Optional[str] = None
    chef_experience: Optional[str] = None
    delivery_area: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "meals"


class OrderDocument(Document):
    """Order placed by a customer for a single meal."""

    meal_id: str
    meal_name: Optional[str] = None
    chef_id: Optional[str] = None
    user_email: Indexed(str)
    user_address: Optional[str] = None
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)
    price: float  # unit_price * quantity, fixed at creation
    order_status: OrderStatus = "pending"
    payment_status: PaymentStatus = "pending"
    transaction_id: Optional[str] = None
    order_time: datetime = Field(default_factory=utcnow)
    payment_time: Optional[datetime] = None

    class Settings:
        name = "orders"
        indexes = [
            "chef_id",
        ]


class RoleRequestDocument(Document):
    """Request by a user to be promoted to chef or admin."""

    user_email: Indexed(str)
    user_name: Optional[str] = None
    request_type: RequestType
    request_status: RequestStatus = "pending"
    created_at: datetime = Field(default_factory=utcnow)
    resolved_at: Optional[datetime] = None

    class Settings:
        name = "requests"


class ReviewDocument(Document):
    """Review left by a customer on a meal."""

    meal_id: str
    reviewer_email: str
    reviewer_name: Optional[str] = None
    reviewer_image: Optional[str] = None
    rating: float = Field(..., ge=1, le=5)
    comment: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "reviews"
        indexes = [
            IndexModel(
                [("meal_id", ASCENDING), ("reviewer_email", ASCENDING)],
                unique=True,
            ),
        ]


class FavoriteDocument(Document):
    """Meal saved by a customer."""

    user_email: str
    meal_id: str
    meal_name: Optional[str] = None
    chef_name: Optional[str] = None
    price: Optional[float] = None
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "favorites"
        indexes = [
            IndexModel(
                [("user_email", ASCENDING), ("meal_id", ASCENDING)],
                unique=True,
            ),
        ]


class PaymentDocument(Document):
    """Confirmed checkout payment, one per provider transaction."""

    transaction_id: Indexed(str, unique=True)
    order_id: Indexed(str, unique=True)
    session_id: Optional[str] = None
    amount: float
    currency: str = "usd"
    customer_email: Optional[str] = None
    chef_id: Optional[str] = None
    meal_id: Optional[str] = None
    meal_name: Optional[str] = None
    status: Literal["paid"] = "paid"
    paid_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "payments"


DOCUMENT_MODELS = [
    UserDocument,
    MealDocument,
    OrderDocument,
    RoleRequestDocument,
    ReviewDocument,
    FavoriteDocument,
    PaymentDocument,
]
