"""HomeChef API - Pydantic Schemas Package."""

from app.schemas.user import (
    UserCreate,
    UserResponse,
    RoleResponse,
)
from app.schemas.meal import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealPage,
    Pagination,
)
from app.schemas.order import (
    OrderCreate,
    OrderStatusUpdate,
    OrderResponse,
)
from app.schemas.role_request import (
    RoleRequestCreate,
    RoleRequestResponse,
    RoleRequestResolution,
)
from app.schemas.review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
)
from app.schemas.favorite import (
    FavoriteCreate,
    FavoriteResponse,
)
from app.schemas.payment import (
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    PaymentConfirmRequest,
    PaymentConfirmResponse,
    PaymentResponse,
)

__all__ = [
    # User
    "UserCreate",
    "UserResponse",
    "RoleResponse",
    # Meal
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealPage",
    "Pagination",
    # Order
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderResponse",
    # Role request
    "RoleRequestCreate",
    "RoleRequestResponse",
    "RoleRequestResolution",
    # Review
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    # Favorite
    "FavoriteCreate",
    "FavoriteResponse",
    # Payment
    "CheckoutSessionRequest",
    "CheckoutSessionResponse",
    "PaymentConfirmRequest",
    "PaymentConfirmResponse",
    "PaymentResponse",
]
