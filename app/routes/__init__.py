"""HomeChef API - Routes Package."""

from app.routes import (
    users,
    meals,
    orders,
    role_requests,
    reviews,
    favorites,
    payments,
)

__all__ = [
    "users",
    "meals",
    "orders",
    "role_requests",
    "reviews",
    "favorites",
    "payments",
]
