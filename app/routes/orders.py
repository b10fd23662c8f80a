# app/routes/orders.py
"""
HomeChef API - Order Routes.

Order placement by customers and fulfilment by chefs.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from app.dependencies import authorize, parse_object_id
from app.models.mongodb import UserDocument, utcnow
from app.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate
from app.utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from database import Storage, get_storage

router = APIRouter()
logger = logging.getLogger(__name__)

# delivered and cancelled have no outgoing transitions
ALLOWED_TRANSITIONS = {
    "pending": {"accepted", "cancelled"},
    "accepted": {"delivered", "cancelled"},
}


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    user: UserDocument = Depends(authorize("orders:create")),
    storage: Storage = Depends(get_storage),
) -> OrderResponse:
    """
    Place an order for one meal.

    The total is fixed here as unit price times quantity and never updated.
    The quoted ``foodPrice`` must match the meal's current price.
    """
    meal = await storage.meals.get(parse_object_id(payload.meal_id, "meal id"))
    if not meal:
        raise NotFoundError("meal not found")
    if round(payload.food_price, 2) != round(meal.price, 2):
        logger.warning(f"{user.email} quoted {payload.food_price} for meal {meal.id} priced {meal.price}")
        raise ValidationError("food price does not match the meal price")

    order = storage.orders(
        meal_id=str(meal.id),
        meal_name=meal.food_name,
        chef_id=meal.chef_id,
        user_email=user.email,
        user_address=payload.user_address or user.address,
        quantity=payload.quantity,
        unit_price=meal.price,
        price=meal.price * payload.quantity,
        order_status="pending",
        payment_status="pending",
        order_time=utcnow(),
    )
    await order.insert()
    logger.info(f"{user.email} ordered {order.quantity} x {meal.food_name} ({order.id})")
    return OrderResponse.from_document(order)


@router.get("", response_model=List[OrderResponse])
async def list_my_orders(
    user: UserDocument = Depends(authorize("orders:read_own")),
    storage: Storage = Depends(get_storage),
) -> List[OrderResponse]:
    """Caller's orders, newest first."""
    orders = storage.orders
    docs = await orders.find(orders.user_email == user.email).sort("-order_time").to_list()
    return [OrderResponse.from_document(order) for order in docs]


@router.get("/chef/{chef_id}", response_model=List[OrderResponse])
async def list_chef_orders(
    chef_id: str,
    user: UserDocument = Depends(authorize("orders:read_chef")),
    storage: Storage = Depends(get_storage),
) -> List[OrderResponse]:
    """Orders to be fulfilled by one chef."""
    if user.role != "admin" and user.chef_id != chef_id:
        raise ForbiddenError("you can only view your own orders")
    orders = storage.orders
    docs = await orders.find(orders.chef_id == chef_id).sort("-order_time").to_list()
    return [OrderResponse.from_document(order) for order in docs]


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    user: UserDocument = Depends(authorize("orders:update_status")),
    storage: Storage = Depends(get_storage),
) -> OrderResponse:
    """
    Move an order to a new status.

    Orders move pending -> accepted -> delivered, and pending or accepted
    -> cancelled. Delivering also marks the order paid.
    """
    order = await storage.orders.get(parse_object_id(order_id, "order id"))
    if not order:
        raise NotFoundError("order not found")
    if user.role != "admin" and order.chef_id != user.chef_id:
        raise ForbiddenError("you can only update your own orders")

    new_status = payload.order_status
    if order.order_status == new_status:
        return OrderResponse.from_document(order)
    if new_status not in ALLOWED_TRANSITIONS.get(order.order_status, set()):
        raise ConflictError(f"order cannot move from {order.order_status} to {new_status}")

    changes = {"order_status": new_status}
    if new_status == "delivered":
        changes["payment_status"] = "paid"
    await order.set(changes)
    logger.info(f"Order {order_id} -> {new_status} by {user.email}")
    return OrderResponse.from_document(order)
