# app/routes/meals.py
"""
HomeChef API - Meal Routes.

Public browsing plus chef-owned publishing of meals.
"""

import logging
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pymongo import DESCENDING

from app.dependencies import authorize, parse_object_id
from app.models.mongodb import UserDocument, utcnow
from app.schemas.meal import MealCreate, MealPage, MealResponse, MealUpdate, Pagination
from app.utils.errors import ForbiddenError, NotFoundError
from database import Storage, get_storage
from settings import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=MealPage)
async def list_meals(
    email: Optional[str] = Query(None, description="Only meals owned by this chef email"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.MEALS_PAGE_LIMIT, ge=1, le=100),
    storage: Storage = Depends(get_storage),
) -> MealPage:
    """Paginated meal listing, newest first."""
    meals = storage.meals
    query = {"user_email": email.lower()} if email else {}

    total = await meals.find(query).count()
    docs = await (
        meals.find(query)
        .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
        .skip((page - 1) * limit)
        .limit(limit)
        .to_list()
    )
    total_pages = math.ceil(total / limit)

    return MealPage(
        meals=[MealResponse.from_document(meal) for meal in docs],
        pagination=Pagination(
            current_page=page,
            total_pages=total_pages,
            total_meals=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
    )


@router.get("/top-rated", response_model=List[MealResponse])
async def top_rated_meals(storage: Storage = Depends(get_storage)) -> List[MealResponse]:
    """Highest rated meals for the home page."""
    docs = await (
        storage.meals.find({})
        .sort([("rating", DESCENDING), ("created_at", DESCENDING)])
        .limit(settings.TOP_RATED_LIMIT)
        .to_list()
    )
    return [MealResponse.from_document(meal) for meal in docs]


@router.get("/{meal_id}", response_model=MealResponse)
async def get_meal(
    meal_id: str,
    _: UserDocument = Depends(authorize("meals:read")),
    storage: Storage = Depends(get_storage),
) -> MealResponse:
    meal = await storage.meals.get(parse_object_id(meal_id, "meal id"))
    if not meal:
        raise NotFoundError("meal not found")
    return MealResponse.from_document(meal)


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: MealCreate,
    chef: UserDocument = Depends(authorize("meals:create")),
    storage: Storage = Depends(get_storage),
) -> MealResponse:
    """Publish a meal owned by the calling chef."""
    now = utcnow()
    meal = storage.meals(
        **payload.model_dump(),
        chef_name=chef.name,
        chef_id=chef.chef_id,
        user_email=chef.email,
        created_at=now,
        updated_at=now,
    )
    await meal.insert()
    logger.info(f"Chef {chef.chef_id} published meal {meal.id}")
    return MealResponse.from_document(meal)


@router.put("/{meal_id}", response_model=MealResponse)
async def update_meal(
    meal_id: str,
    payload: MealUpdate,
    user: UserDocument = Depends(authorize("meals:update")),
    storage: Storage = Depends(get_storage),
) -> MealResponse:
    """Partial update: only the supplied fields change."""
    meal = await storage.meals.get(parse_object_id(meal_id, "meal id"))
    if not meal:
        raise NotFoundError("meal not found")
    if user.role != "admin" and meal.user_email != user.email:
        raise ForbiddenError("you can only edit your own meals")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if changes:
        changes["updated_at"] = utcnow()
        await meal.set(changes)
    return MealResponse.from_document(meal)


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: str,
    user: UserDocument = Depends(authorize("meals:delete")),
    storage: Storage = Depends(get_storage),
) -> dict:
    meal = await storage.meals.get(parse_object_id(meal_id, "meal id"))
    if not meal:
        raise NotFoundError("meal not found")
    if user.role != "admin" and meal.user_email != user.email:
        raise ForbiddenError("you can only delete your own meals")

    await meal.delete()
    logger.info(f"{user.email} deleted meal {meal_id}")
    return {"deleted": True}
