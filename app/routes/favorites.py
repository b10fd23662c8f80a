# app/routes/favorites.py
"""HomeChef API - Favorite Routes."""

from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.errors import DuplicateKeyError

from app.dependencies import authorize, parse_object_id
from app.models.mongodb import UserDocument, utcnow
from app.schemas.favorite import FavoriteCreate, FavoriteResponse
from app.utils.errors import ConflictError, ForbiddenError, NotFoundError
from database import Storage, get_storage

router = APIRouter()

DUPLICATE_FAVORITE = "meal is already in your favorites"


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    payload: FavoriteCreate,
    user: UserDocument = Depends(authorize("favorites:write")),
    storage: Storage = Depends(get_storage),
) -> FavoriteResponse:
    favorites = storage.favorites
    meal = await storage.meals.get(parse_object_id(payload.meal_id, "meal id"))
    if not meal:
        raise NotFoundError("meal not found")

    meal_id = str(meal.id)
    if await favorites.find_one(favorites.user_email == user.email, favorites.meal_id == meal_id):
        raise ConflictError(DUPLICATE_FAVORITE)

    favorite = favorites(
        user_email=user.email,
        meal_id=meal_id,
        meal_name=meal.food_name,
        chef_name=meal.chef_name,
        price=meal.price,
        created_at=utcnow(),
    )
    try:
        await favorite.insert()
    except DuplicateKeyError:
        raise ConflictError(DUPLICATE_FAVORITE)
    return FavoriteResponse.from_document(favorite)


@router.get("", response_model=List[FavoriteResponse])
async def list_favorites(
    user: UserDocument = Depends(authorize("favorites:read")),
    storage: Storage = Depends(get_storage),
) -> List[FavoriteResponse]:
    favorites = storage.favorites
    docs = await favorites.find(favorites.user_email == user.email).sort("-created_at").to_list()
    return [FavoriteResponse.from_document(favorite) for favorite in docs]


@router.delete("/{favorite_id}")
async def remove_favorite(
    favorite_id: str,
    user: UserDocument = Depends(authorize("favorites:write")),
    storage: Storage = Depends(get_storage),
) -> dict:
    favorite = await storage.favorites.get(parse_object_id(favorite_id, "favorite id"))
    if not favorite:
        raise NotFoundError("favorite not found")
    if favorite.user_email != user.email:
        raise ForbiddenError()
    await favorite.delete()
    return {"deleted": True}
