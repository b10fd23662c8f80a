# app/routes/reviews.py
"""
HomeChef API - Review Routes.

One review per meal per reviewer; the meal rating follows the reviews.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.errors import DuplicateKeyError

from app.dependencies import authorize, parse_object_id
from app.models.mongodb import UserDocument, utcnow
from app.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from app.utils.errors import ConflictError, ForbiddenError, NotFoundError
from database import Storage, get_storage

router = APIRouter()
logger = logging.getLogger(__name__)

DUPLICATE_REVIEW = "you have already reviewed this meal"


async def refresh_meal_rating(storage: Storage, meal_id: str) -> None:
    """Set the meal rating to the mean review rating (one decimal), 0.0 when unreviewed."""
    meal = await storage.meals.get(parse_object_id(meal_id, "meal id"))
    if not meal:
        return
    reviews = await storage.reviews.find(storage.reviews.meal_id == meal_id).to_list()
    rating = 0.0
    if reviews:
        rating = round(sum(review.rating for review in reviews) / len(reviews), 1)
    await meal.set({"rating": rating})


async def _get_owned_review(storage: Storage, review_id: str, user: UserDocument):
    review = await storage.reviews.get(parse_object_id(review_id, "review id"))
    if not review:
        raise NotFoundError("review not found")
    if review.reviewer_email != user.email and user.role != "admin":
        raise ForbiddenError("you can only change your own reviews")
    return review


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    payload: ReviewCreate,
    user: UserDocument = Depends(authorize("reviews:write")),
    storage: Storage = Depends(get_storage),
) -> ReviewResponse:
    reviews = storage.reviews
    meal = await storage.meals.get(parse_object_id(payload.food_id, "meal id"))
    if not meal:
        raise NotFoundError("meal not found")

    meal_id = str(meal.id)
    existing = await reviews.find_one(
        reviews.meal_id == meal_id,
        reviews.reviewer_email == user.email,
    )
    if existing:
        raise ConflictError(DUPLICATE_REVIEW)

    now = utcnow()
    review = reviews(
        meal_id=meal_id,
        reviewer_email=user.email,
        reviewer_name=user.name,
        reviewer_image=user.photo_url,
        rating=payload.rating,
        comment=payload.comment,
        created_at=now,
        updated_at=now,
    )
    try:
        await review.insert()
    except DuplicateKeyError:
        raise ConflictError(DUPLICATE_REVIEW)

    await refresh_meal_rating(storage, meal_id)
    logger.info(f"{user.email} reviewed meal {meal_id}")
    return ReviewResponse.from_document(review)


@router.get("", response_model=List[ReviewResponse])
async def list_my_reviews(
    user: UserDocument = Depends(authorize("reviews:read_own")),
    storage: Storage = Depends(get_storage),
) -> List[ReviewResponse]:
    reviews = storage.reviews
    docs = await reviews.find(reviews.reviewer_email == user.email).sort("-created_at").to_list()
    return [ReviewResponse.from_document(review) for review in docs]


@router.get("/{meal_id}", response_model=List[ReviewResponse])
async def list_meal_reviews(
    meal_id: str,
    storage: Storage = Depends(get_storage),
) -> List[ReviewResponse]:
    """Public reviews for one meal, newest first."""
    reviews = storage.reviews
    docs = await reviews.find(reviews.meal_id == meal_id).sort("-created_at").to_list()
    return [ReviewResponse.from_document(review) for review in docs]


@router.patch("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    payload: ReviewUpdate,
    user: UserDocument = Depends(authorize("reviews:write")),
    storage: Storage = Depends(get_storage),
) -> ReviewResponse:
    review = await _get_owned_review(storage, review_id, user)

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if changes:
        changes["updated_at"] = utcnow()
        await review.set(changes)
        if "rating" in changes:
            await refresh_meal_rating(storage, review.meal_id)
    return ReviewResponse.from_document(review)


@router.delete("/{review_id}")
async def delete_review(
    review_id: str,
    user: UserDocument = Depends(authorize("reviews:write")),
    storage: Storage = Depends(get_storage),
) -> dict:
    review = await _get_owned_review(storage, review_id, user)
    await review.delete()
    await refresh_meal_rating(storage, review.meal_id)
    return {"deleted": True}
