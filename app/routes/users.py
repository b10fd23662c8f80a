# app/routes/users.py
"""
HomeChef API - User Routes.

Account registration, lookup and fraud flagging.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.dependencies import authorize, parse_object_id
from app.middleware.auth import get_current_identity
from app.models.mongodb import UserDocument, utcnow
from app.schemas.user import RoleResponse, UserCreate, UserResponse
from app.services.identity_service import CallerIdentity
from app.utils.errors import ForbiddenError, NotFoundError
from database import Storage, get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    response: Response,
    identity: CallerIdentity = Depends(get_current_identity),
    storage: Storage = Depends(get_storage),
) -> UserResponse:
    """
    Register the caller, or refresh the login time of an existing record.

    Role and status always start as ``user``/``active``; the email is the
    verified token email.
    """
    users = storage.users
    existing = await users.find_one(users.email == identity.email)
    if existing:
        await existing.set({"last_login_at": utcnow()})
        response.status_code = status.HTTP_200_OK
        return UserResponse.from_document(existing)

    now = utcnow()
    user = users(
        email=identity.email,
        name=payload.name or identity.name,
        photo_url=payload.photo_url or identity.picture,
        address=payload.address,
        role="user",
        status="active",
        created_at=now,
        updated_at=now,
        last_login_at=now,
    )
    await user.insert()
    logger.info(f"Registered user {user.email}")
    return UserResponse.from_document(user)


@router.get("", response_model=List[UserResponse])
async def list_users(
    _: UserDocument = Depends(authorize("users:list")),
    storage: Storage = Depends(get_storage),
) -> List[UserResponse]:
    """List every user (admin)."""
    users = await storage.users.find({}).sort("-created_at").to_list()
    return [UserResponse.from_document(user) for user in users]


@router.get("/role/{email}", response_model=RoleResponse)
async def get_user_role(
    email: str,
    _: UserDocument = Depends(authorize("users:read")),
    storage: Storage = Depends(get_storage),
) -> RoleResponse:
    """Role, status and chef id for one email."""
    user = await storage.users.find_one(storage.users.email == email.lower())
    if not user:
        raise NotFoundError("user not found")
    return RoleResponse(role=user.role, status=user.status, chef_id=user.chef_id)


@router.get("/{email}", response_model=UserResponse)
async def get_user(
    email: str,
    _: UserDocument = Depends(authorize("users:read")),
    storage: Storage = Depends(get_storage),
) -> UserResponse:
    """Get a single user by email."""
    user = await storage.users.find_one(storage.users.email == email.lower())
    if not user:
        raise NotFoundError("user not found")
    return UserResponse.from_document(user)


@router.patch("/fraud/{user_id}", response_model=UserResponse)
async def mark_fraud(
    user_id: str,
    admin: UserDocument = Depends(authorize("users:mark_fraud")),
    storage: Storage = Depends(get_storage),
) -> UserResponse:
    """Flag a user or chef as fraud (admin)."""
    user = await storage.users.get(parse_object_id(user_id, "user id"))
    if not user:
        raise NotFoundError("user not found")
    if user.role == "admin":
        raise ForbiddenError("admins cannot be flagged as fraud")

    await user.set({"status": "fraud", "updated_at": utcnow()})
    logger.warning(f"{admin.email} flagged {user.email} as fraud")
    return UserResponse.from_document(user)
