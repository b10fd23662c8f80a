"""
HomeChef API - FastAPI Dependencies.

Dependency injection helpers for routes: caller resolution and the access
policy table every protected route is checked against.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple
import logging

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends

from app.middleware.auth import get_current_identity
from app.models.mongodb import UserDocument
from app.services.identity_service import CallerIdentity
from app.utils.errors import ForbiddenError, NotFoundError, ValidationError
from database import Storage, get_storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Policy:
    """Roles allowed to perform an action; ``None`` means any role."""

    roles: Optional[Tuple[str, ...]] = None
    block_fraud: bool = False


ANY_ROLE = Policy()

ACCESS_POLICY: Dict[str, Policy] = {
    # Users
    "users:list": Policy(roles=("admin",)),
    "users:read": ANY_ROLE,
    "users:mark_fraud": Policy(roles=("admin",)),
    # Meals
    "meals:create": Policy(roles=("chef",), block_fraud=True),
    "meals:update": Policy(roles=("chef", "admin"), block_fraud=True),
    "meals:delete": Policy(roles=("chef", "admin")),
    "meals:read": ANY_ROLE,
    # Orders
    "orders:create": Policy(block_fraud=True),
    "orders:read_own": ANY_ROLE,
    "orders:read_chef": Policy(roles=("chef", "admin")),
    "orders:update_status": Policy(roles=("chef", "admin")),
    # Role requests
    "requests:create": Policy(roles=("user", "chef"), block_fraud=True),
    "requests:read_own": ANY_ROLE,
    "requests:list": Policy(roles=("admin",)),
    "requests:resolve": Policy(roles=("admin",)),
    # Reviews
    "reviews:write": ANY_ROLE,
    "reviews:read_own": ANY_ROLE,
    # Favorites
    "favorites:write": ANY_ROLE,
    "favorites:read": ANY_ROLE,
    # Payments
    "payments:checkout": Policy(block_fraud=True),
    "payments:confirm": ANY_ROLE,
    "payments:read_own": ANY_ROLE,
}


async def get_current_user(
    identity: CallerIdentity = Depends(get_current_identity),
    storage: Storage = Depends(get_storage),
) -> UserDocument:
    """
    Get the caller's user record.

    Raises:
        NotFoundError: 404 if the caller never registered through POST /users.
    """
    user = await storage.users.find_one(storage.users.email == identity.email)
    if not user:
        raise NotFoundError("user not found")
    return user


def check_policy(action: str, user: UserDocument) -> None:
    """
    Check ``user`` against the policy for ``action``.

    Raises:
        KeyError: If the action is missing from the policy table.
        ForbiddenError: 403 on role mismatch or fraud block.
    """
    policy = ACCESS_POLICY[action]
    if policy.roles is not None and user.role not in policy.roles:
        logger.warning(f"{user.email} ({user.role}) denied {action}")
        raise ForbiddenError()
    if policy.block_fraud and user.status == "fraud":
        logger.warning(f"Fraud-flagged {user.email} denied {action}")
        raise ForbiddenError("account flagged as fraud")


def authorize(action: str):
    """
    Dependency factory enforcing ``ACCESS_POLICY[action]``.

    Example:
        @router.delete("/{meal_id}")
        async def delete_meal(user: UserDocument = Depends(authorize("meals:delete"))):
            ...
    """
    if action not in ACCESS_POLICY:
        raise KeyError(f"No access policy for {action}")

    async def dependency(user: UserDocument = Depends(get_current_user)) -> UserDocument:
        check_policy(action, user)
        return user

    return dependency


def parse_object_id(value: str, label: str = "id") -> PydanticObjectId:
    """Parse a path id, mapping malformed ids to 400."""
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(f"invalid {label}")
