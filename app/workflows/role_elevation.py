"""
HomeChef Role Elevation Workflow.

Submission and admin resolution of requests to become a chef or an admin.

Approval touches two documents (the user and the request) without a
transaction. The user is promoted first and the request is marked approved
second; promoting is idempotent, so re-running an approval that crashed
halfway finishes the job.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from beanie import PydanticObjectId

from app.models.mongodb import RoleRequestDocument, UserDocument, utcnow
from app.utils.errors import ConflictError, NotFoundError
from database import Storage
from settings import settings

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Outcome of approve/reject; ``changed`` is False for repeated calls."""

    request: RoleRequestDocument
    changed: bool
    chef_id: Optional[str] = None


def generate_chef_id(rng: Optional[random.Random] = None) -> str:
    """Random ``chef-NNNN`` identifier (four digits, zero padded)."""
    rng = rng or random
    return f"chef-{rng.randint(0, 9999):04d}"


class RoleElevationWorkflow:
    """
    Role request workflow bound to a storage handle.

    Args:
        storage: Repositories for users and requests.
        max_attempts: Chef id generation attempts before giving up.
        rng: Random source for chef ids (injectable for tests).
    """

    def __init__(
        self,
        storage: Storage,
        max_attempts: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.storage = storage
        self.max_attempts = max_attempts or settings.CHEF_ID_MAX_ATTEMPTS
        self.rng = rng

    async def submit(self, user: UserDocument, request_type: str) -> RoleRequestDocument:
        """
        Create a pending request for ``user``.

        The duplicate check is a plain read before the insert; two
        concurrent submissions can both pass it.

        Raises:
            ConflictError: 409 if the user already holds the role or has a
                pending request of the same type.
        """
        requests = self.storage.requests
        if user.role == request_type:
            raise ConflictError(f"you are already {request_type}")

        pending = await requests.find_one(
            requests.user_email == user.email,
            requests.request_type == request_type,
            requests.request_status == "pending",
        )
        if pending:
            raise ConflictError(f"a {request_type} request is already pending")

        request = requests(
            user_email=user.email,
            user_name=user.name,
            request_type=request_type,
            request_status="pending",
            created_at=utcnow(),
        )
        await request.insert()
        logger.info(f"{user.email} requested {request_type} role ({request.id})")
        return request

    async def approve(self, request_id: PydanticObjectId) -> Resolution:
        """
        Approve a request and promote the requesting user.

        Raises:
            NotFoundError: 404 if the request does not exist.
            ConflictError: 409 if the request was rejected, or no free chef
                id could be generated.
        """
        request = await self._get_request(request_id)
        if request.request_status == "approved":
            logger.info(f"Request {request_id} already approved")
            return Resolution(request=request, changed=False)
        if request.request_status == "rejected":
            raise ConflictError("request was already rejected")

        chef_id = await self._promote(request)

        await request.set({
            "request_status": "approved",
            "resolved_at": utcnow(),
        })
        logger.info(f"Request {request_id} approved ({request.request_type} for {request.user_email})")
        return Resolution(request=request, changed=True, chef_id=chef_id)

    async def reject(self, request_id: PydanticObjectId) -> Resolution:
        """
        Reject a pending request.

        Raises:
            NotFoundError: 404 if the request does not exist.
            ConflictError: 409 if the request was already approved.
        """
        request = await self._get_request(request_id)
        if request.request_status == "rejected":
            return Resolution(request=request, changed=False)
        if request.request_status == "approved":
            raise ConflictError("request was already approved")

        await request.set({
            "request_status": "rejected",
            "resolved_at": utcnow(),
        })
        logger.info(f"Request {request_id} rejected")
        return Resolution(request=request, changed=True)

    async def _get_request(self, request_id: PydanticObjectId) -> RoleRequestDocument:
        request = await self.storage.requests.get(request_id)
        if not request:
            raise NotFoundError("request not found")
        return request

    async def _promote(self, request: RoleRequestDocument) -> Optional[str]:
        """Apply the requested role; a missing user is logged and skipped."""
        users = self.storage.users
        user = await users.find_one(users.email == request.user_email)
        if not user:
            logger.warning(f"Approving {request.id}: no user {request.user_email}")
            return None

        if request.request_type == "chef":
            chef_id = user.chef_id or await self._allocate_chef_id()
            await user.set({
                "role": "chef",
                "chef_id": chef_id,
                "updated_at": utcnow(),
            })
            logger.info(f"{user.email} promoted to chef as {chef_id}")
            return chef_id

        await user.set({
            "role": "admin",
            "chef_id": None,
            "updated_at": utcnow(),
        })
        logger.info(f"{user.email} promoted to admin")
        return None

    async def _allocate_chef_id(self) -> str:
        users = self.storage.users
        for _ in range(self.max_attempts):
            candidate = generate_chef_id(self.rng)
            if not await users.find_one(users.chef_id == candidate):
                return candidate
        logger.error(f"No free chef id after {self.max_attempts} attempts")
        raise ConflictError("could not allocate a chef id, try again")
