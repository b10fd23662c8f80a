"""
HomeChef API - Role Request Schemas.

Pydantic schemas for chef/admin elevation requests.
"""

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId

from app.models.mongodb import RequestType
from app.schemas.base import CamelModel, DocumentResponse


class RoleRequestCreate(CamelModel):
    """Request to be promoted; the requester is always the caller."""

    request_type: RequestType


class RoleRequestResponse(DocumentResponse):
    """Schema for role request response."""

    id: PydanticObjectId
    user_email: str
    user_name: Optional[str] = None
    request_type: str
    request_status: str
    created_at: datetime
    resolved_at: Optional[datetime] = None


class RoleRequestResolution(CamelModel):
    """Outcome of an approve/reject call."""

    request: RoleRequestResponse
    changed: bool
    chef_id: Optional[str] = None
