"""
HomeChef API - User Schemas.

Pydantic schemas for user account operations.
"""

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.schemas.base import CamelModel, DocumentResponse


class UserCreate(CamelModel):
    """
    Schema for registering the caller's user record.

    Email, role and status are never taken from the client: the email comes
    from the verified token and role/status get server defaults.

    Attributes:
        name: Display name.
        photo_url: Avatar URL.
        address: Default delivery address.
    """

    name: Optional[str] = Field(None, description="Display name")
    photo_url: Optional[str] = Field(None, description="Avatar URL")
    address: Optional[str] = Field(None, description="Default delivery address")


class UserResponse(DocumentResponse):
    """Schema for user response."""

    id: PydanticObjectId
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    address: Optional[str] = None
    role: str
    status: str
    chef_id: Optional[str] = None
    created_at: datetime
    last_login_at: Optional[datetime] = None


class RoleResponse(CamelModel):
    """Role lookup used by the frontend to pick a dashboard."""

    role: str
    status: str
    chef_id: Optional[str] = None
