# app/routes/role_requests.py
"""
HomeChef API - Role Request Routes.

Users ask to become chefs or admins; admins approve or reject.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.dependencies import authorize, parse_object_id
from app.models.mongodb import UserDocument
from app.schemas.role_request import (
    RoleRequestCreate,
    RoleRequestResolution,
    RoleRequestResponse,
)
from app.workflows.role_elevation import Resolution, RoleElevationWorkflow
from database import Storage, get_storage

router = APIRouter()


def get_role_workflow(storage: Storage = Depends(get_storage)) -> RoleElevationWorkflow:
    """Dependency building the workflow on the request's storage handle."""
    return RoleElevationWorkflow(storage)


def _resolution_response(resolution: Resolution) -> RoleRequestResolution:
    return RoleRequestResolution(
        request=RoleRequestResponse.from_document(resolution.request),
        changed=resolution.changed,
        chef_id=resolution.chef_id,
    )


@router.post("", response_model=RoleRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    payload: RoleRequestCreate,
    user: UserDocument = Depends(authorize("requests:create")),
    workflow: RoleElevationWorkflow = Depends(get_role_workflow),
) -> RoleRequestResponse:
    request = await workflow.submit(user, payload.request_type)
    return RoleRequestResponse.from_document(request)


@router.get("", response_model=List[RoleRequestResponse])
async def list_requests(
    _: UserDocument = Depends(authorize("requests:list")),
    storage: Storage = Depends(get_storage),
) -> List[RoleRequestResponse]:
    """All requests, newest first (admin)."""
    docs = await storage.requests.find({}).sort("-created_at").to_list()
    return [RoleRequestResponse.from_document(request) for request in docs]


@router.get("/me", response_model=List[RoleRequestResponse])
async def list_my_requests(
    user: UserDocument = Depends(authorize("requests:read_own")),
    storage: Storage = Depends(get_storage),
) -> List[RoleRequestResponse]:
    requests = storage.requests
    docs = await requests.find(requests.user_email == user.email).sort("-created_at").to_list()
    return [RoleRequestResponse.from_document(request) for request in docs]


@router.patch("/accept/{request_id}", response_model=RoleRequestResolution)
async def accept_request(
    request_id: str,
    _: UserDocument = Depends(authorize("requests:resolve")),
    workflow: RoleElevationWorkflow = Depends(get_role_workflow),
) -> RoleRequestResolution:
    resolution = await workflow.approve(parse_object_id(request_id, "request id"))
    return _resolution_response(resolution)


@router.patch("/reject/{request_id}", response_model=RoleRequestResolution)
async def reject_request(
    request_id: str,
    _: UserDocument = Depends(authorize("requests:resolve")),
    workflow: RoleElevationWorkflow = Depends(get_role_workflow),
) -> RoleRequestResolution:
    resolution = await workflow.reject(parse_object_id(request_id, "request id"))
    return _resolution_response(resolution)
