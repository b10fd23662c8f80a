"""Workflow units exercised directly against the storage handle."""

import random

import pytest

from app.models.mongodb import RoleRequestDocument, UserDocument
from app.utils.errors import ConflictError
from app.workflows.role_elevation import RoleElevationWorkflow, generate_chef_id
from database import Storage


class FixedRandom(random.Random):
    """Always draws the same number."""

    def __init__(self, value: int):
        super().__init__()
        self.value = value

    def randint(self, a: int, b: int) -> int:
        return self.value


def test_chef_id_is_zero_padded():
    assert generate_chef_id(FixedRandom(7)) == "chef-0007"
    assert generate_chef_id(FixedRandom(9999)) == "chef-9999"


def test_chef_id_is_reproducible_with_seed():
    assert generate_chef_id(random.Random(42)) == generate_chef_id(random.Random(42))


async def test_chef_id_allocation_gives_up_when_taken(make_user):
    await make_user("maria@homechef.app", role="chef", chef_id="chef-0042")
    applicant = await make_user("sam@example.com")
    workflow = RoleElevationWorkflow(Storage(), max_attempts=3, rng=FixedRandom(42))
    request = await workflow.submit(applicant, "chef")

    with pytest.raises(ConflictError):
        await workflow.approve(request.id)

    stored = await RoleRequestDocument.get(request.id)
    assert stored.request_status == "pending"
    user = await UserDocument.get(applicant.id)
    assert user.role == "user"


async def test_existing_chef_id_is_kept(make_user):
    applicant = await make_user("sam@example.com", role="user", chef_id="chef-0101")
    workflow = RoleElevationWorkflow(Storage(), rng=FixedRandom(5))
    request = await workflow.submit(applicant, "chef")

    resolution = await workflow.approve(request.id)

    assert resolution.chef_id == "chef-0101"


async def test_half_finished_approval_completes(make_user):
    applicant = await make_user("sam@example.com", role="chef", chef_id="chef-0500")
    # User already promoted but the request was never marked
    request = RoleRequestDocument(user_email=applicant.email, request_type="chef")
    await request.insert()
    workflow = RoleElevationWorkflow(Storage())

    resolution = await workflow.approve(request.id)

    assert resolution.changed is True
    assert resolution.request.request_status == "approved"
    user = await UserDocument.get(applicant.id)
    assert user.chef_id == "chef-0500"
