"""User registration, lookup and fraud flagging."""

from app.models.mongodb import UserDocument
from tests.conftest import auth


async def test_create_user_uses_token_email_and_server_defaults(client):
    response = await client.post(
        "/users",
        json={"name": "Sam", "role": "admin", "status": "fraud", "email": "evil@example.com"},
        headers=auth("sam@example.com"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "sam@example.com"
    assert body["role"] == "user"
    assert body["status"] == "active"
    assert body["chefId"] is None
    assert await UserDocument.find_one(UserDocument.email == "evil@example.com") is None


async def test_create_user_twice_keeps_one_record(client):
    first = await client.post("/users", json={"name": "Sam"}, headers=auth("sam@example.com"))
    second = await client.post("/users", json={"name": "Other"}, headers=auth("sam@example.com"))

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["name"] == "Sam"
    assert await UserDocument.find(UserDocument.email == "sam@example.com").count() == 1


async def test_admin_lists_users(client, admin, customer):
    response = await client.get("/users", headers=auth(admin.email))

    assert response.status_code == 200
    emails = {user["email"] for user in response.json()}
    assert emails == {admin.email, customer.email}


async def test_get_single_user_and_missing_user(client, customer):
    found = await client.get(f"/users/{customer.email}", headers=auth(customer.email))
    missing = await client.get("/users/nobody@example.com", headers=auth(customer.email))

    assert found.status_code == 200
    assert found.json()["email"] == customer.email
    assert missing.status_code == 404
    assert missing.json() == {"message": "user not found"}


async def test_role_lookup(client, chef):
    response = await client.get(f"/users/role/{chef.email}", headers=auth(chef.email))

    assert response.status_code == 200
    assert response.json() == {"role": "chef", "status": "active", "chefId": "chef-1234"}


async def test_admin_flags_user_as_fraud(client, admin, customer):
    response = await client.patch(f"/users/fraud/{customer.id}", headers=auth(admin.email))

    assert response.status_code == 200
    assert response.json()["status"] == "fraud"
    stored = await UserDocument.get(customer.id)
    assert stored.status == "fraud"


async def test_fraud_flag_on_missing_user_is_404(client, admin):
    response = await client.patch("/users/fraud/65f1c0ffee0000000000abcd", headers=auth(admin.email))
    assert response.status_code == 404


async def test_fraud_flag_with_malformed_id_is_400(client, admin):
    response = await client.patch("/users/fraud/not-an-id", headers=auth(admin.email))
    assert response.status_code == 400
    assert response.json() == {"message": "invalid user id"}


async def test_admins_cannot_be_flagged(client, admin, make_user):
    other_admin = await make_user("second@homechef.app", role="admin")
    response = await client.patch(f"/users/fraud/{other_admin.id}", headers=auth(admin.email))
    assert response.status_code == 403
