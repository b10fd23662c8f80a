"""Meal browsing and chef-owned meal management."""

from app.models.mongodb import MealDocument
from tests.conftest import auth

MEAL_PAYLOAD = {
    "foodName": "Chicken Biryani",
    "foodImage": "https://i.ibb.co/biryani.jpg",
    "price": 12.5,
    "ingredients": ["rice", "chicken", "saffron"],
    "estimatedDeliveryTime": "45 minutes",
    "chefExperience": "8 years",
}


async def test_chef_creates_meal_with_owner_stamped(client, chef):
    response = await client.post(
        "/meals",
        json={**MEAL_PAYLOAD, "userEmail": "someone@else.com"},
        headers=auth(chef.email),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["userEmail"] == chef.email
    assert body["chefId"] == "chef-1234"
    assert body["foodName"] == "Chicken Biryani"
    assert body["price"] == 12.5


async def test_plain_user_cannot_create_meal(client, customer):
    response = await client.post("/meals", json=MEAL_PAYLOAD, headers=auth(customer.email))
    assert response.status_code == 403


async def test_meal_payload_validation_is_400(client, chef):
    response = await client.post(
        "/meals",
        json={"foodName": "Soup", "price": -1},
        headers=auth(chef.email),
    )
    assert response.status_code == 400
    assert "price" in response.json()["message"]


async def test_pagination_second_page(client, chef, make_meal):
    for index in range(25):
        await make_meal(chef, food_name=f"Meal {index}")

    response = await client.get("/meals", params={"page": 2, "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert len(body["meals"]) == 10
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalMeals": 25,
        "hasNextPage": True,
        "hasPrevPage": True,
    }


async def test_pagination_last_page_and_email_filter(client, chef, make_user, make_meal):
    other = await make_user("luca@homechef.app", role="chef", chef_id="chef-9999")
    for index in range(5):
        await make_meal(chef, food_name=f"Meal {index}")
    await make_meal(other, food_name="Other")

    response = await client.get("/meals", params={"email": chef.email, "page": 1, "limit": 5})

    body = response.json()
    assert {meal["userEmail"] for meal in body["meals"]} == {chef.email}
    assert body["pagination"]["totalMeals"] == 5
    assert body["pagination"]["totalPages"] == 1
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["hasPrevPage"] is False


async def test_invalid_page_is_400(client):
    response = await client.get("/meals", params={"page": 0})
    assert response.status_code == 400


async def test_top_rated_returns_six_best(client, chef, make_meal):
    for rating in (1.0, 4.9, 3.0, 5.0, 2.5, 4.0, 3.5, 4.5):
        await make_meal(chef, food_name=f"Rated {rating}", rating=rating)

    response = await client.get("/meals/top-rated")

    ratings = [meal["rating"] for meal in response.json()]
    assert ratings == [5.0, 4.9, 4.5, 4.0, 3.5, 3.0]


async def test_get_meal_requires_auth_and_404s(client, chef, customer, make_meal):
    meal = await make_meal(chef)

    anonymous = await client.get(f"/meals/{meal.id}")
    found = await client.get(f"/meals/{meal.id}", headers=auth(customer.email))
    missing = await client.get("/meals/65f1c0ffee0000000000abcd", headers=auth(customer.email))

    assert anonymous.status_code == 401
    assert found.status_code == 200
    assert found.json()["id"] == str(meal.id)
    assert missing.status_code == 404
    assert missing.json() == {"message": "meal not found"}


async def test_partial_update_changes_only_named_fields(client, chef, make_meal):
    meal = await make_meal(chef, price=10.0, rating=4.0)

    response = await client.put(
        f"/meals/{meal.id}",
        json={"price": 11.0},
        headers=auth(chef.email),
    )

    assert response.status_code == 200
    stored = await MealDocument.get(meal.id)
    assert stored.price == 11.0
    assert stored.rating == 4.0
    assert stored.food_name == meal.food_name


async def test_chef_cannot_update_someone_elses_meal(client, chef, make_user, make_meal):
    other = await make_user("luca@homechef.app", role="chef", chef_id="chef-9999")
    meal = await make_meal(other)

    response = await client.put(f"/meals/{meal.id}", json={"price": 1}, headers=auth(chef.email))

    assert response.status_code == 403


async def test_delete_meal_and_delete_again(client, chef, make_meal):
    meal = await make_meal(chef)

    first = await client.delete(f"/meals/{meal.id}", headers=auth(chef.email))
    second = await client.delete(f"/meals/{meal.id}", headers=auth(chef.email))

    assert first.status_code == 200
    assert second.status_code == 404
    assert await MealDocument.get(meal.id) is None


async def test_meal_rating_is_not_client_writable(client, chef, make_meal):
    created = await client.post("/meals", json={**MEAL_PAYLOAD, "rating": 5.0}, headers=auth(chef.email))
    meal = await make_meal(chef, rating=3.5)

    updated = await client.put(f"/meals/{meal.id}", json={"rating": 5.0}, headers=auth(chef.email))

    assert created.status_code == 201
    assert created.json()["rating"] == 0.0
    assert updated.status_code == 200
    stored = await MealDocument.get(meal.id)
    assert stored.rating == 3.5
