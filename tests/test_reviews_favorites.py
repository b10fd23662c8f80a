"""Reviews and favorites: uniqueness, ownership and rating upkeep."""

from app.models.mongodb import FavoriteDocument, MealDocument, ReviewDocument
from tests.conftest import auth


async def post_review(client, email, meal_id, rating=5, comment="Lovely"):
    return await client.post(
        "/reviews",
        json={"foodId": meal_id, "rating": rating, "comment": comment},
        headers=auth(email),
    )


async def test_review_is_created_for_caller(client, chef, customer, make_meal):
    meal = await make_meal(chef)

    response = await post_review(client, customer.email, str(meal.id))

    assert response.status_code == 201
    body = response.json()
    assert body["reviewerEmail"] == customer.email
    assert body["mealId"] == str(meal.id)


async def test_duplicate_review_is_conflict(client, chef, customer, make_meal):
    meal = await make_meal(chef)
    await post_review(client, customer.email, str(meal.id))

    response = await post_review(client, customer.email, str(meal.id), rating=1)

    assert response.status_code == 409
    assert await ReviewDocument.find(ReviewDocument.meal_id == str(meal.id)).count() == 1


async def test_review_updates_meal_rating(client, chef, customer, make_user, make_meal):
    meal = await make_meal(chef, rating=0.0)
    other = await make_user("other@example.com")

    await post_review(client, customer.email, str(meal.id), rating=5)
    await post_review(client, other.email, str(meal.id), rating=4)

    stored = await MealDocument.get(meal.id)
    assert stored.rating == 4.5


async def test_meal_reviews_are_public(client, chef, customer, make_meal):
    meal = await make_meal(chef)
    await post_review(client, customer.email, str(meal.id))

    response = await client.get(f"/reviews/{meal.id}")

    assert response.status_code == 200
    assert len(response.json()) == 1


async def test_reviewer_edits_own_review(client, chef, customer, make_meal):
    meal = await make_meal(chef)
    review_id = (await post_review(client, customer.email, str(meal.id), rating=2)).json()["id"]

    response = await client.patch(
        f"/reviews/{review_id}",
        json={"comment": "Better second time"},
        headers=auth(customer.email),
    )

    assert response.status_code == 200
    assert response.json()["comment"] == "Better second time"
    assert response.json()["rating"] == 2


async def test_other_user_cannot_edit_review(client, chef, customer, make_user, make_meal):
    meal = await make_meal(chef)
    other = await make_user("other@example.com")
    review_id = (await post_review(client, customer.email, str(meal.id))).json()["id"]

    response = await client.patch(f"/reviews/{review_id}", json={"rating": 1}, headers=auth(other.email))

    assert response.status_code == 403


async def test_delete_review(client, chef, customer, make_meal):
    meal = await make_meal(chef)
    review_id = (await post_review(client, customer.email, str(meal.id))).json()["id"]

    first = await client.delete(f"/reviews/{review_id}", headers=auth(customer.email))
    second = await client.delete(f"/reviews/{review_id}", headers=auth(customer.email))

    assert first.status_code == 200
    assert second.status_code == 404


async def test_deleting_last_review_resets_meal_rating(client, chef, customer, make_meal):
    meal = await make_meal(chef, rating=0.0)
    review_id = (await post_review(client, customer.email, str(meal.id), rating=1)).json()["id"]
    assert (await MealDocument.get(meal.id)).rating == 1.0

    response = await client.delete(f"/reviews/{review_id}", headers=auth(customer.email))

    assert response.status_code == 200
    stored = await MealDocument.get(meal.id)
    assert stored.rating == 0.0


async def test_deleting_one_review_recomputes_from_the_rest(client, chef, customer, make_user, make_meal):
    meal = await make_meal(chef, rating=0.0)
    other = await make_user("other@example.com")
    review_id = (await post_review(client, customer.email, str(meal.id), rating=1)).json()["id"]
    await post_review(client, other.email, str(meal.id), rating=4)

    await client.delete(f"/reviews/{review_id}", headers=auth(customer.email))

    stored = await MealDocument.get(meal.id)
    assert stored.rating == 4.0


async def test_favorite_dedup_and_listing(client, chef, customer, make_meal):
    meal = await make_meal(chef)

    first = await client.post("/favorites", json={"mealId": str(meal.id)}, headers=auth(customer.email))
    second = await client.post("/favorites", json={"mealId": str(meal.id)}, headers=auth(customer.email))
    listing = await client.get("/favorites", headers=auth(customer.email))

    assert first.status_code == 201
    assert first.json()["mealName"] == meal.food_name
    assert second.status_code == 409
    assert len(listing.json()) == 1


async def test_favorite_delete_is_owner_only(client, chef, customer, make_user, make_meal):
    meal = await make_meal(chef)
    other = await make_user("other@example.com")
    favorite_id = (
        await client.post("/favorites", json={"mealId": str(meal.id)}, headers=auth(customer.email))
    ).json()["id"]

    foreign = await client.delete(f"/favorites/{favorite_id}", headers=auth(other.email))
    own = await client.delete(f"/favorites/{favorite_id}", headers=auth(customer.email))
    again = await client.delete(f"/favorites/{favorite_id}", headers=auth(customer.email))

    assert foreign.status_code == 403
    assert own.status_code == 200
    assert again.status_code == 404
    assert await FavoriteDocument.find_all().count() == 0
