"""Application shell: health routes and the lazy database connection."""

from database import Database
from tests.conftest import auth


async def test_root_banner(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Hello Chef"


async def test_unreachable_database_answers_503(client, monkeypatch, customer):
    attempts = []

    async def failing_connect(cls, database_url, database_name):
        attempts.append(database_name)
        raise ConnectionError("server selection timed out")

    monkeypatch.setattr(Database, "_initialized", False)
    monkeypatch.setattr(Database, "connect_db", classmethod(failing_connect))

    meals = await client.get("/meals")
    orders = await client.get("/orders", headers=auth(customer.email))
    health = await client.get("/health")

    assert meals.status_code == 503
    assert meals.json() == {"message": "database unavailable"}
    assert orders.status_code == 503
    assert health.status_code == 200
    assert len(attempts) == 2
