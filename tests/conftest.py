"""Shared fixtures: in-memory MongoDB, fake identity provider, fake Stripe."""

import os

os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017")
os.environ.setdefault("DATABASE_NAME", "homechef_test")
os.environ.setdefault("ENV", "testing")

from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.models.mongodb import MealDocument, OrderDocument, UserDocument
from app.services.identity_service import CallerIdentity, get_identity_service
from app.services.stripe_service import (
    CheckoutLineItem,
    CheckoutSessionInfo,
    get_stripe_service,
)
from app.utils.errors import AuthenticationError, PaymentProviderError
from database import Database
from main import app

TOKEN_PREFIX = "valid:"


class FakeIdentityService:
    """Accepts ``valid:<email>`` tokens, rejects everything else."""

    async def verify_token(self, token: str) -> CallerIdentity:
        if not token.startswith(TOKEN_PREFIX):
            raise AuthenticationError(message="unauthorized access: Could not verify token")
        email = token[len(TOKEN_PREFIX):]
        return CallerIdentity(uid=f"uid-{email}", email=email, name=email.split("@")[0])


class FakeStripeService:
    """Records created sessions and serves pre-registered retrievals."""

    def __init__(self):
        self.created: List[Dict] = []
        self.sessions: Dict[str, CheckoutSessionInfo] = {}

    async def create_checkout_session(
        self,
        item: CheckoutLineItem,
        customer_email: str,
        order_id: str,
    ) -> str:
        self.created.append({
            "item": item,
            "customer_email": customer_email,
            "order_id": order_id,
        })
        return f"https://checkout.stripe.test/pay/cs_test_{len(self.created)}"

    def complete(
        self,
        session_id: str,
        order_id: str,
        amount: float,
        transaction_id: str = "pi_test_1",
        customer_email: Optional[str] = None,
        payment_status: str = "paid",
    ) -> None:
        self.sessions[session_id] = CheckoutSessionInfo(
            session_id=session_id,
            payment_status=payment_status,
            transaction_id=transaction_id,
            amount=amount,
            currency="usd",
            customer_email=customer_email,
            metadata={"orderId": order_id},
        )

    async def retrieve_session(self, session_id: str) -> CheckoutSessionInfo:
        if session_id not in self.sessions:
            raise PaymentProviderError(detail=f"No such checkout.session: {session_id}")
        return self.sessions[session_id]


def auth(email: str) -> Dict[str, str]:
    """Authorization header for a caller."""
    return {"Authorization": f"Bearer {TOKEN_PREFIX}{email}"}


@pytest_asyncio.fixture
async def db():
    client = AsyncMongoMockClient()
    await Database.init_models(client, "homechef_test")
    yield client
    Database.client = None
    Database._initialized = False


@pytest.fixture
def stripe_fake() -> FakeStripeService:
    return FakeStripeService()


@pytest_asyncio.fixture
async def client(db, stripe_fake):
    app.dependency_overrides[get_identity_service] = FakeIdentityService
    app.dependency_overrides[get_stripe_service] = lambda: stripe_fake
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def factory(
        email: str,
        role: str = "user",
        status: str = "active",
        chef_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> UserDocument:
        user = UserDocument(
            email=email,
            name=name or email.split("@")[0],
            role=role,
            status=status,
            chef_id=chef_id,
        )
        await user.insert()
        return user

    return factory


@pytest.fixture
def make_meal(db):
    async def factory(
        owner: UserDocument,
        food_name: str = "Chicken Biryani",
        price: float = 12.5,
        rating: float = 4.0,
    ) -> MealDocument:
        meal = MealDocument(
            food_name=food_name,
            chef_name=owner.name,
            chef_id=owner.chef_id,
            user_email=owner.email,
            price=price,
            rating=rating,
        )
        await meal.insert()
        return meal

    return factory


@pytest.fixture
def make_order(db):
    async def factory(
        meal: MealDocument,
        customer: UserDocument,
        quantity: int = 2,
        order_status: str = "pending",
    ) -> OrderDocument:
        order = OrderDocument(
            meal_id=str(meal.id),
            meal_name=meal.food_name,
            chef_id=meal.chef_id,
            user_email=customer.email,
            quantity=quantity,
            unit_price=meal.price,
            price=meal.price * quantity,
            order_status=order_status,
        )
        await order.insert()
        return order

    return factory


@pytest_asyncio.fixture
async def chef(make_user) -> UserDocument:
    return await make_user("maria@homechef.app", role="chef", chef_id="chef-1234")


@pytest_asyncio.fixture
async def admin(make_user) -> UserDocument:
    return await make_user("root@homechef.app", role="admin")


@pytest_asyncio.fixture
async def customer(make_user) -> UserDocument:
    return await make_user("sam@example.com")
