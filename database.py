# database.py
"""
HomeChef MongoDB Database Connection.

Uses Motor async driver with Beanie ODM.
"""

from dataclasses import dataclass
from typing import Optional, Type
import logging

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie

from app.models.mongodb import (
    DOCUMENT_MODELS,
    UserDocument,
    MealDocument,
    OrderDocument,
    RoleRequestDocument,
    ReviewDocument,
    FavoriteDocument,
    PaymentDocument,
)

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    _initialized: bool = False

    @classmethod
    async def connect_db(cls, database_url: str, database_name: str):
        """
        Connect to MongoDB Atlas.

        Args:
            database_url: MongoDB connection string
            database_name: Database name to use
        """
        # Skip if already initialized (prevents multiple worker initialization)
        if cls._initialized:
            return

        try:
            client = AsyncIOMotorClient(
                database_url,
                serverSelectionTimeoutMS=5000,  # 5 second timeout
                maxPoolSize=50,
                minPoolSize=10
            )

            # Test connection with ping
            await client.admin.command('ping')
            logger.info(f"Connected to MongoDB Atlas: {database_name}")

            await cls.init_models(client, database_name)

        except Exception as e:
            logger.error(f"Error connecting to MongoDB: {e}")
            raise

    @classmethod
    async def init_models(cls, client, database_name: str):
        """
        Initialize Beanie ODM on an already created client.

        Also used by the test suite with an in-memory client.
        """
        cls.client = client
        await init_beanie(
            database=client[database_name],
            document_models=DOCUMENT_MODELS
        )
        cls._initialized = True
        logger.info("Beanie ODM initialized with all models")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls._initialized = False
            logger.info("MongoDB connection closed")

    @classmethod
    async def ping(cls) -> bool:
        """Test MongoDB connection."""
        if not cls.client:
            return False
        try:
            await cls.client.admin.command('ping')
            return True
        except Exception:
            return False


@dataclass(frozen=True)
class Storage:
    """
    Storage handle passed to every handler.

    Each attribute is the repository (Beanie document class) for one
    collection, so handlers never reach for module-level connection state.
    """

    users: Type[UserDocument] = UserDocument
    meals: Type[MealDocument] = MealDocument
    orders: Type[OrderDocument] = OrderDocument
    requests: Type[RoleRequestDocument] = RoleRequestDocument
    reviews: Type[ReviewDocument] = ReviewDocument
    favorites: Type[FavoriteDocument] = FavoriteDocument
    payments: Type[PaymentDocument] = PaymentDocument


_storage = Storage()


async def get_storage() -> Storage:
    """Dependency returning the storage handle."""
    return _storage
