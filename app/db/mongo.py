"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Initializes Motor client with connection pooling
- Collections: users, addresses, contacts
- Health checks
- Proper connection lifecycle management
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"
ADDRESSES_COLLECTION = "addresses"
CONTACTS_COLLECTION = "contacts"


class MongoDatabase:
    """
    Owns the Motor client for one application instance.
    Created in the app lifespan and handed to the repositories.
    """

    def __init__(self, settings: Settings):
        self._url = settings.MONGODB_URL
        self._db_name = settings.MONGODB_DB_NAME
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """
        Establishes the connection and verifies it with a ping.
        Called during application startup.
        """
        if self._client is not None:
            logger.warning("MongoDB client already initialized")
            return

        try:
            logger.info("Attempting to connect to MongoDB")

            self._client = AsyncIOMotorClient(
                self._url,
                maxPoolSize=50,
                minPoolSize=5,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
            )
            self._database = self._client[self._db_name]

            await self._client.admin.command("ping")

            logger.info(f"✅ Successfully connected to MongoDB: {self._db_name}")

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.critical(f"Failed to connect to MongoDB: {e}")
            self._client = None
            self._database = None
            raise ConnectionError("Could not establish MongoDB connection") from e

    async def close(self):
        """
        Closes the MongoDB connection.
        Called during application shutdown.
        """
        if self._client:
            logger.info("Closing MongoDB connection")
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB connection closed")

    async def check_health(self) -> bool:
        """
        Checks if the database connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """
        try:
            if self._client is None:
                logger.error("MongoDB client not initialized")
                return False

            await self._client.admin.command("ping")
            return True

        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise RuntimeError(
                "Database not initialized. Call connect() during startup."
            )
        return self._database

    @property
    def users(self) -> AsyncIOMotorCollection:
        """
        Account documents.

        Fields:
        - username: str (unique)
        - email: str (unique)
        - password: str (argon2 digest)
        - firstname, lastname, phone: optional str
        - created_at, updated_at: datetime
        """
        return self.database[USERS_COLLECTION]

    @property
    def addresses(self) -> AsyncIOMotorCollection:
        """
        Address documents: street, city, state, country, postalCode,
        user (owning account ObjectId), created_at.
        """
        return self.database[ADDRESSES_COLLECTION]

    @property
    def contacts(self) -> AsyncIOMotorCollection:
        """Contact form submissions: name, email, message, created_at."""
        return self.database[CONTACTS_COLLECTION]
