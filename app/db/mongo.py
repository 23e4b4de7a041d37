from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import settings
from app.core.logging_setup import get_logger

logger = get_logger(__name__)


class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo() -> AsyncIOMotorDatabase:
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True)
    mongodb.db = mongodb.client[settings.MONGODB_DB]
    logger.info("Connected to MongoDB: %s", settings.MONGODB_DB)
    return mongodb.db

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
        mongodb.client = None
        mongodb.db = None
        logger.info("Disconnected from MongoDB")
