import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

client = None
db = None


async def connect_to_mongo():
    global client, db
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    db = client[settings.MONGODB_DB_NAME]

    await create_indexes(db)
    logger.info("Connected to MongoDB database '%s'", settings.MONGODB_DB_NAME)


async def close_mongo_connection():
    global client
    if client:
        client.close()
        logger.info("MongoDB connection closed")


async def create_indexes(database: AsyncIOMotorDatabase):
    # The unique slug index is what turns a lost check-then-insert race into DuplicateKeyError
    await database.posts.create_index("slug", unique=True)
    await database.posts.create_index("created_at")


async def next_sequence(database: AsyncIOMotorDatabase, name: str) -> int:
    """Atomically increment and return the named counter."""
    counter = await database.counters.find_one_and_update(
        {"_id": name},
        {"$inc": {"value": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return counter["value"]


def get_database():
    return db
