import asyncio
import os
from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv

from app.core.security import create_access_token
from app.core.deps import ADMIN_ROLE
from app.db.mongodb import create_indexes

load_dotenv()

MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "portfolio_blog")

ADMIN_ID = os.getenv("ADMIN_ID", "admin")


async def init_db():
    client = AsyncIOMotorClient(MONGODB_URL)
    db = client[MONGODB_DB_NAME]

    print("Creating indexes...")

    await create_indexes(db)

    print("Seeding post id counter...")

    # Счетчик не должен отставать от уже существующих постов
    last_post = await db.posts.find_one({}, sort=[("_id", -1)])
    last_id = last_post["_id"] if last_post else 0
    await db.counters.update_one(
        {"_id": "posts"},
        {"$max": {"value": last_id}},
        upsert=True
    )

    print(f"Admin token for '{ADMIN_ID}':")
    print(create_access_token(ADMIN_ID, ADMIN_ROLE))

    print("Database initialization completed")

    client.close()


if __name__ == "__main__":
    asyncio.run(init_db())
