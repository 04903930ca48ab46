from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import settings

_client: AsyncIOMotorClient | None = None


def get_client() -> AsyncIOMotorClient:
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.mongodb_uri)
    return _client


def get_db() -> AsyncIOMotorDatabase:
    return get_client()[settings.mongodb_db]


async def init_db() -> None:
    """Create indexes for the venues collection."""
    db = get_db()

    # Upstream id is the natural key for imports
    await db.venues.create_index("id", unique=True, sparse=True)

    # Category pages query by state, then group by city client-side
    await db.venues.create_index([("state", 1), ("city", 1)])
    await db.venues.create_index("amenities")


async def close_db() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
