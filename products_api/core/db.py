# products_api/core/db.py
from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from products_api.core.config import Settings


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Build the Motor client for the process.

    Motor connects lazily: creating the client never blocks and never fails
    because the server is down. Connection problems show up on the first
    operation, after `mongo_timeout_ms`.
    """
    return AsyncIOMotorClient(
        settings.mongo_url,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        tz_aware=True,
    )


def get_products_collection_from_client(
    client: AsyncIOMotorClient, settings: Settings
) -> AsyncIOMotorCollection:
    # A database in the URL path wins over MONGO_DB_NAME.
    db = client.get_default_database(default=settings.mongo_db_name)
    return db[settings.mongo_collection]
