"""Database connection setup for MongoDB."""
import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class MongoConnection:
    """Owns one MongoDB client for the lifetime of the application."""

    def __init__(self, mongo_url: str, db_name: str):
        self._client: Optional[AsyncIOMotorClient] = AsyncIOMotorClient(mongo_url, tz_aware=True)
        self.db: AsyncIOMotorDatabase = self._client[db_name]

    async def setup_indexes(self):
        """Set up MongoDB indexes for the job queries."""
        await self.db.jobs.create_index("status")
        await self.db.jobs.create_index("created_at")
        logger.info("MongoDB indexes ready")

    def close(self):
        """Close the client connection."""
        if self._client:
            self._client.close()
            self._client = None
