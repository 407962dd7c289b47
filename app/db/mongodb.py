"""
MongoDB Connection Utility

MongoDB stores:
- Resolved company profiles (the company cache)

WHY MongoDB for this?
- Schema-flexible: profiles from different sources carry different fields
- Document-oriented: one profile is one self-contained document
- Upsert by normalized name is a single call
"""
import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from app.core.config import Settings

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Owns one MongoClient (connection pooling handled internally by pymongo).
    Created by the composition root, closed on shutdown.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Optional[MongoClient] = None

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            # pymongo connects lazily; the timeout bounds the first real operation
            self._client = MongoClient(
                self.settings.mongodb_uri,
                serverSelectionTimeoutMS=self.settings.mongodb_timeout_ms,
            )
        return self._client

    @property
    def db(self) -> Database:
        return self.client[self.settings.mongodb_db]

    def get_companies_collection(self) -> Collection:
        return self.db[self.settings.mongodb_collection]

    def ping(self) -> bool:
        """True if MongoDB is reachable."""
        try:
            self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB connection failed: %s", e)
            return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def init_company_indexes(collection: Collection) -> None:
    """
    Create indexes for company lookups.
    Call this once during app startup.
    """
    # one document per normalized requested name
    collection.create_index([("lookup_key", ASCENDING)], unique=True)
    # canonical-name lookups ("Alphabet" stored under the "google" request)
    collection.create_index([("name_key", ASCENDING)])
    logger.info("MongoDB company indexes created")
