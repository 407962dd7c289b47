"""
Company Store - persistence for resolved company profiles.

Documents are the JSON dump of a CompanyProfile plus two keys:
- lookup_key: normalized name the user originally asked for (unique)
- name_key:   normalized canonical company name

Reads match either key, so "GOOGLE ", "google" and "Google" all hit the
same document. Writes are upserts by lookup_key (last write wins).

All methods are synchronous (pymongo); async callers use asyncio.to_thread.
"""

import logging
import re
from typing import List, Optional, Protocol

from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.collection import Collection

from app.schemas.schemas import CompanyProfile
from app.services.text_extraction import normalize_company_name


logger = logging.getLogger(__name__)


class CompanyStore(Protocol):
    """What the resolver, cache adapter and search service need from storage."""

    def find_by_name(self, name: str) -> Optional[CompanyProfile]: ...

    def save(self, requested_name: str, profile: CompanyProfile) -> None: ...

    def list_profiles(self, limit: Optional[int] = None, offset: int = 0) -> List[CompanyProfile]: ...

    def search_profiles(self, needle: str, limit: int) -> List[CompanyProfile]: ...

    def ping(self) -> bool: ...


# ============================================================
# HELPER: document <-> profile
# ============================================================

def profile_to_document(requested_name: str, profile: CompanyProfile) -> dict:
    doc = profile.model_dump(mode="json", by_alias=True)
    doc["lookup_key"] = normalize_company_name(requested_name)
    doc["name_key"] = normalize_company_name(profile.name)
    return doc


def document_to_profile(doc: Optional[dict]) -> Optional[CompanyProfile]:
    """Convert a MongoDB document back to a profile. Broken documents -> None."""
    if doc is None:
        return None
    data = {k: v for k, v in doc.items() if k not in ("_id", "lookup_key", "name_key")}
    try:
        return CompanyProfile.model_validate(data)
    except ValidationError as e:
        logger.warning("Ignoring malformed cached company %r: %s", doc.get("name"), e)
        return None


def _valid_profiles(cursor) -> List[CompanyProfile]:
    profiles = []
    for doc in cursor:
        profile = document_to_profile(doc)
        if profile is not None:
            profiles.append(profile)
    return profiles


# ============================================================
# MONGO IMPLEMENTATION
# ============================================================

class MongoCompanyStore:
    """
    Handles company profile storage in the `companies` collection.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def find_by_name(self, name: str) -> Optional[CompanyProfile]:
        key = normalize_company_name(name)
        if not key:
            return None
        doc = self.collection.find_one({"$or": [{"lookup_key": key}, {"name_key": key}]})
        return document_to_profile(doc)

    def save(self, requested_name: str, profile: CompanyProfile) -> None:
        doc = profile_to_document(requested_name, profile)
        self.collection.update_one(
            {"lookup_key": doc["lookup_key"]},
            {"$set": doc},
            upsert=True,
        )

    def list_profiles(self, limit: Optional[int] = None, offset: int = 0) -> List[CompanyProfile]:
        """Most recently updated first."""
        cursor = self.collection.find().sort("lastUpdated", DESCENDING).skip(offset)
        if limit is not None:
            cursor = cursor.limit(limit)
        return _valid_profiles(cursor)

    def search_profiles(self, needle: str, limit: int) -> List[CompanyProfile]:
        """Case-insensitive substring match on name or industry, most recent first."""
        pattern = {"$regex": re.escape(needle), "$options": "i"}
        cursor = (
            self.collection.find({"$or": [{"name": pattern}, {"industry": pattern}]})
            .sort("lastUpdated", DESCENDING)
            .limit(limit)
        )
        return _valid_profiles(cursor)

    def ping(self) -> bool:
        try:
            self.collection.database.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False
