"""Cache adapter: previously resolved profiles from the company store."""

import asyncio
from typing import Optional

from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.company_store import CompanyStore


class CacheAdapter(SourceAdapter):
    name = "cache"
    source = ProfileSource.cache

    def __init__(self, store: CompanyStore, timeout_seconds: float = 8.0):
        super().__init__(timeout_seconds)
        self.store = store

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        profile = await asyncio.to_thread(self.store.find_by_name, company_name)
        if profile is None:
            return None
        partial = PartialProfile(**profile.model_dump())
        partial.source = ProfileSource.cache
        return partial
