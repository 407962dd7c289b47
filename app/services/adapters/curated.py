"""Curated adapter: the hand-authored table. Never fails, no I/O."""

from typing import Optional

from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.curated_companies import find_curated


class CuratedAdapter(SourceAdapter):
    name = "curated"
    source = ProfileSource.curated

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        return find_curated(company_name)
