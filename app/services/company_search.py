"""
Company Search / Listing

Results are {name, industry, headquarters} projections only.
Order: cached profiles first (store order), then dataset records that are
not already cached (dataset order). No ranking.

The store is only asked for as many profiles as the requested window
needs; filtering and paging of the cache happen in MongoDB.
"""

import asyncio
import logging
from itertools import islice
from typing import Iterable, Iterator, List, Set

from app.schemas.schemas import NOT_SPECIFIED, CompanyProfile, SearchResult
from app.services.company_store import CompanyStore
from app.services.dataset_loader import DatasetLoader, DatasetRecord
from app.services.text_extraction import normalize_company_name

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
FOCUS_SUGGESTION_LIMIT = 5


def _cached_result(profile: CompanyProfile) -> SearchResult:
    return SearchResult(
        name=profile.name,
        industry=profile.industry,
        headquarters=profile.headquarters,
    )


def _dataset_results(records: Iterable[DatasetRecord], seen: Set[str]) -> Iterator[SearchResult]:
    for record in records:
        if record.normalized_name in seen:
            continue
        seen.add(record.normalized_name)
        yield SearchResult(
            name=record.name,
            industry=record.industry,
            headquarters=record.location or NOT_SPECIFIED,
        )


class CompanySearchService:
    def __init__(self, store: CompanyStore, loader: DatasetLoader):
        self.store = store
        self.loader = loader

    async def _cached(self, method, *args) -> List[CompanyProfile]:
        try:
            return await asyncio.to_thread(method, *args)
        except Exception as e:
            logger.warning("Company cache unavailable for search: %s", e)
            return []

    async def search(self, query: str, limit: int = 10) -> List[SearchResult]:
        """
        Case-insensitive substring match on name OR industry.
        Queries shorter than 2 characters return the first few entries
        (the HTTP layer rejects them before getting here).
        """
        needle = (query or "").strip().lower()
        if len(needle) < MIN_QUERY_LENGTH:
            return await self.list(limit=FOCUS_SUGGESTION_LIMIT)

        cached = await self._cached(self.store.search_profiles, needle, limit)
        results = [_cached_result(p) for p in cached]
        if len(results) >= limit:
            return results[:limit]

        seen = {normalize_company_name(p.name) for p in cached}
        records = await self.loader.load()
        matches = (
            r for r in records
            if needle in r.name.lower() or needle in r.industry.lower()
        )
        results.extend(islice(_dataset_results(matches, seen), limit - len(results)))
        return results

    async def list(self, limit: int = 20, offset: int = 0) -> List[SearchResult]:
        window = offset + limit
        cached = await self._cached(self.store.list_profiles, window, 0)
        entries = [_cached_result(p) for p in cached]
        if len(cached) < window:
            # the whole cache fit in the window, so dataset de-duplication is exact
            seen = {normalize_company_name(p.name) for p in cached}
            records = await self.loader.load()
            entries.extend(islice(_dataset_results(records, seen), window - len(entries)))
        return entries[offset:window]
