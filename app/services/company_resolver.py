"""
Company Resolution Orchestrator

Given a free-text company name, produce a complete CompanyProfile:

    cache -> dataset -> knowledge graph -> linked data -> encyclopedia
          -> instant answer -> curated -> placeholder

External adapters run one at a time in that fixed order. Their partial
results are folded with merge_partials (first non-empty wins) and the
cascade stops as soon as the merged data is a "quality result":
a description longer than the configured minimum AND a real industry.

RULES:
- Every returned profile went through ensure_complete_data
- Placeholder and error profiles are never written to the cache
- A failed cache write never changes the response
"""

import asyncio
import logging
from typing import List, Optional

from app.schemas.schemas import (
    CompanyProfile,
    PartialProfile,
    ProfileSource,
    ResolutionResult,
    is_blank,
)
from app.services.adapters.base import SourceAdapter
from app.services.company_store import CompanyStore
from app.services.fallbacks import build_placeholder, ensure_complete_data
from app.services.merging import merge_partials

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = (
    "Failed to connect to external data sources. Please check your network connection."
)
EMPTY_NAME_MESSAGE = "Company name is required"


def is_quality_result(partial: Optional[PartialProfile], min_description_length: int = 50) -> bool:
    if partial is None or is_blank(partial.description) or is_blank(partial.industry):
        return False
    return len(partial.description.strip()) > min_description_length


class CompanyResolver:
    def __init__(
        self,
        store: CompanyStore,
        cache: SourceAdapter,
        dataset: SourceAdapter,
        external: List[SourceAdapter],
        curated: SourceAdapter,
        placeholder: SourceAdapter,
        quality_min_description_length: int = 50,
        connectivity_failure_threshold: int = 3,
    ):
        self.store = store
        self.cache = cache
        self.dataset = dataset
        self.external = external
        self.curated = curated
        self.placeholder = placeholder
        self.quality_min_description_length = quality_min_description_length
        self.connectivity_failure_threshold = connectivity_failure_threshold

    async def resolve(self, company_name: Optional[str]) -> ResolutionResult:
        name = (company_name or "").strip()
        if not name:
            return ResolutionResult(success=False, error=EMPTY_NAME_MESSAGE)

        # Step 1: cache
        cached = await self.cache.try_resolve(name)
        if cached is not None:
            logger.info("Cache hit for %r", name)
            profile = ensure_complete_data(cached, ProfileSource.cache, name, refresh_timestamp=False)
            return ResolutionResult(success=True, data=profile)

        # Step 2: dataset
        record = await self.dataset.try_resolve(name)
        if record is not None:
            profile = ensure_complete_data(record, ProfileSource.dataset, name)
            await self._persist(name, profile)
            return ResolutionResult(success=True, data=profile)

        # Step 3: external sources, in order
        accumulated: Optional[PartialProfile] = None
        contributors: List[ProfileSource] = []
        network_failures = 0

        for adapter in self.external:
            outcome = await adapter.attempt(name)
            if outcome.is_network_failure:
                network_failures += 1
            if outcome.partial is None:
                continue

            accumulated = merge_partials(accumulated, outcome.partial)
            contributors.append(adapter.source)
            if is_quality_result(accumulated, self.quality_min_description_length):
                logger.info("Quality result for %r after %s", name, adapter.name)
                break

        if accumulated is not None:
            source = contributors[0] if len(contributors) == 1 else ProfileSource.combined_fallback
            profile = ensure_complete_data(accumulated, source, name)
            await self._persist(name, profile)
            return ResolutionResult(success=True, data=profile)

        # Step 4: curated table
        curated = await self.curated.try_resolve(name)
        if curated is not None:
            profile = ensure_complete_data(curated, ProfileSource.curated, name)
            await self._persist(name, profile)
            return ResolutionResult(success=True, data=profile)

        # Step 5: placeholder (not cached, so later lookups retry real sources)
        placeholder = await self.placeholder.try_resolve(name) or build_placeholder(name)

        if network_failures >= self.connectivity_failure_threshold:
            logger.warning("%d external sources unreachable while resolving %r", network_failures, name)
            profile = ensure_complete_data(placeholder, ProfileSource.error, name)
            return ResolutionResult(success=False, data=profile, error=NETWORK_ERROR_MESSAGE)

        logger.info("No data found for %r, returning placeholder", name)
        profile = ensure_complete_data(placeholder, ProfileSource.placeholder, name)
        return ResolutionResult(success=True, data=profile)

    async def _persist(self, requested_name: str, profile: CompanyProfile) -> None:
        try:
            await asyncio.to_thread(self.store.save, requested_name, profile)
        except Exception as e:
            logger.warning("Could not cache company %r: %s", requested_name, e)
