"""
Service Container - the composition root.

Every service is constructed exactly once here, at application startup,
and stored on app.state. Routes get services through app.api.deps, so
tests can swap in doubles without touching module globals.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.config import Settings
from app.db.mongodb import MongoConnection, init_company_indexes
from app.services.adapters import (
    CacheAdapter,
    CuratedAdapter,
    DatasetAdapter,
    EncyclopediaAdapter,
    InstantAnswerAdapter,
    KnowledgeGraphAdapter,
    LinkedDataAdapter,
    PlaceholderAdapter,
)
from app.services.company_resolver import CompanyResolver
from app.services.company_search import CompanySearchService
from app.services.company_store import CompanyStore, MongoCompanyStore
from app.services.dataset_loader import DatasetLoader
from app.services.http_fetcher import HttpFetcher
from app.services.job_analysis_service import JobAnalysisService
from app.services.llm_client import LLMClient
from app.services.video_search import VideoSearchService

logger = logging.getLogger(__name__)


def build_resolver(
    settings: Settings,
    store: CompanyStore,
    loader: DatasetLoader,
    fetcher: HttpFetcher,
) -> CompanyResolver:
    timeout = settings.adapter_timeout_seconds
    return CompanyResolver(
        store=store,
        cache=CacheAdapter(store, timeout),
        dataset=DatasetAdapter(loader, timeout),
        external=[
            KnowledgeGraphAdapter(fetcher, settings.serp_api_key, timeout),
            LinkedDataAdapter(fetcher, timeout),
            EncyclopediaAdapter(fetcher, timeout),
            InstantAnswerAdapter(fetcher, timeout),
        ],
        curated=CuratedAdapter(timeout),
        placeholder=PlaceholderAdapter(timeout),
        quality_min_description_length=settings.quality_min_description_length,
        connectivity_failure_threshold=settings.connectivity_failure_threshold,
    )


@dataclass
class ServiceContainer:
    settings: Settings
    store: CompanyStore
    loader: DatasetLoader
    fetcher: HttpFetcher
    resolver: CompanyResolver
    search: CompanySearchService
    videos: VideoSearchService
    jobs: JobAnalysisService
    mongo: Optional[MongoConnection] = None

    @classmethod
    def build(cls, settings: Settings) -> "ServiceContainer":
        mongo = MongoConnection(settings)
        store = MongoCompanyStore(mongo.get_companies_collection())
        loader = DatasetLoader(settings.dataset_path)
        fetcher = HttpFetcher(settings.http_timeout_seconds, settings.user_agent)
        resolver = build_resolver(settings, store, loader, fetcher)

        return cls(
            settings=settings,
            store=store,
            loader=loader,
            fetcher=fetcher,
            resolver=resolver,
            search=CompanySearchService(store, loader),
            videos=VideoSearchService(fetcher, settings.google_api_key),
            jobs=JobAnalysisService(LLMClient(settings), resolver),
            mongo=mongo,
        )

    async def startup(self) -> None:
        """Create indexes and load the dataset before the first request."""
        if self.mongo is not None:
            try:
                init_company_indexes(self.mongo.get_companies_collection())
                logger.info("✅ MongoDB indexes initialized")
            except Exception as e:
                logger.warning("⚠️ MongoDB index initialization failed: %s", e)

        records = await self.loader.load()
        if records:
            logger.info("✅ Company dataset ready (%d companies)", len(records))
        else:
            logger.warning("⚠️ Company dataset is empty, dataset lookups will miss")

        if not self.settings.serp_api_key:
            logger.info("SERP_API_KEY not set, knowledge-graph lookups disabled")
        if not self.settings.google_api_key:
            logger.info("GOOGLE_API_KEY not set, interview video search disabled")

    async def shutdown(self) -> None:
        await self.fetcher.close()
        if self.mongo is not None:
            self.mongo.close()
