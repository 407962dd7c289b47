"""Tests for company search and listing over cache + dataset."""

import pytest

from app.schemas.schemas import NOT_SPECIFIED, PartialProfile, ProfileSource, SearchResult
from app.services.company_search import CompanySearchService
from app.services.dataset_loader import DatasetLoader
from app.services.fallbacks import ensure_complete_data


@pytest.fixture
def dataset_loader(write_dataset):
    path = write_dataset([
        {"name": "Google", "industry": "internet", "locality": "mountain view", "country": "united states"},
        {"name": "Good Company Inc", "industry": "retail"},
        {"name": "Acme Rockets", "industry": "aerospace"},
        {"name": "Infosys", "industry": "information technology", "country": "india"},
    ])
    return DatasetLoader(path)


def _cache(store, name, industry):
    profile = ensure_complete_data(PartialProfile(name=name, industry=industry), ProfileSource.dataset)
    store.save(name, profile)
    return profile


class TestSearch:
    @pytest.mark.asyncio
    async def test_substring_match_returns_projections(self, store, dataset_loader):
        results = await CompanySearchService(store, dataset_loader).search("Goo")

        assert [r.name for r in results] == ["Google", "Good Company Inc"]
        assert all(isinstance(r, SearchResult) for r in results)
        assert set(results[0].model_dump()) == {"name", "industry", "headquarters"}
        assert results[0].headquarters == "mountain view, united states"
        assert results[1].headquarters == NOT_SPECIFIED

    @pytest.mark.asyncio
    async def test_matches_industry(self, store, dataset_loader):
        results = await CompanySearchService(store, dataset_loader).search("AEROSPACE")
        assert [r.name for r in results] == ["Acme Rockets"]

    @pytest.mark.asyncio
    async def test_short_query_returns_first_entries(self, store, dataset_loader):
        results = await CompanySearchService(store, dataset_loader).search("g")
        assert len(results) == 4

    @pytest.mark.asyncio
    async def test_cached_profiles_come_first_and_are_not_duplicated(self, store, dataset_loader):
        _cache(store, "Acme Rockets", "Aerospace & Defense")
        results = await CompanySearchService(store, dataset_loader).search("acme")

        assert len(results) == 1
        assert results[0].industry == "Aerospace & Defense"

    @pytest.mark.asyncio
    async def test_limit(self, store, dataset_loader):
        results = await CompanySearchService(store, dataset_loader).search("oo", limit=1)
        assert [r.name for r in results] == ["Google"]

    @pytest.mark.asyncio
    async def test_broken_store_falls_back_to_dataset(self, dataset_loader):
        class BrokenStore:
            def list_profiles(self, limit=None, offset=0):
                raise RuntimeError("mongo down")

            def search_profiles(self, needle, limit):
                raise RuntimeError("mongo down")

        results = await CompanySearchService(BrokenStore(), dataset_loader).search("info")
        assert [r.name for r in results] == ["Infosys"]

    @pytest.mark.asyncio
    async def test_filter_and_limit_go_to_the_store(self, store, dataset_loader):
        _cache(store, "Acme Labs", "Technology")
        _cache(store, "Acme Foods", "Food")

        results = await CompanySearchService(store, dataset_loader).search(" ACME ", limit=2)

        assert store.search_calls == [("acme", 2)]
        assert [r.name for r in results] == ["Acme Labs", "Acme Foods"]


class CountingStore:
    """Records the window asked of the cache."""

    def __init__(self, profiles):
        self.profiles = profiles
        self.calls = []

    def list_profiles(self, limit=None, offset=0):
        self.calls.append((limit, offset))
        return self.profiles[offset:offset + limit]


class TestList:
    @pytest.mark.asyncio
    async def test_offset_and_limit(self, store, dataset_loader):
        _cache(store, "Zyxwv Labs", "Technology")
        service = CompanySearchService(store, dataset_loader)

        everything = await service.list()
        page = await service.list(limit=2, offset=1)

        assert [r.name for r in everything] == [
            "Zyxwv Labs", "Google", "Good Company Inc", "Acme Rockets", "Infosys",
        ]
        assert [r.name for r in page] == ["Google", "Good Company Inc"]

    @pytest.mark.asyncio
    async def test_cache_is_read_only_up_to_the_window(self, dataset_loader):
        profiles = [
            ensure_complete_data(PartialProfile(name=f"Cached {i}", industry="Technology"), ProfileSource.dataset)
            for i in range(10)
        ]
        store = CountingStore(profiles)

        page = await CompanySearchService(store, dataset_loader).list(limit=2, offset=3)

        assert store.calls == [(5, 0)]
        assert [r.name for r in page] == ["Cached 3", "Cached 4"]
