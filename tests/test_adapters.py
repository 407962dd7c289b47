"""
Tests for the source adapters.

HTTP-backed adapters run against httpx.MockTransport handlers that
dispatch on the query parameters, so no network is used.
"""

import asyncio

import httpx
import pytest

from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters import (
    CuratedAdapter,
    DatasetAdapter,
    EncyclopediaAdapter,
    InstantAnswerAdapter,
    KnowledgeGraphAdapter,
    LinkedDataAdapter,
    PlaceholderAdapter,
    SourceAdapter,
)
from app.services.adapters.dataset import find_dataset_match
from app.services.dataset_loader import DatasetLoader, clean_row
from tests.doubles import StubAdapter


# =============================================================================
# Base contract
# =============================================================================


class SlowAdapter(SourceAdapter):
    name = "slow"

    async def fetch(self, company_name):
        await asyncio.sleep(1)
        return PartialProfile(name=company_name)


class TestAdapterBoundary:
    @pytest.mark.asyncio
    async def test_transport_error_is_a_network_failure(self):
        adapter = StubAdapter("kg", ProfileSource.knowledge_graph, error=httpx.ConnectError("down"))
        outcome = await adapter.attempt("Acme")
        assert outcome.partial is None
        assert outcome.failure == "network"
        assert outcome.is_network_failure

    @pytest.mark.asyncio
    async def test_timeout_is_a_network_failure(self):
        outcome = await SlowAdapter(timeout_seconds=0.01).attempt("Acme")
        assert outcome.failure == "network"

    @pytest.mark.asyncio
    async def test_other_errors_are_contained(self):
        adapter = StubAdapter("kg", ProfileSource.knowledge_graph, error=KeyError("search"))
        outcome = await adapter.attempt("Acme")
        assert outcome.failure == "error"
        assert not outcome.is_network_failure
        assert await adapter.try_resolve("Acme") is None

    @pytest.mark.asyncio
    async def test_no_data(self):
        outcome = await StubAdapter("kg", ProfileSource.knowledge_graph).attempt("Acme")
        assert outcome.partial is None
        assert outcome.failure == "no_data"

    @pytest.mark.asyncio
    async def test_hit_is_tagged_with_adapter_source(self):
        adapter = StubAdapter("wiki", ProfileSource.encyclopedia, partial=PartialProfile(name="Acme"))
        partial = await adapter.try_resolve("Acme")
        assert partial.source == ProfileSource.encyclopedia


# =============================================================================
# Dataset adapter
# =============================================================================


def _records(*names):
    return [clean_row({"name": n}) for n in names]


class TestDatasetMatching:
    def test_exact_tier_beats_substring_tier(self):
        records = _records("Infosys BPM", "Infosys")
        assert find_dataset_match("infosys", records).name == "Infosys"

    def test_substring_either_direction(self):
        records = _records("Acme", "Infosys BPM")
        assert find_dataset_match("Infosys BPM Limited", records).name == "Infosys BPM"
        assert find_dataset_match("BPM", records).name == "Infosys BPM"

    def test_token_overlap_first_occurrence_wins(self):
        records = _records("Acme Rockets", "Road Runner Rockets")
        assert find_dataset_match("Rockets Unlimited", records).name == "Acme Rockets"

    def test_generic_tokens_do_not_match(self):
        records = _records("Good Company Inc")
        assert find_dataset_match("Acme Inc", records) is None

    def test_empty_dataset(self):
        assert find_dataset_match("Acme", []) is None

    @pytest.mark.asyncio
    async def test_adapter_builds_partial_from_record(self, write_dataset):
        path = write_dataset([{
            "name": "infosys", "domain": "infosys.com", "year founded": "1981",
            "industry": "information technology", "size range": "10001+",
            "locality": "bangalore, karnataka", "country": "india",
            "current employee estimate": "104752",
        }])
        adapter = DatasetAdapter(DatasetLoader(path))

        partial = await adapter.try_resolve("Infosys")

        assert partial.name == "Infosys"
        assert partial.industry == "Information Technology"
        assert partial.founded == "1981"
        assert partial.headquarters == "Bangalore, Karnataka, India"
        assert partial.website == "https://infosys.com"
        assert partial.employee_count == "104,752 current employees"
        assert "104,752" in partial.description
        assert partial.source == ProfileSource.dataset


# =============================================================================
# Curated and placeholder
# =============================================================================


class TestStaticAdapters:
    @pytest.mark.asyncio
    async def test_curated_etsy(self):
        partial = await CuratedAdapter().try_resolve("Etsy")
        assert "E-commerce" in partial.industry
        assert "2005" in partial.founded
        assert partial.source == ProfileSource.curated

    @pytest.mark.asyncio
    async def test_curated_substring_match(self):
        partial = await CuratedAdapter().try_resolve("Google India")
        assert partial.name == "Google"

    @pytest.mark.asyncio
    async def test_curated_miss(self):
        assert await CuratedAdapter().try_resolve("Zyxwv Labs") is None
        assert await CuratedAdapter().try_resolve("a") is None

    @pytest.mark.asyncio
    async def test_placeholder_guesses_industry(self):
        partial = await PlaceholderAdapter().try_resolve("First Capital Bank")
        assert partial.industry == "Finance"
        assert "First Capital Bank" in partial.description
        assert partial.website == "https://www.firstcapitalbank.com"


# =============================================================================
# Knowledge graph (SerpAPI)
# =============================================================================


class TestKnowledgeGraphAdapter:
    @pytest.mark.asyncio
    async def test_no_api_key_means_no_request(self, mock_fetcher):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={})

        adapter = KnowledgeGraphAdapter(mock_fetcher(handler), api_key="")
        outcome = await adapter.attempt("Razorpay")

        assert outcome.partial is None
        assert outcome.failure == "no_data"
        assert requests == []

    @pytest.mark.asyncio
    async def test_panel_first_then_snippets(self, mock_fetcher):
        responses = {
            "Razorpay company": {
                "knowledge_graph": {
                    "title": "Razorpay",
                    "description": "Razorpay is an Indian payments company that provides "
                                   "a payment gateway to online businesses.",
                    "founded": "2014",
                    "headquarters": "Bengaluru, India",
                    "ceo": "Harshil Mathur",
                },
                "organic_results": [],
            },
            "Razorpay company industry sector": {
                "organic_results": [{"snippet": "Razorpay is a fintech company based in India."}],
            },
            "Razorpay company culture values": {
                "organic_results": [
                    {"snippet": "Razorpay culture values include ownership, transparency and speed."}
                ],
            },
        }

        def handler(request):
            query = request.url.params["q"]
            if query not in responses:
                return httpx.Response(500, json={"error": "boom"})
            return httpx.Response(200, json=responses[query])

        adapter = KnowledgeGraphAdapter(mock_fetcher(handler), api_key="secret")
        partial = await adapter.try_resolve("Razorpay")

        assert partial.name == "Razorpay"
        assert partial.industry == "Fintech"
        assert partial.founded == "2014"
        assert partial.headquarters == "Bengaluru, India"
        assert partial.key_people == ["Harshil Mathur (CEO)"]
        assert partial.culture.values == ["ownership", "transparency", "speed"]
        # products query failed and contributed nothing
        assert partial.products == []

    @pytest.mark.asyncio
    async def test_failed_general_query_fails_the_adapter(self, mock_fetcher):
        adapter = KnowledgeGraphAdapter(
            mock_fetcher(lambda request: httpx.Response(503)), api_key="secret"
        )
        outcome = await adapter.attempt("Razorpay")
        assert outcome.partial is None
        assert outcome.failure == "error"


# =============================================================================
# Linked data (Wikidata)
# =============================================================================


def _claim(value):
    return {"mainsnak": {"datavalue": {"value": value}}}


class TestLinkedDataAdapter:
    @pytest.mark.asyncio
    async def test_claims_and_batched_labels(self, mock_fetcher):
        label_requests = []

        def handler(request):
            params = request.url.params
            if params["action"] == "wbsearchentities":
                return httpx.Response(200, json={"search": [
                    {"id": "Q1", "description": "fictional place"},
                    {"id": "Q95", "description": "American multinational technology company"},
                ]})
            if params["props"] == "labels":
                label_requests.append(params["ids"])
                return httpx.Response(200, json={"entities": {
                    "Q11661": {"labels": {"en": {"value": "information technology"}}},
                    "Q486860": {"labels": {"en": {"value": "Mountain View"}}},
                    "Q3503829": {"labels": {}},
                }})
            return httpx.Response(200, json={"entities": {"Q95": {
                "labels": {"en": {"value": "Google"}},
                "descriptions": {"en": {"value": "American multinational technology company"}},
                "claims": {
                    "P452": [_claim({"id": "Q11661"})],
                    "P571": [_claim({"time": "+1998-09-04T00:00:00Z"})],
                    "P159": [_claim({"id": "Q486860"})],
                    "P1128": [_claim({"amount": "+190234"})],
                    "P856": [_claim("https://about.google/")],
                    "P169": [_claim({"id": "Q3503829"})],
                },
            }}})

        partial = await LinkedDataAdapter(mock_fetcher(handler)).try_resolve("Google")

        assert partial.name == "Google"
        assert partial.description == "Google is an American multinational technology company."
        assert partial.industry == "information technology"
        assert partial.founded == "1998"
        assert partial.headquarters == "Mountain View"
        assert partial.employee_count == "190,234"
        assert partial.website == "https://about.google/"
        # CEO id had no English label and is dropped
        assert partial.key_people == []
        assert label_requests == ["Q11661|Q486860|Q3503829"]

    @pytest.mark.asyncio
    async def test_label_lookup_failure_keeps_entity(self, mock_fetcher):
        def handler(request):
            params = request.url.params
            if params["action"] == "wbsearchentities":
                return httpx.Response(200, json={"search": [{"id": "Q42", "description": "software company"}]})
            if params["props"] == "labels":
                raise httpx.ConnectError("label service down")
            return httpx.Response(200, json={"entities": {"Q42": {
                "labels": {"en": {"value": "Acme"}},
                "descriptions": {"en": {"value": "software company"}},
                "claims": {
                    "P452": [_claim({"id": "Q11661"})],
                    "P571": [_claim({"time": "+2001-01-01T00:00:00Z"})],
                    "P856": [_claim("acme.example")],
                },
            }}})

        outcome = await LinkedDataAdapter(mock_fetcher(handler)).attempt("Acme")

        assert outcome.failure is None
        assert not outcome.is_network_failure
        assert outcome.partial.description == "Acme is a software company."
        assert outcome.partial.founded == "2001"
        assert outcome.partial.website == "https://acme.example"
        assert outcome.partial.industry is None

    @pytest.mark.asyncio
    async def test_no_search_hits(self, mock_fetcher):
        adapter = LinkedDataAdapter(mock_fetcher(lambda r: httpx.Response(200, json={"search": []})))
        outcome = await adapter.attempt("Zyxwv")
        assert outcome.failure == "no_data"


# =============================================================================
# Encyclopedia (Wikipedia)
# =============================================================================


class TestEncyclopediaAdapter:
    @pytest.mark.asyncio
    async def test_cleans_extract_and_reads_categories(self, mock_fetcher):
        extract = (
            "<p><b>Etsy, Inc.</b> (/ˈɛtsi/) is an American e-commerce company"
            "<sup class=\"reference\">[2]</sup> focused on handmade or vintage items. "
            "It was founded in 2005.</p>"
            "<p>Etsy is headquartered in Brooklyn, New York.</p>"
        )

        def handler(request):
            if request.url.params.get("list") == "search":
                assert request.url.params["srsearch"] == "Etsy company"
                return httpx.Response(200, json={"query": {"search": [{"title": "Etsy"}]}})
            return httpx.Response(200, json={"query": {"pages": {"123": {
                "title": "Etsy",
                "extract": extract,
                "categories": [
                    {"title": "Category:American companies"},
                    {"title": "Category:E-commerce companies"},
                ],
            }}}})

        partial = await EncyclopediaAdapter(mock_fetcher(handler)).try_resolve("Etsy")

        assert partial.description == (
            "Etsy is an American e-commerce company focused on handmade or vintage items. "
            "It was founded in 2005."
        )
        assert partial.extended_description == ["Etsy is headquartered in Brooklyn, New York."]
        assert partial.industry == "E-commerce"
        assert partial.founded == "2005"
        assert partial.headquarters == "Brooklyn, New York"
        assert partial.website is None

    @pytest.mark.asyncio
    async def test_network_error(self, mock_fetcher):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        outcome = await EncyclopediaAdapter(mock_fetcher(handler)).attempt("Etsy")
        assert outcome.failure == "network"


# =============================================================================
# Instant answer (DuckDuckGo)
# =============================================================================


class TestInstantAnswerAdapter:
    @pytest.mark.asyncio
    async def test_falls_back_to_bare_name_and_reads_infobox(self, mock_fetcher):
        queries = []

        def handler(request):
            query = request.url.params["q"]
            queries.append(query)
            if query == "Acme company":
                return httpx.Response(200, json={"AbstractText": ""})
            return httpx.Response(200, json={
                "Heading": "Acme Corp",
                "AbstractText": "Acme Corp is an American manufacturing company founded in 1920.",
                "Infobox": {"content": [
                    {"label": "Industry", "value": "Manufacturing"},
                    {"label": "Headquarters", "value": "Phoenix, Arizona"},
                    {"label": "Revenue", "value": {"amount": 1}},
                ]},
            })

        partial = await InstantAnswerAdapter(mock_fetcher(handler)).try_resolve("Acme")

        assert queries == ["Acme company", "Acme"]
        assert partial.name == "Acme Corp"
        assert partial.industry == "Manufacturing"
        assert partial.founded == "1920"
        assert partial.headquarters == "Phoenix, Arizona"
        assert partial.revenue is None

    @pytest.mark.asyncio
    async def test_empty_abstract_everywhere(self, mock_fetcher):
        adapter = InstantAnswerAdapter(mock_fetcher(lambda r: httpx.Response(200, json={"Infobox": ""})))
        assert await adapter.try_resolve("Zyxwv") is None


class TestErrorPayloads:
    @pytest.mark.asyncio
    async def test_serpapi_error_body(self, mock_fetcher):
        adapter = KnowledgeGraphAdapter(
            mock_fetcher(lambda r: httpx.Response(200, json={"error": "Invalid API key."})),
            api_key="bad",
        )
        outcome = await adapter.attempt("Razorpay")
        assert outcome.failure == "error"

    @pytest.mark.asyncio
    async def test_wikidata_error_body(self, mock_fetcher):
        payload = {"error": {"code": "badvalue", "info": "Unrecognized value"}}
        adapter = LinkedDataAdapter(mock_fetcher(lambda r: httpx.Response(200, json=payload)))
        outcome = await adapter.attempt("Google")
        assert outcome.failure == "error"
        assert not outcome.is_network_failure
