"""
Knowledge-graph adapter (SerpAPI Google search).

Four sub-queries run in parallel: general info, industry, products and
culture. The general query is required; a failed secondary query just
contributes nothing. Knowledge-panel fields are preferred over regex
extraction from organic snippets.

Without SERP_API_KEY the adapter returns None and makes no request.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from app.core.exceptions import SourceUnavailableError
from app.schemas.schemas import CompanyCulture, PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.fallbacks import default_culture
from app.services.http_fetcher import HttpFetcher
from app.services.text_extraction import (
    ensure_url_scheme,
    extract_industry_near_name,
    extract_list_items,
    extract_location,
    extract_year,
    year_from_date,
)

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search.json"


def _snippets(payload: Optional[Dict[str, Any]]) -> List[str]:
    if not payload:
        return []
    return [r.get("snippet", "") for r in payload.get("organic_results", []) if r.get("snippet")]


def _panel_value(panel: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = panel.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def build_partial_from_serp(
    company_name: str,
    general: Dict[str, Any],
    industry_payload: Optional[Dict[str, Any]] = None,
    products_payload: Optional[Dict[str, Any]] = None,
    culture_payload: Optional[Dict[str, Any]] = None,
) -> Optional[PartialProfile]:
    """Pure mapping of SerpAPI payloads to a PartialProfile."""
    panel = general.get("knowledge_graph") or {}
    general_snippets = _snippets(general)
    joined = " ".join(general_snippets)

    description = _panel_value(panel, "description")
    if not description and general_snippets:
        description = general_snippets[0]

    industry = _panel_value(panel, "industry", "type")
    if not industry:
        industry = extract_industry_near_name(company_name, _snippets(industry_payload) + general_snippets)

    founded_raw = _panel_value(panel, "founded")
    founded = (year_from_date(founded_raw) or founded_raw) if founded_raw else extract_year(joined)

    headquarters = _panel_value(panel, "headquarters") or extract_location(joined)

    ceo = _panel_value(panel, "ceo")
    key_people = [f"{ceo} (CEO)"] if ceo else []

    products = extract_list_items(_snippets(products_payload), "products")
    values = extract_list_items(_snippets(culture_payload), "values")
    culture = None
    if values:
        base = default_culture(industry or "Industry")
        culture = CompanyCulture(
            work_life_balance=base.work_life_balance,
            learning_opportunities=base.learning_opportunities,
            team_environment=base.team_environment,
            values=values[:6],
        )

    website = _panel_value(panel, "website")

    if not description and not industry:
        return None

    return PartialProfile(
        name=_panel_value(panel, "title") or company_name,
        description=description,
        industry=industry,
        founded=founded,
        headquarters=headquarters,
        employee_count=_panel_value(panel, "employees", "number_of_employees"),
        revenue=_panel_value(panel, "revenue"),
        website=ensure_url_scheme(website) if website else None,
        key_people=key_people,
        products=products[:8],
        culture=culture,
        source=ProfileSource.knowledge_graph,
    )


class KnowledgeGraphAdapter(SourceAdapter):
    name = "knowledge_graph"
    source = ProfileSource.knowledge_graph
    external = True

    def __init__(self, fetcher: HttpFetcher, api_key: str, timeout_seconds: float = 8.0):
        super().__init__(timeout_seconds)
        self.fetcher = fetcher
        self.api_key = api_key

    async def _search(self, query: str) -> Dict[str, Any]:
        return await self.fetcher.get_json(
            SERPAPI_URL,
            params={"engine": "google", "q": query, "api_key": self.api_key, "num": 5},
        )

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        if not self.api_key:
            return None

        queries = [
            f"{company_name} company",
            f"{company_name} company industry sector",
            f"{company_name} products and services",
            f"{company_name} company culture values",
        ]
        results = await asyncio.gather(*(self._search(q) for q in queries), return_exceptions=True)

        general = results[0]
        if isinstance(general, BaseException):
            raise general
        # SerpAPI reports bad keys and exhausted quota in the body
        if general.get("error"):
            raise SourceUnavailableError(f"SerpAPI: {general['error']}")

        secondary = []
        for query, result in zip(queries[1:], results[1:]):
            if isinstance(result, BaseException):
                logger.info("[%s] sub-query %r failed: %r", self.name, query, result)
                secondary.append(None)
            else:
                secondary.append(result)

        return build_partial_from_serp(company_name, general, *secondary)
