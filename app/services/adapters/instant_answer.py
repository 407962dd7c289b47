"""
Instant-answer adapter (DuckDuckGo).

Tries "<name> company" first and the bare name when that yields no
abstract. Infobox labels are read first, regexes over the abstract fill
the gaps.
"""

from typing import Any, Dict, Optional

from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.http_fetcher import HttpFetcher
from app.services.text_extraction import (
    ensure_url_scheme,
    extract_employee_count,
    extract_industry_from_text,
    extract_location,
    extract_website,
    extract_year,
    simplify_description,
    year_from_date,
)

DDG_API = "https://api.duckduckgo.com/"

INFOBOX_LABELS = {
    "industry": ("industry", "type", "sector"),
    "founded": ("founded", "inception", "formation"),
    "headquarters": ("headquarters", "location", "hq location"),
    "employee_count": ("number of employees", "employees"),
    "revenue": ("revenue",),
    "website": ("website", "official website"),
    "key_people": ("key people", "ceo"),
}


def infobox_fields(payload: Dict[str, Any]) -> Dict[str, str]:
    """Label lookup over Infobox.content. Only string values are used."""
    infobox = payload.get("Infobox")
    if not isinstance(infobox, dict):
        return {}

    by_label = {}
    for item in infobox.get("content", []):
        label = str(item.get("label", "")).strip().lower()
        value = item.get("value")
        if label and isinstance(value, str) and value.strip() and label not in by_label:
            by_label[label] = value.strip()

    fields = {}
    for field, labels in INFOBOX_LABELS.items():
        for label in labels:
            if label in by_label:
                fields[field] = by_label[label]
                break
    return fields


def build_partial_from_answer(payload: Dict[str, Any], fallback_name: str) -> Optional[PartialProfile]:
    abstract = simplify_description(payload.get("AbstractText", ""))
    if not abstract:
        return None

    info = infobox_fields(payload)
    founded = info.get("founded")
    if founded:
        founded = year_from_date(founded) or founded
    website = info.get("website")

    return PartialProfile(
        name=payload.get("Heading") or fallback_name,
        description=abstract,
        industry=info.get("industry") or extract_industry_from_text(abstract),
        founded=founded or extract_year(abstract),
        headquarters=info.get("headquarters") or extract_location(abstract),
        employee_count=info.get("employee_count") or extract_employee_count(abstract),
        revenue=info.get("revenue"),
        website=ensure_url_scheme(website) if website else extract_website(abstract),
        key_people=[info["key_people"]] if info.get("key_people") else [],
        source=ProfileSource.instant_answer,
    )


class InstantAnswerAdapter(SourceAdapter):
    name = "instant_answer"
    source = ProfileSource.instant_answer
    external = True

    def __init__(self, fetcher: HttpFetcher, timeout_seconds: float = 8.0):
        super().__init__(timeout_seconds)
        self.fetcher = fetcher

    async def _query(self, query: str) -> Dict[str, Any]:
        return await self.fetcher.get_json(DDG_API, params={
            "q": query,
            "format": "json",
            "no_html": 1,
            "skip_disambig": 1,
        })

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        payload = await self._query(f"{company_name} company")
        if not (payload.get("AbstractText") or "").strip():
            payload = await self._query(company_name)
        return build_partial_from_answer(payload, company_name)
