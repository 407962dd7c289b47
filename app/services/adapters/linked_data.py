"""
Linked-data adapter (Wikidata).

wbsearchentities finds the item, wbgetentities returns its claims.
Entity-valued claims (industry, headquarters, CEO) are resolved to English
labels with one batched wbgetentities call; ids without a label are dropped.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from app.core.exceptions import SourceUnavailableError
from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.http_fetcher import HttpFetcher
from app.services.text_extraction import ensure_url_scheme, format_number, year_from_date

logger = logging.getLogger(__name__)

WIKIDATA_API = "https://www.wikidata.org/w/api.php"

# property id -> profile field
PROP_INDUSTRY = "P452"
PROP_INSTANCE_OF = "P31"
PROP_INCEPTION = "P571"
PROP_HEADQUARTERS = "P159"
PROP_EMPLOYEES = "P1128"
PROP_WEBSITE = "P856"
PROP_CEO = "P169"

COMPANY_HINTS = ("company", "corporation", "business", "enterprise", "manufacturer",
                 "conglomerate", "firm", "startup", "bank")


def claim_values(claims: Dict[str, Any], prop: str) -> List[Any]:
    """Raw datavalue.value of every claim for a property, in order."""
    values = []
    for claim in claims.get(prop, []):
        datavalue = claim.get("mainsnak", {}).get("datavalue")
        if datavalue and "value" in datavalue:
            values.append(datavalue["value"])
    return values


def entity_ids(values: Iterable[Any]) -> List[str]:
    return [v["id"] for v in values if isinstance(v, dict) and "id" in v]


def pick_search_hit(hits: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Prefer the first hit whose description looks like a company."""
    if not hits:
        return None
    for hit in hits:
        description = (hit.get("description") or "").lower()
        if any(h in description for h in COMPANY_HINTS):
            return hit
    return hits[0]


def build_partial_from_entity(
    entity: Dict[str, Any],
    labels: Dict[str, str],
    fallback_name: str,
) -> Optional[PartialProfile]:
    claims = entity.get("claims", {})
    name = entity.get("labels", {}).get("en", {}).get("value") or fallback_name
    short_description = entity.get("descriptions", {}).get("en", {}).get("value")

    industry_ids = entity_ids(claim_values(claims, PROP_INDUSTRY)) or entity_ids(
        claim_values(claims, PROP_INSTANCE_OF)
    )
    industries = [labels[i] for i in industry_ids if i in labels]

    founded = None
    for value in claim_values(claims, PROP_INCEPTION):
        if isinstance(value, dict):
            founded = year_from_date(value.get("time"))
            if founded:
                break

    hq = [labels[i] for i in entity_ids(claim_values(claims, PROP_HEADQUARTERS)) if i in labels]
    ceos = [labels[i] for i in entity_ids(claim_values(claims, PROP_CEO)) if i in labels]

    employee_count = None
    # last claim is usually the most recent figure
    for value in reversed(claim_values(claims, PROP_EMPLOYEES)):
        if isinstance(value, dict) and value.get("amount"):
            try:
                employee_count = format_number(int(float(value["amount"])))
            except ValueError:
                continue
            break

    websites = [v for v in claim_values(claims, PROP_WEBSITE) if isinstance(v, str)]

    description = None
    if short_description:
        description = f"{name} is {_article(short_description)} {short_description}."

    if not description and not industries:
        return None

    return PartialProfile(
        name=name,
        description=description,
        industry=", ".join(industries[:3]) if industries else None,
        founded=founded,
        headquarters=hq[0] if hq else None,
        employee_count=employee_count,
        website=ensure_url_scheme(websites[0]) if websites else None,
        key_people=[f"{c} (CEO)" for c in ceos[:2]],
        source=ProfileSource.linked_data,
    )


def _article(phrase: str) -> str:
    return "an" if phrase[:1].lower() in "aeiou" else "a"


class LinkedDataAdapter(SourceAdapter):
    name = "linked_data"
    source = ProfileSource.linked_data
    external = True

    def __init__(self, fetcher: HttpFetcher, timeout_seconds: float = 8.0):
        super().__init__(timeout_seconds)
        self.fetcher = fetcher

    async def _resolve_labels(self, ids: List[str]) -> Dict[str, str]:
        if not ids:
            return {}
        try:
            payload = await self.fetcher.get_json(WIKIDATA_API, params={
                "action": "wbgetentities",
                "ids": "|".join(ids[:50]),
                "props": "labels",
                "languages": "en",
                "format": "json",
            })
        except (httpx.HTTPError, ValueError) as e:
            logger.info("[%s] label lookup failed, dropping ids: %s", self.name, e)
            return {}

        labels = {}
        for entity_id, entity in (payload.get("entities") or {}).items():
            label = entity.get("labels", {}).get("en", {}).get("value")
            if label:
                labels[entity_id] = label
        return labels

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        search = await self.fetcher.get_json(WIKIDATA_API, params={
            "action": "wbsearchentities",
            "search": company_name,
            "language": "en",
            "type": "item",
            "limit": 5,
            "format": "json",
        })
        error = search.get("error")
        if error:
            info = error.get("info") if isinstance(error, dict) else error
            raise SourceUnavailableError(f"Wikidata: {info}")
        hit = pick_search_hit(search.get("search", []))
        if hit is None:
            return None

        details = await self.fetcher.get_json(WIKIDATA_API, params={
            "action": "wbgetentities",
            "ids": hit["id"],
            "props": "labels|descriptions|claims",
            "languages": "en",
            "format": "json",
        })
        entity = (details.get("entities") or {}).get(hit["id"])
        if not entity:
            return None

        claims = entity.get("claims", {})
        ids = []
        for prop in (PROP_INDUSTRY, PROP_INSTANCE_OF, PROP_HEADQUARTERS, PROP_CEO):
            for entity_id in entity_ids(claim_values(claims, prop)):
                if entity_id not in ids:
                    ids.append(entity_id)

        labels = await self._resolve_labels(ids)
        return build_partial_from_entity(entity, labels, company_name)
