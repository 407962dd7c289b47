"""
Encyclopedia adapter (Wikipedia).

Search for "<name> company", fetch the intro extract plus categories,
strip citation markup with BeautifulSoup, then clean the lead paragraph.
"""

from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.http_fetcher import HttpFetcher
from app.services.text_extraction import (
    extract_employee_count,
    extract_industry_from_text,
    extract_location,
    extract_website,
    extract_year,
    industry_from_categories,
    simplify_description,
)

WIKIPEDIA_API = "https://en.wikipedia.org/w/api.php"


def clean_extract_html(html: str) -> List[str]:
    """Intro HTML -> cleaned, non-empty paragraphs in order."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup.select("sup, .reference, .mw-empty-elt, style"):
        tag.decompose()

    paragraphs = [p.get_text(" ", strip=True) for p in soup.find_all("p")]
    if not paragraphs:
        paragraphs = [soup.get_text(" ", strip=True)]

    cleaned = []
    for paragraph in paragraphs:
        text = simplify_description(paragraph)
        if text:
            cleaned.append(text)
    return cleaned


def build_partial_from_page(page: Dict[str, Any], fallback_name: str) -> Optional[PartialProfile]:
    paragraphs = clean_extract_html(page.get("extract", ""))
    if not paragraphs:
        return None

    text = " ".join(paragraphs)
    categories = [c.get("title", "") for c in page.get("categories", [])]
    industry = industry_from_categories(categories) or extract_industry_from_text(paragraphs[0])

    return PartialProfile(
        name=page.get("title") or fallback_name,
        description=paragraphs[0],
        extended_description=paragraphs[1:],
        industry=industry,
        founded=extract_year(text),
        headquarters=extract_location(text),
        employee_count=extract_employee_count(text),
        website=extract_website(text),
        source=ProfileSource.encyclopedia,
    )


class EncyclopediaAdapter(SourceAdapter):
    name = "encyclopedia"
    source = ProfileSource.encyclopedia
    external = True

    def __init__(self, fetcher: HttpFetcher, timeout_seconds: float = 8.0):
        super().__init__(timeout_seconds)
        self.fetcher = fetcher

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        search = await self.fetcher.get_json(WIKIPEDIA_API, params={
            "action": "query",
            "list": "search",
            "srsearch": f"{company_name} company",
            "srlimit": 1,
            "format": "json",
        })
        hits = search.get("query", {}).get("search", [])
        if not hits:
            return None

        details = await self.fetcher.get_json(WIKIPEDIA_API, params={
            "action": "query",
            "prop": "extracts|info|categories",
            "titles": hits[0]["title"],
            "exintro": 1,
            "inprop": "url",
            "cllimit": "max",
            "clshow": "!hidden",
            "redirects": 1,
            "format": "json",
        })
        pages = details.get("query", {}).get("pages", {})
        page = next(iter(pages.values()), None)
        if not page or "missing" in page:
            return None
        return build_partial_from_page(page, company_name)
