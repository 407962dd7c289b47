"""
Free-text extraction helpers.

Pure functions used by the source adapters to pull company facts out of
prose (Wikipedia extracts, DuckDuckGo abstracts, search-result snippets).
Every extractor returns None when nothing matches and never raises.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional


# ============================================================
# NAME NORMALIZATION
# ============================================================

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_company_name(name: Optional[str]) -> str:
    """Lowercase, strip punctuation, collapse whitespace.

    Used by every adapter that does fuzzy matching and as the cache key.
    """
    if not name:
        return ""
    lowered = _PUNCTUATION_RE.sub("", name.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def slugify_company_name(name: str) -> str:
    """'Acme Widgets Inc' -> 'acmewidgetsinc' (used for website guesses)."""
    return normalize_company_name(name).replace(" ", "")


# ============================================================
# DESCRIPTION CLEANUP
# ============================================================

_CORPORATE_SUFFIXES = r"(?:Inc\.|LLC|Ltd\.|Limited|Corporation|Corp\.|GmbH|S\.A\.|plc)"


def _drop_suffix(match) -> str:
    # a suffix that ends the text also carried the sentence's full stop
    if match.group().endswith(".") and not match.string[match.end():].strip():
        return "."
    return ""


def simplify_description(text: Optional[str]) -> str:
    """
    Clean an encyclopedia lead paragraph for display.

    Removes pronunciation guides, IPA brackets, citation markers,
    "stylized as" / "formerly known as" clauses, corporate suffixes
    and trademark symbols.
    """
    if not text:
        return ""

    simplified = text
    simplified = re.sub(r"\s*\([^)]*pronunciation[^)]*\)\s*", " ", simplified, flags=re.I)
    simplified = re.sub(r"\[\d+\]", "", simplified)
    simplified = re.sub(r"\s*\[[^\]]*\]\s*", " ", simplified)
    simplified = re.sub(r"\s*\(\s*/[^)]*/\s*\)", "", simplified)
    simplified = re.sub(r"\s+", " ", simplified)

    simplified = re.sub(r",\s*stylized as\s+[^,.;]+,?", "", simplified, flags=re.I)
    simplified = re.sub(r"\s*\(stylized as\s+[^)]+\)", "", simplified, flags=re.I)
    simplified = re.sub(
        r"\s*\((?:formerly|previously)(?:\s+(?:named|called|known as))?\s+[^)]+\)",
        "", simplified, flags=re.I,
    )
    simplified = re.sub(
        r"\s*,\s+(?:formerly|previously)(?:\s+(?:named|called|known as))?\s+[^,.;]+,?",
        "", simplified, flags=re.I,
    )

    simplified = re.sub(r",\s*" + _CORPORATE_SUFFIXES + r"(?=[\s,.;)]|$)", _drop_suffix, simplified)
    simplified = re.sub(r"\s+" + _CORPORATE_SUFFIXES + r"(?=[\s,;)]|$)", _drop_suffix, simplified)
    simplified = re.sub(r"[™®©]", "", simplified)

    simplified = re.sub(r"\s+([,.;])", r"\1", simplified)
    return re.sub(r"\s+", " ", simplified).strip()


# ============================================================
# FIELD EXTRACTORS
# ============================================================

_FOUNDED_PATTERNS = (
    re.compile(r"founded\s+(?:[^.]*?\s)?in\s+(\d{4})", re.I),
    re.compile(r"established\s+in\s+(\d{4})", re.I),
    re.compile(r"incorporated\s+in\s+(\d{4})", re.I),
    re.compile(r"\bin\s+(\d{4})\b[^.]*\bfounded\b", re.I),
)

_LOCATION_PATTERNS = (
    re.compile(r"headquartered\s+in\s+([^.;(]+)", re.I),
    re.compile(r"headquarters\s+(?:is\s+|are\s+)?in\s+([^.;(]+)", re.I),
    re.compile(r"based\s+in\s+([^.;(]+)", re.I),
)

_EMPLOYEE_PATTERNS = (
    re.compile(r"(\d{1,3}(?:,\d{3})+|\d+)\s+employees", re.I),
    re.compile(r"employs\s+(?:over\s+|about\s+|approximately\s+|around\s+)?(\d{1,3}(?:,\d{3})+|\d+)", re.I),
)

_WEBSITE_PATTERNS = (
    re.compile(r"website\s+is\s+((?:https?://)?[a-z0-9-]+(?:\.[a-z0-9-]+)+)", re.I),
    re.compile(r"\b((?:https?://)?www\.[a-z0-9-]+(?:\.[a-z]{2,})+)", re.I),
)

_INDUSTRY_PATTERNS = (
    re.compile(r"is\s+an?\s+((?:[a-z\-]+\s+){0,2}[a-z\-]+)\s+(?:company|corporation|firm|conglomerate)", re.I),
    re.compile(r"provider\s+of\s+([a-z\-]+(?:\s+[a-z\-]+){0,2})", re.I),
    re.compile(r"specializ(?:es|ing)\s+in\s+([a-z\-]+(?:\s+[a-z\-]+){0,2})", re.I),
    re.compile(r"focuses\s+on\s+([a-z\-]+(?:\s+[a-z\-]+){0,2})", re.I),
)

# Leading adjectives that say nothing about the industry
_INDUSTRY_NOISE = {
    "american", "indian", "british", "chinese", "japanese", "german", "french",
    "multinational", "global", "leading", "public", "private", "publicly", "traded",
    "large", "major", "canadian", "dutch", "swiss", "korean", "south", "swedish",
    "irish", "israeli", "australian", "italian", "spanish", "international",
}


def extract_year(text: Optional[str]) -> Optional[str]:
    """'... was founded in 1998 ...' -> '1998'."""
    if not text:
        return None
    current_year = datetime.now().year
    for pattern in _FOUNDED_PATTERNS:
        match = pattern.search(text)
        if match and 1800 <= int(match.group(1)) <= current_year:
            return match.group(1)
    return None


def extract_location(text: Optional[str]) -> Optional[str]:
    """'... headquartered in Mountain View, California.' -> 'Mountain View, California'."""
    if not text:
        return None
    for pattern in _LOCATION_PATTERNS:
        match = pattern.search(text)
        if match:
            location = match.group(1).strip().rstrip(",")
            # "based in X, and ..." -> keep only the place
            location = re.split(r"\s+(?:and|with|where|which|that)\s+", location)[0]
            if location and len(location) <= 80:
                return location
    return None


def extract_employee_count(text: Optional[str]) -> Optional[str]:
    """'... employs 30,000 people' -> '30,000'."""
    if not text:
        return None
    for pattern in _EMPLOYEE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_website(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    for pattern in _WEBSITE_PATTERNS:
        match = pattern.search(text)
        if match:
            return ensure_url_scheme(match.group(1))
    return None


def extract_industry_from_text(text: Optional[str]) -> Optional[str]:
    """'Etsy is an American e-commerce company ...' -> 'E-commerce'."""
    if not text:
        return None
    for pattern in _INDUSTRY_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        words = [w for w in match.group(1).split() if w.lower() not in _INDUSTRY_NOISE]
        if words:
            phrase = " ".join(words)
            return phrase[0].upper() + phrase[1:]
    return None


def extract_industry_near_name(company_name: str, snippets: Iterable[str]) -> Optional[str]:
    """
    Industry phrase from search snippets mentioning the company:
    '<name> is a|operates in|specializes in <industry phrase> company|business|...'
    """
    pattern = re.compile(
        re.escape(company_name)
        + r".*?(?:is an?|operates in|specializes in)\s+([\w\s,&-]+?)(?:\s+(?:company|business|firm|that|which)\b|\.|$)",
        re.I,
    )
    for snippet in snippets:
        if not snippet:
            continue
        match = pattern.search(snippet)
        if match:
            words = [w for w in match.group(1).strip(" ,").split() if w.lower() not in _INDUSTRY_NOISE]
            if words:
                phrase = " ".join(words)
                return phrase[0].upper() + phrase[1:]
    return None


_PRODUCT_RE = re.compile(
    r"(?:offers|sells|provides|products include|services include|known for)\s+([^.]+)", re.I
)
_VALUES_RE = re.compile(
    r"(?:values|culture|mission)[^.]*?(?:includes?|are|is|embraces)\s+([^.]+)", re.I
)


def _split_list_phrase(phrase: str) -> List[str]:
    parts = re.split(r",\s*|\s+and\s+", phrase)
    return [p.strip(" .;:") for p in parts if p.strip(" .;:")]


def extract_list_items(snippets: Iterable[str], kind: str) -> List[str]:
    """
    Pull 'products' or 'values' lists out of snippets, de-duplicated,
    first occurrence order preserved.
    """
    pattern = _PRODUCT_RE if kind == "products" else _VALUES_RE
    items: List[str] = []
    for snippet in snippets:
        if not snippet:
            continue
        match = pattern.search(snippet)
        if match:
            for item in _split_list_phrase(match.group(1)):
                if item not in items and len(item) <= 60:
                    items.append(item)
    return items


_CATEGORY_INDUSTRY_RE = re.compile(r"^Category:([A-Za-z][A-Za-z \-]*?)\s+(?:companies|industry)$")


def industry_from_categories(category_titles: Iterable[str]) -> Optional[str]:
    """
    'Category:Software companies of the United States' is skipped,
    'Category:Software companies' -> 'Software'.
    """
    for title in category_titles:
        if not title:
            continue
        match = _CATEGORY_INDUSTRY_RE.match(title.strip())
        if not match:
            continue
        words = [w for w in match.group(1).split() if w.lower() not in _INDUSTRY_NOISE]
        if words:
            phrase = " ".join(words)
            return phrase[0].upper() + phrase[1:]
    return None


# ============================================================
# SMALL FORMATTERS
# ============================================================

def year_from_date(value: Optional[str]) -> Optional[str]:
    """'+1998-09-04T00:00:00Z' -> '1998'. Anything without a year -> None."""
    if not value:
        return None
    match = re.search(r"(\d{4})", value)
    return match.group(1) if match else None


def ensure_url_scheme(value: str) -> str:
    value = value.strip()
    if not value:
        return value
    if value.startswith(("http://", "https://")):
        return value
    return f"https://{value}"


def format_number(num: int) -> str:
    """30000 -> '30,000'."""
    return f"{num:,}"
