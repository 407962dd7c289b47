"""
Deterministic Fallback Generators

Everything here is a pure function of the company name (plus whatever data
was already found). Used by:
- PlaceholderAdapter, when no source knows the company at all
- ensure_complete_data, the final normalization pass on every profile

The contract of ensure_complete_data: the returned CompanyProfile never
carries an empty required scalar.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.schemas.schemas import (
    CompanyCulture,
    CompanyProfile,
    InterviewProcess,
    PartialProfile,
    ProfileSource,
    is_blank,
)
from app.services.curated_companies import find_curated_exact
from app.services.merging import merge_partials
from app.services.text_extraction import slugify_company_name


# ============================================================
# INDUSTRY BY KEYWORD
# ============================================================

# Well-known names first, then generic keywords. Order matters.
KNOWN_INDUSTRIES: Dict[str, str] = {
    "apple": "Consumer Electronics, Software",
    "facebook": "Social Media, Technology",
    "meta": "Social Media, Technology",
    "twitter": "Social Media, Technology",
    "netflix": "Entertainment, Streaming",
    "tesla": "Automotive, Energy",
    "uber": "Transportation, Technology",
    "airbnb": "Hospitality, Technology",
}

INDUSTRY_KEYWORDS = (
    (("bank", "finance", "financial", "capital", "pay", "invest", "insurance"), "Finance"),
    (("health", "med", "care", "pharma", "hospital", "bio"), "Healthcare"),
    (("retail", "shop", "store", "mart"), "Retail"),
    (("motor", "auto"), "Automotive"),
    (("energy", "power", "solar", "oil"), "Energy"),
    (("edu", "school", "academy", "learning"), "Education"),
    (("consult",), "Consulting"),
    (("tech", "soft", "data", "ai", "cloud", "systems", "labs", "digital"), "Technology"),
)

DEFAULT_INDUSTRY = "Technology"


def guess_industry(company_name: str) -> str:
    """Keyword heuristic: 'First Capital Bank' -> 'Finance'. Never empty."""
    lower = (company_name or "").lower()
    words = lower.split()

    for key, industry in KNOWN_INDUSTRIES.items():
        if key in words:
            return industry

    for keywords, industry in INDUSTRY_KEYWORDS:
        for keyword in keywords:
            # short keywords ("ai", "med") only count as whole words or word prefixes
            if len(keyword) <= 3:
                if any(w == keyword or w.startswith(keyword) for w in words):
                    return industry
            elif keyword in lower:
                return industry
    return DEFAULT_INDUSTRY


def guess_website(company_name: str) -> str:
    """'Acme Widgets' -> 'https://www.acmewidgets.com'."""
    slug = slugify_company_name(company_name) or "example"
    return f"https://www.{slug}.com"


def templated_description(company_name: str, industry: str) -> str:
    return (
        f"{company_name} is a company operating in the {industry} sector. "
        f"Detailed information about {company_name} is limited, but you can research "
        f"its products, culture and hiring practices before your interview."
    )


# ============================================================
# DEFAULT SUBSTRUCTURES
# ============================================================

DEFAULT_TECHNOLOGIES = ["Cloud Computing", "Software Development", "Data Analytics",
                        "Mobile Applications", "Web Technologies"]
DEFAULT_PRODUCTS = ["Software Solutions", "Digital Products"]
DEFAULT_SERVICES = ["Support Services", "Consulting", "Digital Services"]
DEFAULT_BUSINESS_SEGMENTS = ["Main Business", "Products", "Services", "Digital Solutions"]


def default_culture(industry: str) -> CompanyCulture:
    return CompanyCulture(
        work_life_balance="Focus on work-life balance and employee wellbeing",
        learning_opportunities="Ongoing professional development and learning",
        team_environment="Collaborative and inclusive workplace",
        values=[f"{industry} Excellence", "Innovation & Growth", "Professional Development",
                "Global Collaboration"],
    )


def default_interview_process(industry: str) -> InterviewProcess:
    return InterviewProcess(
        rounds=["Initial screening", f"{industry} domain / technical assessment",
                "Team interviews", "Final round"],
        typical_duration="2-4 weeks",
        tips=[
            "Research the company thoroughly",
            "Understand the role requirements",
            "Prepare relevant examples of your experience",
            "Prepare thoughtful questions to ask the interviewer",
        ],
        common_questions=[
            "Why are you interested in this company?",
            "Tell us about your relevant experience",
            "How do you approach problem-solving?",
            "What are your career goals?",
        ],
    )


def default_hiring_process() -> Dict[str, Any]:
    return {
        "stages": ["Application review", "Assessment", "Interviews", "Offer"],
        "applicationChannels": ["Company careers page", "LinkedIn", "Campus placement"],
        "averageTimeline": "2-6 weeks",
    }


def default_career_growth(industry: str) -> Dict[str, Any]:
    return {
        "promotionPath": f"Career advancement opportunities in {industry}",
        "learningOpportunities": "Professional development and on-the-job training",
        "mentorshipPrograms": "Structured mentorship programs available",
    }


# ============================================================
# PLACEHOLDER
# ============================================================

def build_placeholder(company_name: str) -> PartialProfile:
    """Profile synthesized purely from the name. Used when every source misses."""
    name = company_name.strip()
    industry = guess_industry(name)
    return PartialProfile(
        name=name,
        description=f"Information about {name} is currently being compiled.",
        industry=industry,
        website=guess_website(name),
        source=ProfileSource.placeholder,
    )


# ============================================================
# FINAL NORMALIZATION PASS
# ============================================================

def _fill(value: List[str], default: List[str]) -> List[str]:
    return value if value else list(default)


def ensure_complete_data(
    partial: PartialProfile,
    source: ProfileSource,
    requested_name: Optional[str] = None,
    refresh_timestamp: bool = True,
) -> CompanyProfile:
    """
    Turn whatever was found into a complete CompanyProfile.

    Order:
    1. curated exact-name entry (industry always overridden, rest back-filled)
    2. keyword industry, website guess, templated description
    3. sentinels for the remaining scalars (schema validator)
    4. default lists and substructures
    """
    working = partial.model_copy(deep=True)
    name = (working.name or requested_name or "").strip()
    working.name = name

    curated = find_curated_exact(name)
    if curated is None and requested_name:
        curated = find_curated_exact(requested_name)
    if curated is not None:
        working = merge_partials(working, curated)
        working.industry = curated.industry

    if is_blank(working.industry):
        working.industry = guess_industry(name)
    if is_blank(working.website):
        working.website = guess_website(name)
    if is_blank(working.description):
        working.description = templated_description(name, working.industry)

    working.technologies = _fill(working.technologies, DEFAULT_TECHNOLOGIES)
    working.products = _fill(working.products, DEFAULT_PRODUCTS)
    working.services = _fill(working.services, DEFAULT_SERVICES)
    working.business_segments = _fill(working.business_segments, DEFAULT_BUSINESS_SEGMENTS)

    if working.culture is None:
        working.culture = default_culture(working.industry)
    if working.interview_process is None:
        working.interview_process = default_interview_process(working.industry)
    if not working.hiring_process:
        working.hiring_process = default_hiring_process()
    if not working.career_growth:
        working.career_growth = default_career_growth(working.industry)

    # None scalars become NOT_SPECIFIED in the CompanyProfile validator
    data = working.model_dump(exclude={"source", "last_updated"})

    if refresh_timestamp or working.last_updated is None:
        last_updated = datetime.now(timezone.utc)
    else:
        last_updated = working.last_updated

    return CompanyProfile(**data, source=source, last_updated=last_updated)
