"""
Dataset adapter: bulk CSV lookup.

Match tiers (first tier with a hit wins, dataset order breaks ties):
1. exact normalized name
2. substring containment in either direction
3. token overlap (a query word equals a candidate word)
"""

from typing import List, Optional

from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.dataset_loader import DatasetLoader, DatasetRecord
from app.services.text_extraction import ensure_url_scheme, format_number, normalize_company_name

# too common to identify a company on their own
GENERIC_TOKENS = {
    "inc", "ltd", "llc", "llp", "plc", "co", "corp", "corporation", "company",
    "limited", "pvt", "private", "group", "the", "and", "of", "india",
}


def find_dataset_match(query: str, records: List[DatasetRecord]) -> Optional[DatasetRecord]:
    normalized = normalize_company_name(query)
    if not normalized or not records:
        return None

    for record in records:
        if record.normalized_name == normalized:
            return record

    for record in records:
        if record.normalized_name and (
            normalized in record.normalized_name or record.normalized_name in normalized
        ):
            return record

    query_tokens = {t for t in normalized.split() if t not in GENERIC_TOKENS}
    if not query_tokens:
        return None
    for record in records:
        if query_tokens.intersection(record.normalized_name.split()):
            return record
    return None


def describe_record(record: DatasetRecord) -> str:
    """'Infosys is a 10001+ information technology company, with approximately ...'."""
    size = record.size_range if record.size_range[0].isdigit() else None
    parts = [f"{record.name} is a{' ' + size if size else ''} {record.industry.lower()} company"]
    if record.employee_estimate_current > 0:
        parts.append(f"with approximately {format_number(record.employee_estimate_current)} current employees")
    if record.location:
        parts.append(f"headquartered in {record.location.title()}")
    if record.year_founded:
        parts.append(f"established in {record.year_founded}")
    return ", ".join(parts) + "."


def record_to_partial(record: DatasetRecord) -> PartialProfile:
    if record.employee_estimate_current > 0:
        employee_count = f"{format_number(record.employee_estimate_current)} current employees"
    elif record.size_range[0].isdigit():
        employee_count = f"{record.size_range} employees"
    else:
        employee_count = None

    return PartialProfile(
        name=record.name.title() if record.name.islower() else record.name,
        description=describe_record(record),
        industry=record.industry.title() if record.industry.islower() else record.industry,
        founded=str(record.year_founded) if record.year_founded else None,
        headquarters=record.location.title() if record.location else None,
        employee_count=employee_count,
        website=ensure_url_scheme(record.domain) if record.domain else None,
        career_growth={
            "promotionPath": f"Career advancement opportunities in {record.industry}",
            "learningOpportunities": f"Professional development in a {record.size_range} organization"
            if record.size_range[0].isdigit() else "Professional development opportunities",
            "mentorshipPrograms": "Structured mentorship programs available",
        },
        source=ProfileSource.dataset,
    )


class DatasetAdapter(SourceAdapter):
    name = "dataset"
    source = ProfileSource.dataset

    def __init__(self, loader: DatasetLoader, timeout_seconds: float = 8.0):
        super().__init__(timeout_seconds)
        self.loader = loader

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        records = await self.loader.load()
        record = find_dataset_match(company_name, records)
        if record is None:
            return None
        return record_to_partial(record)
