"""
Dataset Loader

Loads the bulk company CSV (e.g. the public "companies_sorted.csv" dump)
into memory exactly once per process.

Columns used (header case, spaces and underscores are ignored):
    name | company_name, domain, year founded, industry, size range,
    locality, country, linkedin url,
    current employee estimate, total employee estimate

Invalid values are normalized, never propagated:
- year founded outside 1800..current year -> None
- employee counts that are not positive integers -> 0
- unknown size ranges -> "Information not available"
"""

import asyncio
import csv
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from app.schemas.schemas import INFO_NOT_AVAILABLE, VALID_SIZE_RANGES
from app.services.text_extraction import normalize_company_name

logger = logging.getLogger(__name__)

DEFAULT_DATASET_INDUSTRY = "Technology"


@dataclass(frozen=True)
class DatasetRecord:
    """One validated dataset row. Immutable after load."""
    name: str
    normalized_name: str
    domain: Optional[str] = None
    year_founded: Optional[int] = None
    industry: str = DEFAULT_DATASET_INDUSTRY
    size_range: str = INFO_NOT_AVAILABLE
    locality: Optional[str] = None
    country: Optional[str] = None
    employee_estimate_current: int = 0
    employee_estimate_total: int = 0
    linkedin_url: Optional[str] = None

    @property
    def location(self) -> Optional[str]:
        """'locality, country', either part alone, or None."""
        parts = [p for p in (self.locality, self.country) if p]
        return ", ".join(parts) if parts else None


# ============================================================
# FIELD VALIDATION
# ============================================================

def validate_year_founded(value: Optional[str]) -> Optional[int]:
    """'1998' / '1998.0' -> 1998; 'abcd', '1700', '2999' -> None."""
    if value is None:
        return None
    try:
        year = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None
    if year < 1800 or year > datetime.now().year:
        return None
    return year


def validate_employee_count(value: Optional[str]) -> int:
    if value is None:
        return 0
    try:
        count = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return 0
    return count if count > 0 else 0


def validate_size_range(value: Optional[str]) -> str:
    if not value:
        return INFO_NOT_AVAILABLE
    normalized = re.sub(r"\s*-\s*", "-", value.strip())
    return normalized if normalized in VALID_SIZE_RANGES else INFO_NOT_AVAILABLE


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def clean_row(row: Dict[str, Optional[str]]) -> Optional[DatasetRecord]:
    """Validate one CSV row. Rows without a company name return None."""
    fields = {
        (key or "").strip().lower().replace("_", " "): value
        for key, value in row.items()
    }
    name = _clean(fields.get("name")) or _clean(fields.get("company name"))
    if not name:
        return None

    return DatasetRecord(
        name=name,
        normalized_name=normalize_company_name(name),
        domain=_clean(fields.get("domain")),
        year_founded=validate_year_founded(fields.get("year founded")),
        industry=_clean(fields.get("industry")) or DEFAULT_DATASET_INDUSTRY,
        size_range=validate_size_range(fields.get("size range")),
        locality=_clean(fields.get("locality")),
        country=_clean(fields.get("country")),
        employee_estimate_current=validate_employee_count(fields.get("current employee estimate")),
        employee_estimate_total=validate_employee_count(fields.get("total employee estimate")),
        linkedin_url=_clean(fields.get("linkedin url")),
    )


def read_dataset_file(path: Path) -> List[DatasetRecord]:
    """Blocking CSV read. Runs in a worker thread."""
    records = []
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            record = clean_row(row)
            if record is not None:
                records.append(record)
    return records


# ============================================================
# LOADER
# ============================================================

class DatasetLoader:
    """
    Single-flight, load-once holder for the dataset.

    The first caller of load() reads the file; concurrent callers wait on
    the same lock and then get the already-loaded list.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._records: Optional[List[DatasetRecord]] = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    async def load(self) -> List[DatasetRecord]:
        if self._records is not None:
            return self._records

        async with self._lock:
            if self._records is not None:
                return self._records
            try:
                records = await asyncio.to_thread(read_dataset_file, self.path)
                logger.info("Loaded %d companies from dataset %s", len(records), self.path)
            except (OSError, csv.Error, UnicodeDecodeError) as e:
                logger.warning("Company dataset unavailable (%s): %s", self.path, e)
                records = []
            self._records = records
        return self._records
