"""
Shared fixtures.

- store: empty InMemoryCompanyStore
- write_dataset: writes a small CSV in the dataset's column layout
- mock_fetcher: HttpFetcher on top of httpx.MockTransport
"""

import csv
from typing import Callable, List, Optional

import httpx
import pytest

from app.services.http_fetcher import HttpFetcher
from tests.doubles import InMemoryCompanyStore


# =============================================================================
# Fixtures
# =============================================================================


DATASET_HEADER = [
    "name", "domain", "year founded", "industry", "size range", "locality",
    "country", "linkedin url", "current employee estimate", "total employee estimate",
]


@pytest.fixture
def write_dataset(tmp_path) -> Callable[[List[dict]], str]:
    """Write rows (dicts keyed by DATASET_HEADER names) and return the file path."""

    def _write(rows: List[dict], header: Optional[List[str]] = None) -> str:
        path = tmp_path / "companies.csv"
        columns = header or DATASET_HEADER
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=columns)
            writer.writeheader()
            for row in rows:
                writer.writerow({c: row.get(c, "") for c in columns})
        return str(path)

    return _write


@pytest.fixture
def store() -> InMemoryCompanyStore:
    return InMemoryCompanyStore()


@pytest.fixture
def mock_fetcher() -> Callable[[Callable[[httpx.Request], httpx.Response]], HttpFetcher]:
    """Build an HttpFetcher whose requests are answered by `handler`."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> HttpFetcher:
        return HttpFetcher(timeout_seconds=1.0, transport=httpx.MockTransport(handler))

    return _make
