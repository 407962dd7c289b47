"""
Source adapter contract.

Subclasses implement fetch(); callers use attempt() or try_resolve(),
which never raise. Every attempt is bounded by asyncio.wait_for and logged
with the adapter name and elapsed milliseconds.

Failure classes reported by attempt():
    None        -> data found
    "no_data"   -> source answered, nothing usable
    "network"   -> transport error or timeout (counts toward connectivity)
    "error"     -> anything else (bad status, malformed payload, bug)
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from app.schemas.schemas import PartialProfile, ProfileSource

logger = logging.getLogger(__name__)

FAILURE_NO_DATA = "no_data"
FAILURE_NETWORK = "network"
FAILURE_ERROR = "error"


@dataclass
class AdapterOutcome:
    partial: Optional[PartialProfile]
    failure: Optional[str] = None
    elapsed_ms: float = 0.0

    @property
    def is_network_failure(self) -> bool:
        return self.failure == FAILURE_NETWORK


class SourceAdapter:
    """Base class for every company data source."""

    name: str = "base"
    source: ProfileSource = ProfileSource.placeholder
    # external adapters are the ones counted for connectivity degradation
    external: bool = False

    def __init__(self, timeout_seconds: float = 8.0):
        self.timeout_seconds = timeout_seconds

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        raise NotImplementedError

    async def attempt(self, company_name: str) -> AdapterOutcome:
        start = time.perf_counter()
        try:
            partial = await asyncio.wait_for(self.fetch(company_name), timeout=self.timeout_seconds)
        except (httpx.TransportError, asyncio.TimeoutError) as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.warning("[%s] network failure after %.0f ms: %r", self.name, elapsed, e)
            return AdapterOutcome(None, FAILURE_NETWORK, elapsed)
        except Exception as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.warning("[%s] failed after %.0f ms: %r", self.name, elapsed, e)
            return AdapterOutcome(None, FAILURE_ERROR, elapsed)

        elapsed = (time.perf_counter() - start) * 1000
        if partial is None:
            logger.info("[%s] no data for %r (%.0f ms)", self.name, company_name, elapsed)
            return AdapterOutcome(None, FAILURE_NO_DATA, elapsed)

        if partial.source is None:
            partial.source = self.source
        logger.info("[%s] found %r (%.0f ms)", self.name, partial.name or company_name, elapsed)
        return AdapterOutcome(partial, None, elapsed)

    async def try_resolve(self, company_name: str) -> Optional[PartialProfile]:
        outcome = await self.attempt(company_name)
        return outcome.partial
