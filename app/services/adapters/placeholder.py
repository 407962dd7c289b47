"""Placeholder generator: a profile synthesized from the name alone."""

from typing import Optional

from app.schemas.schemas import PartialProfile, ProfileSource
from app.services.adapters.base import SourceAdapter
from app.services.fallbacks import build_placeholder


class PlaceholderAdapter(SourceAdapter):
    name = "placeholder"
    source = ProfileSource.placeholder

    async def fetch(self, company_name: str) -> Optional[PartialProfile]:
        if not company_name.strip():
            return None
        return build_placeholder(company_name)
