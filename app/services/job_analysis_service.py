"""
Job Analysis Service - job description -> job details + company info.

FLOW:
1. LLM extracts structured job details from the raw text
2. Details are validated / sanitized (never trust model output)
3. The extracted company goes through the normal resolution cascade

A failing company lookup never fails the request: the response then
carries a minimal company block tagged source=error.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAIError

from app.core.exceptions import InputValidationError, JobAnalysisError
from app.schemas.schemas import NOT_SPECIFIED, ProfileSource, is_blank
from app.services.company_resolver import CompanyResolver
from app.services.llm_client import LLMClient

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("job_title", "company", "location", "salary_range", "job_type", "how_to_apply")
LIST_FIELDS = ("responsibilities", "requirements")


def _clean_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [line.strip(" -•*\t") for line in value.splitlines()]
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item and str(item).strip()]


def validate_job_details(data: dict) -> dict:
    """
    Validate and sanitize extracted job details.
    Text fields fall back to "Not specified", lists to [].
    """
    validated = {}
    for field in TEXT_FIELDS:
        value = data.get(field)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or is_blank(value):
            value = NOT_SPECIFIED
        validated[field] = value.strip()

    for field in LIST_FIELDS:
        validated[field] = _clean_list(data.get(field))

    return validated


class JobAnalysisService:
    def __init__(self, llm: LLMClient, resolver: CompanyResolver):
        self.llm = llm
        self.resolver = resolver

    async def _company_info(self, company: str) -> Optional[Dict[str, Any]]:
        if is_blank(company):
            return None
        try:
            result = await self.resolver.resolve(company)
        except Exception as e:
            logger.exception("Company lookup failed for %r", company)
            return {
                "success": False,
                "data": {"name": company, "source": ProfileSource.error.value},
                "error": f"Company lookup failed: {e}",
            }
        return {
            "success": result.success,
            "data": result.data.model_dump(mode="json", by_alias=True) if result.data else None,
            "source": result.source.value if result.source else None,
            "error": result.error,
        }

    async def analyze(self, job_description: Optional[str]) -> Tuple[dict, Optional[Dict[str, Any]]]:
        if not job_description or not job_description.strip():
            raise InputValidationError("Job description is required")

        try:
            raw = await self.llm.aparse_job_description(job_description.strip())
        except OpenAIError as e:
            raise JobAnalysisError(f"LLM request failed: {e}") from e

        details = validate_job_details(raw)
        logger.info("Extracted job %r at %r", details["job_title"], details["company"])
        company_info = await self._company_info(details["company"])
        return details, company_info
