"""
Company Routes

GET /company/search/{query}  - Search companies by name or industry
GET /company/search?query=   - Same, query-string form
GET /company/{name}          - Full profile through the resolution cascade
GET /company                 - Paginated listing (cache first, then dataset)
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_container
from app.core.exceptions import InputValidationError
from app.schemas.schemas import (
    CompanyDetailResponse,
    CompanyListResponse,
    ProfileSource,
)
from app.services.company_search import MIN_QUERY_LENGTH
from app.services.container import ServiceContainer
from app.services.fallbacks import build_placeholder, ensure_complete_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/company", tags=["Company"])


async def _search(query: str, container: ServiceContainer) -> CompanyListResponse:
    if len((query or "").strip()) < MIN_QUERY_LENGTH:
        raise InputValidationError("Search query must be at least 2 characters long")
    results = await container.search.search(query.strip())
    return CompanyListResponse(
        count=len(results),
        data=results,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/search", response_model=CompanyListResponse)
async def search_companies_by_param(
    query: str = Query(""),
    container: ServiceContainer = Depends(get_container),
):
    """Search companies (query-string form)."""
    return await _search(query, container)


@router.get("/search/{query}", response_model=CompanyListResponse)
async def search_companies(query: str, container: ServiceContainer = Depends(get_container)):
    """Search companies by name or industry. Returns {name, industry, headquarters} only."""
    return await _search(query, container)


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    container: ServiceContainer = Depends(get_container),
):
    """List known companies."""
    results = await container.search.list(limit=limit, offset=offset)
    return CompanyListResponse(
        count=len(results),
        data=results,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/{name}", response_model=CompanyDetailResponse)
async def get_company(name: str, container: ServiceContainer = Depends(get_container)):
    """
    Resolve a company profile. Always returns renderable data:
    unexpected failures give a 500 that still carries placeholder data.
    """
    if not name.strip():
        raise InputValidationError("Company name is required")
    return await company_detail_response(name, container)


async def company_detail_response(name: str, container: ServiceContainer):
    """Shared by /company/{name} and /job/company-details/{name}."""
    try:
        result = await container.resolver.resolve(name)
    except Exception:
        logger.exception("Unexpected error resolving %r", name)
        fallback = ensure_complete_data(build_placeholder(name), ProfileSource.error, name)
        body = CompanyDetailResponse(
            success=False,
            data=fallback,
            source=ProfileSource.error.value,
            error="Internal server error",
            timestamp=datetime.now(timezone.utc),
        )
        return JSONResponse(status_code=500, content=body.model_dump(mode="json", by_alias=True))

    return CompanyDetailResponse(
        success=result.success,
        data=result.data,
        source=result.source.value if result.source else None,
        error=result.error,
        timestamp=datetime.now(timezone.utc),
    )
