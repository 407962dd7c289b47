"""
Job Routes

POST /jobs/query          - Analyze a job description (+ company info)
GET  /job/youtube-search  - Ranked interview-preparation videos
GET  /job/company-details/{company_name} - Alias of /company/{name}
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_container
from app.api.routes.company_routes import company_detail_response
from app.core.exceptions import InputValidationError
from app.schemas.schemas import (
    CompanyDetailResponse,
    JobQueryRequest,
    JobQueryResponse,
    VideoSearchResponse,
)
from app.services.company_search import MIN_QUERY_LENGTH
from app.services.container import ServiceContainer
from app.services.video_search import cap_job_title, derive_job_title_from_query

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Jobs"])


@router.post("/jobs/query", response_model=JobQueryResponse)
async def analyze_job(data: JobQueryRequest, container: ServiceContainer = Depends(get_container)):
    """
    Extract job details with the LLM, then look up the hiring company.
    """
    job_details, company_info = await container.jobs.analyze(data.job_description)
    return JobQueryResponse(
        success=True,
        job_details=job_details,
        company_info=company_info,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/job/youtube-search", response_model=VideoSearchResponse)
async def youtube_search(
    query: Optional[str] = Query(None),
    max_results: int = Query(6, alias="maxResults", ge=1, le=25),
    company_from_jd: Optional[str] = Query(None, alias="companyFromJD"),
    job_title_from_jd: Optional[str] = Query(None, alias="jobTitleFromJD"),
    container: ServiceContainer = Depends(get_container),
):
    """
    Search interview videos.
    companyFromJD / jobTitleFromJD are preferred; without them the job
    title is taken from `query` up to its interview keyword.
    """
    company = (company_from_jd or "").strip()
    job_title = (job_title_from_jd or "").strip()

    if not company and not job_title:
        if not query or not query.strip():
            raise InputValidationError("Search query is required")
        logger.info("companyFromJD/jobTitleFromJD missing, deriving job title from %r", query)
        job_title = derive_job_title_from_query(query)
    job_title = cap_job_title(job_title)

    videos = await container.videos.search(company, job_title, max_results)
    return VideoSearchResponse(
        items=videos,
        page_info={"totalResults": len(videos)},
        next_page_token=None,
    )


@router.get("/job/company-details/{company_name}", response_model=CompanyDetailResponse)
async def company_details(company_name: str, container: ServiceContainer = Depends(get_container)):
    """Company profile lookup used by the job analysis page."""
    if len(company_name.strip()) < MIN_QUERY_LENGTH:
        raise InputValidationError("Company name must be at least 2 characters")
    return await company_detail_response(company_name.strip(), container)
