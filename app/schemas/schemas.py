"""
Pydantic Schemas - Domain models and Request/Response validation

All schemas in one file for simplicity.
Python attributes are snake_case; JSON uses camelCase (extendedDescription,
employeeCount, lastUpdated, ...) to match what the frontend reads.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


# ============================================================
# SENTINELS
# ============================================================

NOT_SPECIFIED = "Not specified"
UNKNOWN = "Unknown"
NOT_AVAILABLE = "Not available"
INFO_NOT_AVAILABLE = "Information not available"

SENTINEL_VALUES = {NOT_SPECIFIED, UNKNOWN, NOT_AVAILABLE, INFO_NOT_AVAILABLE}


def is_blank(value: Any) -> bool:
    """True for None, blank strings, sentinel strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return not stripped or stripped in SENTINEL_VALUES
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


# ============================================================
# ENUMS
# ============================================================

class ProfileSource(str, Enum):
    cache = "cache"
    dataset = "dataset"
    knowledge_graph = "knowledge_graph"
    linked_data = "linked_data"
    encyclopedia = "encyclopedia"
    instant_answer = "instant_answer"
    curated = "curated"
    combined_fallback = "combined_fallback"
    placeholder = "placeholder"
    error = "error"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# COMPANY PROFILE
# ============================================================

class CompanyCulture(CamelModel):
    work_life_balance: str
    learning_opportunities: str
    team_environment: str
    values: List[str] = Field(..., min_length=1)


class InterviewProcess(CamelModel):
    rounds: List[str] = []
    typical_duration: str = NOT_SPECIFIED
    tips: List[str] = []
    common_questions: List[str] = []


class PartialProfile(CamelModel):
    """What a single source adapter managed to find. Every field optional."""
    name: Optional[str] = None
    description: Optional[str] = None
    extended_description: List[str] = []
    industry: Optional[str] = None
    founded: Optional[str] = None
    headquarters: Optional[str] = None
    employee_count: Optional[str] = None
    revenue: Optional[str] = None
    website: Optional[str] = None
    key_people: List[str] = []
    business_segments: List[str] = []
    technologies: List[str] = []
    products: List[str] = []
    services: List[str] = []
    culture: Optional[CompanyCulture] = None
    interview_process: Optional[InterviewProcess] = None
    hiring_process: Optional[Dict[str, Any]] = None
    career_growth: Optional[Dict[str, Any]] = None
    rating: Optional[str] = None
    pros: List[str] = []
    cons: List[str] = []
    benefits: List[str] = []
    source: Optional[ProfileSource] = None
    last_updated: Optional[datetime] = None


REQUIRED_SCALARS = (
    "industry", "founded", "headquarters", "employee_count", "revenue", "website"
)


class CompanyProfile(CamelModel):
    """Fully normalized company record returned to callers."""
    name: str = Field(..., min_length=1)
    description: str
    extended_description: List[str] = []
    industry: str = NOT_SPECIFIED
    founded: str = NOT_SPECIFIED
    headquarters: str = NOT_SPECIFIED
    employee_count: str = NOT_SPECIFIED
    revenue: str = NOT_SPECIFIED
    website: str = NOT_SPECIFIED
    key_people: List[str] = []
    business_segments: List[str] = []
    technologies: List[str] = []
    products: List[str] = []
    services: List[str] = []
    culture: Optional[CompanyCulture] = None
    interview_process: Optional[InterviewProcess] = None
    hiring_process: Optional[Dict[str, Any]] = None
    career_growth: Optional[Dict[str, Any]] = None
    rating: Optional[str] = None
    pros: List[str] = []
    cons: List[str] = []
    benefits: List[str] = []
    source: ProfileSource
    last_updated: datetime

    @field_validator(*REQUIRED_SCALARS, mode="before")
    @classmethod
    def _scalar_never_empty(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return NOT_SPECIFIED
        return value

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value


class SearchResult(CamelModel):
    name: str
    industry: str = NOT_SPECIFIED
    headquarters: str = NOT_SPECIFIED


class ResolutionResult(BaseModel):
    """Single tagged result threaded through resolver, services and routes."""
    success: bool
    data: Optional[CompanyProfile] = None
    error: Optional[str] = None

    @property
    def source(self) -> Optional[ProfileSource]:
        return self.data.source if self.data else None


# ============================================================
# DATASET
# ============================================================

VALID_SIZE_RANGES = (
    "Self-employed",
    "1-10",
    "11-50",
    "51-200",
    "201-500",
    "501-1000",
    "1001-5000",
    "5001-10000",
    "5001+",
    "10001+",
)


# ============================================================
# VIDEO SEARCH
# ============================================================

class VideoCandidate(CamelModel):
    video_id: str
    title: str = ""
    description: str = ""
    channel_title: str = ""
    channel_id: str = ""
    thumbnails: Dict[str, Any] = {}
    published_at: Optional[datetime] = None


# ============================================================
# API SCHEMAS
# ============================================================

class CompanyDetailResponse(BaseModel):
    success: bool
    data: Optional[CompanyProfile] = None
    source: Optional[str] = None
    error: Optional[str] = None
    timestamp: datetime


class CompanyListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[SearchResult]
    timestamp: datetime


class JobQueryRequest(BaseModel):
    job_description: Optional[str] = None


class JobQueryResponse(BaseModel):
    success: bool
    job_details: Dict[str, Any]
    company_info: Optional[Dict[str, Any]] = None
    timestamp: datetime


class VideoSearchResponse(CamelModel):
    success: bool = True
    items: List[VideoCandidate]
    page_info: Dict[str, int]
    next_page_token: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    timestamp: datetime
