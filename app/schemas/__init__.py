"""
Schemas module - domain models and request/response schemas.

All of them live in app/schemas/schemas.py:
- Domain: CompanyProfile, PartialProfile, VideoCandidate, ResolutionResult
- API: CompanyDetailResponse, CompanyListResponse, JobQueryResponse, ...
"""
