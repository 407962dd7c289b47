"""
Interview Video Search

Per-request pipeline: build query variants -> fetch the first three in
parallel -> score -> sort -> de-duplicate -> truncate.

Scoring is a plain weighted sum over lowercase title, description and
channel name. The score is never returned to callers.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import ValidationError

from app.core.exceptions import ConfigurationError, InputValidationError
from app.schemas.schemas import VideoCandidate
from app.services.http_fetcher import HttpFetcher

logger = logging.getLogger(__name__)

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
GENERIC_FALLBACK_QUERY = "job interview tips and common questions"
PARALLEL_QUERY_LIMIT = 3


# ============================================================
# VOCABULARY & WEIGHTS
# ============================================================

PRIMARY_INTERVIEW_TERMS = [
    "interview questions", "interview experience", "interview process",
    "technical interview", "coding interview", "behavioral interview",
    "interview preparation", "system design interview",
]
SECONDARY_INTERVIEW_TERMS = [
    "interview tips", "interview guide", "how to prepare", "job interview", "hiring process",
]
TERTIARY_INTERVIEW_TERMS = ["career advice", "job search", "tech skills"]

CAREER_CHANNEL_TERMS = ["career", "job", "interview coach", "tech interview", "hr", "recruiting"]

PROMOTIONAL_TERMS = [
    "sponsored", "discount", "promo code", "coupon", "buy now", "giveaway",
    "limited offer", "affiliate",
]

JOB_TITLE_STOPWORDS = {"lead", "senior", "junior", "the", "and", "for", "with"}

# (title weight, description weight)
WEIGHT_COMPANY_PHRASE = (8.0, 4.0)
WEIGHT_COMPANY_WORD = (2.0, 1.0)
WEIGHT_JOB_PHRASE = (6.0, 3.0)
WEIGHT_JOB_WORD = (1.5, 0.5)
WEIGHT_PRIMARY = (5.0, 2.5)
WEIGHT_SECONDARY = (3.0, 1.5)
WEIGHT_TERTIARY = (1.0, 0.5)
WEIGHT_PROMOTIONAL = (-5.0, -2.0)
WEIGHT_CAREER_CHANNEL = 2.0
WEIGHT_COMPANY_CHANNEL = 3.0


class ScoredVideo(NamedTuple):
    score: float
    video: VideoCandidate


def _has_phrase(text: str, phrase: str) -> bool:
    """Whole-word containment ('hr' does not match 'three')."""
    if not phrase:
        return False
    return re.search(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)", text) is not None


# ============================================================
# QUERY GENERATION
# ============================================================

def build_query_variants(company: str, job_title: str) -> List[str]:
    """Most specific first; the generic fallback is always last."""
    company = (company or "").strip()
    job_title = (job_title or "").strip()

    if company and job_title:
        variants = [
            f"{company} {job_title} interview questions and answers",
            f"{company} {job_title} interview experience process tips",
            f"how to prepare for {job_title} interview at {company}",
        ]
    elif company:
        variants = [
            f"{company} interview questions and answers",
            f"{company} interview experience process tips",
            f"{company} hiring process interview tips",
        ]
    elif job_title:
        variants = [
            f"{job_title} interview questions and answers",
            f"{job_title} interview experience tips",
            f"how to prepare for {job_title} interview",
        ]
    else:
        variants = []

    variants.append(GENERIC_FALLBACK_QUERY)
    return variants


_QUERY_INTERVIEW_TERMS = [
    "interview experience", "interview questions", "interview tips", "interview process", "interview",
]


def derive_job_title_from_query(query: str) -> str:
    """
    'Acme Backend Engineer interview experience' -> 'Acme Backend Engineer'.
    Cuts at the last occurrence of the first interview term found.
    Long results keep only the first 10 words.
    """
    query = (query or "").strip()
    lowered = query.lower()
    base = query
    for term in _QUERY_INTERVIEW_TERMS:
        index = lowered.rfind(term)
        if index != -1:
            base = query[:index].strip()
            break
    return cap_job_title(base)


def cap_job_title(job_title: str) -> str:
    """Titles over 100 characters keep only their first 10 words."""
    if len(job_title) > 100:
        return " ".join(job_title.split()[:10])
    return job_title


# ============================================================
# SCORING
# ============================================================

def _recency_bonus(published_at: Optional[datetime], now: datetime) -> float:
    if published_at is None:
        return 0.0
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)
    age_years = (now - published_at).days / 365.25
    if age_years < 1:
        return 3.0
    if age_years < 3:
        return 1.5
    if age_years <= 5:
        return 0.0
    return -2.0


def _weighted_terms(title: str, description: str, terms: List[str], weights) -> float:
    score = 0.0
    for term in terms:
        if _has_phrase(title, term):
            score += weights[0]
        if _has_phrase(description, term):
            score += weights[1]
    return score


def score_video(
    video: VideoCandidate,
    company: str,
    job_title: str,
    now: Optional[datetime] = None,
) -> float:
    now = now or datetime.now(timezone.utc)
    title = video.title.lower()
    description = video.description.lower()
    channel = video.channel_title.lower()
    company = (company or "").strip().lower()
    job_title = (job_title or "").strip().lower()
    score = 0.0

    if company:
        if _has_phrase(title, company):
            score += WEIGHT_COMPANY_PHRASE[0]
        elif _has_phrase(description, company):
            score += WEIGHT_COMPANY_PHRASE[1]
        company_words = [w for w in company.split() if len(w) > 2]
        score += _weighted_terms(title, description, company_words, WEIGHT_COMPANY_WORD)
        if _has_phrase(channel, company):
            score += WEIGHT_COMPANY_CHANNEL

    if job_title:
        if _has_phrase(title, job_title):
            score += WEIGHT_JOB_PHRASE[0]
        elif _has_phrase(description, job_title):
            score += WEIGHT_JOB_PHRASE[1]
        job_words = [w for w in job_title.split() if len(w) > 3 and w not in JOB_TITLE_STOPWORDS]
        score += _weighted_terms(title, description, job_words, WEIGHT_JOB_WORD)

    score += _weighted_terms(title, description, PRIMARY_INTERVIEW_TERMS, WEIGHT_PRIMARY)
    score += _weighted_terms(title, description, SECONDARY_INTERVIEW_TERMS, WEIGHT_SECONDARY)
    score += _weighted_terms(title, description, TERTIARY_INTERVIEW_TERMS, WEIGHT_TERTIARY)
    score += _weighted_terms(title, description, PROMOTIONAL_TERMS, WEIGHT_PROMOTIONAL)

    for term in CAREER_CHANNEL_TERMS:
        if _has_phrase(channel, term):
            score += WEIGHT_CAREER_CHANNEL

    score += _recency_bonus(video.published_at, now)
    return score


def rank_videos(
    videos: List[VideoCandidate],
    company: str,
    job_title: str,
    max_results: int,
    now: Optional[datetime] = None,
) -> List[VideoCandidate]:
    """Stable sort by score (best first), keep the first copy of each id, truncate."""
    scored = [ScoredVideo(score_video(v, company, job_title, now), v) for v in videos]
    scored.sort(key=lambda s: s.score, reverse=True)

    seen = set()
    ranked = []
    for item in scored:
        if item.video.video_id in seen:
            continue
        seen.add(item.video.video_id)
        ranked.append(item.video)
        if len(ranked) >= max_results:
            break
    return ranked


# ============================================================
# SERVICE
# ============================================================

def parse_search_items(payload: Dict[str, Any]) -> List[VideoCandidate]:
    videos = []
    for item in payload.get("items", []):
        video_id = (item.get("id") or {}).get("videoId")
        if not video_id:
            continue
        snippet = item.get("snippet") or {}
        try:
            videos.append(VideoCandidate(
                video_id=video_id,
                title=snippet.get("title", ""),
                description=snippet.get("description", ""),
                channel_title=snippet.get("channelTitle", ""),
                channel_id=snippet.get("channelId", ""),
                thumbnails=snippet.get("thumbnails") or {},
                published_at=snippet.get("publishedAt"),
            ))
        except ValidationError as e:
            logger.warning("Skipping malformed video %r: %s", video_id, e)
    return videos


class VideoSearchService:
    def __init__(self, fetcher: HttpFetcher, api_key: str):
        self.fetcher = fetcher
        self.api_key = api_key

    async def _fetch(self, query: str, max_results: int) -> List[VideoCandidate]:
        payload = await self.fetcher.get_json(YOUTUBE_SEARCH_URL, params={
            "part": "snippet",
            "q": query,
            "maxResults": max_results * 2,
            "type": "video",
            "relevanceLanguage": "en",
            "videoEmbeddable": "true",
            "key": self.api_key,
        })
        return parse_search_items(payload)

    async def _fetch_quietly(self, query: str, max_results: int) -> List[VideoCandidate]:
        try:
            return await self._fetch(query, max_results)
        except Exception as e:
            logger.warning("YouTube query %r failed: %r", query, e)
            return []

    async def search(self, company: str, job_title: str, max_results: int = 6) -> List[VideoCandidate]:
        if not self.api_key:
            raise ConfigurationError("YouTube API key is not configured")
        company = (company or "").strip()
        job_title = (job_title or "").strip()
        if not company and not job_title:
            raise InputValidationError("A company name or job title is required")

        variants = build_query_variants(company, job_title)
        batches = await asyncio.gather(
            *(self._fetch_quietly(q, max_results) for q in variants[:PARALLEL_QUERY_LIMIT])
        )
        videos = [video for batch in batches for video in batch]

        if not videos:
            logger.info("No videos for %r / %r, trying generic query", company, job_title)
            videos = await self._fetch_quietly(GENERIC_FALLBACK_QUERY, max_results)

        ranked = rank_videos(videos, company, job_title, max_results)
        logger.info("Returning %d videos for %r / %r", len(ranked), company, job_title)
        return ranked
