"""Tests for interview video search: query variants, scoring and the service."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from app.core.exceptions import ConfigurationError, InputValidationError
from app.schemas.schemas import VideoCandidate
from app.services.video_search import (
    GENERIC_FALLBACK_QUERY,
    VideoSearchService,
    build_query_variants,
    cap_job_title,
    derive_job_title_from_query,
    rank_videos,
    score_video,
)

NOW = datetime(2026, 6, 1, tzinfo=timezone.utc)


def _video(video_id, title="", description="", channel="", published_at=None):
    return VideoCandidate(
        video_id=video_id,
        title=title,
        description=description,
        channel_title=channel,
        published_at=published_at,
    )


def _item(video_id, title):
    return {
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {"title": title, "description": "", "channelTitle": "Some Channel",
                    "channelId": "UC1", "thumbnails": {}, "publishedAt": "2026-01-01T00:00:00Z"},
    }


# =============================================================================
# Query generation
# =============================================================================


class TestQueryVariants:
    def test_company_and_title(self):
        variants = build_query_variants("Google", "Software Engineer")
        assert variants[0] == "Google Software Engineer interview questions and answers"
        assert len(variants) == 4
        assert variants[-1] == GENERIC_FALLBACK_QUERY

    def test_company_only(self):
        variants = build_query_variants("Google", "  ")
        assert all("Google" in v for v in variants[:-1])

    def test_nothing(self):
        assert build_query_variants("", "") == [GENERIC_FALLBACK_QUERY]

    def test_derive_job_title(self):
        assert derive_job_title_from_query("Acme Backend Engineer interview experience") == "Acme Backend Engineer"
        assert derive_job_title_from_query("Data Analyst") == "Data Analyst"

    def test_derive_job_title_truncates_long_queries(self):
        query = " ".join(["word"] * 30)
        assert derive_job_title_from_query(query) == " ".join(["word"] * 10)

    def test_cap_job_title(self):
        long_title = " ".join(["Engineer"] * 15)
        assert cap_job_title(long_title) == " ".join(["Engineer"] * 10)
        assert cap_job_title("Data Analyst") == "Data Analyst"


# =============================================================================
# Scoring
# =============================================================================


class TestScoring:
    def test_relevant_video_outscores_unrelated_one(self):
        relevant = _video("a", title="Google Software Engineer Interview Questions")
        unrelated = _video("b", title="My day in the office")

        assert score_video(relevant, "Google", "Software Engineer", NOW) > score_video(
            unrelated, "Google", "Software Engineer", NOW
        )

    def test_promotional_terms_are_penalized(self):
        clean = _video("a", title="Interview questions")
        promo = _video("b", title="Interview questions promo code inside")
        assert score_video(promo, "", "", NOW) < score_video(clean, "", "", NOW)

    def test_recent_videos_score_higher(self):
        fresh = _video("a", title="Interview tips", published_at=NOW - timedelta(days=100))
        stale = _video("b", title="Interview tips", published_at=NOW - timedelta(days=365 * 7))
        assert score_video(fresh, "", "", NOW) - score_video(stale, "", "", NOW) == pytest.approx(5.0)

    def test_channel_terms_match_whole_words(self):
        three = _video("a", channel="Three Friends")
        hr = _video("b", channel="HR Academy")
        assert score_video(three, "", "", NOW) == 0
        assert score_video(hr, "", "", NOW) == 2.0

    def test_rank_dedupes_and_truncates(self):
        videos = [
            _video("a", title="Cooking"),
            _video("b", title="Google interview questions"),
            _video("b", title="Google interview questions"),
            _video("c", title="Google interview experience"),
        ]
        ranked = rank_videos(videos, "Google", "", max_results=2, now=NOW)
        assert [v.video_id for v in ranked] == ["b", "c"]


# =============================================================================
# Service
# =============================================================================


class TestVideoSearchService:
    @pytest.mark.asyncio
    async def test_missing_api_key(self, mock_fetcher):
        def handler(request):
            raise AssertionError("no request expected")

        service = VideoSearchService(mock_fetcher(handler), api_key="")
        with pytest.raises(ConfigurationError):
            await service.search("Google", "Engineer")

    @pytest.mark.asyncio
    async def test_requires_company_or_title(self, mock_fetcher):
        service = VideoSearchService(mock_fetcher(lambda r: httpx.Response(200, json={})), api_key="k")
        with pytest.raises(InputValidationError):
            await service.search("  ", "")

    @pytest.mark.asyncio
    async def test_merges_variants_and_dedupes(self, mock_fetcher):
        queries = []

        def handler(request):
            queries.append(request.url.params["q"])
            return httpx.Response(200, json={"items": [
                _item("shared", "Google interview questions"),
                _item(f"v{len(queries)}", "Google interview experience"),
            ]})

        service = VideoSearchService(mock_fetcher(handler), api_key="k")
        videos = await service.search("Google", "", max_results=10)

        assert len(queries) == 3
        ids = [v.video_id for v in videos]
        assert ids.count("shared") == 1
        assert sorted(ids) == ["shared", "v1", "v2", "v3"]

    @pytest.mark.asyncio
    async def test_failed_variant_is_skipped(self, mock_fetcher):
        def handler(request):
            if "hiring process" in request.url.params["q"]:
                return httpx.Response(403, json={"error": "quota"})
            return httpx.Response(200, json={"items": [_item("a", "Google interview questions")]})

        videos = await VideoSearchService(mock_fetcher(handler), api_key="k").search("Google", "")
        assert [v.video_id for v in videos] == ["a"]

    @pytest.mark.asyncio
    async def test_generic_fallback_when_nothing_found(self, mock_fetcher):
        queries = []

        def handler(request):
            query = request.url.params["q"]
            queries.append(query)
            if query == GENERIC_FALLBACK_QUERY:
                return httpx.Response(200, json={"items": [_item("g", "Job interview tips")]})
            return httpx.Response(200, json={"items": []})

        videos = await VideoSearchService(mock_fetcher(handler), api_key="k").search("", "Data Analyst")

        assert queries[-1] == GENERIC_FALLBACK_QUERY
        assert [v.video_id for v in videos] == ["g"]

    @pytest.mark.asyncio
    async def test_malformed_item_is_skipped(self, mock_fetcher):
        bad = _item("bad", "Google interview questions")
        bad["snippet"]["publishedAt"] = "not-a-date"

        def handler(request):
            return httpx.Response(200, json={"items": [_item("good", "Google interview questions"), bad]})

        videos = await VideoSearchService(mock_fetcher(handler), api_key="k").search("Google", "")
        assert [v.video_id for v in videos] == ["good"]
