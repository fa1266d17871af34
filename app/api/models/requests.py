"""API request models."""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

Severity = Literal["critical", "warning", "info"]


class ScoreRequest(BaseModel):
    """Request body for scoring one page."""

    signals: dict[str, Any] = Field(
        ...,
        description="Extracted page signals; url and status_code are required",
        examples=[{
            "url": "https://example.com/blog/post",
            "status_code": 200,
            "title": "How to prepare your site for AI assistants",
            "word_count": 1200,
        }],
    )
    page_id: str | None = Field(default=None, description="Identifier carried into the result")


class ClassifyRequest(BaseModel):
    """Request body for content-type classification."""

    url: str = Field(..., min_length=1, examples=["https://example.com/docs/setup"])
    schema_types: list[str] = Field(default_factory=list, examples=[["TechArticle"]])


class CrawlIssueItem(BaseModel):
    """An issue occurrence on a page of a crawl."""

    page_id: str | None = None
    code: str = Field(..., min_length=1, examples=["MISSING_TITLE"])
    category: str | None = None
    severity: Severity | None = None
    resolved: bool = False


class QuickWinsRequest(BaseModel):
    """Request body for quick-win ranking."""

    issues: list[CrawlIssueItem]
    limit: int | None = Field(default=None, ge=0, description="Defaults to the configured limit")


class PlatformReadinessRequest(BaseModel):
    """Request body for per-platform readiness."""

    issues: list[CrawlIssueItem]


class FactItem(BaseModel):
    text: str
    citability_score: float
    source: str | None = None


class CitationReadinessRequest(BaseModel):
    """Request body for citation readiness.

    When ``signals`` is given, rubric, schema and link inputs are read from it
    and the explicit fields are ignored.
    """

    signals: dict[str, Any] | None = None
    citation_worthiness: float | None = None
    schema_types: list[str] = Field(default_factory=list)
    structured_data_count: int = Field(default=0, ge=0)
    external_link_count: int = Field(default=0, ge=0)
    facts: list[FactItem] = Field(default_factory=list)


class CompetitorMentionItem(BaseModel):
    competitor: str | None = None
    mentioned: bool = False


class VisibilityCheckItem(BaseModel):
    llm_provider: str
    brand_mentioned: bool = False
    competitor_mentions: list[CompetitorMentionItem] = Field(default_factory=list)


class VisibilityScoreRequest(BaseModel):
    """Request body for the AI visibility score.

    Pass normalized rates directly, or raw ``checks`` to aggregate first.
    """

    llm_mention_rate: float = 0.0
    ai_search_presence_rate: float = 0.0
    share_of_voice: float = 0.0
    backlink_authority_signal: float = 0.0
    checks: list[VisibilityCheckItem] | None = None
    referring_domains: int = Field(default=0, ge=0)


class CategoryScores(BaseModel):
    overall_score: int = Field(..., ge=0, le=100)
    technical_score: int = Field(..., ge=0, le=100)
    content_score: int = Field(..., ge=0, le=100)
    ai_readiness_score: int = Field(..., ge=0, le=100)
    performance_score: int = Field(..., ge=0, le=100)


class BenchmarkItem(CategoryScores):
    competitor_domain: str = Field(..., min_length=1, examples=["competitor.com"])
    created_at: datetime | None = None
    letter_grade: str | None = None


class BenchmarkCompareRequest(BaseModel):
    """Project scores and competitor benchmark rows, newest first."""

    project: CategoryScores
    benchmarks: list[BenchmarkItem]


class PageItem(BaseModel):
    id: str
    url: str
    word_count: int = Field(default=0, ge=0)
    title: str | None = None


class ScoreItem(BaseModel):
    page_id: str
    overall_score: int = Field(..., ge=0, le=100)
    technical_score: int | None = Field(default=None, ge=0, le=100)
    content_score: int | None = Field(default=None, ge=0, le=100)
    ai_readiness_score: int | None = Field(default=None, ge=0, le=100)
    performance_score: int | None = Field(default=None, ge=0, le=100)


class IssueItem(BaseModel):
    page_id: str
    code: str
    category: str | None = None
    severity: Severity | None = None


class CrawlItem(BaseModel):
    """One crawl with its pages, scores and issues."""

    id: str
    status: str = "complete"
    created_at: datetime | None = None
    pages: list[PageItem] = Field(default_factory=list)
    scores: list[ScoreItem] = Field(default_factory=list)
    issues: list[IssueItem] = Field(default_factory=list)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC so crawls stay comparable."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class ProgressRequest(BaseModel):
    """A project's crawl history, in any order."""

    crawls: list[CrawlItem]


class InsightsRequest(BaseModel):
    """A finished crawl to snapshot into insights."""

    crawl_id: str
    project_id: str
    pages: list[PageItem] = Field(default_factory=list)
    scores: list[ScoreItem] = Field(default_factory=list)
    issues: list[IssueItem] = Field(default_factory=list)
