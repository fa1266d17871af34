"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Grade = Literal["A", "B", "C", "D", "F"]

# === Page Score Models ===


class IssueModel(BaseModel):
    """Detected issue on a page."""

    code: str
    category: Literal["technical", "content", "ai_readiness", "performance"]
    severity: Literal["critical", "warning", "info"]
    message: str
    recommendation: str
    score_impact: int = Field(..., le=0, description="Deduction applied for this instance")
    data: dict[str, Any] = Field(default_factory=dict)


class RecommendationModel(BaseModel):
    issue_code: str
    title: str
    description: str
    priority: Literal["high", "medium", "low"]
    effort: Literal["quick", "moderate", "significant"]
    impact: Literal["high", "medium", "low"]
    estimated_improvement: int
    affected_platforms: list[str] = Field(default_factory=list)
    steps: list[str] | None = None


class StrengthModel(BaseModel):
    category: str
    title: str
    description: str


class PageScoreResponse(BaseModel):
    """Composite score of one page."""

    status: Literal["scored"] = "scored"
    page_id: str | None = None
    url: str
    overall_score: int = Field(..., ge=0, le=100)
    technical_score: int = Field(..., ge=0, le=100)
    content_score: int = Field(..., ge=0, le=100)
    ai_readiness_score: int = Field(..., ge=0, le=100)
    performance_score: int = Field(..., ge=0, le=100)
    letter_grade: Grade
    content_type: str
    caps_applied: list[str] = Field(default_factory=list)
    issues: list[IssueModel] = Field(default_factory=list)
    recommendations: list[RecommendationModel] = Field(default_factory=list)
    strengths: list[StrengthModel] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "scored",
                "page_id": None,
                "url": "https://example.com/blog/post",
                "overall_score": 74,
                "technical_score": 82,
                "content_score": 71,
                "ai_readiness_score": 68,
                "performance_score": 80,
                "letter_grade": "C",
                "content_type": "blog_post",
                "caps_applied": [],
                "issues": [],
                "recommendations": [],
                "strengths": [],
            }
        }
    }


class ContentTypeResponse(BaseModel):
    type: str
    confidence: float = Field(..., ge=0, le=1)
    signals: list[str] = Field(default_factory=list)


# === Crawl Models ===


class QuickWinModel(BaseModel):
    code: str
    message: str
    recommendation: str
    effort_level: Literal["low", "medium", "high"]
    score_impact: int
    affected_pages: int
    implementation_snippet: str | None = None


class QuickWinsResponse(BaseModel):
    quick_wins: list[QuickWinModel]


class PlatformCheckModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    factor: str
    label: str
    importance: Literal["critical", "important", "recommended"]
    passed: bool = Field(..., alias="pass")
    status: Literal["pass", "critical_fail", "needs_attention"]


class PlatformReadinessModel(BaseModel):
    platform: str
    pass_rate: int = Field(..., ge=0, le=100)
    checks: list[PlatformCheckModel]


class PlatformReadinessResponse(BaseModel):
    platforms: list[PlatformReadinessModel]


# === GEO Models ===


class CitableFact(BaseModel):
    text: str
    citability_score: float
    source: str | None = None


class CitationComponents(BaseModel):
    fact_citability: int
    llm_citation_worthiness: int
    schema_quality: int


class CitationReadinessResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    components: CitationComponents
    top_citable_facts: list[CitableFact]


class VisibilityScoreResponse(BaseModel):
    overall: int = Field(..., ge=0, le=100)
    grade: Grade
    breakdown: dict[str, int]
    rates: dict[str, float] = Field(..., description="Normalized rates the score was computed from")


class BenchmarkComparisonResponse(BaseModel):
    summary: dict[str, Any]
    diffs: list[dict[str, Any]]
    competitors: list[dict[str, Any]]
    insights: list[str]


# === Progress Models ===


class PageMovementModel(BaseModel):
    url: str
    current_score: int
    previous_score: int
    delta: int


class ProgressDeltaModel(BaseModel):
    current_crawl_id: str
    previous_crawl_id: str
    current_score: float
    previous_score: float
    score_delta: float
    velocity: float
    category_deltas: dict[str, float]
    issues_fixed: int
    issues_new: int
    issues_persisting: int
    top_improved_pages: list[PageMovementModel]
    top_regressed_pages: list[PageMovementModel]
    grade_changes: dict[str, int]


class RegressionModel(BaseModel):
    category: str
    previous_score: float
    current_score: float
    delta: float
    severity: Literal["critical", "warning", "info"]


class ProgressResponse(BaseModel):
    """``progress`` is null until two crawls have completed."""

    progress: ProgressDeltaModel | None = None
    regressions: list[RegressionModel] = Field(default_factory=list)


class InsightRowModel(BaseModel):
    crawl_id: str
    project_id: str
    category: str
    type: str
    severity: Literal["critical", "warning", "info"]
    headline: str
    summary: str
    data: dict[str, Any] = Field(default_factory=dict)
    page_id: str | None = None
    url: str | None = None


class InsightsResponse(BaseModel):
    crawl_insights: list[InsightRowModel]
    page_insights: list[InsightRowModel]


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    timestamp: datetime
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual health check results"
    )
