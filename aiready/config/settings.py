"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class GradeSettings:
    """Letter grade thresholds (inclusive lower bounds)."""
    grade_a_threshold: int = 90
    grade_b_threshold: int = 80
    grade_c_threshold: int = 70
    grade_d_threshold: int = 60


@dataclass
class DetectorThresholds:
    """Thresholds used by the issue detection rules."""
    title_min_length: int = 30
    title_max_length: int = 60
    description_min_length: int = 120
    description_max_length: int = 160

    thin_content_words: int = 200
    min_internal_links: int = 2
    excessive_link_ratio: int = 3
    alt_text_penalty_per_image: int = 3
    alt_text_max_penalty: int = 15
    slow_response_ms: int = 2000

    # LLM rubric scores (0-100) map to a 0-20 deduction
    llm_score_deduction_scale: float = 0.2
    structure_score_poor: int = 50

    flesch_poor: float = 30
    flesch_moderate: float = 50

    direct_answer_min_words: int = 300
    summary_section_min_words: int = 500
    authoritative_citation_min_words: int = 500
    pdf_only_content_max_words: int = 200

    lighthouse_perf_poor: float = 0.5
    lighthouse_perf_moderate: float = 0.8
    lighthouse_seo_min: float = 0.8
    lighthouse_a11y_min: float = 0.7
    lighthouse_bp_min: float = 0.8
    large_page_bytes: int = 3 * 1024 * 1024  # 3 MB


@dataclass
class ScoringSettings:
    """Settings for the composite page score."""
    # Content heuristic reaches full credit at this word count
    word_count_target: int = 1000
    content_llm_blend: float = 0.5
    ai_readiness_llm_blend: float = 0.3
    neutral_performance_score: int = 50

    # Hard caps
    technical_critical_cap: int = 20
    content_critical_cap: int = 20
    ai_readiness_critical_cap: int = 30
    error_status_overall_cap: int = 30
    noindex_overall_cap: int = 50


@dataclass
class CitationSettings:
    """Settings for the citation readiness score."""
    top_fact_count: int = 5
    schema_base_score: int = 40
    schema_first_type_bonus: float = 30
    external_link_bonus_max: int = 5


@dataclass
class ProgressSettings:
    """Settings for crawl-to-crawl progress."""
    top_pages: int = 3
    regression_threshold: int = -5
    regression_critical: int = -15
    regression_warning: int = -10


@dataclass
class InsightSettings:
    """Settings for insight capture."""
    max_page_insights: int = 100
    top_issue_count: int = 5
    page_top_issue_count: int = 3
    thin_page_words: int = 300
    platform_warning_pass_rate: int = 70


@dataclass
class APISettings:
    """API-specific settings."""
    quick_win_limit: int = 10
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class Settings:
    """Main application settings container."""
    grades: GradeSettings = field(default_factory=GradeSettings)
    thresholds: DetectorThresholds = field(default_factory=DetectorThresholds)
    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    citation: CitationSettings = field(default_factory=CitationSettings)
    progress: ProgressSettings = field(default_factory=ProgressSettings)
    insights: InsightSettings = field(default_factory=InsightSettings)
    api: APISettings = field(default_factory=APISettings)

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("AIREADY_DEBUG", "").lower() in ("true", "1", "yes")
        self.log_level = os.environ.get(
            "AIREADY_LOG_LEVEL", "DEBUG" if self.debug else self.log_level
        ).upper()

        # Scoring overrides
        if thin := os.environ.get("AIREADY_THIN_CONTENT_WORDS"):
            self.thresholds.thin_content_words = int(thin)
        if neutral := os.environ.get("AIREADY_NEUTRAL_PERFORMANCE"):
            self.scoring.neutral_performance_score = int(neutral)

        # API overrides
        if limit := os.environ.get("AIREADY_QUICK_WIN_LIMIT"):
            self.api.quick_win_limit = int(limit)
        if cors := os.environ.get("AIREADY_CORS_ORIGINS"):
            self.api.cors_origins = [o.strip() for o in cors.split(",")]


# Global settings instance
settings = Settings()
