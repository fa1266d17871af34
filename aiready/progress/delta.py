"""Crawl-to-crawl progress: score deltas, issue churn and top movers."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from aiready.config.settings import ProgressSettings, settings
from aiready.logger import get_logger
from aiready.scoring.grades import letter_grade, round_half_up_1

log = get_logger("progress")

CATEGORY_FIELDS = {
    "technical": "technical_score",
    "content": "content_score",
    "ai_readiness": "ai_readiness_score",
    "performance": "performance_score",
}

REGRESSION_FIELDS = [
    ("overall_score", "Overall"),
    ("technical_score", "Technical"),
    ("content_score", "Content"),
    ("ai_readiness_score", "AI Readiness"),
    ("performance_score", "Performance"),
]


@dataclass(frozen=True)
class PageRecord:
    id: str
    url: str
    word_count: int = 0
    title: str | None = None


@dataclass(frozen=True)
class ScoreRecord:
    page_id: str
    overall_score: int
    technical_score: int | None = None
    content_score: int | None = None
    ai_readiness_score: int | None = None
    performance_score: int | None = None


@dataclass(frozen=True)
class IssueRecord:
    page_id: str
    code: str
    category: str | None = None
    severity: str | None = None


@dataclass(frozen=True)
class CrawlSnapshot:
    """One crawl's pages, scores and issues."""
    crawl_id: str
    status: str = "complete"
    created_at: datetime | None = None
    pages: tuple[PageRecord, ...] = ()
    scores: tuple[ScoreRecord, ...] = ()
    issues: tuple[IssueRecord, ...] = ()

    @property
    def is_complete(self) -> bool:
        return self.status == "complete"

    def urls_by_page(self) -> dict[str, str]:
        return {page.id: page.url for page in self.pages}


@dataclass(frozen=True)
class PageMovement:
    url: str
    current_score: int
    previous_score: int
    delta: int

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "current_score": self.current_score,
            "previous_score": self.previous_score,
            "delta": self.delta,
        }


@dataclass(frozen=True)
class ProgressDelta:
    current_crawl_id: str
    previous_crawl_id: str
    current_score: float
    previous_score: float
    score_delta: float
    velocity: float
    category_deltas: dict[str, float] = field(default_factory=dict)
    issues_fixed: int = 0
    issues_new: int = 0
    issues_persisting: int = 0
    top_improved_pages: list[PageMovement] = field(default_factory=list)
    top_regressed_pages: list[PageMovement] = field(default_factory=list)
    grade_changes: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "current_crawl_id": self.current_crawl_id,
            "previous_crawl_id": self.previous_crawl_id,
            "current_score": self.current_score,
            "previous_score": self.previous_score,
            "score_delta": self.score_delta,
            "velocity": self.velocity,
            "category_deltas": dict(self.category_deltas),
            "issues_fixed": self.issues_fixed,
            "issues_new": self.issues_new,
            "issues_persisting": self.issues_persisting,
            "top_improved_pages": [p.to_dict() for p in self.top_improved_pages],
            "top_regressed_pages": [p.to_dict() for p in self.top_regressed_pages],
            "grade_changes": dict(self.grade_changes),
        }


@dataclass(frozen=True)
class Regression:
    category: str
    previous_score: float
    current_score: float
    delta: float
    severity: str

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "previous_score": self.previous_score,
            "current_score": self.current_score,
            "delta": self.delta,
            "severity": self.severity,
        }


def _mean(values: Iterable[float | None]) -> float:
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return round_half_up_1(sum(present) / len(present))


def _issue_keys(snapshot: CrawlSnapshot) -> set[tuple[str, str]]:
    # Pages are matched across crawls by URL; page ids differ per crawl
    urls = snapshot.urls_by_page()
    return {(urls.get(issue.page_id, issue.page_id), issue.code) for issue in snapshot.issues}


def _scores_by_url(snapshot: CrawlSnapshot) -> dict[str, int]:
    urls = snapshot.urls_by_page()
    return {
        urls[score.page_id]: score.overall_score
        for score in snapshot.scores
        if score.page_id in urls
    }


def compute_progress(
    current: CrawlSnapshot,
    previous: CrawlSnapshot,
    *,
    config: ProgressSettings | None = None,
) -> ProgressDelta:
    """Compare two crawls of the same project.

    Pages are matched by URL, so a page whose URL changed between crawls
    counts as removed and added rather than moved.

    Args:
        current: The newer crawl
        previous: The older crawl
        config: Progress settings

    Returns:
        ProgressDelta. Swapping the arguments negates every delta and swaps
        fixed/new issue counts and improved/regressed pages.
    """
    config = config or settings.progress

    current_score = _mean(s.overall_score for s in current.scores)
    previous_score = _mean(s.overall_score for s in previous.scores)
    score_delta = round(current_score - previous_score, 1)

    category_deltas = {}
    for category, attr in CATEGORY_FIELDS.items():
        cur = _mean(getattr(s, attr) for s in current.scores)
        prev = _mean(getattr(s, attr) for s in previous.scores)
        category_deltas[category] = round(cur - prev, 1)

    current_issues = _issue_keys(current)
    previous_issues = _issue_keys(previous)

    current_by_url = _scores_by_url(current)
    previous_by_url = _scores_by_url(previous)
    movements = [
        PageMovement(
            url=url,
            current_score=current_by_url[url],
            previous_score=previous_by_url[url],
            delta=current_by_url[url] - previous_by_url[url],
        )
        for url in current_by_url
        if url in previous_by_url
    ]
    improved = sorted((m for m in movements if m.delta > 0), key=lambda m: (-m.delta, m.url))
    regressed = sorted((m for m in movements if m.delta < 0), key=lambda m: (m.delta, m.url))

    grade_changes = {"improved": 0, "regressed": 0, "unchanged": 0}
    for m in movements:
        cur_grade = letter_grade(m.current_score)
        prev_grade = letter_grade(m.previous_score)
        # "A" < "B": alphabetically lower is better
        if cur_grade < prev_grade:
            grade_changes["improved"] += 1
        elif cur_grade > prev_grade:
            grade_changes["regressed"] += 1
        else:
            grade_changes["unchanged"] += 1

    return ProgressDelta(
        current_crawl_id=current.crawl_id,
        previous_crawl_id=previous.crawl_id,
        current_score=current_score,
        previous_score=previous_score,
        score_delta=score_delta,
        # two points only: the delta is the per-crawl velocity
        velocity=score_delta,
        category_deltas=category_deltas,
        issues_fixed=len(previous_issues - current_issues),
        issues_new=len(current_issues - previous_issues),
        issues_persisting=len(current_issues & previous_issues),
        top_improved_pages=improved[:config.top_pages],
        top_regressed_pages=regressed[:config.top_pages],
        grade_changes=grade_changes,
    )


def _sort_time(snapshot: CrawlSnapshot) -> datetime:
    # naive timestamps are taken as UTC so they compare with aware ones
    created_at = snapshot.created_at
    return created_at if created_at.tzinfo else created_at.replace(tzinfo=UTC)


def latest_completed(snapshots: Iterable[CrawlSnapshot], count: int = 2) -> list[CrawlSnapshot]:
    """Newest completed crawls first. Crawls without a timestamp keep their
    list position after the timestamped ones."""
    completed = [s for s in snapshots if s.is_complete]
    dated = [s for s in completed if s.created_at is not None]
    undated = [s for s in completed if s.created_at is None]
    dated.sort(key=_sort_time, reverse=True)
    return (dated + undated)[:count]


def progress_from_history(
    snapshots: Iterable[CrawlSnapshot],
    *,
    config: ProgressSettings | None = None,
) -> ProgressDelta | None:
    """Progress between the two newest completed crawls, or None when there
    are fewer than two."""
    latest = latest_completed(snapshots)
    if len(latest) < 2:
        log.info("Progress unavailable: %d completed crawl(s)", len(latest))
        return None
    return compute_progress(latest[0], latest[1], config=config)


def _classify_regression(delta: float, config: ProgressSettings) -> str:
    if delta <= config.regression_critical:
        return "critical"
    if delta <= config.regression_warning:
        return "warning"
    return "info"


def _score_field(summary: Any, name: str):
    value = summary.get(name) if isinstance(summary, Mapping) else getattr(summary, name, None)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def detect_regressions(
    current: Any,
    previous: Any,
    *,
    config: ProgressSettings | None = None,
) -> list[Regression]:
    """Score drops of at least the regression threshold between two crawl
    summaries (mappings or objects with ``overall_score`` and category
    score fields). Fields missing from either summary are skipped."""
    config = config or settings.progress
    regressions = []
    for attr, label in REGRESSION_FIELDS:
        cur = _score_field(current, attr)
        prev = _score_field(previous, attr)
        if cur is None or prev is None:
            continue
        delta = round(cur - prev, 1)
        if delta <= config.regression_threshold:
            regressions.append(Regression(
                category=label,
                previous_score=prev,
                current_score=cur,
                delta=delta,
                severity=_classify_regression(delta, config),
            ))
    return regressions
