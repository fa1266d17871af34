"""Crawl and page insight snapshots for later retrieval without recomputation."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Protocol

from aiready.config.settings import InsightSettings, settings
from aiready.logger import get_logger
from aiready.platforms.readiness import evaluate_platform_readiness
from aiready.progress.delta import IssueRecord, PageRecord, ScoreRecord
from aiready.scoring.grades import letter_grade, round_half_up_1

log = get_logger("insights")

GRADES = ("A", "B", "C", "D", "F")
SEVERITY_RANK = {"critical": 3, "warning": 2, "info": 1}


@dataclass(frozen=True)
class CaptureArgs:
    crawl_id: str
    project_id: str
    scores: tuple[ScoreRecord, ...] = ()
    issues: tuple[IssueRecord, ...] = ()
    pages: tuple[PageRecord, ...] = ()


@dataclass(frozen=True)
class InsightRow:
    crawl_id: str
    project_id: str
    category: str
    type: str
    severity: str
    headline: str
    summary: str
    data: dict = field(default_factory=dict)
    page_id: str | None = None
    url: str | None = None

    def to_dict(self) -> dict:
        row = {
            "crawl_id": self.crawl_id,
            "project_id": self.project_id,
            "category": self.category,
            "type": self.type,
            "severity": self.severity,
            "headline": self.headline,
            "summary": self.summary,
            "data": self.data,
        }
        if self.page_id is not None:
            row["page_id"] = self.page_id
            row["url"] = self.url
        return row


@dataclass(frozen=True)
class InsightSet:
    crawl_insights: list[InsightRow] = field(default_factory=list)
    page_insights: list[InsightRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "crawl_insights": [row.to_dict() for row in self.crawl_insights],
            "page_insights": [row.to_dict() for row in self.page_insights],
        }


class InsightRepository(Protocol):
    def replace_for_crawl(self, crawl_id: str, rows: list[InsightRow]) -> None: ...


def _average(values) -> float:
    present = [v for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)]
    if not present:
        return 0.0
    return round_half_up_1(sum(present) / len(present))


def _severity_rank(severity: str | None) -> int:
    return SEVERITY_RANK.get(severity or "", 0)


def _score_summary(args: CaptureArgs) -> InsightRow:
    grades = Counter(letter_grade(s.overall_score) for s in args.scores)
    averages = {
        "overall": _average(s.overall_score for s in args.scores),
        "technical": _average(s.technical_score for s in args.scores),
        "content": _average(s.content_score for s in args.scores),
        "ai_readiness": _average(s.ai_readiness_score for s in args.scores),
        "performance": _average(s.performance_score for s in args.scores),
    }
    return InsightRow(
        crawl_id=args.crawl_id,
        project_id=args.project_id,
        category="summary",
        type="score_summary",
        severity="info",
        headline="Score overview",
        summary=f"Average overall score {averages['overall']}",
        data={
            "averages": averages,
            "grade_distribution": [{"grade": g, "count": grades.get(g, 0)} for g in GRADES],
            "sample_size": len(args.scores),
        },
    )


def _issue_distribution(args: CaptureArgs, config: InsightSettings) -> InsightRow:
    totals: Counter = Counter()
    by_code: dict[str, dict[str, Any]] = {}
    for issue in args.issues:
        totals[issue.severity] += 1
        entry = by_code.setdefault(
            issue.code,
            {"code": issue.code, "count": 0, "severity": issue.severity, "category": issue.category},
        )
        entry["count"] += 1
        if _severity_rank(issue.severity) > _severity_rank(entry["severity"]):
            entry["severity"] = issue.severity

    top_issues = sorted(by_code.values(), key=lambda e: -e["count"])[:config.top_issue_count]
    return InsightRow(
        crawl_id=args.crawl_id,
        project_id=args.project_id,
        category="issue",
        type="issue_distribution",
        severity="warning" if args.issues else "info",
        headline="Issue snapshot",
        summary=f"{len(args.issues)} issues detected across the crawl",
        data={"totals": dict(totals), "top_issues": top_issues},
    )


def _content_depth(args: CaptureArgs, config: InsightSettings) -> InsightRow:
    word_counts = [page.word_count or 0 for page in args.pages]
    thin = sum(1 for count in word_counts if count < config.thin_page_words)
    return InsightRow(
        crawl_id=args.crawl_id,
        project_id=args.project_id,
        category="content",
        type="content_depth",
        severity="warning" if thin else "info",
        headline="Content depth",
        summary=f"{thin} pages under {config.thin_page_words} words",
        data={
            "avg_word_count": _average(word_counts),
            "pages_below_threshold": thin,
            "total_pages": len(args.pages),
        },
    )


def _platform_readiness(args: CaptureArgs, config: InsightSettings) -> InsightRow:
    platforms = evaluate_platform_readiness(args.issues)
    failing = [p.platform for p in platforms if p.pass_rate < config.platform_warning_pass_rate]
    return InsightRow(
        crawl_id=args.crawl_id,
        project_id=args.project_id,
        category="platform",
        type="platform_readiness",
        severity="warning" if failing else "info",
        headline="Assistant readiness",
        summary=f"Tracked across {len(platforms)} assistants",
        data={
            "platforms": [
                {
                    "platform": p.platform,
                    "pass_rate": p.pass_rate,
                    "failing_checks": [c.label for c in p.checks if not c.passed],
                }
                for p in platforms
            ],
        },
    )


def _page_hotspots(args: CaptureArgs, config: InsightSettings) -> list[InsightRow]:
    issues_by_page: dict[str, list[IssueRecord]] = {}
    for issue in args.issues:
        issues_by_page.setdefault(issue.page_id, []).append(issue)
    score_by_page = {s.page_id: s.overall_score for s in args.scores}

    pages = [page for page in args.pages if issues_by_page.get(page.id)]
    pages.sort(key=lambda page: -len(issues_by_page[page.id]))

    rows = []
    for page in pages[:config.max_page_insights]:
        page_issues = sorted(issues_by_page[page.id], key=lambda i: -_severity_rank(i.severity))
        top = [
            {"code": i.code, "severity": i.severity, "category": i.category}
            for i in page_issues[:config.page_top_issue_count]
        ]
        severities = Counter(i.severity for i in page_issues)
        score = score_by_page.get(page.id)
        rows.append(InsightRow(
            crawl_id=args.crawl_id,
            project_id=args.project_id,
            category="issue",
            type="page_hotspot",
            severity=top[0]["severity"] or "info",
            headline=page.title or page.url,
            summary=f"{len(page_issues)} issues detected on this page",
            data={
                "issue_count": len(page_issues),
                "severity_breakdown": {s: severities.get(s, 0) for s in SEVERITY_RANK},
                "grade": letter_grade(score) if score is not None else None,
                "issues": top,
            },
            page_id=page.id,
            url=page.url,
        ))
    return rows


def capture_insights(args: CaptureArgs, *, config: InsightSettings | None = None) -> InsightSet:
    """Shape a crawl's scores, issues and pages into insight rows.

    Returns four crawl-level rows (score summary, issue distribution, content
    depth, platform readiness) and one hotspot row per page with issues,
    most issues first.
    """
    config = config or settings.insights
    return InsightSet(
        crawl_insights=[
            _score_summary(args),
            _issue_distribution(args, config),
            _content_depth(args, config),
            _platform_readiness(args, config),
        ],
        page_insights=_page_hotspots(args, config),
    )


class InsightCaptureService:
    """Persist insight snapshots, replacing any earlier set for the crawl."""

    def __init__(self, crawl_insights: InsightRepository, page_insights: InsightRepository):
        self.crawl_insights = crawl_insights
        self.page_insights = page_insights

    def capture(self, args: CaptureArgs) -> InsightSet:
        insights = capture_insights(args)
        self.crawl_insights.replace_for_crawl(args.crawl_id, insights.crawl_insights)
        self.page_insights.replace_for_crawl(args.crawl_id, insights.page_insights)
        log.info(
            "Captured %d crawl and %d page insights for crawl %s",
            len(insights.crawl_insights),
            len(insights.page_insights),
            args.crawl_id,
        )
        return insights
