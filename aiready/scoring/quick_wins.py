"""Rank crawl issues into quick wins: the fixes that recover the most score."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from aiready.audit.base import IssueDefinition
from aiready.audit.definitions import ISSUE_DEFINITIONS


@dataclass(frozen=True)
class QuickWin:
    """One issue code aggregated across a crawl."""
    code: str
    message: str
    recommendation: str
    effort_level: str
    score_impact: int
    affected_pages: int
    implementation_snippet: str | None = None

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "recommendation": self.recommendation,
            "effort_level": self.effort_level,
            "score_impact": self.score_impact,
            "affected_pages": self.affected_pages,
            "implementation_snippet": self.implementation_snippet,
        }


def _get(issue: Any, name: str, default=None):
    if isinstance(issue, Mapping):
        return issue.get(name, default)
    return getattr(issue, name, default)


def get_quick_wins(
    issues: Iterable[Any],
    *,
    definitions: Mapping[str, IssueDefinition] = ISSUE_DEFINITIONS,
    limit: int | None = None,
) -> list[QuickWin]:
    """Group unresolved issues by code and rank them.

    Impact and effort come from the catalog rather than from the per-page
    issue instances, so the ranking reflects what a fix is worth in general.
    Codes without a catalog entry, or with no nominal impact, are dropped.

    Args:
        issues: ``CrawlIssue`` objects or mappings with ``code`` and
            optionally ``page_id`` and ``resolved``
        definitions: Issue catalog
        limit: Maximum number of wins to return (all when None)

    Returns:
        Quick wins sorted by absolute impact, then by affected pages. Equal
        entries keep the order their code was first seen.
    """
    pages_by_code: dict[str, set] = {}
    for index, issue in enumerate(issues):
        if _get(issue, "resolved", False):
            continue
        code = _get(issue, "code")
        if not isinstance(code, str):
            continue
        page_id = _get(issue, "page_id")
        # issues without a page count once each
        key = page_id if page_id is not None else ("__unbound__", index)
        pages_by_code.setdefault(code, set()).add(key)

    wins: list[QuickWin] = []
    for code, pages in pages_by_code.items():
        definition = definitions.get(code)
        if definition is None or definition.score_impact == 0:
            continue
        wins.append(QuickWin(
            code=code,
            message=definition.message,
            recommendation=definition.recommendation,
            effort_level=definition.effort_level.value,
            score_impact=definition.score_impact,
            affected_pages=len(pages),
            implementation_snippet=definition.implementation_snippet,
        ))

    wins.sort(key=lambda w: (-abs(w.score_impact), -w.affected_pages))
    if limit is not None:
        wins = wins[:max(0, limit)]
    return wins
