"""Base classes for the issue detection framework."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from aiready.signals import PageSignals


class IssueSeverity(Enum):
    """Severity levels for detected issues."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Higher is more severe."""
        return {"critical": 3, "warning": 2, "info": 1}[self.value]


class IssueCategory(Enum):
    """Score category an issue counts against."""
    TECHNICAL = "technical"
    CONTENT = "content"
    AI_READINESS = "ai_readiness"
    PERFORMANCE = "performance"


class EffortLevel(Enum):
    """Static effort estimate for fixing an issue."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class IssueDefinition:
    """Catalog entry for an issue code.

    Attributes:
        code: Unique issue code (e.g. ``MISSING_TITLE``)
        category: Score category the issue belongs to
        severity: Severity of every occurrence
        score_impact: Nominal score impact (negative); 0 when the impact is
            mapped per page from the LLM rubric
        message: Human-readable description
        recommendation: Suggested fix
        effort_level: Static effort estimate
        max_impact: Largest deduction a single occurrence can carry; used as
            the check's weight in pass rates
        implementation_snippet: Optional copy-paste fix
    """
    code: str
    category: IssueCategory
    severity: IssueSeverity
    score_impact: int
    message: str
    recommendation: str
    effort_level: EffortLevel
    max_impact: int | None = None
    implementation_snippet: str | None = None

    @property
    def weight(self) -> int:
        if self.max_impact is not None:
            return self.max_impact
        return abs(self.score_impact)


@dataclass(frozen=True)
class Issue:
    """A detected deficiency on one page. Never mutated after creation."""
    code: str
    category: IssueCategory
    severity: IssueSeverity
    message: str
    recommendation: str
    score_impact: int
    data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "recommendation": self.recommendation,
            "score_impact": self.score_impact,
            "data": dict(self.data),
        }


@dataclass(frozen=True)
class CrawlIssue:
    """An issue occurrence bound to a page of a crawl."""
    page_id: str
    code: str
    category: IssueCategory
    severity: IssueSeverity
    resolved: bool = False

    def to_dict(self) -> dict:
        return {
            "page_id": self.page_id,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "resolved": self.resolved,
        }


@dataclass(frozen=True)
class Finding:
    """What a failing rule reports back.

    ``impact`` overrides the catalog's nominal deduction for this page
    (positive number of points), and ``message`` overrides its text.
    """
    data: Mapping[str, Any] = field(default_factory=dict)
    impact: int | None = None
    message: str | None = None


@dataclass(frozen=True)
class RuleResult:
    """Result of evaluating a single rule against a page.

    Attributes:
        code: Issue code the rule checks for
        category: Category of that issue code
        applicable: False when an optional input the rule needs is absent
        passed: Whether the page passed the check
        weight: Weight of the check in its category pass rate
        earned: Weight earned (full weight on pass, partial on a mild failure)
        llm_derived: Whether the rule only restates the LLM rubric
        issue: The emitted issue, if the check failed
    """
    code: str
    category: IssueCategory
    applicable: bool
    passed: bool
    weight: int
    earned: int
    llm_derived: bool = False
    issue: Issue | None = None

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "category": self.category.value,
            "applicable": self.applicable,
            "passed": self.passed,
            "weight": self.weight,
            "earned": self.earned,
            "llm_derived": self.llm_derived,
            "issue": self.issue.to_dict() if self.issue else None,
        }


class BaseRule(ABC):
    """Abstract base class for all issue rules.

    Subclasses must implement:
    - code: Issue code emitted on failure
    - check(): Return a Finding on failure or None on pass
    """

    @property
    @abstractmethod
    def code(self) -> str:
        """Issue code this rule emits."""
        pass

    @property
    def llm_derived(self) -> bool:
        """True for rules that only restate the LLM rubric."""
        return False

    def applies(self, signals: PageSignals) -> bool:
        """Whether the optional inputs this rule needs are present."""
        return True

    @abstractmethod
    def check(self, signals: PageSignals) -> Finding | None:
        """Evaluate the rule. Return a Finding when the page fails."""
        pass

    def run(self, signals: PageSignals, definition: IssueDefinition) -> RuleResult:
        """Execute the rule and build the result for its catalog entry."""
        weight = definition.weight
        if not self.applies(signals):
            return RuleResult(
                code=self.code,
                category=definition.category,
                applicable=False,
                passed=True,
                weight=0,
                earned=0,
                llm_derived=self.llm_derived,
            )

        finding = self.check(signals)
        if finding is None:
            return RuleResult(
                code=self.code,
                category=definition.category,
                applicable=True,
                passed=True,
                weight=weight,
                earned=weight,
                llm_derived=self.llm_derived,
            )

        impact = finding.impact if finding.impact is not None else abs(definition.score_impact)
        issue = Issue(
            code=definition.code,
            category=definition.category,
            severity=definition.severity,
            message=finding.message or definition.message,
            recommendation=definition.recommendation,
            score_impact=-impact,
            data=MappingProxyType(dict(finding.data)),
        )
        return RuleResult(
            code=self.code,
            category=definition.category,
            applicable=True,
            passed=False,
            weight=weight,
            earned=max(0, weight - impact),
            llm_derived=self.llm_derived,
            issue=issue,
        )


class FunctionRule(BaseRule):
    """A rule backed by a plain check function.

    Usage:
        FunctionRule("MISSING_H1", _check_missing_h1)
        FunctionRule("LH_SEO_LOW", _check_lh_seo, applies=_has_lighthouse)
    """

    def __init__(
        self,
        code: str,
        check: Callable[[PageSignals], Finding | None],
        *,
        applies: Callable[[PageSignals], bool] | None = None,
        llm_derived: bool = False,
    ):
        self._code = code
        self._check = check
        self._applies = applies
        self._llm_derived = llm_derived

    @property
    def code(self) -> str:
        return self._code

    @property
    def llm_derived(self) -> bool:
        return self._llm_derived

    def applies(self, signals: PageSignals) -> bool:
        if self._applies is None:
            return True
        return self._applies(signals)

    def check(self, signals: PageSignals) -> Finding | None:
        return self._check(signals)
