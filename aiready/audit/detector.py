"""Issue detection over page signals."""
from __future__ import annotations

from aiready.audit.base import Issue, RuleResult
from aiready.audit.registry import RuleRegistry, default_registry
from aiready.logger import get_logger
from aiready.signals import PageSignals

log = get_logger("audit")


def run_checks(signals: PageSignals, *, registry: RuleRegistry | None = None) -> list[RuleResult]:
    """Evaluate every registered rule against the page, in registration order."""
    registry = registry or default_registry
    return registry.run_all(signals)


def sort_issues(issues: list[Issue]) -> list[Issue]:
    """Order by severity (critical first); ties keep their input order."""
    return sorted(issues, key=lambda issue: -issue.severity.rank)


def issues_from_results(results: list[RuleResult]) -> list[Issue]:
    return sort_issues([r.issue for r in results if r.issue is not None])


def detect_issues(signals: PageSignals, *, registry: RuleRegistry | None = None) -> list[Issue]:
    """Detect issues on a page.

    Args:
        signals: Validated page signals
        registry: Rule registry to use (defaults to all built-in rules)

    Returns:
        Issues sorted critical → warning → info. The same signals always
        produce the same list.
    """
    issues = issues_from_results(run_checks(signals, registry=registry))
    log.debug("Detected %d issues on %s", len(issues), signals.url)
    return issues
