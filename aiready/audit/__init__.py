"""Issue detection framework."""
from aiready.audit.base import (
    BaseRule,
    CrawlIssue,
    EffortLevel,
    Finding,
    FunctionRule,
    Issue,
    IssueCategory,
    IssueDefinition,
    IssueSeverity,
    RuleResult,
)
from aiready.audit.definitions import ISSUE_DATA_KEYS, ISSUE_DEFINITIONS
from aiready.audit.registry import RuleRegistry, build_default_registry, default_registry

__all__ = [
    "BaseRule",
    "FunctionRule",
    "Finding",
    "RuleResult",
    "Issue",
    "CrawlIssue",
    "IssueCategory",
    "IssueSeverity",
    "EffortLevel",
    "IssueDefinition",
    "ISSUE_DEFINITIONS",
    "ISSUE_DATA_KEYS",
    "RuleRegistry",
    "build_default_registry",
    "default_registry",
]
