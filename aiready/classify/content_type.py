"""Heuristic page content-type classification from URL path and schema types."""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from urllib.parse import urlsplit


class ContentType(Enum):
    """Known content types."""
    BLOG_POST = "blog_post"
    NEWS_ARTICLE = "news_article"
    PRODUCT = "product"
    LANDING_PAGE = "landing_page"
    DOCUMENTATION = "documentation"
    SUPPORT = "support"
    CASE_STUDY = "case_study"
    ABOUT = "about"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PathRule:
    """A URL-path keyword rule."""
    pattern: re.Pattern
    type: ContentType
    weight: float
    signal: str


@dataclass(frozen=True)
class ContentTypeRules:
    """Classifier tables. Replace to tune classification."""
    schema_map: Mapping[str, ContentType]
    path_rules: tuple[PathRule, ...]
    schema_weight: float = 2
    dated_path: re.Pattern = re.compile(r"/(19|20)\d{2}/")
    dated_path_weight: float = 1
    # best score that maps to full confidence
    confidence_scale: float = 4


DEFAULT_CONTENT_TYPE_RULES = ContentTypeRules(
    schema_map=MappingProxyType({
        "Article": ContentType.BLOG_POST,
        "BlogPosting": ContentType.BLOG_POST,
        "NewsArticle": ContentType.NEWS_ARTICLE,
        "TechArticle": ContentType.DOCUMENTATION,
        "Report": ContentType.CASE_STUDY,
        "FAQPage": ContentType.SUPPORT,
        "HowTo": ContentType.SUPPORT,
        "QAPage": ContentType.SUPPORT,
        "Product": ContentType.PRODUCT,
        "ProductModel": ContentType.PRODUCT,
        "Service": ContentType.LANDING_PAGE,
        "WebApplication": ContentType.PRODUCT,
        "CaseStudy": ContentType.CASE_STUDY,
    }),
    path_rules=(
        PathRule(re.compile(r"(blog|insights|stories|library)"),
                 ContentType.BLOG_POST, 1.5, "URL contains blog keyword"),
        PathRule(re.compile(r"(news|press|updates|announcements|release-notes)"),
                 ContentType.NEWS_ARTICLE, 1.5, "News path keyword"),
        PathRule(re.compile(r"(docs|documentation|developers|api|kb)"),
                 ContentType.DOCUMENTATION, 2, "Documentation path keyword"),
        PathRule(re.compile(r"(support|help|knowledge|faq|troubleshoot)"),
                 ContentType.SUPPORT, 1.5, "Support/help path keyword"),
        PathRule(re.compile(r"(product|features|platform|capabilities)"),
                 ContentType.PRODUCT, 1, "Product-focused path"),
        PathRule(re.compile(r"(solutions|services|why-|platform)"),
                 ContentType.LANDING_PAGE, 1, "Solution/landing keyword"),
        PathRule(re.compile(r"(case-stud|customers|success-stories)"),
                 ContentType.CASE_STUDY, 1.5, "Case study keyword"),
        PathRule(re.compile(r"(about|company|team|culture|careers)"),
                 ContentType.ABOUT, 1, "About/company keyword"),
    ),
)


@dataclass(frozen=True)
class ContentTypeResult:
    """Classification outcome."""
    type: ContentType
    confidence: float
    signals: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "confidence": self.confidence,
            "signals": list(self.signals),
        }


def _url_path(url: str) -> str | None:
    """Lower-cased path of an absolute URL, or None when it is not one."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return (parts.path or "/").lower()


def detect_content_type(
    url: str,
    schema_types: Iterable[str] | None = None,
    *,
    rules: ContentTypeRules = DEFAULT_CONTENT_TYPE_RULES,
) -> ContentTypeResult:
    """Classify a page by its schema.org types and URL path.

    Schema types and path keywords each add to a per-type score; the first
    type to reach the highest score wins. Never raises: URLs that cannot be
    parsed simply contribute no path signals.

    Args:
        url: Page URL
        schema_types: schema.org ``@type`` values found on the page
        rules: Classifier tables

    Returns:
        ContentTypeResult with type, confidence (0-1) and matched signals
    """
    scores: dict[ContentType, float] = {}
    signals: list[str] = []

    def add(content_type: ContentType, score: float, signal: str) -> None:
        scores[content_type] = scores.get(content_type, 0) + score
        signals.append(f"{content_type.value}:{signal}")

    for schema_type in schema_types or ():
        mapped = rules.schema_map.get(schema_type)
        if mapped is not None:
            add(mapped, rules.schema_weight, f"schema:{schema_type}")

    path = _url_path(url) if isinstance(url, str) else None
    if path is not None:
        for rule in rules.path_rules:
            if rule.pattern.search(path):
                add(rule.type, rule.weight, rule.signal)
        if rules.dated_path.search(path):
            add(ContentType.NEWS_ARTICLE, rules.dated_path_weight, "dated-path")

    best_type = ContentType.UNKNOWN
    best_score = 0.0
    for content_type, score in scores.items():
        if score > best_score:
            best_type = content_type
            best_score = score

    return ContentTypeResult(
        type=best_type,
        confidence=min(1.0, best_score / rules.confidence_scale),
        signals=signals,
    )
