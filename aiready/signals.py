"""Per-page input signals and boundary validation.

Signals are produced upstream by the HTML/robots/sitemap extractor, the
Lighthouse runner and the LLM rubric evaluator. ``parse_page_signals`` is the
only place required fields are checked; everything past it is total.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, Any] = MappingProxyType({})

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")


@dataclass(frozen=True)
class Headings:
    """Heading texts per level."""
    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()
    h4: tuple[str, ...] = ()
    h5: tuple[str, ...] = ()
    h6: tuple[str, ...] = ()

    def levels_present(self) -> list[int]:
        return [
            index + 1
            for index, level in enumerate(HEADING_LEVELS)
            if getattr(self, level)
        ]

    def all(self, up_to: int = 6) -> list[str]:
        texts: list[str] = []
        for level in HEADING_LEVELS[:up_to]:
            texts.extend(getattr(self, level))
        return texts


@dataclass(frozen=True)
class LighthouseScores:
    """Lighthouse category scores as 0-1 floats."""
    performance: float | None = None
    seo: float | None = None
    accessibility: float | None = None
    best_practices: float | None = None


@dataclass(frozen=True)
class LLMContentScores:
    """Pre-computed LLM content rubric (each dimension 0-100)."""
    clarity: int
    authority: int
    comprehensiveness: int
    structure: int
    citation_worthiness: int

    def content_average(self) -> float:
        return (self.clarity + self.authority + self.comprehensiveness + self.structure) / 4


@dataclass(frozen=True)
class SiteContext:
    """Site-level facts shared by every page of a crawl."""
    has_llms_txt: bool = False
    ai_crawlers_blocked: tuple[str, ...] = ()
    has_sitemap: bool = False
    sitemap_valid: bool | None = None
    sitemap_stale_urls: int = 0
    response_time_ms: int | None = None
    # content hash -> URL of the first page seen with it
    content_hashes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    stale_content: bool = False


@dataclass(frozen=True)
class PageSignals:
    """Everything the engine knows about one crawled page."""
    url: str
    status_code: int
    title: str | None = None
    meta_description: str | None = None
    canonical_url: str | None = None
    word_count: int = 0
    content_hash: str = ""
    headings: Headings = field(default_factory=Headings)
    schema_types: tuple[str, ...] = ()
    internal_links: tuple[str, ...] = ()
    external_links: tuple[str, ...] = ()
    pdf_links: tuple[str, ...] = ()
    images_without_alt: int = 0
    robots_directives: tuple[str, ...] = ()
    og_tags: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    structured_data: tuple[Mapping[str, Any], ...] = ()
    flesch_score: float | None = None
    page_size_bytes: int | None = None
    lighthouse: LighthouseScores | None = None
    llm_scores: LLMContentScores | None = None
    site_context: SiteContext | None = None


@dataclass(frozen=True)
class SignalsResult:
    """Outcome of boundary validation: either signals or a list of errors."""
    signals: PageSignals | None = None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.signals is not None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_int(value: Any, default: int | None = 0) -> int | None:
    if _is_int(value):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return default


def _as_float(value: Any) -> float | None:
    """Finite number as float; NaN and infinities count as malformed."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _as_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_strings(value: Any) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value if item is not None)
    return ()


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    return _EMPTY


def _parse_headings(raw: Any) -> Headings:
    if not isinstance(raw, Mapping):
        return Headings()
    return Headings(**{level: _as_strings(raw.get(level)) for level in HEADING_LEVELS})


def _parse_lighthouse(raw: Any) -> LighthouseScores | None:
    if not isinstance(raw, Mapping):
        return None
    return LighthouseScores(
        performance=_as_float(raw.get("performance")),
        seo=_as_float(raw.get("seo")),
        accessibility=_as_float(raw.get("accessibility")),
        best_practices=_as_float(raw.get("best_practices")),
    )


def _parse_llm_scores(raw: Any) -> LLMContentScores | None:
    """Rubric results are all-or-nothing: a partial rubric is treated as absent."""
    if not isinstance(raw, Mapping):
        return None
    keys = ("clarity", "authority", "comprehensiveness", "structure", "citation_worthiness")
    values = [_as_float(raw.get(key)) for key in keys]
    if any(value is None for value in values):
        return None
    clamped = [max(0, min(100, round(value))) for value in values]
    return LLMContentScores(*clamped)


def _parse_site_context(raw: Any) -> SiteContext | None:
    if not isinstance(raw, Mapping):
        return None
    sitemap_valid = raw.get("sitemap_valid")
    return SiteContext(
        has_llms_txt=bool(raw.get("has_llms_txt", False)),
        ai_crawlers_blocked=_as_strings(raw.get("ai_crawlers_blocked")),
        has_sitemap=bool(raw.get("has_sitemap", False)),
        sitemap_valid=sitemap_valid if isinstance(sitemap_valid, bool) else None,
        sitemap_stale_urls=_as_int(raw.get("sitemap_stale_urls")),
        response_time_ms=_as_int(raw.get("response_time_ms"), None),
        content_hashes=_as_mapping(raw.get("content_hashes")),
        stale_content=bool(raw.get("stale_content", False)),
    )


def parse_page_signals(data: Mapping[str, Any]) -> SignalsResult:
    """Validate a raw signals mapping and build ``PageSignals``.

    Only ``url`` and ``status_code`` are required. Malformed optional fields
    are dropped to their defaults so the affected rules degrade instead of
    failing.

    Args:
        data: Raw mapping as produced by the signal extractor

    Returns:
        SignalsResult with either ``signals`` or ``errors`` set
    """
    if not isinstance(data, Mapping):
        return SignalsResult(errors=("signals must be a mapping",))

    errors: list[str] = []
    url = data.get("url")
    if not isinstance(url, str) or not url.strip():
        errors.append("url is required")
    status_code = data.get("status_code")
    if not _is_int(status_code):
        errors.append("status_code is required and must be an integer")
    elif not 100 <= status_code <= 599:
        errors.append(f"status_code {status_code} is not a valid HTTP status")
    if errors:
        return SignalsResult(errors=tuple(errors))

    structured = data.get("structured_data")
    structured_items: tuple[Mapping[str, Any], ...] = ()
    if isinstance(structured, (list, tuple)):
        structured_items = tuple(
            MappingProxyType(dict(item)) for item in structured if isinstance(item, Mapping)
        )

    signals = PageSignals(
        url=url.strip(),
        status_code=status_code,
        title=_as_text(data.get("title")),
        meta_description=_as_text(data.get("meta_description")),
        canonical_url=_as_text(data.get("canonical_url")),
        word_count=max(0, _as_int(data.get("word_count"))),
        content_hash=_as_text(data.get("content_hash")) or "",
        headings=_parse_headings(data.get("headings")),
        schema_types=_as_strings(data.get("schema_types")),
        internal_links=_as_strings(data.get("internal_links")),
        external_links=_as_strings(data.get("external_links")),
        pdf_links=_as_strings(data.get("pdf_links")),
        images_without_alt=max(0, _as_int(data.get("images_without_alt"))),
        robots_directives=tuple(d.lower() for d in _as_strings(data.get("robots_directives"))),
        og_tags=_as_mapping(data.get("og_tags")),
        structured_data=structured_items,
        flesch_score=_as_float(data.get("flesch_score")),
        page_size_bytes=_as_int(data.get("page_size_bytes"), None),
        lighthouse=_parse_lighthouse(data.get("lighthouse")),
        llm_scores=_parse_llm_scores(data.get("llm_scores")),
        site_context=_parse_site_context(data.get("site_context")),
    )
    return SignalsResult(signals=signals)
