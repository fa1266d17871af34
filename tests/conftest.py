"""Shared test fixtures and configuration."""
from __future__ import annotations

import copy
from datetime import UTC, datetime

import pytest

from aiready.progress.delta import CrawlSnapshot, IssueRecord, PageRecord, ScoreRecord
from aiready.signals import parse_page_signals

EXCELLENT_URL = "https://example.com/blog/ai-readiness-guide"

# 151 characters: inside the 120-160 window
EXCELLENT_DESCRIPTION = (
    "A practical guide to structured data, llms.txt, crawler access and answer-first "
    "writing that helps AI assistants understand, trust and cite your pages."
)

_EXCELLENT = {
    "url": EXCELLENT_URL,
    "status_code": 200,
    "title": "How to Prepare Your Website for AI Assistants",
    "meta_description": EXCELLENT_DESCRIPTION,
    "canonical_url": EXCELLENT_URL,
    "word_count": 1500,
    "content_hash": "abc123",
    "headings": {
        "h1": ["How to Prepare Your Website for AI Assistants"],
        "h2": ["What is llms.txt?", "Key takeaways"],
        "h3": ["Allowing AI crawlers"],
    },
    "schema_types": ["Article", "FAQPage", "Organization"],
    "structured_data": [
        {
            "@type": "Article",
            "headline": "How to Prepare Your Website for AI Assistants",
            "author": "Jane Doe",
            "datePublished": "2024-05-01",
        },
        {"@type": "FAQPage", "mainEntity": []},
        {"@type": "Organization", "name": "Example", "url": "https://example.com"},
    ],
    "internal_links": [
        "https://example.com/",
        "https://example.com/blog",
        "https://example.com/docs/llms-txt",
        "https://example.com/pricing",
        "https://example.com/about",
    ],
    "external_links": ["https://www.nist.gov/ai", "https://cs.example.edu/research"],
    "pdf_links": [],
    "images_without_alt": 0,
    "robots_directives": ["index", "follow"],
    "og_tags": {
        "og:title": "Prepare your website for AI assistants",
        "og:description": "Structured data, llms.txt and answer-first writing.",
        "og:image": "https://example.com/og.png",
    },
    "flesch_score": 62.0,
    "page_size_bytes": 800_000,
    "lighthouse": {
        "performance": 0.92,
        "seo": 0.95,
        "accessibility": 0.9,
        "best_practices": 0.95,
    },
    "llm_scores": {
        "clarity": 99,
        "authority": 98,
        "comprehensiveness": 98,
        "structure": 95,
        "citation_worthiness": 98,
    },
    "site_context": {
        "has_llms_txt": True,
        "ai_crawlers_blocked": [],
        "has_sitemap": True,
        "sitemap_valid": True,
        "sitemap_stale_urls": 0,
        "response_time_ms": 350,
        "content_hashes": {"abc123": EXCELLENT_URL},
        "stale_content": False,
    },
}

_WORST = {
    "url": "https://example.com/",
    "status_code": 200,
    "word_count": 0,
    "site_context": {"ai_crawlers_blocked": ["GPTBot", "ClaudeBot"]},
}


@pytest.fixture
def excellent_data() -> dict:
    """Raw signals for a page that passes every check."""
    return copy.deepcopy(_EXCELLENT)


@pytest.fixture
def worst_data() -> dict:
    """Raw signals for an empty page with blocked AI crawlers and no rubric."""
    return copy.deepcopy(_WORST)


@pytest.fixture
def make_signals():
    """Build validated PageSignals from the excellent page with overrides.

    A value of None removes the key.
    """

    def _make(base: dict | None = None, **overrides):
        data = copy.deepcopy(base if base is not None else _EXCELLENT)
        for key, value in overrides.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        result = parse_page_signals(data)
        assert result.ok, result.errors
        return result.signals

    return _make


@pytest.fixture
def minimal_data() -> dict:
    """Only the required fields."""
    return {"url": "https://example.com/page", "status_code": 200}


def _snapshot(crawl_id, created_at, rows, issues=()):
    """rows: (page_id, url, overall_score)."""
    return CrawlSnapshot(
        crawl_id=crawl_id,
        created_at=created_at,
        pages=tuple(PageRecord(id=pid, url=url, word_count=500) for pid, url, _ in rows),
        scores=tuple(
            ScoreRecord(
                page_id=pid,
                overall_score=score,
                technical_score=score,
                content_score=score,
                ai_readiness_score=score,
                performance_score=score,
            )
            for pid, _, score in rows
        ),
        issues=tuple(IssueRecord(page_id=pid, code=code) for pid, code in issues),
    )


@pytest.fixture
def previous_crawl() -> CrawlSnapshot:
    return _snapshot(
        "crawl-1",
        datetime(2024, 1, 1, tzinfo=UTC),
        [
            ("p1", "https://example.com/a", 60),
            ("p2", "https://example.com/b", 80),
            ("p3", "https://example.com/c", 70),
            ("p4", "https://example.com/old", 50),
        ],
        issues=[("p1", "MISSING_TITLE"), ("p1", "THIN_CONTENT"), ("p2", "MISSING_H1")],
    )


@pytest.fixture
def current_crawl() -> CrawlSnapshot:
    # page ids change between crawls; URLs are the identity
    return _snapshot(
        "crawl-2",
        datetime(2024, 2, 1, tzinfo=UTC),
        [
            ("q1", "https://example.com/a", 75),
            ("q2", "https://example.com/b", 70),
            ("q3", "https://example.com/c", 70),
            ("q5", "https://example.com/new", 90),
        ],
        issues=[("q1", "THIN_CONTENT"), ("q2", "MISSING_H1"), ("q2", "NO_STRUCTURED_DATA")],
    )
