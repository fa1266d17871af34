"""Content quality rules."""
from __future__ import annotations

import re

from aiready.audit.base import Finding, FunctionRule
from aiready.config.settings import settings
from aiready.scoring.grades import round_half_up
from aiready.signals import PageSignals

QUESTION_HEADING = re.compile(
    r"^(how|what|why|when|where|which|who|can|does|is|should|will)\b", re.IGNORECASE
)
FAQ_SCHEMA_TYPES = frozenset({"faqpage", "qapage"})


def has_question_heading(headings: list[str], pattern: re.Pattern = QUESTION_HEADING) -> bool:
    return any("?" in text or pattern.search(text.strip()) for text in headings)


def has_faq_schema(schema_types) -> bool:
    return any(t.lower() in FAQ_SCHEMA_TYPES for t in schema_types)


def llm_deduction(score: int) -> int:
    """Map a 0-100 rubric score to a 0-20 deduction."""
    return round_half_up((100 - score) * settings.thresholds.llm_score_deduction_scale)


def _has_llm_scores(signals: PageSignals) -> bool:
    return signals.llm_scores is not None


def _has_site_context(signals: PageSignals) -> bool:
    return signals.site_context is not None


def _has_readability(signals: PageSignals) -> bool:
    return signals.flesch_score is not None


def check_thin_content(signals: PageSignals) -> Finding | None:
    if signals.word_count < settings.thresholds.thin_content_words:
        return Finding(data={"word_count": signals.word_count})
    return None


def _llm_check(dimension: str):
    def check(signals: PageSignals) -> Finding | None:
        score = getattr(signals.llm_scores, dimension)
        deduction = llm_deduction(score)
        if deduction > 0:
            return Finding(data={"llm_score": score}, impact=deduction)
        return None

    check.__name__ = f"check_{dimension}"
    return check


def check_duplicate_content(signals: PageSignals) -> Finding | None:
    if not signals.content_hash:
        return None
    other_url = signals.site_context.content_hashes.get(signals.content_hash)
    if other_url and other_url != signals.url:
        return Finding(data={"duplicate_of": other_url})
    return None


def check_stale_content(signals: PageSignals) -> Finding | None:
    return Finding() if signals.site_context.stale_content else None


def check_internal_links(signals: PageSignals) -> Finding | None:
    count = len(signals.internal_links)
    if count < settings.thresholds.min_internal_links:
        return Finding(data={"internal_link_count": count})
    return None


def check_excessive_links(signals: PageSignals) -> Finding | None:
    internal = len(signals.internal_links)
    external = len(signals.external_links)
    if internal > 0 and external > internal * settings.thresholds.excessive_link_ratio:
        return Finding(data={"internal_count": internal, "external_count": external})
    return None


def check_faq_structure(signals: PageSignals) -> Finding | None:
    if has_question_heading(signals.headings.all()) and not has_faq_schema(signals.schema_types):
        return Finding()
    return None


def check_readability(signals: PageSignals) -> Finding | None:
    t = settings.thresholds
    score = signals.flesch_score
    if score < t.flesch_poor:
        return Finding(data={"flesch_score": score}, impact=10)
    if score < t.flesch_moderate:
        return Finding(data={"flesch_score": score}, impact=5)
    return None


CONTENT_RULES = (
    FunctionRule("THIN_CONTENT", check_thin_content),
    FunctionRule(
        "CONTENT_DEPTH", _llm_check("comprehensiveness"),
        applies=_has_llm_scores, llm_derived=True,
    ),
    FunctionRule(
        "CONTENT_CLARITY", _llm_check("clarity"),
        applies=_has_llm_scores, llm_derived=True,
    ),
    FunctionRule(
        "CONTENT_AUTHORITY", _llm_check("authority"),
        applies=_has_llm_scores, llm_derived=True,
    ),
    FunctionRule("DUPLICATE_CONTENT", check_duplicate_content, applies=_has_site_context),
    FunctionRule("STALE_CONTENT", check_stale_content, applies=_has_site_context),
    FunctionRule("NO_INTERNAL_LINKS", check_internal_links),
    FunctionRule("EXCESSIVE_LINKS", check_excessive_links),
    FunctionRule("MISSING_FAQ_STRUCTURE", check_faq_structure),
    FunctionRule("POOR_READABILITY", check_readability, applies=_has_readability),
)
