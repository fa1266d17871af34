"""AI readiness rules: crawler access, structured data and answerability."""
from __future__ import annotations

import re

from aiready.audit.base import Finding, FunctionRule
from aiready.audit.content_rules import has_faq_schema, has_question_heading, llm_deduction
from aiready.config.settings import settings
from aiready.signals import PageSignals

# Required properties for common schema.org types
SCHEMA_REQUIRED_PROPS = {
    "Article": ("headline", "author", "datePublished"),
    "WebPage": ("name", "description"),
    "Organization": ("name", "url"),
    "Product": ("name", "description"),
    "FAQPage": ("mainEntity",),
    "LocalBusiness": ("name", "address"),
}

ENTITY_TYPES = frozenset({"Person", "Organization", "Product", "Place", "Event"})
AUTHORITATIVE_TLDS = (".gov", ".edu", ".org")

ANSWER_HEADING = re.compile(r"^(how|what|why|when|where|which|who)\b", re.IGNORECASE)
SUMMARY_HEADING = re.compile(
    r"\b(summary|key takeaways?|tl;?dr|conclusion|overview|highlights?|in brief)\b",
    re.IGNORECASE,
)


def _has_site_context(signals: PageSignals) -> bool:
    return signals.site_context is not None


def _has_llm_scores(signals: PageSignals) -> bool:
    return signals.llm_scores is not None


def _has_structured_data(signals: PageSignals) -> bool:
    return bool(signals.structured_data)


def check_ai_crawlers(signals: PageSignals) -> Finding | None:
    blocked = signals.site_context.ai_crawlers_blocked
    if blocked:
        return Finding(data={"blocked_crawlers": list(blocked)})
    return None


def check_structured_data(signals: PageSignals) -> Finding | None:
    return Finding() if not signals.structured_data else None


def check_incomplete_schema(signals: PageSignals) -> Finding | None:
    # Reported once, for the first incomplete object
    for item in signals.structured_data:
        schema_type = item.get("@type")
        required = SCHEMA_REQUIRED_PROPS.get(schema_type) if isinstance(schema_type, str) else None
        if not required:
            continue
        missing = [prop for prop in required if prop not in item]
        if missing:
            return Finding(data={"schema_type": schema_type, "missing_props": missing})
    return None


def check_invalid_schema(signals: PageSignals) -> Finding | None:
    if any(not item.get("@type") for item in signals.structured_data):
        return Finding()
    return None


def check_citation_worthiness(signals: PageSignals) -> Finding | None:
    score = signals.llm_scores.citation_worthiness
    deduction = llm_deduction(score)
    if deduction > 0:
        return Finding(data={"llm_score": score}, impact=deduction)
    return None


def check_direct_answers(signals: PageSignals) -> Finding | None:
    if signals.word_count < settings.thresholds.direct_answer_min_words:
        return None
    headings = signals.headings.all(up_to=3)
    if has_question_heading(headings, ANSWER_HEADING) and not has_faq_schema(signals.schema_types):
        return Finding()
    return None


def check_entity_markup(signals: PageSignals) -> Finding | None:
    if any(t in ENTITY_TYPES for t in signals.schema_types):
        return None
    return Finding()


def check_summary_section(signals: PageSignals) -> Finding | None:
    if signals.word_count < settings.thresholds.summary_section_min_words:
        return None
    if any(SUMMARY_HEADING.search(text) for text in signals.headings.all(up_to=3)):
        return None
    return Finding()


def check_question_coverage(signals: PageSignals) -> Finding | None:
    structure = signals.llm_scores.structure
    if structure < settings.thresholds.structure_score_poor:
        return Finding(data={"structure_score": structure})
    return None


def check_authoritative_citations(signals: PageSignals) -> Finding | None:
    if signals.word_count <= settings.thresholds.authoritative_citation_min_words:
        return None
    for link in signals.external_links:
        lowered = link.lower()
        if any(tld in lowered for tld in AUTHORITATIVE_TLDS):
            return None
    return Finding()


def check_pdf_only(signals: PageSignals) -> Finding | None:
    pdf_count = len(signals.pdf_links)
    if pdf_count > 0 and signals.word_count < settings.thresholds.pdf_only_content_max_words:
        return Finding(data={"pdf_count": pdf_count, "word_count": signals.word_count})
    return None


AI_READINESS_RULES = (
    FunctionRule("AI_CRAWLER_BLOCKED", check_ai_crawlers, applies=_has_site_context),
    FunctionRule("NO_STRUCTURED_DATA", check_structured_data),
    FunctionRule("INCOMPLETE_SCHEMA", check_incomplete_schema, applies=_has_structured_data),
    FunctionRule("INVALID_SCHEMA", check_invalid_schema, applies=_has_structured_data),
    FunctionRule(
        "CITATION_WORTHINESS", check_citation_worthiness,
        applies=_has_llm_scores, llm_derived=True,
    ),
    FunctionRule("NO_DIRECT_ANSWERS", check_direct_answers),
    FunctionRule("MISSING_ENTITY_MARKUP", check_entity_markup, applies=_has_structured_data),
    FunctionRule("NO_SUMMARY_SECTION", check_summary_section),
    FunctionRule(
        "POOR_QUESTION_COVERAGE", check_question_coverage,
        applies=_has_llm_scores, llm_derived=True,
    ),
    FunctionRule("MISSING_AUTHORITATIVE_CITATIONS", check_authoritative_citations),
    FunctionRule("PDF_ONLY_CONTENT", check_pdf_only),
)
