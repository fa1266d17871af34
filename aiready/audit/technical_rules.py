"""Technical SEO rules: titles, meta tags, headings, indexability, sitemaps."""
from __future__ import annotations

from aiready.audit.base import Finding, FunctionRule
from aiready.config.settings import settings
from aiready.signals import PageSignals

REQUIRED_OG_TAGS = ("og:title", "og:description", "og:image")


def _has_site_context(signals: PageSignals) -> bool:
    return signals.site_context is not None


def _has_response_time(signals: PageSignals) -> bool:
    return signals.site_context is not None and signals.site_context.response_time_ms is not None


def _has_checked_sitemap(signals: PageSignals) -> bool:
    ctx = signals.site_context
    return ctx is not None and ctx.has_sitemap and ctx.sitemap_valid is not None


def _has_sitemap(signals: PageSignals) -> bool:
    ctx = signals.site_context
    return ctx is not None and ctx.has_sitemap


def check_missing_title(signals: PageSignals) -> Finding | None:
    if not signals.title or not signals.title.strip():
        return Finding()
    return None


def check_title_length(signals: PageSignals) -> Finding | None:
    # An absent title is reported as MISSING_TITLE only
    if not signals.title or not signals.title.strip():
        return None
    t = settings.thresholds
    length = len(signals.title.strip())
    if length < t.title_min_length or length > t.title_max_length:
        return Finding(data={"title_length": length})
    return None


def check_missing_meta_description(signals: PageSignals) -> Finding | None:
    if not signals.meta_description or not signals.meta_description.strip():
        return Finding()
    return None


def check_meta_description_length(signals: PageSignals) -> Finding | None:
    if not signals.meta_description or not signals.meta_description.strip():
        return None
    t = settings.thresholds
    length = len(signals.meta_description.strip())
    if length < t.description_min_length or length > t.description_max_length:
        return Finding(data={"description_length": length})
    return None


def check_missing_h1(signals: PageSignals) -> Finding | None:
    return Finding() if not signals.headings.h1 else None


def check_multiple_h1(signals: PageSignals) -> Finding | None:
    count = len(signals.headings.h1)
    return Finding(data={"h1_count": count}) if count > 1 else None


def check_heading_hierarchy(signals: PageSignals) -> Finding | None:
    levels = signals.headings.levels_present()
    for previous, current in zip(levels, levels[1:]):
        if current - previous > 1:
            return Finding(data={
                "skipped_from": f"H{previous}",
                "skipped_to": f"H{current}",
            })
    return None


def check_http_status(signals: PageSignals) -> Finding | None:
    if signals.status_code >= 400:
        return Finding(data={"status_code": signals.status_code})
    return None


def check_noindex(signals: PageSignals) -> Finding | None:
    return Finding() if "noindex" in signals.robots_directives else None


def check_missing_canonical(signals: PageSignals) -> Finding | None:
    return Finding() if not signals.canonical_url else None


def check_missing_alt_text(signals: PageSignals) -> Finding | None:
    count = signals.images_without_alt
    if count <= 0:
        return None
    t = settings.thresholds
    penalty = min(count * t.alt_text_penalty_per_image, t.alt_text_max_penalty)
    return Finding(data={"images_without_alt": count}, impact=penalty)


def check_missing_og_tags(signals: PageSignals) -> Finding | None:
    missing = [tag for tag in REQUIRED_OG_TAGS if not signals.og_tags.get(tag)]
    return Finding(data={"missing_tags": missing}) if missing else None


def check_slow_response(signals: PageSignals) -> Finding | None:
    response_ms = signals.site_context.response_time_ms
    if response_ms > settings.thresholds.slow_response_ms:
        return Finding(data={"response_time_ms": response_ms})
    return None


def check_missing_sitemap(signals: PageSignals) -> Finding | None:
    return Finding() if not signals.site_context.has_sitemap else None


def check_sitemap_format(signals: PageSignals) -> Finding | None:
    return Finding() if signals.site_context.sitemap_valid is False else None


def check_sitemap_stale_urls(signals: PageSignals) -> Finding | None:
    stale = signals.site_context.sitemap_stale_urls
    return Finding(data={"stale_urls": stale}) if stale > 0 else None


def check_missing_llms_txt(signals: PageSignals) -> Finding | None:
    return Finding() if not signals.site_context.has_llms_txt else None


TECHNICAL_RULES = (
    FunctionRule("MISSING_TITLE", check_missing_title),
    FunctionRule("TITLE_LENGTH", check_title_length),
    FunctionRule("MISSING_META_DESC", check_missing_meta_description),
    FunctionRule("META_DESC_LENGTH", check_meta_description_length),
    FunctionRule("MISSING_H1", check_missing_h1),
    FunctionRule("MULTIPLE_H1", check_multiple_h1),
    FunctionRule("HEADING_HIERARCHY", check_heading_hierarchy),
    FunctionRule("HTTP_STATUS", check_http_status),
    FunctionRule("NOINDEX_SET", check_noindex),
    FunctionRule("MISSING_CANONICAL", check_missing_canonical),
    FunctionRule("MISSING_ALT_TEXT", check_missing_alt_text),
    FunctionRule("MISSING_OG_TAGS", check_missing_og_tags),
    FunctionRule("SLOW_RESPONSE", check_slow_response, applies=_has_response_time),
    FunctionRule("MISSING_SITEMAP", check_missing_sitemap, applies=_has_site_context),
    FunctionRule("SITEMAP_INVALID_FORMAT", check_sitemap_format, applies=_has_checked_sitemap),
    FunctionRule("SITEMAP_STALE_URLS", check_sitemap_stale_urls, applies=_has_sitemap),
    FunctionRule("MISSING_LLMS_TXT", check_missing_llms_txt, applies=_has_site_context),
)
