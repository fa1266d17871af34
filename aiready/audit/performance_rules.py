"""Lighthouse-backed performance rules."""
from __future__ import annotations

from aiready.audit.base import Finding, FunctionRule
from aiready.config.settings import settings
from aiready.signals import PageSignals


def _lighthouse_has(field_name: str):
    def applies(signals: PageSignals) -> bool:
        return signals.lighthouse is not None and getattr(signals.lighthouse, field_name) is not None
    return applies


def _has_page_size(signals: PageSignals) -> bool:
    return signals.page_size_bytes is not None


def check_performance(signals: PageSignals) -> Finding | None:
    t = settings.thresholds
    value = signals.lighthouse.performance
    if value < t.lighthouse_perf_poor:
        return Finding(data={"performance": value}, impact=20)
    if value < t.lighthouse_perf_moderate:
        return Finding(data={"performance": value}, impact=10)
    return None


def check_seo(signals: PageSignals) -> Finding | None:
    value = signals.lighthouse.seo
    if value < settings.thresholds.lighthouse_seo_min:
        return Finding(data={"seo": value})
    return None


def check_accessibility(signals: PageSignals) -> Finding | None:
    value = signals.lighthouse.accessibility
    if value < settings.thresholds.lighthouse_a11y_min:
        return Finding(data={"accessibility": value})
    return None


def check_best_practices(signals: PageSignals) -> Finding | None:
    value = signals.lighthouse.best_practices
    if value < settings.thresholds.lighthouse_bp_min:
        return Finding(data={"best_practices": value})
    return None


def check_page_size(signals: PageSignals) -> Finding | None:
    if signals.page_size_bytes > settings.thresholds.large_page_bytes:
        return Finding(data={"page_size_bytes": signals.page_size_bytes})
    return None


PERFORMANCE_RULES = (
    FunctionRule("LH_PERF_LOW", check_performance, applies=_lighthouse_has("performance")),
    FunctionRule("LH_SEO_LOW", check_seo, applies=_lighthouse_has("seo")),
    FunctionRule("LH_A11Y_LOW", check_accessibility, applies=_lighthouse_has("accessibility")),
    FunctionRule("LH_BP_LOW", check_best_practices, applies=_lighthouse_has("best_practices")),
    FunctionRule("LARGE_PAGE_SIZE", check_page_size, applies=_has_page_size),
)
