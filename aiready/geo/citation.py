"""Citation readiness: how quotable a page's facts and structured data are."""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from aiready.config.settings import CitationSettings, settings
from aiready.scoring.grades import clamp_score
from aiready.scoring.weights import CITATION_WEIGHTS, CitationWeights
from aiready.signals import PageSignals

HIGH_VALUE_SCHEMA_TYPES = ("Article", "FAQPage", "HowTo", "BreadcrumbList")


@dataclass(frozen=True)
class Fact:
    """An extracted statement with a 0-100 citability score."""
    text: str
    citability_score: float
    source: str | None = None

    def to_dict(self) -> dict:
        return {"text": self.text, "citability_score": self.citability_score, "source": self.source}


@dataclass(frozen=True)
class CitationInput:
    citation_worthiness: float | None = None
    schema_types: tuple[str, ...] = ()
    structured_data_count: int = 0
    external_link_count: int = 0
    facts: tuple[Fact, ...] = ()

    @classmethod
    def from_signals(cls, signals: PageSignals, facts: Iterable[Fact] = ()) -> CitationInput:
        return cls(
            citation_worthiness=(
                signals.llm_scores.citation_worthiness if signals.llm_scores else None
            ),
            schema_types=signals.schema_types,
            structured_data_count=len(signals.structured_data),
            external_link_count=len(signals.external_links),
            facts=tuple(facts),
        )


@dataclass(frozen=True)
class CitationReadiness:
    score: int
    fact_citability: int
    llm_citation_worthiness: int
    schema_quality: int
    top_citable_facts: list[Fact] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "components": {
                "fact_citability": self.fact_citability,
                "llm_citation_worthiness": self.llm_citation_worthiness,
                "schema_quality": self.schema_quality,
            },
            "top_citable_facts": [f.to_dict() for f in self.top_citable_facts],
        }


def parse_facts(raw: Any) -> tuple[Fact, ...]:
    """Build facts from mappings, skipping entries without a numeric score."""
    if not isinstance(raw, (list, tuple)):
        return ()
    facts = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        score = item.get("citability_score")
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
            continue
        facts.append(Fact(
            text=str(item.get("text", "")),
            citability_score=score,
            source=item.get("source") if isinstance(item.get("source"), str) else None,
        ))
    return tuple(facts)


def _bounded(value: float) -> float:
    """Clamp to 0-100; non-finite values count as 0."""
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(100.0, value))


def schema_quality_score(
    schema_types: Iterable[str],
    structured_data_count: int,
    config: CitationSettings | None = None,
) -> int:
    """0 without structured data; otherwise a base score plus a halving bonus
    for each distinct high-value type."""
    config = config or settings.citation
    if structured_data_count <= 0:
        return 0
    present = {t for t in schema_types if t in HIGH_VALUE_SCHEMA_TYPES}
    bonus = sum(config.schema_first_type_bonus / 2 ** i for i in range(len(present)))
    return clamp_score(config.schema_base_score + bonus)


def compute_citation_readiness(
    data: CitationInput,
    *,
    weights: CitationWeights = CITATION_WEIGHTS,
    config: CitationSettings | None = None,
) -> CitationReadiness:
    """Score how citable a page is. Total over any input: missing facts or
    rubric yield zero components."""
    config = config or settings.citation

    # non-finite scores are malformed and ignored
    usable = [f for f in data.facts if math.isfinite(f.citability_score)]
    ranked = sorted(usable, key=lambda f: -f.citability_score)
    top = ranked[:config.top_fact_count]
    fact_score = (
        sum(_bounded(f.citability_score) for f in top) / len(top) if top else 0.0
    )

    llm_score = 0.0
    if data.citation_worthiness is not None:
        llm_score = _bounded(data.citation_worthiness)

    schema_score = schema_quality_score(data.schema_types, data.structured_data_count, config)

    blended = (
        fact_score * weights.fact_citability
        + llm_score * weights.llm_citation_worthiness
        + schema_score * weights.schema_quality
    ) / 100
    link_bonus = min(max(0, data.external_link_count), config.external_link_bonus_max)

    return CitationReadiness(
        score=clamp_score(clamp_score(blended) + link_bonus),
        fact_citability=clamp_score(fact_score),
        llm_citation_worthiness=clamp_score(llm_score),
        schema_quality=schema_score,
        top_citable_facts=ranked,
    )
