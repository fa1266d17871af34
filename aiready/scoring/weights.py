"""
Composite score weights.

Each weight table must sum to 100; the defaults are validated at import time.
"""
from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class CategoryWeights:
    """Page score category weights (must sum to 100)."""
    technical: int = 25
    content: int = 30
    ai_readiness: int = 30
    performance: int = 15

    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class VisibilityWeights:
    """AI visibility score weights (must sum to 100)."""
    llm_mentions: int = 40
    ai_search: int = 30
    share_of_voice: int = 20
    backlink_authority: int = 10

    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class CitationWeights:
    """Citation readiness component weights (must sum to 100)."""
    fact_citability: int = 40
    llm_citation_worthiness: int = 35
    schema_quality: int = 25

    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))


# Default weight instances
CATEGORY_WEIGHTS = CategoryWeights()
VISIBILITY_WEIGHTS = VisibilityWeights()
CITATION_WEIGHTS = CitationWeights()


def validate_weights(weights) -> None:
    """Raise ValueError unless the table sums to exactly 100."""
    total = weights.total()
    if total != 100:
        raise ValueError(f"{type(weights).__name__} sum to {total}, expected 100")


def _validate_defaults():
    for table in (CATEGORY_WEIGHTS, VISIBILITY_WEIGHTS, CITATION_WEIGHTS):
        validate_weights(table)


_validate_defaults()
