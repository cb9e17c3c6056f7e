"""Approximate matching of query terms against catalog text fields."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from thefuzz import fuzz

from .types import ToolRecord

logger = logging.getLogger("ai-tool-recommender.fuzzy")

# partial_ratio (0-100) a term must reach against some field to make a tool a candidate
FUZZY_THRESHOLD = 70

FIELD_WEIGHTS: dict[str, float] = {
    "name": 1.0,
    "category": 0.8,
    "subcategory": 0.7,
    "description": 0.6,
    "features": 0.5,
    "use_cases": 0.4,
    "pros": 0.3,
}


def _field_texts(tool: ToolRecord) -> dict[str, list[str]]:
    """Lowercased searchable texts of a tool, per weighted field."""
    return {
        "name": [tool.name.lower()],
        "category": [tool.category.lower()],
        "subcategory": [tool.subcategory.lower()],
        "description": [tool.description.lower()],
        "features": [f.lower() for f in tool.features],
        "use_cases": [u.lower() for u in tool.use_cases],
        "pros": [p.lower() for p in tool.pros],
    }


def _best_ratios(terms: Iterable[str], tool: ToolRecord) -> dict[str, int]:
    """Best partial_ratio of any term against each field of the tool."""
    terms = [t.lower() for t in terms if t and t.strip()]
    best: dict[str, int] = {}
    for field_name, texts in _field_texts(tool).items():
        field_best = 0
        for text in texts:
            if not text:
                continue
            for term in terms:
                ratio = fuzz.partial_ratio(term, text)
                if ratio > field_best:
                    field_best = ratio
                    if field_best == 100:
                        break
            if field_best == 100:
                break
        best[field_name] = field_best
    return best


def fuzzy_similarity(terms: Iterable[str], tool: ToolRecord) -> float:
    """Best field-weighted similarity (0-100) of the terms to a tool."""
    ratios = _best_ratios(terms, tool)
    return max(
        (FIELD_WEIGHTS[name] * ratio for name, ratio in ratios.items()), default=0.0
    )


def is_fuzzy_match(
    terms: Iterable[str], tool: ToolRecord, threshold: int = FUZZY_THRESHOLD
) -> bool:
    """Check whether any term approximately matches any field of the tool."""
    return any(ratio >= threshold for ratio in _best_ratios(terms, tool).values())


def fuzzy_candidates(
    terms: Iterable[str],
    catalog: Iterable[ToolRecord],
    threshold: int = FUZZY_THRESHOLD,
) -> list[ToolRecord]:
    """Collect tools that approximately match the query terms.

    Tolerates typos and partial words, so the result is a superset that
    may contain tools the strict scorer gives zero points; callers must
    score and filter it.

    Args:
        terms: Normalized query terms
        catalog: Tools to match against
        threshold: Minimum partial_ratio for a field match

    Returns:
        Matching tools, in no guaranteed order.
    """
    terms = list(terms)
    if not terms:
        return []
    candidates = [tool for tool in catalog if is_fuzzy_match(terms, tool, threshold)]
    logger.debug(f"Fuzzy matcher kept {len(candidates)} candidates for {len(terms)} terms")
    return candidates
