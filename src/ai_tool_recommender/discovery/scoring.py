"""Relevance scoring for tool recommendation.

Two independent point tables are applied with strict, case-insensitive
substring checks:

- the needs table rewards need/priority phrases found in a tool and
  penalises limitation phrases found in its cons, then weighs the budget;
- the text table rewards normalized search terms by the field they hit.

Points are integers and accumulate across terms and rows. Totals may be
negative; filtering happens in the ranker.
"""

from __future__ import annotations

from collections.abc import Iterable

from .metadata import BEGINNER_QUERY_MARKERS, EASY_CONCEPT, FREE_CONCEPT
from .types import QueryContext, ToolRecord

# Needs table
NEED_IN_FEATURES = 3
NEED_IN_USE_CASES = 2
NEED_IN_DESCRIPTION = 1
PRIORITY_IN_PROS = 2
PRIORITY_IN_FEATURES = 1
LIMITATION_IN_CONS = -2
FREE_BUDGET_WITH_FREE_PLAN = 2
PRICE_WITHIN_BUDGET = 1
PRICE_OVER_BUDGET = -2

# Text table
TERM_IN_NAME = 10
TERM_IN_CATEGORY = 8
TERM_IN_SUBCATEGORY = 6
TERM_IN_DESCRIPTION = 5
TERM_IN_FEATURES = 4
TERM_IN_USE_CASES = 3
TERM_IN_PROS = 2
FREE_QUERY_WITH_FREE_PLAN = 5
EASY_QUERY_BEGINNER_FRIENDLY = 3


def _normalize_text(text: str) -> str:
    """Normalize text for comparison - lowercase and strip."""
    return text.lower().strip()


def _contains(haystack: str, needle: str) -> bool:
    return needle in haystack.lower()


def _any_contains(items: Iterable[str], needle: str) -> bool:
    return any(needle in item.lower() for item in items)


def _score_needs(tool: ToolRecord, ctx: QueryContext) -> tuple[int, list[str]]:
    score = 0
    reasons: list[str] = []

    for need in ctx.needs:
        need = _normalize_text(need)
        if not need:
            continue
        if _any_contains(tool.features, need):
            score += NEED_IN_FEATURES
            reasons.append(f"need in features: {need}")
        if _any_contains(tool.use_cases, need):
            score += NEED_IN_USE_CASES
            reasons.append(f"need in use cases: {need}")
        if _contains(tool.description, need):
            score += NEED_IN_DESCRIPTION
            reasons.append(f"need in description: {need}")

    for priority in ctx.priorities:
        priority = _normalize_text(priority)
        if not priority:
            continue
        if _any_contains(tool.pros, priority):
            score += PRIORITY_IN_PROS
            reasons.append(f"priority in pros: {priority}")
        if _any_contains(tool.features, priority):
            score += PRIORITY_IN_FEATURES
            reasons.append(f"priority in features: {priority}")

    for limitation in ctx.limitations:
        limitation = _normalize_text(limitation)
        if limitation and _any_contains(tool.cons, limitation):
            score += LIMITATION_IN_CONS
            reasons.append(f"limitation in cons: {limitation}")

    if ctx.is_free_budget:
        if tool.pricing.has_free:
            score += FREE_BUDGET_WITH_FREE_PLAN
            reasons.append("free plan available")
    elif ctx.is_paid_budget:
        if tool.first_paid_price <= ctx.max_budget:
            score += PRICE_WITHIN_BUDGET
            reasons.append("within budget")
        else:
            score += PRICE_OVER_BUDGET
            reasons.append("over budget")

    return score, reasons


def _score_terms(tool: ToolRecord, terms: Iterable[str]) -> tuple[int, list[str]]:
    score = 0
    reasons: list[str] = []
    terms = {_normalize_text(t) for t in terms}
    terms.discard("")

    # Sorted so that reasons come out in a stable order
    for term in sorted(terms):
        if _contains(tool.name, term):
            score += TERM_IN_NAME
            reasons.append(f"name match: {term}")
        if _contains(tool.category, term):
            score += TERM_IN_CATEGORY
            reasons.append(f"category match: {term}")
        if _contains(tool.subcategory, term):
            score += TERM_IN_SUBCATEGORY
            reasons.append(f"subcategory match: {term}")
        if _contains(tool.description, term):
            score += TERM_IN_DESCRIPTION
            reasons.append(f"description match: {term}")
        if _any_contains(tool.features, term):
            score += TERM_IN_FEATURES
            reasons.append(f"feature match: {term}")
        if _any_contains(tool.use_cases, term):
            score += TERM_IN_USE_CASES
            reasons.append(f"use case match: {term}")
        if _any_contains(tool.pros, term):
            score += TERM_IN_PROS
            reasons.append(f"pros match: {term}")

    if FREE_CONCEPT in terms and tool.pricing.has_free:
        score += FREE_QUERY_WITH_FREE_PLAN
        reasons.append("free plan available")

    wants_easy = EASY_CONCEPT in terms or any(
        marker in term for term in terms for marker in BEGINNER_QUERY_MARKERS
    )
    if wants_easy and tool.is_beginner_friendly:
        score += EASY_QUERY_BEGINNER_FRIENDLY
        reasons.append("beginner friendly")

    return score, reasons


def score_needs(tool: ToolRecord, ctx: QueryContext) -> int:
    """Score a tool against needs, priorities, limitations and budget."""
    return _score_needs(tool, ctx)[0]


def score_terms(tool: ToolRecord, terms: Iterable[str]) -> int:
    """Score a tool against normalized plain-search terms."""
    return _score_terms(tool, terms)[0]


def score(
    tool: ToolRecord,
    ctx: QueryContext | None = None,
    terms: Iterable[str] | None = None,
) -> int:
    """Total relevance score of a tool.

    Args:
        tool: Tool to score
        ctx: Recommendation context for the needs table, if any
        terms: Normalized search terms for the text table, if any

    Returns:
        The sum of both tables; may be zero or negative.
    """
    total = 0
    if ctx is not None:
        total += score_needs(tool, ctx)
    if terms is not None:
        total += score_terms(tool, terms)
    return total


def explain(
    tool: ToolRecord,
    ctx: QueryContext | None = None,
    terms: Iterable[str] | None = None,
) -> list[str]:
    """List the rows of both tables that contributed to a tool's score."""
    reasons: list[str] = []
    if ctx is not None:
        reasons.extend(_score_needs(tool, ctx)[1])
    if terms is not None:
        reasons.extend(_score_terms(tool, terms)[1])
    return reasons
