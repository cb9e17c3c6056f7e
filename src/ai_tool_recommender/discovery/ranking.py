"""Ranking of catalog tools for search and recommendation requests."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .catalog import ToolCatalog
from .fuzzy import FUZZY_THRESHOLD, fuzzy_candidates
from .normalize import normalize
from .scoring import score
from .types import QueryContext, Recommendation, ScoredCandidate, ToolRecord

logger = logging.getLogger("ai-tool-recommender.ranking")

SEARCH_LIMIT = 3


def rank(
    candidates: Iterable[ToolRecord],
    ctx: QueryContext | None = None,
    terms: Iterable[str] | None = None,
) -> list[ScoredCandidate]:
    """Score candidates, keep strictly positive scores and sort them.

    The sort is stable, so equal scores keep the candidates' input order.

    Args:
        candidates: Tools to rank, in tie-break order
        ctx: Recommendation context for the needs table
        terms: Normalized search terms for the text table

    Returns:
        Scored candidates, best first.
    """
    terms = frozenset(terms) if terms is not None else None
    results = []
    for tool in candidates:
        tool_score = score(tool, ctx, terms)
        if tool_score > 0:
            results.append(ScoredCandidate(tool=tool, score=tool_score))

    results.sort(key=lambda c: c.score, reverse=True)
    return results


class ToolRanker:
    """Search and recommendation entry points over one catalog."""

    def __init__(
        self,
        catalog: ToolCatalog,
        fuzzy_threshold: int = FUZZY_THRESHOLD,
    ) -> None:
        self.catalog = catalog
        self.fuzzy_threshold = fuzzy_threshold

    def search_tools(self, query: str) -> list[ToolRecord]:
        """Rank every matching tool for a plain text query.

        A blank query places no constraint and yields the whole catalog
        in catalog order.
        """
        terms = normalize(query)
        if not terms:
            return list(self.catalog)

        candidates = fuzzy_candidates(terms, self.catalog, self.fuzzy_threshold)
        # Fuzzy output is unordered; restore catalog order for stable tie-breaks
        candidates.sort(key=self.catalog.position)

        ranked = rank(candidates, terms=terms)
        logger.debug(
            f"Search '{query}': {len(terms)} terms, {len(candidates)} candidates, "
            f"{len(ranked)} scored"
        )
        return [c.tool for c in ranked]

    def search(self, query: str, limit: int | None = None) -> list[ToolRecord]:
        """Return the top tools for a plain text query.

        Args:
            query: Free text query
            limit: Maximum results, capped at SEARCH_LIMIT

        Returns:
            At most ``limit`` tools, best first.
        """
        limit = SEARCH_LIMIT if limit is None else min(limit, SEARCH_LIMIT)
        return self.search_tools(query)[: max(limit, 0)]

    def rank_needs(self, ctx: QueryContext) -> list[ScoredCandidate]:
        """Rank the whole catalog against a validated recommendation context."""
        ranked = rank(self.catalog, ctx=ctx)
        if ctx.is_beginner:
            ranked = [c for c in ranked if c.tool.is_beginner_friendly]
        return ranked

    def recommend(
        self,
        needs: Any,
        budget: Any = None,
        technical_level: Any = None,
        priorities: Any = None,
        limitations: Any = None,
    ) -> list[Recommendation]:
        """Recommend tools for a user's needs and preferences.

        Args:
            needs: Capability phrases (at least one non-blank)
            budget: None for unconstrained, a free marker, or a maximum price
            technical_level: beginner / intermediate / advanced
            priorities: Desirable traits
            limitations: Traits to avoid

        Returns:
            Every positively scored tool, best first.

        Raises:
            ValidationFailure: If needs is empty or a field is malformed.
        """
        ctx = QueryContext.from_request(
            needs=needs,
            budget=budget,
            technical_level=technical_level,
            priorities=priorities,
            limitations=limitations,
        )
        ranked = self.rank_needs(ctx)
        logger.info(f"Recommend for {len(ctx.needs)} needs: {len(ranked)} tools")
        return [Recommendation.from_candidate(c) for c in ranked]
