"""Resolution of free-text tool names to catalog records."""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Iterable

from rapidfuzz.distance import Levenshtein

from .types import ToolRecord

logger = logging.getLogger("ai-tool-recommender.resolution")

# Whitespace, punctuation and underscores; CJK characters count as word characters
_SEPARATOR_PATTERN = re.compile(r"[\W_]+")


def normalize_name(name: str) -> str:
    """Fold width and case and drop separators: "Chat-GPT ４" -> "chatgpt4"."""
    folded = unicodedata.normalize("NFKC", name or "").casefold()
    return _SEPARATOR_PATTERN.sub("", folded)


def resolve_tool_name(name: str, tools: Iterable[ToolRecord]) -> ToolRecord | None:
    """Find the catalog tool a generated tool name refers to.

    Stages, each tried only when the previous one finds nothing:

    1. exact match of normalized names
    2. substring containment in either direction
    3. smallest Levenshtein distance

    Ties go to the earliest tool in catalog order. Stage 3 always answers
    for a non-empty catalog, so an unknown name degrades to the closest tool.

    Args:
        name: Tool name as written by the text-generation collaborator
        tools: Catalog tools in catalog order

    Returns:
        The resolved tool, or None for a blank name or an empty catalog.
    """
    wanted = normalize_name(name)
    if not wanted:
        return None

    indexed = [(normalize_name(tool.name), tool) for tool in tools]
    indexed = [(normalized, tool) for normalized, tool in indexed if normalized]
    if not indexed:
        return None

    for normalized, tool in indexed:
        if normalized == wanted:
            return tool

    for normalized, tool in indexed:
        if wanted in normalized or normalized in wanted:
            logger.debug(f"Resolved '{name}' to '{tool.name}' by containment")
            return tool

    best_tool = None
    best_distance = None
    for normalized, tool in indexed:
        distance = Levenshtein.distance(wanted, normalized)
        if best_distance is None or distance < best_distance:
            best_tool, best_distance = tool, distance

    logger.debug(
        f"Resolved '{name}' to '{best_tool.name}' by edit distance {best_distance}"
    )
    return best_tool
