"""Offline task analysis and display ratings for recommended tools."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .metadata import OTHER_CATEGORY, TASK_CATEGORY_KEYWORDS
from .types import ToolRecord

_SENTENCE_PATTERN = re.compile(r"[.。!！?？]")


@dataclass(frozen=True)
class TaskAnalysis:
    """Keyword categories and sentence-level sub-tasks of a needs text."""

    task: str
    categories: tuple[str, ...]
    subtasks: tuple[str, ...]


def analyze_task(text: str) -> TaskAnalysis:
    """Categorise a needs text by keyword and split it into sub-tasks.

    Falls back to the "other" category when no keyword matches.
    """
    lowered = (text or "").lower()
    categories = [
        category
        for category, keywords in TASK_CATEGORY_KEYWORDS.items()
        if any(keyword.lower() in lowered for keyword in keywords)
    ]
    subtasks = [s.strip() for s in _SENTENCE_PATTERN.split(text or "") if s.strip()]
    return TaskAnalysis(
        task=text or "",
        categories=tuple(categories) or (OTHER_CATEGORY,),
        subtasks=tuple(subtasks),
    )


def star_rating(tool: ToolRecord, categories: Iterable[str] = ()) -> int:
    """Rate how well a tool suits a task, from 1 to 5 stars.

    Components: feature richness (up to 1.5), pros/cons balance (up to 1),
    pricing (0.7 with a free plan, 0.3 paid only) and a category match (1).
    The sum is floored and clamped to 1-5.
    """
    rating = min(len(tool.features) / 3, 1.5)
    rating += min(len(tool.pros) / (len(tool.cons) + 1), 1)

    if tool.pricing.has_free:
        rating += 0.7
    elif tool.pricing.paid_plans:
        rating += 0.3

    tool_category = tool.category.lower()
    if any(cat.lower() in tool_category for cat in categories if cat):
        rating += 1

    return min(max(math.floor(rating), 1), 5)


def usage_tags(tools: Iterable[ToolRecord]) -> list[str]:
    """One short usage tag per tool: first feature, first sentence or name."""
    tags = []
    for tool in tools:
        if tool.features:
            tags.append(tool.features[0])
        elif tool.description:
            tags.append(_SENTENCE_PATTERN.split(tool.description)[0])
        else:
            tags.append(tool.name)
    return tags
