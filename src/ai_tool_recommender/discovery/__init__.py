"""Tool discovery: catalog, query normalization, scoring and ranking."""

from .catalog import ToolCatalog, load_default_catalog
from .decomposer import TaskDecomposer, parse_decomposition
from .fuzzy import fuzzy_candidates
from .normalize import normalize
from .ranking import ToolRanker, rank
from .resolution import resolve_tool_name
from .scoring import score, score_needs, score_terms
from .types import (
    QueryContext,
    Recommendation,
    RecommendedTool,
    ScoredCandidate,
    TaskBreakdown,
    ToolRecord,
)

__all__ = [
    "ToolCatalog",
    "load_default_catalog",
    "TaskDecomposer",
    "parse_decomposition",
    "fuzzy_candidates",
    "normalize",
    "ToolRanker",
    "rank",
    "resolve_tool_name",
    "score",
    "score_needs",
    "score_terms",
    "QueryContext",
    "Recommendation",
    "RecommendedTool",
    "ScoredCandidate",
    "TaskBreakdown",
    "ToolRecord",
]
