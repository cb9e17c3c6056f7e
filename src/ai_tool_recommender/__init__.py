"""Recommends AI tools from a curated catalog based on free-text needs.

The discovery package holds the matching engine (query normalization,
fuzzy candidate matching, point-based scoring and ranking) plus the
task decomposer that delegates free-text breakdown to an external
text-generation service. The servers package exposes it over MCP.
"""

__version__ = "0.1.0"
