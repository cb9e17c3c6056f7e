"""MCP server exposing the recommender."""

from .recommender import recommender_mcp

__all__ = ["recommender_mcp"]
