"""Command-line entry point of the recommender MCP server."""

from __future__ import annotations

import os

from ai_tool_recommender.servers.recommender import recommender_mcp
from ai_tool_recommender.utils.logging import setup_logging


def main() -> None:
    """Configure logging from TOOLREC_LOG_LEVEL and serve over stdio."""
    setup_logging(os.getenv("TOOLREC_LOG_LEVEL", "INFO"))
    recommender_mcp.run()


if __name__ == "__main__":
    main()
