"""Shared state of the recommender server and accessors for tool handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ai_tool_recommender.config import RecommenderConfig
from ai_tool_recommender.discovery.catalog import ToolCatalog, load_default_catalog
from ai_tool_recommender.discovery.decomposer import TaskDecomposer
from ai_tool_recommender.discovery.ranking import ToolRanker
from ai_tool_recommender.llm.client import OpenAICompatibleClient

if TYPE_CHECKING:
    from fastmcp import Context

logger = logging.getLogger("ai-tool-recommender.server")


@dataclass
class AppContext:
    """Everything built once at startup and shared, read-only, by requests."""

    config: RecommenderConfig
    catalog: ToolCatalog
    ranker: ToolRanker
    llm: OpenAICompatibleClient | None = None
    decomposer: TaskDecomposer | None = None


def build_app_context(config: RecommenderConfig | None = None) -> AppContext:
    """Load the catalog and wire the ranker and the optional decomposer."""
    config = config or RecommenderConfig.from_env()
    if config.catalog_path:
        catalog = ToolCatalog.from_json_file(config.catalog_path)
    else:
        catalog = load_default_catalog()

    ranker = ToolRanker(
        catalog,
        fuzzy_threshold=config.fuzzy_threshold,
    )

    llm = None
    decomposer = None
    if config.llm.is_configured():
        llm = OpenAICompatibleClient(config.llm)
        decomposer = TaskDecomposer(
            llm,
            catalog,
            max_tokens=config.llm.max_tokens,
            temperature=config.llm.temperature,
        )
    else:
        logger.warning("No text-generation API key configured; decomposition disabled")

    return AppContext(
        config=config, catalog=catalog, ranker=ranker, llm=llm, decomposer=decomposer
    )


async def get_app_context(ctx: Context) -> AppContext:
    """Return the application context of the running server.

    Raises:
        ValueError: If the server was started without its lifespan.
    """
    app = ctx.request_context.lifespan_context
    if not isinstance(app, AppContext):
        raise ValueError("Recommender is not initialized")
    return app


async def get_ranker(ctx: Context) -> ToolRanker:
    return (await get_app_context(ctx)).ranker


async def get_decomposer(ctx: Context) -> TaskDecomposer:
    """Return the task decomposer.

    Raises:
        ValueError: If no text-generation service is configured.
    """
    app = await get_app_context(ctx)
    if app.decomposer is None:
        raise ValueError("Task decomposition requires a text-generation API key")
    return app.decomposer
