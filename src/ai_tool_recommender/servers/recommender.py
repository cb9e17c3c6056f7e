"""MCP tools for searching, recommending and decomposing AI tool needs."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from ai_tool_recommender.discovery.normalize import normalize
from ai_tool_recommender.discovery.ranking import SEARCH_LIMIT
from ai_tool_recommender.discovery.scoring import explain
from ai_tool_recommender.discovery.tasks import analyze_task, star_rating, usage_tags
from ai_tool_recommender.discovery.types import ToolRecord
from ai_tool_recommender.exceptions import ToolRecommenderError
from ai_tool_recommender.servers.dependencies import (
    AppContext,
    build_app_context,
    get_app_context,
    get_decomposer,
    get_ranker,
)

logger = logging.getLogger("ai-tool-recommender.server")


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Build the catalog and collaborators once for the server's lifetime."""
    app = build_app_context()
    logger.info(f"Recommender ready with {len(app.catalog)} catalog tools")
    yield app


recommender_mcp = FastMCP(
    name="AI Tool Recommender",
    instructions="Recommends AI tools from a curated catalog based on free-text needs.",
    lifespan=app_lifespan,
)


def _dumps(result: dict[str, Any]) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


def _error(e: Exception) -> str:
    retryable = isinstance(e, ToolRecommenderError) and e.retryable
    return _dumps({"error": str(e), "retryable": retryable})


def _tool_summary(tool: ToolRecord) -> dict[str, Any]:
    return {
        "id": tool.id,
        "name": tool.name,
        "category": tool.category,
        "subcategory": tool.subcategory,
        "description": tool.description,
        "url": tool.official_url,
        "imageUrl": tool.image_url,
        "hasFree": tool.pricing.has_free,
        "price": tool.price_label,
    }


def _tool_details(tool: ToolRecord) -> dict[str, Any]:
    if tool.pricing.has_free:
        price = "free plan available"
    elif tool.pricing.paid_plans and tool.pricing.paid_plans[0].price:
        price = tool.pricing.paid_plans[0].price
    else:
        price = "no pricing information"
    return {
        "id": tool.id,
        "name": tool.name,
        "description": tool.description,
        "url": tool.official_url,
        "price": price,
        "features": list(tool.features),
        "pros": list(tool.pros),
        "cons": list(tool.cons),
        "source": "catalog",
    }


@recommender_mcp.tool(tags={"search", "read"})
async def search_tools(
    ctx: Context,
    query: Annotated[str, Field(description="Free-text search, e.g. '無料 画像生成'")],
    limit: Annotated[
        int,
        Field(
            description="Maximum number of results (at most 3)",
            default=SEARCH_LIMIT,
            ge=1,
            le=SEARCH_LIMIT,
        ),
    ] = SEARCH_LIMIT,
) -> str:
    """Search the catalog for the AI tools best matching a query.

    Args:
        ctx: The FastMCP context.
        query: Free-text search query
        limit: Maximum number of results

    Returns:
        JSON with the normalized terms and the matching tools, best first.
    """
    if not query or not query.strip():
        return _dumps({"error": "A search query is required", "retryable": False})

    try:
        ranker = await get_ranker(ctx)
    except ValueError as e:
        return _error(e)

    terms = normalize(query)
    tools = ranker.search(query, limit=limit)
    return _dumps(
        {
            "query": query,
            "terms": sorted(terms),
            "tools": [
                {**_tool_summary(tool), "matchReasons": explain(tool, terms=terms)}
                for tool in tools
            ],
            "count": len(tools),
        }
    )


@recommender_mcp.tool(tags={"recommend", "read"})
async def recommend_tools(
    ctx: Context,
    needs: Annotated[
        list[str], Field(description="Capabilities needed, e.g. ['image generation']")
    ],
    budget: Annotated[
        str | None,
        Field(
            description="'free', or a maximum price such as '$20/month'; omit for no limit",
            default=None,
        ),
    ] = None,
    technical_level: Annotated[
        str | None,
        Field(description="beginner, intermediate or advanced", default=None),
    ] = None,
    priorities: Annotated[
        list[str] | None,
        Field(description="Desirable traits, e.g. ['ease of use']", default=None),
    ] = None,
    limitations: Annotated[
        list[str] | None,
        Field(description="Traits to avoid, e.g. ['no offline support']", default=None),
    ] = None,
) -> str:
    """Recommend catalog tools for needs, budget, priorities and limitations.

    Args:
        ctx: The FastMCP context.
        needs: Capability phrases; at least one is required
        budget: Budget constraint
        technical_level: User's technical level
        priorities: Desirable traits
        limitations: Traits to avoid

    Returns:
        JSON with every positively scored tool, best first.
    """
    try:
        ranker = await get_ranker(ctx)
        recommendations = ranker.recommend(
            needs=needs,
            budget=budget,
            technical_level=technical_level,
            priorities=priorities,
            limitations=limitations,
        )
    except (ValueError, ToolRecommenderError) as e:
        return _error(e)

    return _dumps(
        {
            "recommendations": [rec.to_dict() for rec in recommendations],
            "count": len(recommendations),
        }
    )


@recommender_mcp.tool(tags={"decompose", "read"})
async def decompose_needs(
    ctx: Context,
    needs: Annotated[
        str,
        Field(description="Free-text description of everything the user wants to do"),
    ],
) -> str:
    """Break needs into tasks and recommend catalog tools for each.

    Args:
        ctx: The FastMCP context.
        needs: Free-text needs

    Returns:
        JSON with one entry per task, each listing recommended tools with
        their reasons, resolved catalog entries and a 1-5 star rating.
    """
    try:
        decomposer = await get_decomposer(ctx)
        # The collaborator call blocks on the network
        tasks = await asyncio.to_thread(decomposer.decompose, needs)
    except (ValueError, ToolRecommenderError) as e:
        logger.warning(f"Decomposition failed: {e}")
        return _error(e)

    result_tasks = []
    for task in tasks:
        categories = analyze_task(f"{task.task} {task.description}").categories
        entry = task.to_dict()
        for tool_entry, rec in zip(entry["recommendedTools"], task.recommended_tools):
            tool_entry["stars"] = star_rating(rec.tool, categories) if rec.tool else None
        entry["categories"] = list(categories)
        entry["usageTags"] = usage_tags(rec.tool for rec in task.recommended_tools if rec.tool)
        result_tasks.append(entry)

    return _dumps({"tasks": result_tasks, "count": len(result_tasks)})


@recommender_mcp.tool(tags={"details", "read"})
async def get_tool_details(
    ctx: Context,
    tool_id: Annotated[
        str | None, Field(description="Catalog id of the tool", default=None)
    ] = None,
    tool_name: Annotated[
        str | None, Field(description="Name of the tool", default=None)
    ] = None,
) -> str:
    """Get details of a tool by catalog id or name.

    Tools missing from the catalog are described by the text-generation
    service when one is configured.

    Args:
        ctx: The FastMCP context.
        tool_id: Catalog id
        tool_name: Tool name (case-insensitive)

    Returns:
        JSON with description, url, price, features, pros and cons.
    """
    if not tool_id and not (tool_name and tool_name.strip()):
        return _dumps({"error": "tool_id or tool_name is required", "retryable": False})

    try:
        app = await get_app_context(ctx)
    except ValueError as e:
        return _error(e)

    tool = None
    if tool_id:
        tool = app.catalog.get_by_id(tool_id)
    if tool is None and tool_name:
        tool = app.catalog.find_by_name(tool_name)
    if tool is not None:
        return _dumps(_tool_details(tool))

    if not tool_name or app.llm is None:
        return _dumps({"error": "Tool not found", "retryable": False})

    try:
        details = await asyncio.to_thread(app.llm.generate_tool_details, tool_name)
    except ToolRecommenderError as e:
        logger.warning(f"Failed to generate details for '{tool_name}': {e}")
        return _error(e)
    return _dumps({**details, "source": "generated"})
