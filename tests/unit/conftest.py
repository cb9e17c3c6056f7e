"""Shared fixtures for unit tests."""

import pytest

from ai_tool_recommender.discovery.catalog import ToolCatalog
from ai_tool_recommender.discovery.types import PaidPlan, Pricing, ToolRecord


def _make_tool(tool_id="tool", name=None, price=None, has_free=False, **fields):
    paid_plans = (PaidPlan(name="Pro", price=price),) if price is not None else ()
    return ToolRecord(
        id=tool_id,
        name=name or tool_id,
        pricing=Pricing(has_free=has_free, paid_plans=paid_plans),
        **{key: tuple(value) if isinstance(value, list) else value
           for key, value in fields.items()},
    )


@pytest.fixture
def make_tool():
    """Factory building a ToolRecord; list fields are converted to tuples."""
    return _make_tool


@pytest.fixture
def sample_catalog():
    """A small synthetic catalog covering several categories."""
    return ToolCatalog(
        [
            _make_tool(
                "midjourney",
                name="Midjourney",
                category="Image Generation",
                subcategory="Art",
                description="Artistic image generation from prompts.",
                features=["image generation", "upscaling"],
                use_cases=["concept art"],
                pros=["beautiful output"],
                cons=["requires Discord"],
                price="$10/month",
            ),
            _make_tool(
                "stable-diffusion",
                name="Stable Diffusion",
                category="Image Generation",
                subcategory="Open Source",
                description="Open source image model.",
                features=["image generation", "offline use"],
                pros=["free and open source"],
                cons=["technical setup required"],
                has_free=True,
            ),
            _make_tool(
                "deepl",
                name="DeepL",
                category="Translation",
                description="Accurate machine translation.",
                features=["translation", "翻訳"],
                use_cases=["translating documents"],
                pros=["easy to use"],
                has_free=True,
                price="$8.74/month",
            ),
            _make_tool(
                "copilot",
                name="GitHub Copilot",
                category="Code Development",
                description="AI pair programmer.",
                features=["code completion"],
                pros=["fast suggestions"],
                price="$10/month",
            ),
        ]
    )


@pytest.fixture
def anyio_backend():
    """The server code is asyncio-based (asyncio.to_thread); run anyio tests on asyncio."""
    return "asyncio"
