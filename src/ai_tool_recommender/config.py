"""Configuration for the AI tool recommender."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .discovery.fuzzy import FUZZY_THRESHOLD

logger = logging.getLogger("ai-tool-recommender.config")

DEFAULT_LLM_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_LLM_MODEL = "meta-llama/llama-4-maverick:free"


def _get_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid int value for {key}: {raw}, using default")
        return default


def _get_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid float value for {key}: {raw}, using default")
        return default


@dataclass
class LLMConfig:
    """Settings of the OpenAI-compatible text-generation service.

    Attributes:
        base_url: API root, e.g. https://openrouter.ai/api/v1
        api_key: Bearer key; generation is unavailable without it
        model: Model identifier sent with every request
        max_tokens: Completion token limit
        temperature: Sampling temperature
        timeout: Seconds before a request fails with CollaboratorTimeout
        app_title: Sent as X-Title, used by OpenRouter for attribution
    """

    base_url: str = DEFAULT_LLM_BASE_URL
    api_key: str | None = None
    model: str = DEFAULT_LLM_MODEL
    max_tokens: int = 2000
    temperature: float = 0.7
    timeout: float = 30.0
    app_title: str = "AI Tool Recommender"

    @classmethod
    def from_env(cls) -> LLMConfig:
        """Load settings from TOOLREC_LLM_* variables.

        OPENROUTER_API_KEY is used when TOOLREC_LLM_API_KEY is unset.
        """
        defaults = cls()
        return cls(
            base_url=os.getenv("TOOLREC_LLM_BASE_URL", defaults.base_url).rstrip("/"),
            api_key=os.getenv("TOOLREC_LLM_API_KEY") or os.getenv("OPENROUTER_API_KEY"),
            model=os.getenv("TOOLREC_LLM_MODEL", defaults.model),
            max_tokens=_get_int("TOOLREC_LLM_MAX_TOKENS", defaults.max_tokens),
            temperature=_get_float("TOOLREC_LLM_TEMPERATURE", defaults.temperature),
            timeout=_get_float("TOOLREC_LLM_TIMEOUT", defaults.timeout),
        )

    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass
class RecommenderConfig:
    """Top-level settings.

    Attributes:
        catalog_path: Catalog JSON file; the bundled catalog when None
        fuzzy_threshold: Minimum partial_ratio for a fuzzy field match
        llm: Text-generation settings
    """

    catalog_path: Path | None = None
    fuzzy_threshold: int = FUZZY_THRESHOLD
    llm: LLMConfig = field(default_factory=LLMConfig)

    @classmethod
    def from_env(cls) -> RecommenderConfig:
        catalog_path = os.getenv("TOOLREC_CATALOG_PATH")
        return cls(
            catalog_path=Path(catalog_path).expanduser() if catalog_path else None,
            fuzzy_threshold=_get_int("TOOLREC_FUZZY_THRESHOLD", FUZZY_THRESHOLD),
            llm=LLMConfig.from_env(),
        )
