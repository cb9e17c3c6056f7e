"""Client for the external text-generation service."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

import requests
from requests import Session

from ..config import LLMConfig
from ..exceptions import CollaboratorError, CollaboratorTimeout
from ..utils.logging import mask_sensitive
from ..utils.rate_limit import configure_rate_limiting

logger = logging.getLogger("ai-tool-recommender.llm")

RATE_LIMIT_SERVICE = "llm"

TOOL_DETAILS_INSTRUCTIONS = "You are an expert who outputs AI tool details as JSON."

TOOL_DETAILS_PROMPT = """Output details of the AI tool "{name}" as JSON only, in this shape:

{{
  "name": "tool name",
  "description": "detailed description",
  "url": "official URL",
  "price": "pricing (free tier, paid plan prices)",
  "features": ["feature 1", "feature 2"],
  "pros": ["pro 1", "pro 2"],
  "cons": ["con 1", "con 2"]
}}"""

_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class TextGenerator(Protocol):
    """Anything that turns instructions and a prompt into free text."""

    def generate(
        self,
        system_instructions: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str: ...


class OpenAICompatibleClient:
    """Chat-completions client for OpenRouter or any OpenAI-compatible API."""

    def __init__(self, config: LLMConfig | None = None, session: Session | None = None) -> None:
        """Initialize the client.

        Args:
            config: Service settings (read from the environment if not provided)
            session: Optional pre-built session, mainly for tests

        Raises:
            CollaboratorError: If no API key is configured.
        """
        self.config = config or LLMConfig.from_env()
        if not self.config.is_configured():
            raise CollaboratorError("No API key configured for text generation")

        logger.debug(
            f"Initializing text-generation client. URL: {self.config.base_url}, "
            f"model: {self.config.model}, "
            f"key (masked): {mask_sensitive(self.config.api_key)}"
        )

        self.session = session or Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
                "X-Title": self.config.app_title,
            }
        )
        configure_rate_limiting(self.session, RATE_LIMIT_SERVICE)

    def _post_chat(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.config.base_url}/chat/completions"
        try:
            response = self.session.post(url, json=payload, timeout=self.config.timeout)
        except requests.Timeout as e:
            logger.warning(f"Text generation timed out after {self.config.timeout}s")
            raise CollaboratorTimeout(
                f"Text generation timed out after {self.config.timeout}s"
            ) from e
        except requests.RequestException as e:
            logger.error(f"Text generation request failed: {e}")
            raise CollaboratorError(f"Text generation request failed: {e}") from e

        if not response.ok:
            logger.error(
                f"Text generation returned HTTP {response.status_code}: "
                f"{response.text[:200]}"
            )
            raise CollaboratorError(
                f"Text generation returned HTTP {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise CollaboratorError("Text generation returned invalid JSON") from e

    def generate(
        self,
        system_instructions: str,
        user_prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Generate text for a prompt.

        Args:
            system_instructions: System message
            user_prompt: User message
            max_tokens: Completion token limit (config default if None)
            temperature: Sampling temperature (config default if None)

        Returns:
            The generated message content.

        Raises:
            CollaboratorTimeout: If the request exceeds the configured timeout.
            CollaboratorError: If the request fails or the reply has no content.
        """
        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_instructions},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": max_tokens if max_tokens is not None else self.config.max_tokens,
            "temperature": (
                temperature if temperature is not None else self.config.temperature
            ),
        }
        data = self._post_chat(payload)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected text generation response: {str(data)[:200]}")
            raise CollaboratorError("Text generation returned no content") from e
        if not isinstance(content, str) or not content.strip():
            raise CollaboratorError("Text generation returned no content")
        return content

    def generate_tool_details(self, name: str) -> dict[str, Any]:
        """Ask for details of a tool that is not in the catalog.

        Raises:
            CollaboratorError: If generation fails or the reply holds no JSON object.
        """
        content = self.generate(
            TOOL_DETAILS_INSTRUCTIONS,
            TOOL_DETAILS_PROMPT.format(name=name),
            max_tokens=800,
            temperature=0.2,
        )
        match = _JSON_OBJECT_PATTERN.search(content)
        if not match:
            raise CollaboratorError(f"No JSON object in tool details for '{name}'")
        try:
            details = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise CollaboratorError(f"Invalid JSON in tool details for '{name}'") from e
        if not isinstance(details, dict):
            raise CollaboratorError(f"Invalid JSON in tool details for '{name}'")
        return details
