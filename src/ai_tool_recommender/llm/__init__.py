"""Text-generation collaborator."""

from .client import OpenAICompatibleClient, TextGenerator

__all__ = ["OpenAICompatibleClient", "TextGenerator"]
