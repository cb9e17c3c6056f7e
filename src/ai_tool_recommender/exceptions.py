"""Exception types raised by the AI tool recommender."""


class ToolRecommenderError(Exception):
    """Base class for all recommender failures."""

    retryable: bool = False


class ValidationFailure(ToolRecommenderError):
    """Required input is empty or malformed (e.g. no need phrases)."""


class CatalogError(ToolRecommenderError):
    """A catalog entry could not be loaded."""


class DecompositionFailure(ToolRecommenderError):
    """Generated text could not be parsed into tasks with recommended tools."""


class CollaboratorError(ToolRecommenderError):
    """The external text-generation call failed.

    Surfaced to the user as retryable; the recommender never retries on its own.
    """

    retryable = True


class CollaboratorTimeout(CollaboratorError):
    """The external text-generation call exceeded its time budget."""
