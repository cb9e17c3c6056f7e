"""Data types for tool discovery."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import ValidationFailure
from .metadata import BEGINNER_LEVELS, DIFFICULTY_MARKERS, FREE_BUDGET_MARKERS

# First numeric run, allowing thousands separators and a decimal part: "$1,200.50/mo" -> 1200.5
_NUMBER_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?")


def parse_number(text: str | None) -> float:
    """Extract the first numeric substring of ``text``; 0 when there is none."""
    if not text:
        return 0
    match = _NUMBER_PATTERN.search(text)
    if not match:
        return 0
    value = float(match.group(0).replace(",", ""))
    return int(value) if value.is_integer() else value


def _strings(value: Any) -> tuple[str, ...]:
    """Coerce a catalog sequence field to a tuple of strings."""
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value if item is not None)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class PaidPlan:
    """A paid pricing plan of a tool."""

    name: str = ""
    price: str = ""
    billing_cycle: str = ""
    features: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> PaidPlan:
        data = data or {}
        return cls(
            name=_text(data.get("name")),
            price=_text(data.get("price")),
            billing_cycle=_text(data.get("billingCycle")),
            features=_strings(data.get("features")),
        )


@dataclass(frozen=True)
class Pricing:
    """Pricing summary of a tool."""

    has_free: bool = False
    free_features: tuple[str, ...] = ()
    paid_plans: tuple[PaidPlan, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Pricing:
        data = data or {}
        return cls(
            has_free=bool(data.get("hasFree", False)),
            free_features=_strings(data.get("freeFeatures")),
            paid_plans=tuple(
                PaidPlan.from_dict(plan) for plan in data.get("paidPlans") or ()
            ),
        )


@dataclass(frozen=True)
class ToolRecord:
    """A catalog entry describing one AI tool.

    Records are frozen and hold tuples so nothing downstream of the
    catalog can alter them during a search or recommendation.
    """

    id: str
    name: str
    category: str = ""
    subcategory: str = ""
    description: str = ""
    features: tuple[str, ...] = ()
    use_cases: tuple[str, ...] = ()
    pros: tuple[str, ...] = ()
    cons: tuple[str, ...] = ()
    pricing: Pricing = field(default_factory=Pricing)
    official_url: str = ""
    image_url: str = ""
    api_available: bool = False
    api_doc_url: str = ""
    alternatives: tuple[str, ...] = ()
    last_updated: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ToolRecord:
        """Build a record from a catalog JSON entry (camelCase keys).

        Only ``id`` and ``name`` are required; the caller validates them.
        """
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            category=_text(data.get("category")),
            subcategory=_text(data.get("subcategory")),
            description=_text(data.get("description")),
            features=_strings(data.get("features")),
            use_cases=_strings(data.get("useCases")),
            pros=_strings(data.get("pros")),
            cons=_strings(data.get("cons")),
            pricing=Pricing.from_dict(data.get("pricing")),
            official_url=_text(data.get("officialUrl")),
            image_url=_text(data.get("imageUrl")),
            api_available=bool(data.get("apiAvailable", False)),
            api_doc_url=_text(data.get("apiDocUrl")),
            alternatives=_strings(data.get("alternatives")),
            last_updated=_text(data.get("lastUpdated")),
        )

    @property
    def first_paid_price(self) -> float:
        """Numeric price of the first paid plan, 0 if unknown."""
        if not self.pricing.paid_plans:
            return 0
        return parse_number(self.pricing.paid_plans[0].price)

    @property
    def price_label(self) -> str:
        if self.pricing.paid_plans and self.pricing.paid_plans[0].price:
            return self.pricing.paid_plans[0].price
        return "free"

    @property
    def is_beginner_friendly(self) -> bool:
        """True when no con mentions a difficulty marker."""
        return not any(
            marker in con.lower() for con in self.cons for marker in DIFFICULTY_MARKERS
        )


def _phrases(value: Any, field_name: str) -> tuple[str, ...]:
    """Validate a list of phrases, dropping blank entries."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValidationFailure(f"'{field_name}' must be a list of strings")
    phrases = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationFailure(f"'{field_name}' must be a list of strings")
        if item.strip():
            phrases.append(item.strip())
    return tuple(phrases)


@dataclass(frozen=True)
class QueryContext:
    """What a user asked for in one recommendation request.

    Attributes:
        needs: Capabilities the tool must provide
        priorities: Desirable traits that earn a bonus
        limitations: Traits to avoid, penalised when found in cons
        budget: None/"" for unconstrained, a free marker, or a string
            holding the maximum price (e.g. "$20/month")
        technical_level: beginner / intermediate / advanced
    """

    needs: tuple[str, ...] = ()
    priorities: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()
    budget: str | None = None
    technical_level: str | None = None

    @classmethod
    def from_request(
        cls,
        needs: Any,
        budget: Any = None,
        technical_level: Any = None,
        priorities: Any = None,
        limitations: Any = None,
    ) -> QueryContext:
        """Validate raw request values into a context.

        Raises:
            ValidationFailure: If no non-blank need is given or a field has
                the wrong type.
        """
        need_phrases = _phrases(needs, "needs")
        if not need_phrases:
            raise ValidationFailure("At least one need is required")
        if budget is not None and not isinstance(budget, str):
            raise ValidationFailure("'budget' must be a string")
        if technical_level is not None and not isinstance(technical_level, str):
            raise ValidationFailure("'technical_level' must be a string")
        return cls(
            needs=need_phrases,
            priorities=_phrases(priorities, "priorities"),
            limitations=_phrases(limitations, "limitations"),
            budget=budget.strip() if budget else None,
            technical_level=technical_level.strip() if technical_level else None,
        )

    @property
    def is_free_budget(self) -> bool:
        return bool(self.budget) and self.budget.strip().lower() in FREE_BUDGET_MARKERS

    @property
    def is_paid_budget(self) -> bool:
        return bool(self.budget and self.budget.strip()) and not self.is_free_budget

    @property
    def max_budget(self) -> float:
        return parse_number(self.budget)

    @property
    def is_beginner(self) -> bool:
        return bool(self.technical_level) and (
            self.technical_level.strip().lower() in BEGINNER_LEVELS
        )


@dataclass(frozen=True)
class ScoredCandidate:
    """A tool paired with its relevance score for one ranking pass."""

    tool: ToolRecord
    score: int


@dataclass
class Recommendation:
    """A recommended tool as returned to callers of ``recommend``."""

    name: str
    description: str
    url: str
    price: str
    features: list[str]
    pros: list[str]
    cons: list[str]
    category: str
    subcategory: str
    image_url: str
    score: int

    @classmethod
    def from_candidate(cls, candidate: ScoredCandidate) -> Recommendation:
        tool = candidate.tool
        return cls(
            name=tool.name,
            description=tool.description,
            url=tool.official_url,
            price=tool.price_label,
            features=list(tool.features),
            pros=list(tool.pros),
            cons=list(tool.cons),
            category=tool.category,
            subcategory=tool.subcategory,
            image_url=tool.image_url,
            score=candidate.score,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "price": self.price,
            "features": self.features,
            "pros": self.pros,
            "cons": self.cons,
            "category": self.category,
            "subcategory": self.subcategory,
            "imageUrl": self.image_url,
            "score": self.score,
        }


@dataclass(frozen=True)
class RecommendedTool:
    """A tool named by the text-generation collaborator for one task."""

    name: str
    reason: str
    tool: ToolRecord | None = None


@dataclass(frozen=True)
class TaskBreakdown:
    """One decomposed task and the tools recommended for it."""

    task: str
    description: str
    recommended_tools: tuple[RecommendedTool, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "task": self.task,
            "description": self.description,
            "recommendedTools": [
                {
                    "name": rec.name,
                    "reason": rec.reason,
                    "toolId": rec.tool.id if rec.tool else None,
                    "catalogName": rec.tool.name if rec.tool else None,
                    "url": rec.tool.official_url if rec.tool else None,
                }
                for rec in self.recommended_tools
            ],
        }
