"""Decomposition of multi-intent needs into tasks with recommended tools."""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from ..exceptions import DecompositionFailure, ValidationFailure
from .catalog import ToolCatalog
from .resolution import resolve_tool_name
from .types import RecommendedTool, TaskBreakdown

if TYPE_CHECKING:
    from ..llm.client import TextGenerator

logger = logging.getLogger("ai-tool-recommender.decomposer")

SYSTEM_INSTRUCTIONS = """You are an expert in recommending AI tools.
Analyse the user's needs, break them down into the tasks required, and
recommend the best AI tools for each task.
Answer in Markdown using exactly this format:

# Task 1: [task name]
Description: [detailed description of the task]
Recommended tools:
- [tool name 1]
  - Reason: [why this tool is recommended]
- [tool name 2]
  - Reason: [why this tool is recommended]

# Task 2: [task name]
..."""

USER_PROMPT_TEMPLATE = """User needs: {needs}

Recommend the best AI tools for each task. When several tools fit, compare
their strengths."""

# Task sections start with a level-one markdown heading
_SECTION_PATTERN = re.compile(r"^#[ \t]+", re.MULTILINE)
_TITLE_PREFIX = re.compile(r"^(?:task|タスク)\s*\d*\s*[:：]\s*", re.IGNORECASE)
_DESCRIPTION_LABEL = re.compile(r"(?:description|説明)\s*[:：]", re.IGNORECASE)
_TOOLS_LABEL = re.compile(r"(?:recommended tools|推薦ツール)\s*[:：]", re.IGNORECASE)
_REASON_LINE = re.compile(r"^[-*]?\s*(?:reason|推薦理由)\s*[:：]\s*(.*)$", re.IGNORECASE)
_BULLET_LINE = re.compile(r"^[-*]\s+(.*)$")
# Trailing remarks such as "Runway (if budget allows)" or "Canva（無料版）"
_TRAILING_REMARK = re.compile(r"\s*[（(][^（()）]*[）)]\s*$")
# Inline remarks such as "**Midjourney**: great for art"
_INLINE_REMARK = re.compile(r"\s*[:：].*$")


def _clean_tool_name(raw: str) -> str:
    name = raw.strip().strip("*`[]").strip()
    name = _TRAILING_REMARK.sub("", name)
    name = _INLINE_REMARK.sub("", name).strip("*`[] ")
    name = _TRAILING_REMARK.sub("", name)
    return name.strip().strip("*`[]").strip()


def _parse_tools(section: str) -> list[RecommendedTool]:
    tools: list[tuple[str, list[str]]] = []
    for line in section.splitlines():
        stripped = line.strip()
        if not stripped:
            continue

        reason_match = _REASON_LINE.match(stripped)
        if reason_match:
            if tools and reason_match.group(1).strip():
                tools[-1][1].append(reason_match.group(1).strip())
            continue

        bullet = _BULLET_LINE.match(stripped)
        if not bullet:
            continue
        # Indented bullets are details of the previous tool
        if line[:1].isspace() and tools:
            continue
        name = _clean_tool_name(bullet.group(1))
        if name:
            tools.append((name, []))

    return [RecommendedTool(name=name, reason=" ".join(reasons)) for name, reasons in tools]


def _parse_section(section: str) -> TaskBreakdown:
    title_line, _, body = section.partition("\n")
    task = _TITLE_PREFIX.sub("", title_line.strip()).strip()

    tools_label = _TOOLS_LABEL.search(body)
    if not tools_label:
        raise DecompositionFailure(f"Task '{task}' has no recommended tools section")

    description = ""
    description_label = _DESCRIPTION_LABEL.search(body, 0, tools_label.start())
    if description_label:
        description = body[description_label.end() : tools_label.start()]
        description = " ".join(description.split())

    tools = _parse_tools(body[tools_label.end() :])
    if not tools:
        raise DecompositionFailure(f"Task '{task}' recommends no tools")

    return TaskBreakdown(task=task, description=description, recommended_tools=tuple(tools))


def parse_decomposition(content: str) -> list[TaskBreakdown]:
    """Parse generated text into tasks with (unresolved) recommended tools.

    Text before the first heading is ignored. A single unparseable section
    invalidates the whole response.

    Args:
        content: Generated markdown text

    Returns:
        The parsed tasks, in order.

    Raises:
        DecompositionFailure: If no task section is found, or a section lacks
            a recommended tools section or lists no tools.
    """
    sections = _SECTION_PATTERN.split(content or "")[1:]
    sections = [s for s in sections if s.strip()]
    if not sections:
        raise DecompositionFailure("No task sections found in generated text")
    return [_parse_section(section) for section in sections]


class TaskDecomposer:
    """Split needs into tasks through a text-generation collaborator."""

    def __init__(
        self,
        generator: TextGenerator,
        catalog: ToolCatalog,
        max_tokens: int = 2000,
        temperature: float = 0.7,
        max_workers: int = 4,
    ) -> None:
        self.generator = generator
        self.catalog = catalog
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_workers = max_workers

    def _resolve_task(self, task: TaskBreakdown) -> TaskBreakdown:
        tools = tuple(
            RecommendedTool(
                name=rec.name,
                reason=rec.reason,
                tool=resolve_tool_name(rec.name, self.catalog),
            )
            for rec in task.recommended_tools
        )
        return TaskBreakdown(
            task=task.task, description=task.description, recommended_tools=tools
        )

    def resolve_tasks(self, tasks: list[TaskBreakdown]) -> list[TaskBreakdown]:
        """Attach catalog records to every recommended tool name."""
        if len(tasks) <= 1:
            return [self._resolve_task(task) for task in tasks]
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self._resolve_task, tasks))

    def decompose(self, needs_text: str) -> list[TaskBreakdown]:
        """Decompose needs into tasks and resolve their tools against the catalog.

        Args:
            needs_text: The user's free-text needs

        Returns:
            One breakdown per task.

        Raises:
            ValidationFailure: If needs_text is blank.
            CollaboratorError: If text generation fails.
            CollaboratorTimeout: If text generation times out.
            DecompositionFailure: If the generated text cannot be parsed.
        """
        if not isinstance(needs_text, str) or not needs_text.strip():
            raise ValidationFailure("Needs text is required")

        content = self.generator.generate(
            SYSTEM_INSTRUCTIONS,
            USER_PROMPT_TEMPLATE.format(needs=needs_text.strip()),
            self.max_tokens,
            self.temperature,
        )
        tasks = parse_decomposition(content)
        logger.info(f"Decomposed needs into {len(tasks)} tasks")
        return self.resolve_tasks(tasks)
