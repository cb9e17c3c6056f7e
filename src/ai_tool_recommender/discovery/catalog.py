"""Read-only store of catalog tool records."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from importlib import resources
from pathlib import Path
from typing import Any

from ..exceptions import CatalogError
from .types import ToolRecord

logger = logging.getLogger("ai-tool-recommender.catalog")

DEFAULT_CATALOG_RESOURCE = "ai_tools.json"


class ToolCatalog:
    """Immutable collection of tools, in catalog order.

    Built once at startup and passed explicitly to whatever needs it;
    nothing mutates it afterwards, so concurrent requests can share it.
    """

    def __init__(self, tools: Iterable[ToolRecord] = ()) -> None:
        self._tools: tuple[ToolRecord, ...] = tuple(tools)
        self._by_id: dict[str, ToolRecord] = {}
        self._positions: dict[int, int] = {}
        for position, tool in enumerate(self._tools):
            self._by_id.setdefault(tool.id, tool)
            self._positions[id(tool)] = position

    @classmethod
    def from_entries(cls, entries: Iterable[dict[str, Any]]) -> ToolCatalog:
        """Build a catalog from raw catalog entries.

        Raises:
            CatalogError: If an entry is not an object or lacks an id or name.
        """
        tools = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise CatalogError(f"Catalog entry {index} is not an object")
            if not entry.get("id") or not entry.get("name"):
                raise CatalogError(f"Catalog entry {index} is missing 'id' or 'name'")
            tools.append(ToolRecord.from_dict(entry))
        return cls(tools)

    @classmethod
    def from_json_file(cls, path: str | Path) -> ToolCatalog:
        """Load a catalog from a JSON file holding a list of entries."""
        path = Path(path)
        try:
            entries = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Failed to read catalog {path}: {e}") from e
        if not isinstance(entries, list):
            raise CatalogError(f"Catalog {path} must contain a JSON list")
        catalog = cls.from_entries(entries)
        logger.info(f"Loaded {len(catalog)} tools from {path}")
        return catalog

    @property
    def tools(self) -> tuple[ToolRecord, ...]:
        return self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolRecord]:
        return iter(self._tools)

    def __bool__(self) -> bool:
        return bool(self._tools)

    def get_by_id(self, tool_id: str) -> ToolRecord | None:
        """Get a tool by id (first one wins for duplicate ids)."""
        return self._by_id.get(tool_id)

    def find_by_name(self, name: str) -> ToolRecord | None:
        """Get the first tool whose name equals ``name``, ignoring case."""
        wanted = name.strip().lower()
        for tool in self._tools:
            if tool.name.lower() == wanted:
                return tool
        return None

    def position(self, tool: ToolRecord) -> int:
        """Catalog order of a tool; tools from elsewhere sort last."""
        return self._positions.get(id(tool), len(self._tools))


def load_default_catalog() -> ToolCatalog:
    """Load the catalog bundled with the package."""
    source = resources.files("ai_tool_recommender.data").joinpath(DEFAULT_CATALOG_RESOURCE)
    with resources.as_file(source) as path:
        return ToolCatalog.from_json_file(path)
