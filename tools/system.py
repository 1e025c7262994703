"""System MCP tools -- search, server time, history and field labels."""

from __future__ import annotations

import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from _auth import fetch_result, get_megaplan_client, tool_error_handler
from _constants import MAX_SEARCH_LEN
from megaplan.lang_ru import FIELD_LABELS, labels_for

logger = logging.getLogger("megaplan_mcp.server")

__all__ = ["register"]


def register(mcp: FastMCP) -> None:
    """Register all system tools on the given FastMCP instance."""

    @mcp.tool
    @tool_error_handler("Search failed. Please try again.")
    async def system_search(text: str) -> dict[str, Any]:
        """Global quick search across tasks, projects, employees and contractors."""
        if len(text) > MAX_SEARCH_LEN:
            raise ToolError(f"Search text too long (max {MAX_SEARCH_LEN} characters)")
        client = await get_megaplan_client()
        return await fetch_result(client.system.search(text))

    @mcp.tool
    @tool_error_handler("Failed to fetch server time. Please try again.")
    async def system_datetime() -> dict[str, Any]:
        """Current date and time on the Megaplan server."""
        client = await get_megaplan_client()
        return await fetch_result(client.system.datetime())

    @mcp.tool
    @tool_error_handler("Failed to fetch history. Please try again.")
    async def system_history(
        subject_id: int | None = None,
        subject_type: str = "task",
    ) -> dict[str, Any]:
        """Change history of a task or project, or of everything when no ID is given.

        Args:
            subject_id: Task or project ID.
            subject_type: "task" or "project".
        """
        client = await get_megaplan_client()
        return await fetch_result(client.system.history(subject_id, subject_type))

    @mcp.tool
    @tool_error_handler("Failed to fetch field labels.")
    async def system_field_labels(entity: str) -> dict[str, Any]:
        """Russian labels of an entity's fields (task, project, employee, ...).

        "folder" and "task_status" return the labels of the task list filters.
        """
        labels = labels_for(entity)
        if labels is None:
            available = sorted([*FIELD_LABELS, "folder", "task_status"])
            raise ToolError(f"Unknown entity {entity!r}. Available: {available}")
        return {"status": "success", "data": dict(labels)}
