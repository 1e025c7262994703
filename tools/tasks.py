"""Tasks MCP tools -- list, read, create and comment on tasks."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from _auth import fetch_result, get_megaplan_client, tool_error_handler
from _constants import MAX_COMMENT_LEN

logger = logging.getLogger("megaplan_mcp.server")

__all__ = ["register"]


def register(mcp: FastMCP) -> None:
    """Register all task tools on the given FastMCP instance."""

    # ------------------------------------------------------------------
    # Read tools
    # ------------------------------------------------------------------

    @mcp.tool
    @tool_error_handler("Failed to fetch tasks. Please try again.")
    async def tasks_list(
        folder: str | None = None,
        status: str | None = None,
        search: str | None = None,
        only_actual: bool | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """List tasks visible to the configured Megaplan user.

        Args:
            folder: incoming, responsible, executor, owner, auditor or all.
            status: actual, inprocess, new, overdue, done, delayed, completed, failed or any.
            search: Free-text filter.
            only_actual: Only unfinished tasks.
            limit: Maximum number of tasks.
            offset: Number of tasks to skip.
        """
        client = await get_megaplan_client()
        return await fetch_result(
            client.tasks.list(
                status=status,
                folder=folder,
                search=search,
                only_actual=only_actual,
                limit=limit,
                offset=offset,
            )
        )

    @mcp.tool
    @tool_error_handler("Failed to fetch task card. Please try again.")
    async def tasks_card(task_id: int) -> dict[str, Any]:
        """Get the full card of one task.

        Args:
            task_id: Task ID (short IDs below 1000000 are offset automatically).
        """
        client = await get_megaplan_client()
        return await fetch_result(client.tasks.card(task_id))

    @mcp.tool
    @tool_error_handler("Failed to fetch task comments. Please try again.")
    async def tasks_comments(task_id: int) -> dict[str, Any]:
        """List the comments of one task."""
        client = await get_megaplan_client()
        return await fetch_result(client.tasks.comments(task_id))

    # ------------------------------------------------------------------
    # Write tools
    # ------------------------------------------------------------------

    @mcp.tool
    @tool_error_handler("Failed to create task. Please try again.")
    async def tasks_create(
        name: str,
        responsible: int,
        statement: str | None = None,
        super_task: str | None = None,
        deadline: str | None = None,
        auditors: list[int] | None = None,
        executors: list[int] | None = None,
        severity: str | None = None,
    ) -> dict[str, Any]:
        """Create a task.

        Args:
            name: Task title.
            responsible: Employee ID of the responsible person.
            statement: Task description.
            super_task: Parent task ID, or "p<id>" to place it in a project.
            deadline: Deadline as ISO-8601 datetime (e.g. 2026-01-31T18:00:00).
            auditors: Employee IDs of auditors.
            executors: Employee IDs of co-executors.
            severity: Severity code.
        """
        if not name.strip():
            raise ToolError("Task name must not be empty.")
        deadline_dt = datetime.fromisoformat(deadline) if deadline else None
        client = await get_megaplan_client()
        result = await fetch_result(
            client.tasks.create(
                name=name,
                statement=statement,
                responsible=responsible,
                super_task=super_task,
                deadline=deadline_dt,
                executors=executors,
                auditors=auditors,
                severity=severity,
            )
        )
        logger.info(
            "WRITE_OP tool=tasks_create responsible=%s super_task=%s",
            responsible, super_task,
        )
        return result

    @mcp.tool
    @tool_error_handler("Failed to post comment. Please try again.")
    async def tasks_comment_create(task_id: int, text: str, hours: float = 0) -> dict[str, Any]:
        """Comment on a task.

        Args:
            task_id: Task ID.
            text: Comment text.
            hours: Work time to book on the task, in hours.
        """
        if len(text) > MAX_COMMENT_LEN:
            raise ToolError(f"Comment too long (max {MAX_COMMENT_LEN} characters)")
        if hours < 0:
            raise ValueError(f"hours must not be negative, got {hours}")
        client = await get_megaplan_client()
        result = await fetch_result(client.tasks.comment_create(task_id, text, hours))
        logger.info("WRITE_OP tool=tasks_comment_create task_id=%s hours=%s", task_id, hours)
        return result
