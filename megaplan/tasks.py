"""Domain client for Megaplan task operations.

Uses composition: holds a reference to :class:`BaseMegaplanClient` and
delegates request building to ``self._base._request()``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from megaplan import utils
from megaplan._base import BaseMegaplanClient
from megaplan.dicts import FOLDERS, TASK_STATUSES
from megaplan.errors import UsageError
from megaplan.request import MegaplanRequest

__all__ = ["TasksClient"]


def _normalize_ids(ids: Sequence[Any] | None) -> list[Any] | None:
    if ids is None:
        return None
    if isinstance(ids, (str, int)):
        ids = [ids]
    return [utils.normalize_id(i) for i in ids]


class TasksClient:
    """Task list, card, creation and comments."""

    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(
        self,
        status: str | None = None,
        folder: str | None = None,
        favorites_only: bool | None = None,
        search: str | None = None,
        detailed: bool | None = None,
        only_actual: bool | None = None,
        filter_id: str | int | None = None,
        count: bool | None = None,
        employee_id: str | int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        show_actions: bool | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> MegaplanRequest:
        """List tasks; the response is narrowed to the ``tasks`` list.

        Unset arguments fall back to the client defaults rather than the
        API ones (``any``, ``all``, ``only_actual=false``): status
        ``actual``, folder ``incoming``, only unfinished tasks, ascending
        order.  ``favorites_only``, ``detailed``, ``count`` and
        ``show_actions`` are always sent as explicit flags.

        Raises:
            UsageError: On an unknown folder or status.
        """
        if folder is not None and folder not in FOLDERS:
            raise UsageError(f"Unknown task folder {folder!r}. Valid: {sorted(FOLDERS)}")
        if status is not None and status not in TASK_STATUSES:
            raise UsageError(f"Unknown task status {status!r}. Valid: {sorted(TASK_STATUSES)}")

        params = utils.object_filter(
            {
                "status": status or "actual",
                "folder": folder or "incoming",
                "favorites_only": 1 if favorites_only else 0,
                "search": search,
                "detailed": bool(detailed),
                "only_actual": only_actual is None or bool(only_actual),
                "filter_id": filter_id,
                "count": bool(count),
                "employee_id": utils.normalize_id(employee_id),
                "sort_by": sort_by,
                "sort_order": "desc" if (sort_order or "").lower() == "desc" else "asc",
                "show_actions": bool(show_actions),
                "limit": limit,
                "offset": offset,
            }
        )
        return self._base._request("::task/list.api", params, "tasks")

    def create(
        self,
        name: str,
        statement: str | None = None,
        responsible: str | int | None = None,
        super_task: str | int | None = None,
        deadline: datetime | date | Mapping[str, Any] | None = None,
        executors: Sequence[Any] | None = None,
        auditors: Sequence[Any] | None = None,
        severity: str | int | None = None,
        customer: str | int | None = None,
        is_group: bool = False,
    ) -> MegaplanRequest:
        """Create a task; the response is narrowed to ``task``.

        *super_task* is a task ID, or ``"p<id>"`` for a project.  *deadline*
        is a datetime, or a mapping with ``datetime``, ``date`` and ``type``.
        File attachments are not supported.
        """
        deadline_date = deadline_type = None
        if isinstance(deadline, Mapping):
            deadline_date = deadline.get("date")
            deadline_type = deadline.get("type")
            deadline = deadline.get("datetime")

        model = utils.object_filter(
            {
                "name": name,
                "statement": statement,
                "responsible": utils.normalize_id(responsible),
                "super_task": utils.normalize_id(super_task),
                "deadline": deadline,
                "deadline_date": deadline_date,
                "deadline_type": deadline_type,
                "executors": _normalize_ids(executors),
                "auditors": _normalize_ids(auditors),
                "severity": severity,
                "customer": utils.normalize_id(customer),
                "is_group": 1 if is_group else 0,
            }
        )
        return self._base._request("::task/create.api", {"model": model}, "task")

    def card(self, task_id: str | int) -> MegaplanRequest:
        """Full task card."""
        return self._base._request("::task/card.api", {"id": utils.normalize_id(task_id)})

    def comments(self, task_id: str | int) -> MegaplanRequest:
        return self._base._request(
            "::comment/list.api",
            {"subject_type": "task", "subject_id": utils.normalize_id(task_id)},
        )

    def comment_create(
        self,
        task_id: str | int,
        text: str,
        hours: float | int | None = 0,
    ) -> MegaplanRequest:
        """Comment on a task, optionally booking *hours* of work."""
        return self._base._add_comment("task", task_id, text, hours)
