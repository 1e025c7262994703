"""Domain client for Megaplan projects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from megaplan._base import BaseMegaplanClient
from megaplan.dicts import ACTION_TYPES
from megaplan.errors import UsageError
from megaplan.request import MegaplanRequest

__all__ = ["ProjectsClient"]


class ProjectsClient:
    """Project list, create, edit, actions and comments.

    Parameters follow the Megaplan project API and are passed through as
    snake_case keys.
    """

    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::project/list.api", self._base._params(params, kwargs))

    def create(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::project/Create.api", self._base._params(params, kwargs))

    def edit(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::project/edit.api", self._base._params(params, kwargs))

    def action(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        """Apply an ``act_*`` action to a project.

        Raises:
            UsageError: If ``action`` is given and is not a known action type.
        """
        merged = self._base._params(params, kwargs)
        action = merged.get("action")
        if action is not None and action not in ACTION_TYPES:
            raise UsageError(f"Unknown action {action!r}. Valid: {sorted(ACTION_TYPES)}")
        return self._base._request("::project/action.api", merged)

    def comment_create(
        self,
        project_id: str | int,
        text: str,
        hours: float | int | None = 0,
    ) -> MegaplanRequest:
        return self._base._add_comment("project", project_id, text, hours)
