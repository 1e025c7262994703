"""Domain clients for Megaplan todo lists and calendar events."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from megaplan._base import BaseMegaplanClient
from megaplan.errors import UsageError
from megaplan.request import MegaplanRequest

__all__ = ["EventsClient", "TodoListsClient"]


class TodoListsClient:
    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::todo/list.api", self._base._params(params, kwargs))

    def create(self, name: str) -> MegaplanRequest:
        if not name:
            raise UsageError("Todo list name must not be empty")
        return self._base._request("::todo/create.api", {"name": name})

    def edit(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::todo/edit.api", self._base._params(params, kwargs))

    def delete(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::todo/delete.api", self._base._params(params, kwargs))


class EventsClient:
    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::event/list.api", self._base._params(params, kwargs))

    def card(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::event/card.api", self._base._params(params, kwargs))

    def create(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::event/create.api", self._base._params(params, kwargs))

    def edit(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::event/edit.api", self._base._params(params, kwargs))
