"""Domain clients for Megaplan employees and departments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from megaplan._base import BaseMegaplanClient
from megaplan.request import MegaplanRequest

__all__ = ["DepartmentsClient", "EmployeesClient"]


class EmployeesClient:
    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::employee/list.api", self._base._params(params, kwargs))

    def card(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::employee/card.api", self._base._params(params, kwargs))

    def create(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::employee/create.api", self._base._params(params, kwargs))

    def edit(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::employee/edit.api", self._base._params(params, kwargs))


class DepartmentsClient:
    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::department/list.api", self._base._params(params, kwargs))
