"""Domain clients for Megaplan CRM: contractors (clients) and deals."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from megaplan._base import BaseMegaplanClient
from megaplan.request import MegaplanRequest

__all__ = ["ContractorsClient", "DealsClient"]


class ContractorsClient:
    """Contractor operations.

    Contractor IDs are sent as given; the +1000000 offset applies to tasks
    and projects only.
    """

    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(
        self,
        filter_id: str | int | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> MegaplanRequest:
        """List contractors; the response is narrowed to ``clients``."""
        params = self._base._params(
            None, {"filter_id": filter_id, "qs": search, "limit": limit, "offset": offset}
        )
        return self._base._request("::contractor/list.api", params, "clients")

    def save(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        """Create a contractor, or edit one when ``id`` is given."""
        return self._base._request("::contractor/save.api", self._base._params(params, kwargs))

    def card(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::contractor/card.api", self._base._params(params, kwargs))

    def delete(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::contractor/delete.api", self._base._params(params, kwargs))

    def list_fields(self) -> MegaplanRequest:
        return self._base._request("::contractor/listFields.api")

    def comment_create(
        self,
        contractor_id: str | int,
        text: str,
        hours: float | int | None = 0,
    ) -> MegaplanRequest:
        return self._base._add_comment("contractor", contractor_id, text, hours, normalize=False)


class DealsClient:
    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def list(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::deal/list.api", self._base._params(params, kwargs))

    def save(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        """Create a deal, or edit one when ``id`` is given."""
        return self._base._request("::deal/save.api", self._base._params(params, kwargs))

    def card(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> MegaplanRequest:
        return self._base._request("::deal/card.api", self._base._params(params, kwargs))

    def comment_create(
        self,
        deal_id: str | int,
        text: str,
        hours: float | int | None = 0,
    ) -> MegaplanRequest:
        return self._base._add_comment("deal", deal_id, text, hours, normalize=False)

    def add_online_store(
        self,
        params: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> MegaplanRequest:
        """Import an online-store order as a deal."""
        return self._base._request(
            ":trade/Deal/createFromOnlineStore.api", self._base._params(params, kwargs)
        )
