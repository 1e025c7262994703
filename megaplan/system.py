"""Domain client for account-wide operations: search, time, history, feedback."""

from __future__ import annotations

from typing import Any

from megaplan import utils
from megaplan._base import BaseMegaplanClient
from megaplan.dicts import SUBJECT_TYPES
from megaplan.errors import UsageError
from megaplan.request import MegaplanRequest

__all__ = ["SystemClient"]


def _identity(data: Any) -> Any:
    return data


class SystemClient:
    def __init__(self, base: BaseMegaplanClient) -> None:
        self._base = base

    def search(self, text: str) -> MegaplanRequest:
        """Global quick search.  The ``qs`` key is sent as is, not PascalCased."""
        if not text:
            raise UsageError("Search text must not be empty")
        return self._base._request("::search/quick.api", {"qs": text}, None, _identity)

    def datetime(self) -> MegaplanRequest:
        """Current server time; the response is narrowed to ``datetime``."""
        return self._base._request("::system/datetime.api", None, "datetime")

    def history(
        self,
        subject_id: str | int | None = None,
        subject_type: str = "task",
        **kwargs: Any,
    ) -> MegaplanRequest:
        """Change history of one subject, or of all subjects without an id.

        The response is narrowed to ``changes``.
        """
        if subject_type not in SUBJECT_TYPES:
            raise UsageError(
                f"subject_type must be one of {sorted(SUBJECT_TYPES)}, got {subject_type!r}"
            )
        params = self._base._params(
            {"subject_type": subject_type, "subject_id": utils.normalize_id(subject_id)},
            kwargs,
        )
        method = "list.api" if params.get("subject_id") else "all.api"
        return self._base._request(f"::history/{method}", params, "changes")

    def feedback(self, message: str) -> MegaplanRequest:
        return self._base._request("::system/feedback.api", {"message": message})

    def react(self, token: str, message: str) -> MegaplanRequest:
        """Answer a notification reaction by its token."""
        return self._base._request(
            "::reaction/do.api", {"token": token, "params": {"text": message}}
        )
