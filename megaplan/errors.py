"""Exceptions raised synchronously for configuration and usage mistakes.

Remote rejections and transport failures are not raised: they reach the
caller as failure payloads through ``MegaplanRequest.send``.  Only
``MegaplanRequest.fetch`` turns such a payload into ``MegaplanAPIError``.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConfigurationError",
    "MegaplanAPIError",
    "MegaplanError",
    "NotAuthenticatedError",
    "UsageError",
]


class MegaplanError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MegaplanError, ValueError):
    """Server configuration is missing a required field."""


class UsageError(MegaplanError, ValueError):
    """An operation was called with arguments it cannot turn into a request."""


class NotAuthenticatedError(MegaplanError, PermissionError):
    """A signed operation was requested before credentials were set."""

    def __init__(self, message: str = "Authenticate first") -> None:
        super().__init__(message)


class MegaplanAPIError(MegaplanError):
    """Failure payload delivered by a request, raised by ``fetch``."""

    def __init__(self, payload: dict[str, Any]) -> None:
        self.payload = payload
        error = payload.get("error") if isinstance(payload, dict) else None
        self.code: str | None = None
        message = "Megaplan request failed"
        if isinstance(error, dict):
            self.code = error.get("code")
            message = error.get("message") or message
        super().__init__(message)
