"""Async client for the Megaplan API.

Provides ``MegaplanClient`` plus get_registry() / set_registry() holding
the process-wide client used by the MCP tools.  Tests inject clients or
mocks via set_registry().
"""

from __future__ import annotations

from megaplan._base import BaseMegaplanClient, Credentials
from megaplan.client import MegaplanClient
from megaplan.errors import (
    ConfigurationError,
    MegaplanAPIError,
    MegaplanError,
    NotAuthenticatedError,
    UsageError,
)
from megaplan.request import MegaplanRequest
from megaplan.serverconf import ServerConfig

__all__ = [
    "BaseMegaplanClient",
    "ConfigurationError",
    "Credentials",
    "MegaplanAPIError",
    "MegaplanClient",
    "MegaplanError",
    "MegaplanRequest",
    "NotAuthenticatedError",
    "ServerConfig",
    "UsageError",
    "get_registry",
    "set_registry",
]

_registry: MegaplanClient | None = None


def get_registry() -> MegaplanClient:
    """Return the active client, or raise if not initialized."""
    if _registry is None:
        raise RuntimeError("MegaplanClient not initialized. Server lifespan has not started.")
    return _registry


def set_registry(client: MegaplanClient | None) -> None:
    """Set (or clear) the global client. Used by lifespan and tests."""
    global _registry
    _registry = client
