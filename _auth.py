"""Shared authentication and error-handling helpers for MCP tools."""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from typing import Any, ParamSpec, TypeVar

from fastmcp.exceptions import ToolError

from megaplan import MegaplanAPIError, MegaplanClient, MegaplanRequest, get_registry

logger = logging.getLogger("megaplan_mcp.server")

P = ParamSpec("P")
R = TypeVar("R")

# Serializes lazy logins so concurrent tool calls share one auth round-trip.
_login_lock = asyncio.Lock()


def tool_error_handler(
    error_message: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that wraps MCP tool functions with standard error handling.

    Converts PermissionError and ValueError to ToolError (preserving message),
    MegaplanAPIError to ToolError with the Megaplan message, and catches all
    other exceptions with a generic message.
    """

    def decorator(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await fn(*args, **kwargs)
            except ToolError:
                raise
            except PermissionError as exc:
                raise ToolError(str(exc)) from exc
            except ValueError as exc:
                raise ToolError(str(exc)) from exc
            except MegaplanAPIError as exc:
                raise ToolError(f"Megaplan error: {exc}") from exc
            except Exception:
                logger.exception("%s failed", fn.__name__)
                raise ToolError(error_message) from None

        return wrapper

    return decorator


async def get_megaplan_client() -> MegaplanClient:
    """Return the shared client, logging in first if it has no credentials.

    Raises:
        PermissionError: If no credentials are configured or login fails.
    """
    client = get_registry()
    if client.authenticated:
        return client

    async with _login_lock:
        # Another coroutine may have logged in while we waited.
        if client.authenticated:
            return client

        login = os.environ.get("MEGAPLAN_LOGIN", "")
        password = os.environ.get("MEGAPLAN_PASSWORD", "")
        if not login or not password:
            raise PermissionError(
                "Megaplan credentials are not configured. Set MEGAPLAN_LOGIN and "
                "MEGAPLAN_PASSWORD, or MEGAPLAN_ACCESS_ID and MEGAPLAN_SECRET_KEY."
            )

        logger.debug("Logging in to Megaplan as %s", login)
        credentials = await client.auth(login, password)
        if credentials is None:
            raise PermissionError("Megaplan login failed. Check the configured credentials.")
    return client


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


async def fetch_result(request: MegaplanRequest) -> dict[str, Any]:
    """Send *request* and wrap its payload in a success dict.

    Raises:
        MegaplanAPIError: If the request settled through its failure path.
    """
    return {"status": "success", "data": _jsonable(await request.fetch())}
