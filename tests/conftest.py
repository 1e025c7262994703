"""Pytest configuration for Megaplan client and MCP server tests.

Sets required environment variables before any test module imports
server.py, which loads tool domains from ENABLED_DOMAINS at module level.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

os.environ.setdefault("MEGAPLAN_HOST", "megaplan.example.com")
os.environ.setdefault("ENABLED_DOMAINS", "tasks,crm,system")

import pytest_asyncio

from megaplan import MegaplanClient

HOST = "megaplan.example.com"
API = f"https://{HOST}:443"
ACCESS_ID = "a1b2c3"
SECRET_KEY = "s3cr3t"


def ok(data: object = None, key: str = "data") -> dict[str, object]:
    """Build a Megaplan success envelope."""
    body: dict[str, object] = {"status": {"code": "ok"}}
    if data is not None:
        body[key] = data
    return body


def get_tool_fn(name: str):
    """Get a registered tool's underlying async function by name.

    Looks up the tool in ``mcp.local_provider._components``.
    Raises ``KeyError`` with available tool names if not found.
    """
    from fastmcp.tools.function_tool import FunctionTool

    import server as server_module

    lp = server_module.mcp.local_provider
    for comp in lp._components.values():
        if isinstance(comp, FunctionTool) and comp.name == name:
            return comp.fn
    available = sorted(
        comp.name for comp in lp._components.values() if isinstance(comp, FunctionTool)
    )
    raise KeyError(f"Tool {name!r} not found. Available: {available}")


@pytest_asyncio.fixture
async def anon_client() -> AsyncGenerator[MegaplanClient, None]:
    c = MegaplanClient(HOST)
    yield c
    await c.close()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[MegaplanClient, None]:
    c = MegaplanClient(HOST, ACCESS_ID, SECRET_KEY)
    yield c
    await c.close()
