"""Megaplan MCP Server: FastMCP with a shared Megaplan client.

Exposes Megaplan tasks, CRM and system operations via the Model Context
Protocol.  The server logs in to Megaplan lazily with the configured
credentials (or resumes a session from an access ID / secret key pair)
and signs every request with that single account.
"""

from __future__ import annotations

import importlib.metadata
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from megaplan import ConfigurationError, MegaplanClient, ServerConfig, set_registry
from tools import load_domains

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger("megaplan_mcp.server")

# Configure logging; LOG_LEVEL env var overrides the default INFO level.
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

try:
    _APP_VERSION: str = importlib.metadata.version("megaplan-mcp")
except importlib.metadata.PackageNotFoundError:
    _APP_VERSION = os.environ.get("APP_VERSION", "dev")


def server_config_from_env() -> ServerConfig:
    """Build the Megaplan server address from MEGAPLAN_* variables.

    Raises:
        ConfigurationError: If MEGAPLAN_HOST is not set.
    """
    return ServerConfig.create(
        {
            "hostname": os.environ.get("MEGAPLAN_HOST", "").strip(),
            "port": os.environ.get("MEGAPLAN_PORT") or None,
            "scheme": os.environ.get("MEGAPLAN_SCHEME") or None,
            "auth": os.environ.get("MEGAPLAN_BASIC_AUTH") or None,
        }
    )


def client_from_env() -> MegaplanClient:
    """Create the shared client, resuming a session if one is configured."""
    client = MegaplanClient(server_config_from_env())
    access_id = os.environ.get("MEGAPLAN_ACCESS_ID", "")
    secret_key = os.environ.get("MEGAPLAN_SECRET_KEY", "")
    if access_id and secret_key:
        client.set_credentials(access_id, secret_key)
    return client


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Own the shared Megaplan client for the lifetime of the server."""
    try:
        client = client_from_env()
    except ConfigurationError as exc:
        logger.critical("Invalid Megaplan configuration: %s. Refusing to start", exc)
        raise SystemExit(1) from exc
    set_registry(client)
    logger.info(
        "Megaplan MCP server %s starting up (host=%s)", _APP_VERSION, client.server.hostname
    )
    try:
        yield
    finally:
        logger.info("Megaplan MCP server shutting down")
        set_registry(None)
        await client.close()


mcp = FastMCP(name="megaplan-mcp", lifespan=_lifespan)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@mcp.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> JSONResponse:
    """Liveness probe; reports the version and the loaded tool domains."""
    return JSONResponse({"status": "ok", "version": _APP_VERSION, "domains": LOADED_DOMAINS})


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

LOADED_DOMAINS: list[str] = load_domains(mcp)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    if not os.environ.get("MEGAPLAN_HOST"):
        raise SystemExit("MEGAPLAN_HOST environment variable is required.")
    mcp.run(
        transport="http",
        host=os.environ.get("MCP_HOST", "127.0.0.1"),
        port=int(os.environ.get("MCP_PORT", "8100")),
        stateless_http=True,
    )
