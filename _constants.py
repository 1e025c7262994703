"""Shared constants for the Megaplan client and MCP server."""

from __future__ import annotations

# IDs below this value are offset into the addressable range.
ID_OFFSET: int = 1_000_000
MAX_COMMENT_LEN: int = 10000
MAX_SEARCH_LEN: int = 500

HTTP_METHOD: str = "POST"
CONTENT_TYPE: str = "application/x-www-form-urlencoded"
USER_AGENT: str = "Megaplan Python Client"
DEFAULT_PORT: int = 443
AUTH_SHORTCUT: str = "::auth"

ERR_HANGUP: str = ":hangup"
ERR_INVALID_JSON: str = ":invalidjson"
ERR_NETWORK: str = ":network"

REQUEST_ERRORS: dict[str, str] = {
    ERR_HANGUP: "connection closed unexpectedly",
    ERR_INVALID_JSON: "received invalid json string",
    ERR_NETWORK: "request dropped",
}
