"""CRM MCP tools -- contractors and deals (read only)."""

from __future__ import annotations

import logging
from typing import Any

from fastmcp import FastMCP

from _auth import fetch_result, get_megaplan_client, tool_error_handler

logger = logging.getLogger("megaplan_mcp.server")

__all__ = ["register"]


def register(mcp: FastMCP) -> None:
    """Register all CRM tools on the given FastMCP instance."""

    @mcp.tool
    @tool_error_handler("Failed to fetch contractors. Please try again.")
    async def crm_contractors_list(
        search: str | None = None,
        filter_id: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """List CRM contractors (clients).

        Args:
            search: Free-text filter.
            filter_id: Saved filter ID.
            limit: Maximum number of contractors.
            offset: Number of contractors to skip.
        """
        client = await get_megaplan_client()
        return await fetch_result(
            client.contractors.list(filter_id=filter_id, search=search, limit=limit, offset=offset)
        )

    @mcp.tool
    @tool_error_handler("Failed to fetch contractor card. Please try again.")
    async def crm_contractor_card(contractor_id: int) -> dict[str, Any]:
        """Get the card of one contractor."""
        client = await get_megaplan_client()
        return await fetch_result(client.contractors.card(id=contractor_id))

    @mcp.tool
    @tool_error_handler("Failed to fetch deals. Please try again.")
    async def crm_deals_list(
        program_id: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """List deals.

        Args:
            program_id: Deal program (pipeline) ID.
            limit: Maximum number of deals.
            offset: Number of deals to skip.
        """
        client = await get_megaplan_client()
        return await fetch_result(
            client.deals.list(program_id=program_id, limit=limit, offset=offset)
        )

    @mcp.tool
    @tool_error_handler("Failed to fetch deal card. Please try again.")
    async def crm_deal_card(deal_id: int) -> dict[str, Any]:
        """Get the card of one deal."""
        client = await get_megaplan_client()
        return await fetch_result(client.deals.card(id=deal_id))
