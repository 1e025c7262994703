"""Tool domains for the Megaplan MCP server.

``ENABLED_DOMAINS`` (comma-separated, case-insensitive) selects which of
the ``tools.<domain>`` modules are imported.  Every module exposes
``register(mcp)``, which attaches its ``<domain>_*`` tools.
"""

from __future__ import annotations

import importlib
import logging
import os

from fastmcp import FastMCP

logger = logging.getLogger("megaplan_mcp.server")

__all__ = ["AVAILABLE_DOMAINS", "DEFAULT_DOMAINS", "load_domains", "parse_domains"]

AVAILABLE_DOMAINS: dict[str, str] = {
    "tasks": "tools.tasks",
    "crm": "tools.crm",
    "system": "tools.system",
}

DEFAULT_DOMAINS: str = "tasks,system"


def parse_domains(raw: str) -> tuple[list[str], list[str]]:
    """Split an ENABLED_DOMAINS value into known and unknown names.

    Order of first appearance is kept and repeats are dropped.
    """
    known: list[str] = []
    unknown: list[str] = []
    for name in (part.strip().lower() for part in raw.split(",")):
        if not name or name in known or name in unknown:
            continue
        (known if name in AVAILABLE_DOMAINS else unknown).append(name)
    return known, unknown


def load_domains(mcp: FastMCP) -> list[str]:
    """Register the tools of every enabled domain on *mcp*.

    Returns the loaded domain names.

    Raises:
        SystemExit: If no known domain is enabled.
    """
    raw = os.environ.get("ENABLED_DOMAINS", DEFAULT_DOMAINS)
    known, unknown = parse_domains(raw)

    if unknown:
        logger.warning(
            "Ignoring unknown domains %s in ENABLED_DOMAINS (available: %s)",
            unknown,
            sorted(AVAILABLE_DOMAINS),
        )
    if not known:
        logger.critical("No tool domain enabled by ENABLED_DOMAINS=%r", raw)
        raise SystemExit(1)

    for domain in known:
        importlib.import_module(AVAILABLE_DOMAINS[domain]).register(mcp)
        logger.info("Registered %s tools", domain)
    return known
