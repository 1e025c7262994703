"""Tests for the domain loader (tools/__init__.py) and server wiring (server.py)."""

from __future__ import annotations

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from conftest import HOST
from fastmcp import FastMCP
from fastmcp.tools.function_tool import FunctionTool

from megaplan import ConfigurationError, get_registry


def _get_tool_names(mcp: FastMCP) -> list[str]:
    """Extract registered tool names from a FastMCP instance."""
    lp = mcp.local_provider
    return [
        comp.name for comp in lp._components.values() if isinstance(comp, FunctionTool)
    ]


class TestLoadDomains:
    def test_server_loads_enabled_domains(self) -> None:
        import server as srv

        tool_names = _get_tool_names(srv.mcp)
        assert srv.LOADED_DOMAINS == ["tasks", "crm", "system"]
        for prefix in ("tasks_", "crm_", "system_"):
            assert any(name.startswith(prefix) for name in tool_names)

    def test_default_domains(self) -> None:
        from tools import load_domains

        test_mcp = FastMCP(name="test")
        env = {k: v for k, v in os.environ.items() if k != "ENABLED_DOMAINS"}
        with patch.dict(os.environ, env, clear=True):
            loaded = load_domains(test_mcp)
        assert loaded == ["tasks", "system"]
        assert not any(name.startswith("crm_") for name in _get_tool_names(test_mcp))

    def test_empty_enabled_domains_exits(self) -> None:
        from tools import load_domains

        test_mcp = FastMCP(name="test")
        with patch.dict(os.environ, {"ENABLED_DOMAINS": " , "}):
            with pytest.raises(SystemExit):
                load_domains(test_mcp)

    def test_only_unknown_domains_exits(self) -> None:
        from tools import load_domains

        test_mcp = FastMCP(name="test")
        with patch.dict(os.environ, {"ENABLED_DOMAINS": "payroll"}):
            with pytest.raises(SystemExit):
                load_domains(test_mcp)

    def test_unknown_domain_skipped(self) -> None:
        from tools import load_domains

        test_mcp = FastMCP(name="test")
        with patch.dict(os.environ, {"ENABLED_DOMAINS": "payroll, CRM"}):
            loaded = load_domains(test_mcp)
        assert loaded == ["crm"]

    def test_duplicates_loaded_once(self) -> None:
        from tools import load_domains

        test_mcp = FastMCP(name="test")
        with patch.dict(os.environ, {"ENABLED_DOMAINS": "tasks,tasks"}):
            loaded = load_domains(test_mcp)
        assert loaded == ["tasks"]
        assert len(_get_tool_names(test_mcp)) == 5

    def test_parse_domains(self) -> None:
        from tools import parse_domains

        assert parse_domains(" Tasks ,crm,,nope,tasks,NOPE") == (["tasks", "crm"], ["nope"])

    def test_tool_count_per_domain(self) -> None:
        from tools import load_domains

        test_mcp = FastMCP(name="test")
        with patch.dict(os.environ, {"ENABLED_DOMAINS": "crm,system"}):
            load_domains(test_mcp)
        assert sorted(_get_tool_names(test_mcp)) == [
            "crm_contractor_card",
            "crm_contractors_list",
            "crm_deal_card",
            "crm_deals_list",
            "system_datetime",
            "system_field_labels",
            "system_history",
            "system_search",
        ]


class TestServerConfig:
    def test_from_env(self) -> None:
        import server as srv

        env = {
            "MEGAPLAN_HOST": " mp.local ",
            "MEGAPLAN_PORT": "8080",
            "MEGAPLAN_BASIC_AUTH": "u:p",
        }
        with patch.dict(os.environ, env):
            conf = srv.server_config_from_env()
        assert conf.hostname == "mp.local"
        assert conf.port == 8080
        assert conf.scheme == "http"
        assert conf.basic_auth == ("u", "p")

    def test_missing_host(self) -> None:
        import server as srv

        with patch.dict(os.environ, {"MEGAPLAN_HOST": ""}):
            with pytest.raises(ConfigurationError):
                srv.server_config_from_env()

    async def test_client_resumes_session(self) -> None:
        import server as srv

        env = {"MEGAPLAN_ACCESS_ID": "id", "MEGAPLAN_SECRET_KEY": "key"}
        with patch.dict(os.environ, env):
            client = srv.client_from_env()
        try:
            assert client.authenticated
            assert client.server.hostname == HOST
        finally:
            await client.close()

    async def test_client_without_session(self) -> None:
        import server as srv

        env = {k: v for k, v in os.environ.items() if not k.startswith("MEGAPLAN_ACCESS")}
        with patch.dict(os.environ, env, clear=True):
            client = srv.client_from_env()
        try:
            assert not client.authenticated
        finally:
            await client.close()


class TestLifespan:
    async def test_installs_and_clears_registry(self) -> None:
        import server as srv

        async with srv._lifespan(srv.mcp):
            client = get_registry()
            assert client.server.hostname == HOST
        with pytest.raises(RuntimeError, match="not initialized"):
            get_registry()

    async def test_bad_config_refuses_to_start(self) -> None:
        import server as srv

        with patch.dict(os.environ, {"MEGAPLAN_HOST": ""}):
            with pytest.raises(SystemExit):
                async with srv._lifespan(srv.mcp):
                    pass

    async def test_health_check(self) -> None:
        import server as srv

        response = await srv.health_check(MagicMock())
        assert response.status_code == 200
        body = json.loads(response.body)
        assert body["status"] == "ok"
        assert body["domains"] == ["tasks", "crm", "system"]
