"""Unit tests for the MCP server surface.

Tests cover: tool registration and calls through an in-memory FastMCP
client, CLI argument parsing, run kwargs per transport.

Run with: uv run pytest tests/unit/test_server.py -v
"""

__test__ = True

import json

import pytest
import pytest_asyncio
from fastmcp import Client

from intentui import server as server_module
from intentui.config import ServerConfig
from intentui.server import _build_arg_parser, build_run_kwargs, mcp


SEVERITY_PAYLOAD = {
    "action": "choose-one",
    "subject": {
        "type": "severity",
        "label": "Severity",
        "constraints": {"options": [{"value": "low", "label": "Low"}, {"value": "high", "label": "High"}]},
    },
    "purpose": "request",
}


@pytest.fixture(autouse=True)
def fresh_adapter(monkeypatch):
    monkeypatch.setattr(server_module, "_adapter", None)
    monkeypatch.delenv("INTENTUI_DEFAULT_PRESETS", raising=False)


@pytest_asyncio.fixture
async def mcp_client():
    """Create FastMCP client connected to the server."""
    async with Client(mcp) as client:
        yield client


# =============================================================================
# Tools
# =============================================================================


@pytest.mark.asyncio
async def test_tools_registered(mcp_client):
    tools = {t.name for t in await mcp_client.list_tools()}
    assert {"resolve_intention", "describe_traits", "list_affinity_rules"} <= tools


@pytest.mark.asyncio
async def test_resolve_intention_object(mcp_client):
    result = await mcp_client.call_tool(
        "resolve_intention", {"intention": SEVERITY_PAYLOAD, "presets": ["mobile"]}
    )
    assert result.data["success"] is True
    assert result.data["resolution"]["manifestation"]["pattern"] == "touch-option-list"


@pytest.mark.asyncio
async def test_resolve_intention_json_string(mcp_client):
    result = await mcp_client.call_tool(
        "resolve_intention", {"intention": json.dumps(SEVERITY_PAYLOAD)}
    )
    assert result.data["resolution"]["manifestation"]["pattern"] == "radio-group"


@pytest.mark.asyncio
async def test_resolve_intention_preset_case_insensitive(mcp_client):
    result = await mcp_client.call_tool(
        "resolve_intention", {"intention": SEVERITY_PAYLOAD, "presets": ["Screen_Reader"]}
    )
    assert result.data["resolution"]["manifestation"]["pattern"] == "sequential-option-group"


@pytest.mark.asyncio
async def test_resolve_intention_reports_errors(mcp_client):
    result = await mcp_client.call_tool(
        "resolve_intention", {"intention": {"action": "choose-one", "purpose": "request"}}
    )
    assert result.data["success"] is False
    assert "subject" in result.data["error"]


@pytest.mark.asyncio
async def test_describe_traits(mcp_client):
    result = await mcp_client.call_tool("describe_traits", {"traits": ["modal-blocking"]})
    assert result.data["traits"][0]["name"] == "Modal blocking"


@pytest.mark.asyncio
async def test_list_affinity_rules(mcp_client):
    result = await mcp_client.call_tool("list_affinity_rules", {})
    assert result.data["count"] == 20


def test_adapter_honours_default_presets(monkeypatch):
    monkeypatch.setattr("intentui.config._ENV_LOADED", True)
    monkeypatch.setenv("INTENTUI_DEFAULT_PRESETS", "mobile")
    adapter = server_module._get_adapter()
    assert adapter.build_constraints().device.is_mobile
    assert server_module._get_adapter() is adapter


# =============================================================================
# CLI
# =============================================================================


class TestArgParser:

    def test_defaults_are_unset(self):
        args = _build_arg_parser().parse_args([])
        assert (args.transport, args.host, args.port, args.path, args.log_level) == (
            None, None, None, None, None,
        )

    def test_all_options(self):
        args = _build_arg_parser().parse_args([
            "--transport", "http", "--host", "0.0.0.0", "--port", "9000",
            "--path", "/mcp", "--log-level", "DEBUG",
        ])
        assert (args.transport, args.host, args.port, args.path, args.log_level) == (
            "http", "0.0.0.0", 9000, "/mcp", "DEBUG",
        )

    def test_invalid_transport(self):
        with pytest.raises(SystemExit):
            _build_arg_parser().parse_args(["--transport", "ftp"])


class TestBuildRunKwargs:

    def test_stdio(self):
        assert build_run_kwargs(ServerConfig()) == {"transport": "stdio"}

    def test_http(self):
        cfg = ServerConfig(transport="http", host="0.0.0.0", port=9000, path="/mcp")
        assert build_run_kwargs(cfg) == {
            "transport": "http", "host": "0.0.0.0", "port": 9000, "path": "/mcp",
        }

    def test_sse_without_path(self):
        cfg = ServerConfig(transport="sse")
        assert build_run_kwargs(cfg) == {"transport": "sse", "host": "127.0.0.1", "port": 8000}


def test_main_runs_server(monkeypatch):
    calls = []
    monkeypatch.setattr("intentui.config._ENV_LOADED", True)
    monkeypatch.delenv("INTENTUI_TRANSPORT", raising=False)
    monkeypatch.setattr(server_module.mcp, "run", lambda **kwargs: calls.append(kwargs))
    server_module.main(["--transport", "http", "--port", "9001"])
    assert calls == [{"transport": "http", "host": "127.0.0.1", "port": 9001}]
