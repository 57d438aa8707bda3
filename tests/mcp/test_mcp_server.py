"""Tests for MCP server creation."""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest

from refdocs.config.settings import RefdocsSettings
from refdocs.infrastructure.catalog import DocsCatalog
from refdocs.mcp.server import create_server, mcp_available


class DummyFastMCP:
    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name
        self.kwargs = kwargs


class TestServerAvailability:
    def test_mcp_available_is_bool(self) -> None:
        assert isinstance(mcp_available, bool)

    @pytest.mark.skipif(mcp_available, reason="mcp extra is installed")
    def test_create_server_without_mcp_raises(self, settings: RefdocsSettings) -> None:
        with pytest.raises(RuntimeError, match="MCP extra not installed"):
            create_server(settings)


class TestCreateServer:
    def test_uses_settings_and_registers_everything(
        self, settings: RefdocsSettings, catalog: DocsCatalog
    ) -> None:
        with (
            patch("refdocs.mcp.server.mcp_available", True),
            patch("refdocs.mcp.server._FastMCP", DummyFastMCP),
            patch("refdocs.mcp.tools.register_tools") as tools,
            patch("refdocs.mcp.resources.register_resources") as resources,
            patch("refdocs.mcp.prompts.register_prompts") as prompts,
        ):
            server = create_server(settings, catalog=catalog)

        assert server.name == "refdocs"
        assert server.kwargs == {"host": "127.0.0.1", "port": 8000}
        tools.assert_called_once_with(server, catalog)
        resources.assert_called_once_with(server, catalog)
        prompts.assert_called_once_with(server, "the library")

    def test_host_and_port_override(self, settings: RefdocsSettings, catalog: DocsCatalog) -> None:
        with (
            patch("refdocs.mcp.server.mcp_available", True),
            patch("refdocs.mcp.server._FastMCP", DummyFastMCP),
            patch("refdocs.mcp.tools.register_tools"),
            patch("refdocs.mcp.resources.register_resources"),
            patch("refdocs.mcp.prompts.register_prompts"),
        ):
            server = create_server(settings, catalog=catalog, host="0.0.0.0", port=9100)

        assert server.kwargs == {"host": "0.0.0.0", "port": 9100}


@pytest.mark.skipif(not mcp_available, reason="mcp extra not installed")
class TestRealServer:
    def test_builds_fastmcp(self, settings: RefdocsSettings, catalog: DocsCatalog) -> None:
        server = create_server(settings, catalog=catalog)
        assert server.name == "refdocs"
