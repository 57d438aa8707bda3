"""FastMCP server setup.

Optional extra, guarded behind try/except ImportError.
Transport: stdio default, SSE or streamable HTTP optional.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

if TYPE_CHECKING:
    from refdocs.config.settings import RefdocsSettings
    from refdocs.infrastructure.catalog import DocsCatalog

__all__ = ["create_server", "mcp_available"]

logger = logging.getLogger(__name__)


def create_server(
    settings: RefdocsSettings,
    *,
    catalog: DocsCatalog | None = None,
    host: str | None = None,
    port: int | None = None,
) -> Any:
    """Create and configure the MCP server.

    Builds a :class:`DocsCatalog` from *settings* (unless one is passed in)
    and registers all tools, resources, and prompts. Returns the FastMCP
    instance.

    *host* and *port* override ``[mcp]`` settings for HTTP transports
    (sse, streamable-http). They are ignored when using stdio.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install refdocs[mcp]"
        raise RuntimeError(msg)

    from refdocs.infrastructure.catalog import DocsCatalog
    from refdocs.mcp.prompts import register_prompts
    from refdocs.mcp.resources import register_resources
    from refdocs.mcp.tools import register_tools

    if catalog is None:
        catalog = DocsCatalog(settings)

    server = _FastMCP(
        settings.mcp.server_name,
        host=host or settings.mcp.host,
        port=port or settings.mcp.port,
    )

    register_tools(server, catalog)
    register_resources(server, catalog)
    register_prompts(server, settings.prompts.library_name)

    logger.info("MCP server %s ready", settings.mcp.server_name)
    return server
