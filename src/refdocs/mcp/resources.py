"""MCP resource definitions for documentation pages.

``document://`` resources cover released pages; ``roadmap-item://``
resources cover unreleased ones. Both handlers sit on the low-level server
and go back to the catalog on every request: the listing reflects the
manifest as it is now, and any URI the docs service understands can be
read whether or not it was listed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from refdocs.services.contracts import MARKDOWN_MIME
from refdocs.services.docs import DocsService

if TYPE_CHECKING:
    from refdocs.infrastructure.catalog import DocsCatalog

# ---------------------------------------------------------------------------
# Resource implementations (testable without mcp)
# ---------------------------------------------------------------------------


def list_documents_impl(catalog: DocsCatalog) -> list[dict[str, Any]]:
    """Released documentation pages as resource descriptors."""
    result = DocsService(catalog).list_documents()
    return list(result.data.get("items", [])) if result.ok else []


def list_roadmap_impl(catalog: DocsCatalog) -> list[dict[str, Any]]:
    """Roadmap items as resource descriptors."""
    result = DocsService(catalog).list_roadmap()
    return list(result.data.get("items", [])) if result.ok else []


def list_resources_impl(catalog: DocsCatalog) -> list[dict[str, Any]]:
    """Every advertised resource: released pages first, then roadmap items."""
    return [*list_documents_impl(catalog), *list_roadmap_impl(catalog)]


def read_resource_impl(catalog: DocsCatalog, uri: str) -> str:
    """Markdown for *uri*.

    Raises:
        ValueError: With the service error code and message when the read
            fails; the MCP server reports it to the client as a resource error.
    """
    result = DocsService(catalog).read(uri)
    if not result.ok:
        err = result.error
        msg = f"{err.code}: {err.message}" if err else f"Failed to read resource: {uri}"
        raise ValueError(msg)
    return str(result.data["text"])


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def register_resources(server: Any, catalog: DocsCatalog) -> None:
    """Install list/read resource handlers on *server*'s low-level server."""
    from mcp import types
    from mcp.server.lowlevel.helper_types import ReadResourceContents

    lowlevel = server._mcp_server

    @lowlevel.list_resources()  # type: ignore[untyped-decorator]
    async def list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=item["uri"],
                name=item["name"],
                description=item["description"],
                mimeType=item["mime_type"],
            )
            for item in list_resources_impl(catalog)
        ]

    @lowlevel.read_resource()  # type: ignore[untyped-decorator]
    async def read_resource(uri: Any) -> list[ReadResourceContents]:
        text = read_resource_impl(catalog, str(uri))
        return [ReadResourceContents(content=text, mime_type=MARKDOWN_MIME)]
