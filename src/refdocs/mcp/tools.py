"""MCP tool definitions: 10 tools across 3 categories.

Categories: Code/docs (3), Code/tests (5), Catalog (2).
Each tool has a ``<name>_impl`` function testable without the mcp package.
``register_tools()`` wraps them with FastMCP decorators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from refdocs.services.docs import DocsService
from refdocs.services.xref import CrossRefService

if TYPE_CHECKING:
    from refdocs.infrastructure.catalog import DocsCatalog
    from refdocs.services.result import ServiceResult


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": result.data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
        }
    return response


# ---------------------------------------------------------------------------
# Code <-> docs (3)
# ---------------------------------------------------------------------------


def get_code_location_impl(catalog: DocsCatalog, concept: str) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).code_location(concept))


def get_related_docs_impl(catalog: DocsCatalog, symbol: str) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).related_docs(symbol))


def validate_doc_links_impl(catalog: DocsCatalog) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).validate_doc_links())


# ---------------------------------------------------------------------------
# Code <-> tests (5)
# ---------------------------------------------------------------------------


def get_tests_for_code_impl(catalog: DocsCatalog, symbol: str) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).tests_for_code(symbol))


def get_code_for_test_impl(catalog: DocsCatalog, test_key: str) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).code_for_test(test_key))


def get_coverage_stats_impl(catalog: DocsCatalog) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).coverage_stats())


def find_untested_symbols_impl(catalog: DocsCatalog, symbols: list[str]) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).untested_symbols(symbols))


def validate_test_links_impl(catalog: DocsCatalog) -> dict[str, Any]:
    return _to_mcp_response(CrossRefService(catalog).validate_test_links())


# ---------------------------------------------------------------------------
# Catalog (2)
# ---------------------------------------------------------------------------


def list_categories_impl(catalog: DocsCatalog) -> dict[str, Any]:
    return _to_mcp_response(DocsService(catalog).categories())


def list_docs_by_category_impl(catalog: DocsCatalog, category: str | None = None) -> dict[str, Any]:
    return _to_mcp_response(DocsService(catalog).docs_by_category(category=category))


# ---------------------------------------------------------------------------
# Registration: wraps _impl functions with FastMCP decorators
# ---------------------------------------------------------------------------


def register_tools(server: Any, catalog: DocsCatalog) -> None:
    """Register all 10 MCP tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def get_code_location(concept: str) -> dict[str, Any]:
        """Find the code implementing a documentation concept or URL.

        Accepts a concept name ("dispatcher") or docs path ("core-concepts/dispatcher").
        """
        return get_code_location_impl(catalog, concept)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_related_docs(symbol: str) -> dict[str, Any]:
        """Get the documentation page for a code symbol (e.g. "IDispatcher")."""
        return get_related_docs_impl(catalog, symbol)

    @server.tool()  # type: ignore[untyped-decorator]
    def validate_doc_links() -> dict[str, Any]:
        """Check that every code-docs link points at an existing page."""
        return validate_doc_links_impl(catalog)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_tests_for_code(symbol: str) -> dict[str, Any]:
        """Find tests that exercise a code symbol."""
        return get_tests_for_code_impl(catalog, symbol)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_code_for_test(test_key: str) -> dict[str, Any]:
        """Find code exercised by a test ("TestClassName.TestMethodName")."""
        return get_code_for_test_impl(catalog, test_key)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_coverage_stats() -> dict[str, Any]:
        """Test coverage statistics from the code-tests index."""
        return get_coverage_stats_impl(catalog)

    @server.tool()  # type: ignore[untyped-decorator]
    def find_untested_symbols(symbols: list[str]) -> dict[str, Any]:
        """Filter a list of symbols down to those with no recorded tests."""
        return find_untested_symbols_impl(catalog, symbols)

    @server.tool()  # type: ignore[untyped-decorator]
    def validate_test_links() -> dict[str, Any]:
        """Report every recorded code-test link."""
        return validate_test_links_impl(catalog)

    @server.tool()  # type: ignore[untyped-decorator]
    def list_categories() -> dict[str, Any]:
        """List all documentation categories."""
        return list_categories_impl(catalog)

    @server.tool()  # type: ignore[untyped-decorator]
    def list_docs_by_category(category: str | None = None) -> dict[str, Any]:
        """List documentation grouped by category, optionally just one."""
        return list_docs_by_category_impl(catalog, category)
