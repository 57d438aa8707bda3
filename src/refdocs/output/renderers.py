"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from refdocs.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from refdocs.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: identifiers only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    data = result.data
    if result.op == "read_resource":
        return str(data.get("text", ""))
    if isinstance(data.get("items"), list):
        return "\n".join(str(item.get("uri", "")) for item in data["items"])
    if isinstance(data.get("untested"), list):
        return "\n".join(data["untested"])
    if isinstance(data.get("categories"), list):
        return "\n".join(data["categories"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="rd.ok")
    op = Text(f"  {result.op}", style="rd.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rd.key")
    if key == "uri" or key.endswith("_uri"):
        v = Text(str(value), style="rd.uri")
    elif key in ("path", "file", "file_path"):
        v = Text(str(value), style="rd.path")
    elif key == "title":
        v = Text(str(value), style="rd.title")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _not_found(console: Console, result: ServiceResult, what: str) -> None:
    _status_line(console, result)
    console.print(Text(f"  No mapping found for {what}", style="rd.warning"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rd.error")
    op = Text(f"  {result.op}", style="rd.op")
    code = Text(f"  [{err.code}] " if err else "  ", style="rd.key")
    console.print(label, op, code, msg, sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Resource renderers ────────────────────────────────────────────────


def _render_resource_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render list_documents / list_roadmap results as a table."""
    items = result.data.get("items", [])
    roadmap = result.op == "list_roadmap"

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("URI", style="rd.uri", no_wrap=True)
    table.add_column("Name", style="rd.title")
    table.add_column("Status" if roadmap else "Category")
    if verbose:
        table.add_column("Description", style="dim")

    for item in items:
        meta = item.get("metadata", {})
        if roadmap:
            status = meta.get("status")
            third: Any = Text(str(status or "planned"), style=style_for_status(status or "planned"))
        else:
            third = str(meta.get("category", ""))
        row: list[Any] = [str(item.get("uri", "")), str(item.get("name", "")), third]
        if verbose:
            row.append(str(item.get("description", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} resources")


def _render_content(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render read_resource results: the markdown itself, unwrapped."""
    if verbose:
        _field(console, "uri", result.data.get("uri", ""))
        _field(console, "path", result.data.get("path", ""))
        console.print()
    console.out(str(result.data.get("text", "")), highlight=False)


def _render_categories(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for name in result.data.get("categories", []):
        console.print(f"  {name}")


def _render_grouped(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_docs_by_category results as one block per category."""
    _status_line(console, result)
    for category, docs in result.data.get("categories", {}).items():
        console.print(Text(f"\n  {category} ({len(docs)})", style="rd.title"))
        for doc in docs:
            console.print(Text(f"    {doc['uri']}", style="rd.uri"))


# ── Cross-reference renderers ─────────────────────────────────────────


def _render_lookup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_code_location / get_related_docs results."""
    data = result.data
    if not data.get("found"):
        _not_found(console, result, str(data.get("concept") or data.get("symbol")))
        return
    _status_line(console, result)
    for key, value in data.items():
        if key != "found" and value is not None:
            _field(console, key, value)


def _render_link_report(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render validate_doc_links / validate_test_links results."""
    _status_line(console, result)
    data = result.data
    _field(console, "valid", data.get("valid", 0))
    if "broken" in data:
        _field(console, "broken", data["broken"])
    if "total_links" in data:
        _field(console, "total_links", data["total_links"])
        _field(console, "validation_rate", data.get("validation_rate", ""))

    details = data.get("details", [])
    shown = details if verbose else [d for d in details if d.get("status") != "valid"]
    if not shown:
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Symbol", no_wrap=True)
    table.add_column("Target")
    table.add_column("Status")
    for detail in shown:
        status = str(detail.get("status", ""))
        style = "rd.valid" if status == "valid" else "rd.broken"
        target = detail.get("docs") or detail.get("test_method", "")
        table.add_row(str(detail.get("symbol", "")), str(target), Text(status, style=style))
    console.print()
    console.print(table)


def _render_links(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_tests_for_code / get_code_for_test results as a table."""
    data = result.data
    if not data.get("found"):
        _not_found(console, result, str(data.get("symbol") or data.get("test_key")))
        return

    _status_line(console, result)
    if "tests" in data:
        rows = data["tests"]
        columns = ("testClass", "testMethod", "testFile", "testLine", "linkSource")
    else:
        rows = data.get("code", [])
        columns = ("sourceSymbol", "sourceType", "sourceFile", "sourceLine", "linkSource")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*(str(row.get(col, "")) for col in columns))
    console.print(table)


def _render_coverage(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    for key in ("total_code_symbols", "total_test_methods"):
        _field(console, key, data.get(key, 0))
    _field(console, "average_tests_per_symbol", f"{data.get('average_tests_per_symbol', 0.0):.2f}")
    for source, count in data.get("link_source_breakdown", {}).items():
        console.print(f"    {source}: {count}")
    if verbose and data.get("metadata"):
        _field(console, "metadata", data["metadata"])


def _render_untested(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "checked", result.data.get("checked", 0))
    _field(console, "untested", result.data.get("count", 0))
    for symbol in result.data.get("untested", []):
        console.print(Text(f"    {symbol}", style="rd.warning"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if value is not None:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Resources
    "list_documents": _render_resource_table,
    "list_roadmap": _render_resource_table,
    "read_resource": _render_content,
    "resolve": _render_generic,
    "resource_metadata": _render_generic,
    "list_categories": _render_categories,
    "list_docs_by_category": _render_grouped,
    # Code <-> docs
    "get_code_location": _render_lookup,
    "get_related_docs": _render_lookup,
    "validate_doc_links": _render_link_report,
    # Code <-> tests
    "get_tests_for_code": _render_links,
    "get_code_for_test": _render_links,
    "get_coverage_stats": _render_coverage,
    "find_untested_symbols": _render_untested,
    "validate_test_links": _render_link_report,
}
