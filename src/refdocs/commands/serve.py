"""serve: start the MCP server (requires the refdocs[mcp] extra)."""

from __future__ import annotations

import click

from refdocs.commands._base import RefdocsCommand


@click.command(
    cls=RefdocsCommand,
    examples="""\
  # Start the MCP server (stdio transport, default)
  refdocs serve

  # Serve pages fetched from the published site
  refdocs --source remote --base-url https://docs.example.com serve

  # Streamable HTTP on custom host/port
  refdocs serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default: [mcp] transport, stdio).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: object, transport: str | None, host: str | None, port: int | None) -> None:
    """Start the MCP server (requires refdocs[mcp] extra)."""
    from refdocs.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install refdocs[mcp]", err=True)
        raise SystemExit(1)

    from refdocs.commands._context import AppContext

    assert isinstance(app, AppContext)
    server = create_server(app.settings, catalog=app.catalog, host=host, port=port)
    try:
        server.run(transport=transport or app.settings.mcp.transport)
    finally:
        app.close()
