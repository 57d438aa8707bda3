"""Root CLI group for refdocs with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click
from pydantic import ValidationError

from refdocs import __version__
from refdocs.commands import register_commands
from refdocs.commands._context import AppContext
from refdocs.config.settings import RefdocsSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="refdocs")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--docs-path", default=None, help="Documentation root directory.")
@click.option(
    "--source",
    type=click.Choice(["local", "remote"]),
    default=None,
    help="Read pages from disk or from the published site.",
)
@click.option("--base-url", default=None, help="Published site URL (remote source).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    docs_path: str | None,
    source: str | None,
    base_url: str | None,
) -> None:
    """refdocs: serve library documentation and code cross-references over MCP."""
    docs_overrides: dict[str, Any] = {}
    if docs_path is not None:
        docs_overrides["path"] = docs_path
    if source is not None:
        docs_overrides["source"] = source
    if base_url is not None:
        docs_overrides["base_url"] = base_url

    overrides: dict[str, Any] = {"docs": docs_overrides} if docs_overrides else {}
    try:
        settings = RefdocsSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            **overrides,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc

    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
