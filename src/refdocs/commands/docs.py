"""Command group: list, read, and resolve documentation resources."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from refdocs.commands._base import RefdocsGroup
from refdocs.services.docs import DocsService

if TYPE_CHECKING:
    from refdocs.commands._context import AppContext


@click.group(cls=RefdocsGroup)
@click.pass_obj
def docs(app: AppContext) -> None:
    """List, read, and resolve documentation resources."""


@docs.command(
    name="list",
    examples="""\
  refdocs docs list
  refdocs docs list --category tutorials
  refdocs docs list --roadmap
  refdocs --json docs list --roadmap --status experimental""",
)
@click.option("--roadmap", is_flag=True, help="List roadmap items instead of released pages.")
@click.option("--category", default=None, help="Only pages in this category.")
@click.option(
    "--status",
    type=click.Choice(["planned", "in-development", "experimental"]),
    default=None,
    help="Only roadmap items with this status (implies --roadmap).",
)
@click.pass_obj
def list_cmd(app: AppContext, roadmap: bool, category: str | None, status: str | None) -> None:
    """List documentation pages as MCP resources."""
    svc = DocsService(app.catalog)
    if roadmap or status:
        app.emit(svc.list_roadmap(status=status))
    else:
        app.emit(svc.list_documents(category=category))


@docs.command(
    examples="""\
  refdocs docs read document://tutorials/basic-setup
  refdocs docs read roadmap-item://event-sourcing
  refdocs -q docs read document://index > index.md"""
)
@click.argument("uri")
@click.option("--meta", is_flag=True, help="Show title, description and front-matter instead.")
@click.pass_obj
def read(app: AppContext, uri: str, meta: bool) -> None:
    """Read a resource by URI."""
    svc = DocsService(app.catalog)
    app.emit(svc.metadata(uri) if meta else svc.read(uri))


@docs.command(
    examples="""\
  refdocs docs resolve document://tutorials/basic-setup
  refdocs --json docs resolve code-sample://csharp/aggregates/Order.cs"""
)
@click.argument("uri")
@click.pass_obj
def resolve(app: AppContext, uri: str) -> None:
    """Show which file a URI maps to, without reading it."""
    app.emit(DocsService(app.catalog).resolve(uri))


@docs.command(
    examples="""\
  refdocs docs categories
  refdocs docs categories --group
  refdocs docs categories --group --category tutorials"""
)
@click.option("--group", is_flag=True, help="List every page under its category.")
@click.option("--category", default=None, help="With --group, only this category.")
@click.pass_obj
def categories(app: AppContext, group: bool, category: str | None) -> None:
    """List documentation categories."""
    svc = DocsService(app.catalog)
    if group:
        app.emit(svc.docs_by_category(category=category))
    else:
        app.emit(svc.categories())
