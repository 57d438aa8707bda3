"""Command group: code <-> docs and code <-> tests cross-references."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from refdocs.commands._base import RefdocsGroup
from refdocs.services.xref import CrossRefService

if TYPE_CHECKING:
    from refdocs.commands._context import AppContext


@click.group(cls=RefdocsGroup)
@click.pass_obj
def xref(app: AppContext) -> None:
    """Cross-reference code, documentation, and tests."""


@xref.command(
    name="code-location",
    examples="""\
  refdocs xref code-location dispatcher
  refdocs xref code-location core-concepts/dispatcher
  refdocs --json xref code-location /v1.0/core-concepts/dispatcher.md""",
)
@click.argument("concept")
@click.pass_obj
def code_location(app: AppContext, concept: str) -> None:
    """Find the code implementing a documentation concept."""
    app.emit(CrossRefService(app.catalog).code_location(concept))


@xref.command(
    name="related-docs",
    examples=("refdocs xref related-docs IDispatcher",),
)
@click.argument("symbol")
@click.pass_obj
def related_docs(app: AppContext, symbol: str) -> None:
    """Find the documentation page for a code symbol."""
    app.emit(CrossRefService(app.catalog).related_docs(symbol))


@xref.command(
    name="validate-links",
    examples="""\
  refdocs xref validate-links
  refdocs -v xref validate-links""",
)
@click.pass_obj
def validate_links(app: AppContext) -> None:
    """Check every code-docs link against the docs manifest."""
    app.emit(CrossRefService(app.catalog).validate_doc_links())


@xref.command(
    name="tests-for",
    examples=("refdocs xref tests-for OrderAggregate",),
)
@click.argument("symbol")
@click.pass_obj
def tests_for(app: AppContext, symbol: str) -> None:
    """Find tests that exercise a code symbol."""
    app.emit(CrossRefService(app.catalog).tests_for_code(symbol))


@xref.command(
    name="code-for",
    examples=("refdocs xref code-for OrderTests.Create_Works",),
)
@click.argument("test_key")
@click.pass_obj
def code_for(app: AppContext, test_key: str) -> None:
    """Find code exercised by a test (ClassName.MethodName)."""
    app.emit(CrossRefService(app.catalog).code_for_test(test_key))


@xref.command(
    examples=(
        "refdocs xref coverage",
        "refdocs --json xref coverage",
    ),
)
@click.pass_obj
def coverage(app: AppContext) -> None:
    """Test coverage statistics from the code-tests index."""
    app.emit(CrossRefService(app.catalog).coverage_stats())


@xref.command(
    examples=(
        "refdocs xref untested OrderAggregate Invoice Dispatcher",
        "refdocs -q xref untested $(cat symbols.txt)",
    ),
)
@click.argument("symbols", nargs=-1, required=True)
@click.pass_obj
def untested(app: AppContext, symbols: tuple[str, ...]) -> None:
    """Filter SYMBOLS down to those with no recorded tests."""
    app.emit(CrossRefService(app.catalog).untested_symbols(list(symbols)))


@xref.command(
    name="validate-test-links",
    examples=("refdocs xref validate-test-links",),
)
@click.pass_obj
def validate_test_links(app: AppContext) -> None:
    """Report every recorded code-test link."""
    app.emit(CrossRefService(app.catalog).validate_test_links())
