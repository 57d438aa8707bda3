"""Subcommand modules for refdocs.

Provides register_commands() which uses deferred imports to keep
``refdocs --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    # --- Groups ---
    from refdocs.commands.docs import docs
    from refdocs.commands.xref import xref

    cli.add_command(docs)
    cli.add_command(xref)

    # --- Standalone commands ---
    from refdocs.commands.serve import serve

    cli.add_command(serve)
