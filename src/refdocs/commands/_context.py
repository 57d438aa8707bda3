"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the docs catalog lazily and owns result
emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from refdocs.config.logging import configure_logging
from refdocs.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from refdocs.config.settings import RefdocsSettings
    from refdocs.infrastructure.catalog import DocsCatalog
    from refdocs.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The catalog loads index artifacts, so it is created on first use and
    ``--help`` never touches the filesystem.
    """

    def __init__(self, settings: RefdocsSettings) -> None:
        self.settings = settings
        self._catalog: DocsCatalog | None = None
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            source=settings.docs.source,
        )

    @property
    def catalog(self) -> DocsCatalog:
        """The docs catalog (created lazily on first access)."""
        if self._catalog is None:
            from refdocs.infrastructure.catalog import DocsCatalog

            self._catalog = DocsCatalog(self.settings)
        return self._catalog

    def close(self) -> None:
        if self._catalog is not None:
            self._catalog.close()
            self._catalog = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
