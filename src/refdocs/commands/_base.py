"""Click base classes carrying usage examples.

Every refdocs command and group takes an ``--examples`` flag that prints
usage lines and exits, so ``--help`` stays short. A group without examples
of its own shows the first example of each of its subcommands. Under the
global ``--json`` flag the examples are printed as a JSON object.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import click

Examples = str | Sequence[str] | None


def _normalize(examples: Examples) -> list[str]:
    """Split *examples* into lines, dropping indentation and outer blank lines."""
    if not examples:
        return []
    raw = examples.splitlines() if isinstance(examples, str) else list(examples)
    lines = [line.strip() for line in raw]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _first_command(lines: list[str]) -> str | None:
    return next((line for line in lines if line and not line.startswith("#")), None)


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    cmd = ctx.command
    lines = cmd.example_lines() if isinstance(cmd, (RefdocsCommand, RefdocsGroup)) else []

    from refdocs.commands._context import AppContext

    app = ctx.find_object(AppContext)
    if app is not None and app.settings.json_output:
        click.echo(json.dumps({"command": ctx.command_path, "examples": lines}, indent=2))
    else:
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in lines:
            click.echo(f"  {line}" if line else "")
    ctx.exit(0)


def _examples_option() -> click.Option:
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show_examples,
        help="Show usage examples and exit.",
    )


class RefdocsCommand(click.Command):
    """Command with an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: Examples = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = _normalize(examples)
        self.params.append(_examples_option())

    def example_lines(self) -> list[str]:
        return list(self.examples)


class RefdocsGroup(click.Group):
    """Group with an ``--examples`` flag; subcommands default to RefdocsCommand."""

    command_class = RefdocsCommand

    def __init__(self, *args: Any, examples: Examples = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = _normalize(examples)
        self.params.append(_examples_option())

    def example_lines(self) -> list[str]:
        """Own examples, or the leading example of every subcommand."""
        if self.examples:
            return list(self.examples)
        derived: list[str] = []
        for sub in self.commands.values():
            if isinstance(sub, (RefdocsCommand, RefdocsGroup)):
                first = _first_command(sub.example_lines())
                if first is not None:
                    derived.append(first)
        return derived
