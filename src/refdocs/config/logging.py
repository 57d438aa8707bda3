"""structlog setup shared by the CLI and the MCP server.

All output goes to stderr because stdout carries command results and MCP
stdio traffic. Human-readable console lines are the default; ``--log-json``
switches to one JSON object per line. stdlib loggers (``httpx``, the MCP
SDK, refdocs modules using ``logging.getLogger``) go through the same
formatter, so both APIs produce identical records.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that stay at WARNING even under --verbose.
_QUIET_LOGGERS = ("httpx", "httpcore", "mcp", "uvicorn", "uvicorn.access")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _install_stderr_handler(formatter: logging.Formatter, *, verbose: bool) -> None:
    """Replace the root handlers with one stderr handler and set levels."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("refdocs").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    source: str | None = None,
) -> None:
    """Configure structlog and stdlib logging. Safe to call repeatedly.

    Args:
        verbose: DEBUG for ``refdocs.*`` loggers; WARNING otherwise.
        log_json: Render JSON lines instead of console output.
        source: Content source (``local`` or ``remote``), bound as
            ``docs_source`` on every record emitted afterwards.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json),
        ],
    )
    _install_stderr_handler(formatter, verbose=verbose)

    structlog.contextvars.clear_contextvars()
    if source is not None:
        structlog.contextvars.bind_contextvars(docs_source=source)
