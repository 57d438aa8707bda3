"""Locate ``refdocs.toml``.

The file is found by walking up from the working directory, the way git
finds ``.git/``. ``REFDOCS_CONFIG`` pins an explicit file instead.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "refdocs.toml"
CONFIG_ENV_VAR = "REFDOCS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``refdocs.toml`` at or above *start*, or None.

    When ``REFDOCS_CONFIG`` is set it wins outright, even if it names a
    missing file (in which case None is returned).
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
