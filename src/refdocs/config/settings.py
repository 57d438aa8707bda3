"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs:   CLI flags passed by Click
  2. Env vars:      ``REFDOCS_*`` prefix, ``__`` between section and key
                    (``REFDOCS_DOCS__SOURCE=remote``)
  3. TOML file:     ``refdocs.toml`` discovered via walk-up
  4. Code defaults: baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from refdocs.config.discovery import find_config
from refdocs.config.models import DocsConfig, IndexConfig, McpConfig, PromptsConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``refdocs.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path is discovered in from_cli() and read back while pydantic
# assembles sources; construction is synchronous, so a thread-local suffices.
_tls = threading.local()


class RefdocsSettings(BaseSettings):
    """All refdocs settings, frozen after construction.

    Attributes:
        project_root: Directory relative paths resolve against (parent of
            ``refdocs.toml``, or CWD when no config is found).
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REFDOCS_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    docs: DocsConfig = Field(default_factory=DocsConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)
    prompts: PromptsConfig = Field(default_factory=PromptsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **overrides: Any,
    ) -> RefdocsSettings:
        """Construct settings for a CLI invocation or server start.

        *overrides* are highest priority. Section overrides are partial
        dicts (``docs={"path": "site/docs"}``) merged over lower sources.
        """
        toml_path: Path | None = None
        if config_path:
            candidate = Path(config_path)
            if candidate.is_file():
                toml_path = candidate
        else:
            toml_path = find_config(project_root)

        root = project_root
        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(project_root=root, config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    # ------------------------------------------------------------------
    # Resolved paths
    # ------------------------------------------------------------------

    def _resolve(self, raw: str) -> Path:
        path = Path(raw).expanduser()
        return path if path.is_absolute() else self.project_root / path

    @property
    def docs_path(self) -> Path:
        """Absolute documentation root."""
        return self._resolve(self.docs.path)

    @property
    def assets_path(self) -> Path:
        """Directory holding the cross-reference artifacts."""
        if self.index.assets_path:
            return self._resolve(self.index.assets_path)
        return self.docs_path.parent
