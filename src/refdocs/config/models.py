"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``refdocs.toml`` only contains
overrides. A local checkout needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class DocsConfig(BaseModel):
    """[docs] section: where documentation pages are read from."""

    model_config = {"frozen": True}

    source: Literal["local", "remote"] = "local"
    path: str = "src/assets/docs"
    base_url: str | None = None
    manifest: str = "docs-list.json"
    timeout: float = 10.0

    @model_validator(mode="after")
    def _remote_needs_base_url(self) -> DocsConfig:
        if self.source == "remote" and not self.base_url:
            msg = "docs.base_url is required when docs.source is 'remote'"
            raise ValueError(msg)
        return self


class IndexConfig(BaseModel):
    """[index] section: cross-reference artifacts.

    ``assets_path`` defaults to the parent of the docs directory.
    """

    model_config = {"frozen": True}

    assets_path: str | None = None
    code_docs_file: str = "code-docs-map.json"
    code_tests_file: str = "code-tests-map.json"


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    server_name: str = "refdocs"
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


class PromptsConfig(BaseModel):
    """[prompts] section."""

    model_config = {"frozen": True}

    library_name: str = "the library"

