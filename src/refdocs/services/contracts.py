"""Typed payload contracts for service and adapter boundaries.

Payload dicts are validated against these models before they leave the
service layer so key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

MARKDOWN_MIME = "text/markdown"

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    return model_cls.model_validate(data).model_dump(mode="json")


class ResourceItem(BaseModel):
    """One listed documentation resource."""

    uri: str
    name: str
    path: str
    description: str
    mime_type: str = MARKDOWN_MIME
    metadata: dict[str, str | int | bool] = Field(default_factory=dict)


class ResourceListData(BaseModel):
    """Payload contract for ``DocsService.list_documents`` / ``list_roadmap``."""

    count: int
    items: list[ResourceItem]


class ResourceContentData(BaseModel):
    """Payload contract for ``DocsService.read``."""

    uri: str
    path: str
    mime_type: str = MARKDOWN_MIME
    text: str


class CodeLocationData(BaseModel):
    """Payload contract for ``CrossRefService.code_location``."""

    model_config = ConfigDict(extra="forbid")

    found: bool
    concept: str
    file: str | None = None
    line: int | None = None
    symbol: str | None = None
    docs: str | None = None


class RelatedDocsData(BaseModel):
    """Payload contract for ``CrossRefService.related_docs``."""

    model_config = ConfigDict(extra="forbid")

    found: bool
    symbol: str
    url: str | None = None
    uri: str | None = None
    title: str | None = None
    category: str | None = None
    file: str | None = None
    line: int | None = None
