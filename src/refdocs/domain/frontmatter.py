"""Front-matter extraction and display metadata for documentation pages.

A page is ``---``-delimited YAML followed by markdown. Text before the
``<!-- more -->`` marker is the page excerpt.

INVARIANT: a page is a roadmap item iff ``unreleased`` is true or ``status``
is set. :func:`is_roadmap_doc` is the single source of that rule; the
``roadmap-item://`` scheme and the roadmap listings both defer to it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from refdocs.domain.errors import FrontmatterError

logger = logging.getLogger(__name__)

EXCERPT_SEPARATOR = "<!-- more -->"
DESCRIPTION_EXCERPT_LENGTH = 200

_FRONTMATTER_DELIMITER = "---"
_WORD_START = re.compile(r"\b\w")

RoadmapStatus = Literal["planned", "in-development", "experimental"]
Difficulty = Literal["BEGINNER", "INTERMEDIATE", "ADVANCED"]


class DocFrontmatter(BaseModel):
    """Optional metadata fields recognised in a page header.

    Unknown keys are ignored. Values of the wrong type are dropped by
    :meth:`from_mapping` rather than failing the whole page.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    title: str | None = None
    category: str | None = None
    order: int | None = None
    tags: list[str] | None = None
    description: str | None = None
    unreleased: bool | None = None
    target_version: str | None = Field(default=None, alias="targetVersion")
    status: RoadmapStatus | None = None
    last_updated: str | None = Field(default=None, alias="lastUpdated")
    difficulty: Difficulty | None = None

    @field_validator("target_version", "last_updated", mode="before")
    @classmethod
    def _dates_as_text(cls, value: Any) -> Any:
        # YAML loads bare ``2024-05-01`` as a date.
        if isinstance(value, date):
            return value.isoformat()
        return value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DocFrontmatter:
        """Validate *data*, discarding any keys whose values do not fit."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            rejected = {err["loc"][0] for err in exc.errors() if err["loc"]}
            logger.debug("Dropping front-matter keys with invalid values: %s", sorted(rejected))
            return cls.model_validate({k: v for k, v in data.items() if k not in rejected})


@dataclass(frozen=True)
class ParsedMarkdown:
    """A page split into header, body, and optional excerpt."""

    frontmatter: DocFrontmatter
    content: str
    excerpt: str | None = None


def _split_frontmatter(raw: str) -> tuple[str | None, str]:
    """Return ``(yaml_block, body)``; ``yaml_block`` is None without a header."""
    normalized = raw.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None, raw

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return None, raw

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]
    return yaml_block, body


def parse_markdown(raw: str) -> ParsedMarkdown:
    """Parse a documentation page.

    Raises:
        FrontmatterError: If the YAML header is present but malformed.
    """
    yaml_block, body = _split_frontmatter(raw)

    data: Any = {}
    if yaml_block is not None:
        try:
            data = YAML(typ="safe", pure=True).load(yaml_block)
        except YAMLError as exc:
            msg = f"Invalid front-matter: {exc}"
            raise FrontmatterError(msg) from exc
    if not isinstance(data, Mapping):
        data = {}

    excerpt: str | None = None
    marker = body.find(EXCERPT_SEPARATOR)
    if marker != -1:
        excerpt = body[:marker]

    return ParsedMarkdown(
        frontmatter=DocFrontmatter.from_mapping(data),
        content=body,
        excerpt=excerpt,
    )


def is_roadmap_doc(frontmatter: DocFrontmatter) -> bool:
    """Check whether a page describes an unreleased feature."""
    return frontmatter.unreleased is True or bool(frontmatter.status)


def doc_title(frontmatter: DocFrontmatter, fallback_path: str) -> str:
    """Return the page title, deriving one from *fallback_path* if absent.

    ``Tutorials/getting-started.md`` -> ``Getting Started``.
    """
    if frontmatter.title:
        return frontmatter.title

    filename = fallback_path.split("/")[-1].removesuffix(".md").replace("-", " ")
    return _WORD_START.sub(lambda m: m.group(0).upper(), filename)


def doc_description(frontmatter: DocFrontmatter, excerpt: str | None = None) -> str:
    """Prefer the declared description, then the excerpt head, else ``""``."""
    if frontmatter.description:
        return frontmatter.description
    if excerpt:
        return excerpt[:DESCRIPTION_EXCERPT_LENGTH]
    return ""


def resource_metadata(frontmatter: DocFrontmatter) -> dict[str, str | int | bool]:
    """Flatten present header fields into resource metadata.

    Absent fields are omitted entirely; ``unreleased`` only appears when
    true and ``tags`` only when non-empty.
    """
    metadata: dict[str, str | int | bool] = {}
    if frontmatter.category:
        metadata["category"] = frontmatter.category
    if frontmatter.order is not None:
        metadata["order"] = frontmatter.order
    if frontmatter.tags:
        metadata["tags"] = ", ".join(frontmatter.tags)
    if frontmatter.difficulty:
        metadata["difficulty"] = frontmatter.difficulty
    if frontmatter.unreleased:
        metadata["unreleased"] = True
    if frontmatter.status:
        metadata["status"] = frontmatter.status
    if frontmatter.target_version:
        metadata["targetVersion"] = frontmatter.target_version
    return metadata
