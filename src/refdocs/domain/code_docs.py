"""Code <-> documentation cross-reference index.

The index is a precomputed ``code-docs-map.json`` artifact keyed by symbol::

    {"OrderAggregate": {"file": "src/Orders/OrderAggregate.cs", "line": 12,
                        "symbol": "OrderAggregate", "docs": "core-concepts/aggregates"}}

``docs`` is a normalized documentation path: no leading slash, no version
prefix, no ``.md`` suffix. Loading lives in
:mod:`refdocs.infrastructure.indices`; everything here is a pure query.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel

_LEADING_SLASHES = re.compile(r"^/+")
_VERSION_PREFIX = re.compile(r"^v[\d.]+/")
_MD_SUFFIX = re.compile(r"\.md$")


class CodeDocsMapping(BaseModel):
    """Where a symbol lives and which page explains it."""

    model_config = {"frozen": True}

    file: str
    line: int | None = None
    symbol: str
    docs: str


class CodeDocsMap(Mapping[str, CodeDocsMapping]):
    """Read-only symbol -> :class:`CodeDocsMapping` index.

    Iteration follows the artifact's key order, which is what makes
    :func:`find_code_by_docs` deterministic.
    """

    def __init__(self, entries: Mapping[str, CodeDocsMapping] | None = None) -> None:
        self._entries: Mapping[str, CodeDocsMapping] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, symbol: str) -> CodeDocsMapping:
        return self._entries[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CodeDocsMap({len(self)} symbols)"


class LinkStatus(BaseModel):
    """Validation outcome for one symbol's documentation link."""

    model_config = {"frozen": True}

    symbol: str
    docs: str
    status: Literal["valid", "broken"]


class LinkValidationReport(BaseModel):
    """Aggregate result of :func:`validate_links`."""

    model_config = {"frozen": True}

    valid: int
    broken: int
    details: list[LinkStatus]


def normalize_docs_reference(reference: str) -> str:
    """Normalize a documentation URL or concept name for lookup.

    ``/v1.2/core-concepts/aggregates.md`` -> ``core-concepts/aggregates``
    """
    normalized = _LEADING_SLASHES.sub("", reference)
    normalized = _VERSION_PREFIX.sub("", normalized)
    return _MD_SUFFIX.sub("", normalized)


def find_code_by_docs(
    index: Mapping[str, CodeDocsMapping], reference: str
) -> CodeDocsMapping | None:
    """Find the first entry whose ``docs`` equals or contains *reference*.

    Substring containment is intentional: a concept name such as
    ``aggregates`` resolves to ``core-concepts/aggregates``.
    """
    normalized = normalize_docs_reference(reference)
    for mapping in index.values():
        if mapping.docs == normalized or normalized in mapping.docs:
            return mapping
    return None


def find_docs_by_symbol(
    index: Mapping[str, CodeDocsMapping], symbol: str
) -> CodeDocsMapping | None:
    """Direct keyed lookup by symbol name."""
    return index.get(symbol)


def validate_links(
    index: Mapping[str, CodeDocsMapping],
    valid_docs_urls: set[str] | frozenset[str],
) -> LinkValidationReport:
    """Classify every entry against a caller-supplied set of valid pages."""
    details: list[LinkStatus] = []
    valid = 0
    for symbol, mapping in index.items():
        ok = mapping.docs in valid_docs_urls
        if ok:
            valid += 1
        details.append(
            LinkStatus(symbol=symbol, docs=mapping.docs, status="valid" if ok else "broken")
        )
    return LinkValidationReport(valid=valid, broken=len(details) - valid, details=details)
