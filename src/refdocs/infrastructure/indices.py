"""Load the precomputed cross-reference artifacts.

INVARIANT: loading never raises. A missing or unreadable artifact is logged
and replaced with an empty index. Entries are validated one at a time, so a
malformed entry is logged and dropped while the rest of the index loads.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from refdocs.domain.code_docs import CodeDocsMap, CodeDocsMapping
from refdocs.domain.code_tests import (
    CodeLinkMapping,
    CodeTestsMap,
    CodeTestsMetadata,
    TestLinkMapping,
)

CODE_DOCS_FILENAME = "code-docs-map.json"
CODE_TESTS_FILENAME = "code-tests-map.json"

log = structlog.get_logger(__name__)


def _read_json_object(path: Path, event: str) -> dict[str, Any] | None:
    """Parse *path* as a JSON object, or log *event* and return None."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.warning(event, path=str(path), error=str(exc))
        return None
    if not isinstance(data, dict):
        log.warning(event, path=str(path), error="top-level value is not an object")
        return None
    return data


def load_code_docs_map(assets_path: Path, filename: str = CODE_DOCS_FILENAME) -> CodeDocsMap:
    """Load ``code-docs-map.json`` from *assets_path*; empty on any failure."""
    map_path = assets_path / filename
    raw = _read_json_object(map_path, "code_docs_map_load_failed")
    if raw is None:
        return CodeDocsMap()

    entries: dict[str, CodeDocsMapping] = {}
    for symbol, value in raw.items():
        try:
            entries[symbol] = CodeDocsMapping.model_validate(value)
        except ValidationError as exc:
            log.warning(
                "code_docs_entry_skipped",
                path=str(map_path),
                symbol=symbol,
                errors=exc.error_count(),
            )

    log.debug("code_docs_map_loaded", path=str(map_path), symbols=len(entries))
    return CodeDocsMap(entries)


M = TypeVar("M", bound=BaseModel)


def _load_links(
    section: Any, model: type[M], *, map_path: Path, name: str
) -> dict[str, list[M]]:
    """Validate one direction of the code/tests map link by link."""
    if section is None:
        return {}
    if not isinstance(section, dict):
        log.warning("code_tests_section_skipped", path=str(map_path), section=name)
        return {}

    result: dict[str, list[M]] = {}
    for key, links in section.items():
        if not isinstance(links, list):
            log.warning("code_tests_entry_skipped", path=str(map_path), section=name, key=key)
            continue
        kept: list[M] = []
        for link in links:
            try:
                kept.append(model.model_validate(link))
            except ValidationError as exc:
                log.warning(
                    "code_tests_link_skipped",
                    path=str(map_path),
                    section=name,
                    key=key,
                    errors=exc.error_count(),
                )
        # A key whose every link was dropped has no recorded links left.
        if kept or not links:
            result[key] = kept
    return result


def load_code_tests_map(assets_path: Path, filename: str = CODE_TESTS_FILENAME) -> CodeTestsMap:
    """Load ``code-tests-map.json`` from *assets_path*; empty on any failure."""
    map_path = assets_path / filename
    raw = _read_json_object(map_path, "code_tests_map_load_failed")
    if raw is None:
        return CodeTestsMap()

    metadata: CodeTestsMetadata | None = None
    if raw.get("metadata") is not None:
        try:
            metadata = CodeTestsMetadata.model_validate(raw["metadata"])
        except ValidationError as exc:
            log.warning("code_tests_metadata_skipped", path=str(map_path), error=str(exc))

    index = CodeTestsMap(
        code_to_tests=_load_links(
            raw.get("codeToTests"), TestLinkMapping, map_path=map_path, name="codeToTests"
        ),
        tests_to_code=_load_links(
            raw.get("testsToCode"), CodeLinkMapping, map_path=map_path, name="testsToCode"
        ),
        metadata=metadata,
    )
    log.debug(
        "code_tests_map_loaded",
        path=str(map_path),
        symbols=len(index.code_to_tests),
        tests=len(index.tests_to_code),
    )
    return index
