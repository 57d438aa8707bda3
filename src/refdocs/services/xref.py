"""CrossRefService: code <-> docs and code <-> tests lookups.

Every query runs against the indices loaded into the catalog at startup.
Missing entries are reported as ``found: false`` payloads, never as errors:
an unmapped symbol is a normal answer.
"""

from __future__ import annotations

import logging
from typing import Any

from refdocs.domain.code_docs import find_code_by_docs, find_docs_by_symbol, validate_links
from refdocs.domain.code_tests import (
    find_code_for_test,
    find_tests_for_code,
    find_untested_symbols,
    get_coverage_stats,
    validate_test_links,
)
from refdocs.domain.errors import RefdocsError
from refdocs.domain.frontmatter import doc_title, parse_markdown
from refdocs.domain.uris import DOCUMENT
from refdocs.services.base import BaseService
from refdocs.services.contracts import CodeLocationData, RelatedDocsData, dump_validated
from refdocs.services.docs import DocsService
from refdocs.services.result import ServiceResult

logger = logging.getLogger(__name__)


class CrossRefService(BaseService):
    """Queries over the code/docs and code/tests indices."""

    # ------------------------------------------------------------------
    # Code <-> docs
    # ------------------------------------------------------------------

    def code_location(self, concept: str) -> ServiceResult:
        """Find the code implementing a documentation concept or URL."""
        op = "get_code_location"
        mapping = find_code_by_docs(self._catalog.code_docs, concept)
        payload: dict[str, Any] = {"found": mapping is not None, "concept": concept}
        if mapping is not None:
            payload.update(mapping.model_dump())
        return ServiceResult(ok=True, op=op, data=dump_validated(CodeLocationData, payload))

    def related_docs(self, symbol: str) -> ServiceResult:
        """Find the documentation page for a code symbol.

        Title and category come from the page's front-matter when the page
        is in the manifest; a page that cannot be read leaves them unset.
        """
        op = "get_related_docs"
        mapping = find_docs_by_symbol(self._catalog.code_docs, symbol)
        if mapping is None:
            return ServiceResult(
                ok=True,
                op=op,
                data=dump_validated(RelatedDocsData, {"found": False, "symbol": symbol}),
            )

        payload: dict[str, Any] = {
            "found": True,
            "symbol": symbol,
            "url": mapping.docs,
            "uri": f"{DOCUMENT}://{mapping.docs.lower()}",
            "file": mapping.file,
            "line": mapping.line,
        }
        payload.update(self._page_details(mapping.docs))
        return ServiceResult(ok=True, op=op, data=dump_validated(RelatedDocsData, payload))

    def _page_details(self, docs: str) -> dict[str, Any]:
        target = docs.lower()
        retriever = self._catalog.retriever
        for file in retriever.list_doc_files():
            if file.path.removesuffix(".md").lower() != target:
                continue
            try:
                fm = parse_markdown(retriever.read_doc_file(file.path)).frontmatter
            except (RefdocsError, OSError, ValueError) as exc:
                logger.warning("Could not read %s for %s: %s", file.path, docs, exc)
                return {"category": file.category}
            return {
                "uri": file.uri,
                "title": doc_title(fm, file.path),
                "category": fm.category or file.category,
            }
        return {}

    def validate_doc_links(self) -> ServiceResult:
        """Check every symbol's docs link against the manifest."""
        valid_urls = DocsService(self._catalog).valid_docs_urls()
        report = validate_links(self._catalog.code_docs, valid_urls)
        warnings: list[str] = []
        if not valid_urls:
            warnings.append("Documentation manifest is empty; every link is reported broken")
        return ServiceResult(
            ok=True,
            op="validate_doc_links",
            data=report.model_dump(mode="json"),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Code <-> tests
    # ------------------------------------------------------------------

    def tests_for_code(self, symbol: str) -> ServiceResult:
        tests = find_tests_for_code(self._catalog.code_tests, symbol)
        data: dict[str, Any] = {"found": bool(tests), "symbol": symbol}
        if tests:
            data["tests"] = [t.model_dump(by_alias=True, exclude_none=True) for t in tests]
            data["test_count"] = len(tests)
        return ServiceResult(ok=True, op="get_tests_for_code", data=data)

    def code_for_test(self, test_key: str) -> ServiceResult:
        code = find_code_for_test(self._catalog.code_tests, test_key)
        data: dict[str, Any] = {"found": bool(code), "test_key": test_key}
        if code:
            data["code"] = [c.model_dump(by_alias=True, exclude_none=True) for c in code]
            data["code_count"] = len(code)
        return ServiceResult(ok=True, op="get_code_for_test", data=data)

    def coverage_stats(self) -> ServiceResult:
        """Coverage figures plus the generator's summary when present."""
        index = self._catalog.code_tests
        data = get_coverage_stats(index).model_dump(mode="json")
        if index.metadata is not None:
            data["metadata"] = {
                "generated": index.metadata.generated,
                "source_files": index.metadata.source_files,
                "test_files": index.metadata.test_files,
            }
        return ServiceResult(ok=True, op="get_coverage_stats", data=data)

    def untested_symbols(self, symbols: list[str]) -> ServiceResult:
        untested = find_untested_symbols(self._catalog.code_tests, symbols)
        return ServiceResult(
            ok=True,
            op="find_untested_symbols",
            data={"checked": len(symbols), "count": len(untested), "untested": untested},
        )

    def validate_test_links(self) -> ServiceResult:
        validation = validate_test_links(self._catalog.code_tests)
        return ServiceResult(
            ok=True,
            op="validate_test_links",
            data={
                "valid": validation.valid,
                "total_links": validation.total_links,
                "validation_rate": validation.validation_rate,
                "details": [
                    d.model_dump(mode="json", exclude_none=True) for d in validation.details
                ],
            },
        )
