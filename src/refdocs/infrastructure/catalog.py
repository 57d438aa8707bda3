"""DocsCatalog: the single dependency injected into every service.

Owns the content retriever and the two cross-reference indices. Indices are
loaded once, at construction, and never rewritten; concurrent readers need
no locking. A reload would build a new catalog and swap the reference.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from refdocs.infrastructure.indices import load_code_docs_map, load_code_tests_map
from refdocs.infrastructure.retriever import ContentRetriever, RetrieverConfig

if TYPE_CHECKING:
    from pathlib import Path

    import httpx

    from refdocs.config.settings import RefdocsSettings
    from refdocs.domain.code_docs import CodeDocsMap
    from refdocs.domain.code_tests import CodeTestsMap

logger = logging.getLogger(__name__)


class DocsCatalog:
    """Loaded documentation sources for one serving process.

    *code_docs* / *code_tests* may be passed pre-built (tests); otherwise
    they are loaded from the settings' assets directory.
    """

    def __init__(
        self,
        settings: RefdocsSettings,
        *,
        http_client: httpx.Client | None = None,
        code_docs: CodeDocsMap | None = None,
        code_tests: CodeTestsMap | None = None,
    ) -> None:
        self.settings = settings
        self.retriever = ContentRetriever(
            RetrieverConfig(
                source=settings.docs.source,
                base_path=settings.docs_path,
                remote_base_url=settings.docs.base_url,
                manifest_name=settings.docs.manifest,
                timeout=settings.docs.timeout,
            ),
            client=http_client,
        )
        assets = settings.assets_path
        self.code_docs = (
            code_docs
            if code_docs is not None
            else load_code_docs_map(assets, settings.index.code_docs_file)
        )
        self.code_tests = (
            code_tests
            if code_tests is not None
            else load_code_tests_map(assets, settings.index.code_tests_file)
        )
        logger.debug(
            "Catalog ready: source=%s docs=%s symbols=%d tested=%d",
            settings.docs.source,
            settings.docs_path,
            len(self.code_docs),
            len(self.code_tests.code_to_tests),
        )

    @property
    def docs_path(self) -> Path:
        return self.settings.docs_path

    def close(self) -> None:
        """Release the HTTP client, if one was opened."""
        self.retriever.close()
