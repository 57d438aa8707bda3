"""BaseService: common foundation for refdocs services.

Every service receives a :class:`DocsCatalog` at construction time. The
catalog provides the retriever and the loaded cross-reference indices;
services never touch the filesystem or network directly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from refdocs.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from refdocs.domain.errors import RefdocsError
    from refdocs.infrastructure.catalog import DocsCatalog

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class DocsService(BaseService):
            def read(self, uri: str) -> ServiceResult:
                try:
                    text = self._catalog.retriever.read_doc_file(...)
                except RefdocsError as exc:
                    return self._error(op, exc)
    """

    def __init__(self, catalog: DocsCatalog) -> None:
        self._catalog = catalog

    @staticmethod
    def _error(op: str, exc: RefdocsError) -> ServiceResult:
        """Convert a domain error into a failed result for the caller."""
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc))
