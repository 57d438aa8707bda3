"""Error taxonomy for identifier parsing and content retrieval.

Identifier and retrieval errors are fatal to the single call that raised
them. Index-load failures are never raised: loaders log and substitute an
empty index (see :mod:`refdocs.infrastructure.indices`).

Each error carries a stable ``code`` that the service layer copies into
:class:`~refdocs.services.result.ServiceError`.
"""

from __future__ import annotations

from typing import Any, ClassVar


class RefdocsError(Exception):
    """Base class for all refdocs errors."""

    code: ClassVar[str] = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class InvalidUriError(RefdocsError, ValueError):
    """The string does not match ``scheme://path`` for a known scheme."""

    code = "INVALID_FORMAT"


class UnsupportedSchemeError(RefdocsError, ValueError):
    """The identifier is well-formed but its scheme has no file mapping."""

    code = "UNSUPPORTED_SCHEME"


class RoadmapDocumentError(RefdocsError, ValueError):
    """A ``document://`` identifier names a page flagged as unreleased."""

    code = "ROADMAP_DOCUMENT"


class DocumentNotFoundError(RefdocsError, LookupError):
    """A local documentation file does not exist."""

    code = "NOT_FOUND"


class RemoteFetchError(RefdocsError):
    """The remote origin answered with a non-2xx status or was unreachable."""

    code = "REMOTE_FETCH_FAILED"


class FrontmatterError(RefdocsError, ValueError):
    """The YAML header of a document could not be parsed."""

    code = "INVALID_FRONTMATTER"
