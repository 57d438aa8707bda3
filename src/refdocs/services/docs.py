"""DocsService: resource listing, reading, and identifier resolution.

Read-only surfaces over the documentation corpus:
- resolve: identifier -> scheme/path/category/file path (no I/O)
- read: identifier -> raw markdown (roadmap items get a warning banner)
- metadata: identifier -> title, description, front-matter, roadmap flag
- list_documents / list_roadmap: manifest entries as MCP resources
- categories / docs_by_category: manifest grouped by top-level directory

Listings are recomputed on every call and skip pages that fail to load.
"""

from __future__ import annotations

import logging
from typing import Any

from refdocs.domain.errors import (
    InvalidUriError,
    RefdocsError,
    RoadmapDocumentError,
    UnsupportedSchemeError,
)
from refdocs.domain.frontmatter import (
    ParsedMarkdown,
    doc_description,
    doc_title,
    is_roadmap_doc,
    parse_markdown,
    resource_metadata,
)
from refdocs.domain.uris import (
    CODE_SAMPLE,
    DOCUMENT,
    ROADMAP_ITEM,
    canonical_uri,
    get_uri_scheme,
    parse_uri,
    uri_to_file_path,
)
from refdocs.infrastructure.retriever import DocFileInfo
from refdocs.services.base import BaseService
from refdocs.services.contracts import (
    ResourceContentData,
    ResourceItem,
    ResourceListData,
    dump_validated,
)
from refdocs.services.result import ServiceResult

logger = logging.getLogger(__name__)

ROADMAP_WARNING = "This feature is not yet released"

ROADMAP_BANNER = """> **ROADMAP FEATURE**
> This documentation describes a feature that is not yet released.
> The API and behavior described here may change before release.

---

"""

UNCATEGORIZED = "uncategorized"

_DEFAULT_ORDER = 999
_STATUS_RANK: dict[str, int] = {"experimental": 1, "in-development": 2, "planned": 3}


def _order_of(item: ResourceItem) -> int:
    order = item.metadata.get("order")
    return order if isinstance(order, int) and not isinstance(order, bool) else _DEFAULT_ORDER


class DocsService(BaseService):
    """Lists, reads, and resolves documentation resources."""

    # ------------------------------------------------------------------
    # resolve: codec only
    # ------------------------------------------------------------------

    def resolve(self, uri: str) -> ServiceResult:
        """Show how *uri* maps onto the docs tree without reading it."""
        op = "resolve"
        try:
            ident = parse_uri(uri)
            file_path = uri_to_file_path(ident)
        except RefdocsError as exc:
            return self._error(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "uri": ident.uri,
                "canonical_uri": canonical_uri(ident.uri),
                "scheme": ident.scheme,
                "path": ident.path,
                "category": ident.category,
                "language": ident.language,
                "file_path": file_path,
            },
        )

    # ------------------------------------------------------------------
    # read
    # ------------------------------------------------------------------

    def read(self, uri: str) -> ServiceResult:
        """Read a resource, dispatching on its scheme."""
        op = "read_resource"
        scheme = get_uri_scheme(uri)
        try:
            if scheme == DOCUMENT:
                path, text = self._read_document(uri)
            elif scheme == ROADMAP_ITEM:
                path, text = self._read_roadmap(uri)
            elif scheme == CODE_SAMPLE:
                return ServiceResult.failure(
                    op,
                    "RESERVED_SCHEME",
                    "code-sample:// URIs are reserved; code samples are embedded in "
                    "documentation pages (document:// URIs).",
                    uri=uri,
                )
            elif scheme is None:
                msg = f"Invalid URI format: {uri}. Expected format: scheme://path"
                raise InvalidUriError(msg, uri=uri)
            else:
                msg = f"Unsupported URI scheme: {scheme}"
                raise UnsupportedSchemeError(msg, scheme=scheme, uri=uri)
        except RefdocsError as exc:
            return self._error(op, exc)

        payload = {"uri": uri, "path": path, "text": text}
        return ServiceResult(ok=True, op=op, data=dump_validated(ResourceContentData, payload))

    def _read_document(self, uri: str) -> tuple[str, str]:
        path = uri_to_file_path(parse_uri(uri))
        content = self._catalog.retriever.read_doc_file(path)
        if is_roadmap_doc(parse_markdown(content).frontmatter):
            msg = f"{uri} is a roadmap document. Use a roadmap-item:// URI instead."
            raise RoadmapDocumentError(msg, uri=uri)
        return path, content

    def _read_roadmap(self, uri: str) -> tuple[str, str]:
        path = self._roadmap_path(uri)
        return path, ROADMAP_BANNER + self._catalog.retriever.read_doc_file(path)

    def _roadmap_path(self, uri: str) -> str:
        ident = parse_uri(uri)
        path = uri_to_file_path(ident)
        if not self._catalog.retriever.file_exists(path):
            # Roadmap pages may live in the regular tree, flagged by front-matter.
            path = uri_to_file_path(parse_uri(f"{DOCUMENT}://{ident.path}"))
        return path

    # ------------------------------------------------------------------
    # metadata
    # ------------------------------------------------------------------

    def metadata(self, uri: str) -> ServiceResult:
        """Title, description, front-matter, and roadmap flag for *uri*."""
        op = "resource_metadata"
        try:
            if get_uri_scheme(uri) == ROADMAP_ITEM:
                path = self._roadmap_path(uri)
            else:
                path = uri_to_file_path(uri)
            parsed = parse_markdown(self._catalog.retriever.read_doc_file(path))
        except RefdocsError as exc:
            return self._error(op, exc)

        fm = parsed.frontmatter
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "uri": uri,
                "path": path,
                "title": doc_title(fm, path),
                "description": doc_description(fm, parsed.excerpt),
                "frontmatter": fm.model_dump(mode="json", by_alias=True, exclude_none=True),
                "is_roadmap": is_roadmap_doc(fm),
            },
        )

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def _load(self, file: DocFileInfo) -> ParsedMarkdown | None:
        """Read and parse one manifest entry, or None (logged) on failure."""
        try:
            return parse_markdown(self._catalog.retriever.read_doc_file(file.path))
        except (RefdocsError, OSError, ValueError) as exc:
            logger.warning("Skipping %s: %s", file.path, exc)
            return None

    def list_documents(self, *, category: str | None = None) -> ServiceResult:
        """Released documentation pages, sorted by category then order."""
        items: list[ResourceItem] = []
        for file in self._catalog.retriever.list_doc_files():
            if file.uri.startswith(f"{ROADMAP_ITEM}://"):
                continue
            if category is not None and (file.category or "").lower() != category.lower():
                continue
            parsed = self._load(file)
            if parsed is None or is_roadmap_doc(parsed.frontmatter):
                continue

            fm = parsed.frontmatter
            title = doc_title(fm, file.path)
            items.append(
                ResourceItem(
                    uri=file.uri,
                    name=title,
                    path=file.path,
                    description=doc_description(fm, parsed.excerpt)
                    or f"Documentation: {title}",
                    metadata=resource_metadata(fm),
                )
            )

        items.sort(key=lambda i: (str(i.metadata.get("category", "")), _order_of(i)))
        return self._listing("list_documents", items)

    def list_roadmap(self, *, status: str | None = None) -> ServiceResult:
        """Roadmap items: ``Roadmap/`` pages plus pages flagged in front-matter."""
        items: list[ResourceItem] = []
        for file in self._catalog.retriever.list_doc_files():
            in_roadmap_dir = file.uri.startswith(f"{ROADMAP_ITEM}://")
            if not in_roadmap_dir and not file.uri.startswith(f"{DOCUMENT}://"):
                continue
            parsed = self._load(file)
            if parsed is None:
                continue

            fm = parsed.frontmatter
            if not in_roadmap_dir and not is_roadmap_doc(fm):
                continue

            title = doc_title(fm, file.path)
            metadata: dict[str, str | int | bool] = resource_metadata(fm)
            metadata["warning"] = ROADMAP_WARNING
            if in_roadmap_dir:
                badge = f"[{fm.status.upper()}]" if fm.status else "[PLANNED]"
                name = f"{badge} {title}"
                uri = file.uri
            else:
                name = f"[Roadmap] {title}"
                uri = f"{ROADMAP_ITEM}://{file.uri.removeprefix(f'{DOCUMENT}://')}"

            items.append(
                ResourceItem(
                    uri=uri,
                    name=name,
                    path=file.path,
                    description=doc_description(fm, parsed.excerpt) or f"Planned feature: {title}",
                    metadata=metadata,
                )
            )

        if status is not None:
            items = [i for i in items if i.metadata.get("status") == status]

        items.sort(
            key=lambda i: (
                _STATUS_RANK.get(str(i.metadata.get("status", "planned")), _DEFAULT_ORDER),
                _order_of(i),
            )
        )
        return self._listing("list_roadmap", items)

    @staticmethod
    def _listing(op: str, items: list[ResourceItem]) -> ServiceResult:
        payload: dict[str, Any] = {"count": len(items), "items": [i.model_dump() for i in items]}
        return ServiceResult(ok=True, op=op, data=dump_validated(ResourceListData, payload))

    def categories(self) -> ServiceResult:
        """Distinct top-level categories in the manifest."""
        names = sorted(
            {f.category for f in self._catalog.retriever.list_doc_files() if f.category},
            key=str.lower,
        )
        data = {"count": len(names), "categories": names}
        return ServiceResult(ok=True, op="list_categories", data=data)

    def docs_by_category(self, *, category: str | None = None) -> ServiceResult:
        """Manifest entries grouped by category (manifest order within groups)."""
        groups: dict[str, list[dict[str, str]]] = {}
        for file in self._catalog.retriever.list_doc_files():
            name = file.category or UNCATEGORIZED
            if category is not None and name.lower() != category.lower():
                continue
            groups.setdefault(name, []).append({"uri": file.uri, "path": file.path})

        return ServiceResult(
            ok=True,
            op="list_docs_by_category",
            data={"count": sum(len(v) for v in groups.values()), "categories": groups},
        )

    def valid_docs_urls(self) -> frozenset[str]:
        """Documentation paths currently in the manifest, as ``docs`` values.

        Each entry appears as written and lowercased, since category
        directories are capitalized on disk but lowercase in index links.
        """
        urls: set[str] = set()
        for file in self._catalog.retriever.list_doc_files():
            stem = file.path.removesuffix(".md")
            urls.add(stem)
            urls.add(stem.lower())
        return frozenset(urls)
