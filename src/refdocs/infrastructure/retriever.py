"""Fetch raw documentation text from a local directory or a remote origin.

Local mode reads ``{base_path}/{relative_path}``. Remote mode issues
``GET {remote_base_url}/assets/docs/{relative_path}``. There is no retry and
no caching here; callers own timeout and retry policy.

The document listing comes from ``docs-list.json`` one directory above
``base_path``: a JSON array of extension-less paths. Listing is best-effort
and returns ``[]`` when the manifest cannot be read.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import httpx
import structlog

from refdocs.domain.errors import DocumentNotFoundError, InvalidUriError, RemoteFetchError
from refdocs.domain.uris import file_path_to_uri

MANIFEST_FILENAME = "docs-list.json"
DOC_EXTENSION = ".md"

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RetrieverConfig:
    """Where documents come from.

    Not re-validated here: ``remote_base_url`` must be set when
    ``source == "remote"`` (enforced by :class:`refdocs.config.models.DocsConfig`).
    """

    source: Literal["local", "remote"]
    base_path: Path
    remote_base_url: str | None = None
    manifest_name: str = MANIFEST_FILENAME
    timeout: float = 10.0


@dataclass(frozen=True)
class DocFileInfo:
    """One manifest entry: file path, identifier, and category directory."""

    path: str
    uri: str
    category: str | None = None


class ContentRetriever:
    """Reads documentation files by docs-relative path.

    *client* may be supplied to share a connection pool or to substitute
    a mock transport; otherwise a client is created on first remote read.
    """

    def __init__(self, config: RetrieverConfig, *, client: httpx.Client | None = None) -> None:
        self.config = config
        self._client = client

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_doc_file(self, relative_path: str) -> str:
        """Return the text of *relative_path*.

        Raises:
            DocumentNotFoundError: Local file does not exist.
            InvalidUriError: *relative_path* climbs out of the docs root.
            RemoteFetchError: Remote origin failed or answered non-2xx.
            OSError: Any other local read failure, unchanged.
        """
        if self.config.source == "local":
            return self._read_local(relative_path)
        return self._read_remote(relative_path)

    def _local_path(self, relative_path: str) -> Path:
        base = self.config.base_path
        full = base / relative_path
        # Guard against identifiers that climb out of the docs root
        if not full.resolve().is_relative_to(base.resolve()):
            msg = f"Path escapes documentation root: {relative_path}"
            raise InvalidUriError(msg, path=relative_path)
        return full

    def _read_local(self, relative_path: str) -> str:
        full = self._local_path(relative_path)
        try:
            return full.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            msg = f"Documentation file not found: {relative_path}"
            raise DocumentNotFoundError(msg, path=relative_path) from exc

    def remote_url(self, relative_path: str) -> str:
        base = (self.config.remote_base_url or "").rstrip("/")
        return f"{base}/assets/docs/{relative_path}"

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.config.timeout)
        return self._client

    def _read_remote(self, relative_path: str) -> str:
        url = self.remote_url(relative_path)
        try:
            response = self._http().get(url)
        except httpx.HTTPError as exc:
            msg = f"Failed to fetch remote documentation {url}: {exc}"
            raise RemoteFetchError(msg, url=url) from exc

        if not response.is_success:
            msg = f"Failed to fetch {url}: {response.status_code} {response.reason_phrase}"
            raise RemoteFetchError(msg, url=url, status=response.status_code)
        return response.text

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------
    # Listing and existence
    # ------------------------------------------------------------------

    @property
    def manifest_path(self) -> Path:
        return self.config.base_path.parent / self.config.manifest_name

    def list_doc_files(self) -> list[DocFileInfo]:
        """List every manifest entry in manifest order. Never raises."""
        try:
            entries = json.loads(self.manifest_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("manifest_load_failed", path=str(self.manifest_path), error=str(exc))
            return []

        if not isinstance(entries, list):
            log.warning("manifest_not_a_list", path=str(self.manifest_path))
            return []

        files: list[DocFileInfo] = []
        for entry in entries:
            if not isinstance(entry, str):
                continue
            file_path = f"{entry}{DOC_EXTENSION}"
            category = entry.split("/", 1)[0] if "/" in entry else None
            files.append(
                DocFileInfo(path=file_path, uri=file_path_to_uri(file_path), category=category)
            )
        return files

    def file_exists(self, relative_path: str) -> bool:
        """Check existence; remote mode approximates it by fetchability."""
        if self.config.source == "local":
            try:
                return self._local_path(relative_path).is_file()
            except InvalidUriError:
                return False
        try:
            self._read_remote(relative_path)
        except RemoteFetchError:
            return False
        return True
