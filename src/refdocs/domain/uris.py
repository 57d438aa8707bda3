"""Resource identifier codec: ``scheme://path`` <-> relative file paths.

Three schemes address the documentation corpus:

- ``document://tutorials/basic-setup``  -> ``Tutorials/basic-setup.md``
- ``roadmap-item://event-sourcing``     -> ``Roadmap/event-sourcing.md``
- ``code-sample://csharp/aggregates/Order.cs`` -> ``aggregates/Order.cs``

INVARIANT: the forward mapping capitalizes the category directory and the
reverse mapping lowercases, so ``file_path_to_uri(uri_to_file_path(x))`` is
not guaranteed to reproduce ``x`` for mixed-case document paths. The
lowercase form is canonical for equality (see :func:`canonical_uri`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from refdocs.domain.errors import InvalidUriError, UnsupportedSchemeError

DOCUMENT = "document"
ROADMAP_ITEM = "roadmap-item"
CODE_SAMPLE = "code-sample"

SCHEMES: tuple[str, ...] = (DOCUMENT, ROADMAP_ITEM, CODE_SAMPLE)

ROADMAP_DIR = "Roadmap"

# Code samples are C# sources; the language segment is implied by the extension.
SAMPLE_EXTENSION = ".cs"
SAMPLE_LANGUAGE = "csharp"

_URI_PATTERN = re.compile(r"(document|roadmap-item|code-sample)://(.+)")
_SCHEME_PREFIX = re.compile(r"^([^:]+)://")
_EXTENSION_PATTERN = re.compile(r"\.(md|cs)\Z")


@dataclass(frozen=True)
class ResourceIdentifier:
    """A parsed resource identifier."""

    scheme: str
    path: str
    category: str | None = None
    language: str | None = None  # code-sample only

    @property
    def uri(self) -> str:
        return f"{self.scheme}://{self.path}"

    def __str__(self) -> str:
        return self.uri


def parse_uri(uri: str) -> ResourceIdentifier:
    """Parse *uri* into a :class:`ResourceIdentifier`.

    Only the ``scheme://rest`` shape is checked; any non-empty rest is
    accepted. ``category`` is the segment before the first ``/``; for
    ``code-sample`` identifiers the same segment is also the ``language``.

    Raises:
        InvalidUriError: If *uri* does not match a known scheme.
    """
    match = _URI_PATTERN.fullmatch(uri)
    if match is None:
        msg = f"Invalid URI format: {uri}. Expected format: scheme://path"
        raise InvalidUriError(msg, uri=uri)

    scheme, path = match.group(1), match.group(2)
    category: str | None = None
    language: str | None = None
    if "/" in path:
        category = path.split("/", 1)[0]
        if scheme == CODE_SAMPLE:
            language = category
    return ResourceIdentifier(scheme=scheme, path=path, category=category, language=language)


def uri_to_file_path(uri: str | ResourceIdentifier) -> str:
    """Convert an identifier to a path relative to the docs root.

    Raises:
        InvalidUriError: If a string *uri* cannot be parsed.
        UnsupportedSchemeError: If the identifier's scheme has no file mapping.
    """
    ident = parse_uri(uri) if isinstance(uri, str) else uri

    if ident.scheme == DOCUMENT:
        if ident.category is None:
            return f"{ident.path}.md"
        first, rest = ident.path.split("/", 1)
        return f"{first[:1].upper()}{first[1:]}/{rest}.md"

    if ident.scheme == ROADMAP_ITEM:
        return f"{ROADMAP_DIR}/{ident.path}.md"

    if ident.scheme == CODE_SAMPLE:
        if ident.language:
            return ident.path[len(ident.language) + 1 :]
        return ident.path

    msg = f"Unsupported URI scheme: {ident.scheme}"
    raise UnsupportedSchemeError(msg, scheme=ident.scheme, uri=ident.uri)


def file_path_to_uri(file_path: str) -> str:
    """Convert a docs-relative file path to its canonical identifier string.

    - ``Roadmap/x.md`` -> lowercased ``roadmap-item://x``
    - ``a/B.cs``       -> ``code-sample://csharp/a/B.cs`` (case and extension kept)
    - ``A/x.md``       -> lowercased ``document://a/x``

    Markdown paths lose their extension and are lowercased. ``.cs`` paths
    do not: stripping the extension would leave ``uri_to_file_path`` unable
    to recover the source file, since code-sample paths are taken verbatim.
    ``file_path_to_uri(p)`` therefore round-trips for every ``.cs`` path.
    """
    roadmap_prefix = f"{ROADMAP_DIR}/"
    if file_path.startswith(roadmap_prefix):
        rest = _EXTENSION_PATTERN.sub("", file_path[len(roadmap_prefix) :])
        return f"{ROADMAP_ITEM}://{rest.lower()}"

    if file_path.endswith(SAMPLE_EXTENSION):
        # Kept verbatim so uri_to_file_path() returns the same source file.
        return f"{CODE_SAMPLE}://{SAMPLE_LANGUAGE}/{file_path}"

    return f"{DOCUMENT}://{file_path.removesuffix('.md').lower()}"


def canonical_uri(uri: str) -> str:
    """Return the form of *uri* used for equality comparisons.

    ``document`` and ``roadmap-item`` paths are lowercased; code-sample paths
    keep their case because they name source files verbatim.
    """
    ident = parse_uri(uri)
    if ident.scheme in (DOCUMENT, ROADMAP_ITEM):
        return f"{ident.scheme}://{ident.path.lower()}"
    return ident.uri


def is_valid_uri(uri: str) -> bool:
    """Check whether *uri* parses."""
    try:
        parse_uri(uri)
    except InvalidUriError:
        return False
    return True


def get_uri_scheme(uri: str) -> str | None:
    """Extract the scheme token without validating it (tolerant prefix match)."""
    match = _SCHEME_PREFIX.match(uri)
    return match.group(1) if match else None
