"""Shared pytest fixtures and test helpers for refdocs tests."""

from __future__ import annotations

import json
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from refdocs.config.settings import RefdocsSettings
from refdocs.infrastructure.catalog import DocsCatalog

# ---------------------------------------------------------------------------
# Sample site: pages, manifest, and cross-reference artifacts
# ---------------------------------------------------------------------------

PAGES: dict[str, str] = {
    "index.md": """---
title: Home
---
Welcome to the documentation.
""",
    "Tutorials/getting-started.md": """---
category: Tutorials
order: 1
---
Start here.
<!-- more -->
The rest of the walkthrough.
""",
    "Tutorials/basic-setup.md": """---
title: Basic Setup
category: Tutorials
order: 2
tags: [setup, intro]
difficulty: BEGINNER
description: Set up the library.
---
# Basic Setup
""",
    "Concepts/dispatcher.md": """---
title: Dispatcher
category: Core Concepts
order: 1
---
# Dispatcher
""",
    "Concepts/event-store.md": """---
title: Event Store
category: Core Concepts
unreleased: true
status: in-development
targetVersion: "2.0"
---
# Event Store
""",
    "Roadmap/event-sourcing.md": """---
title: Event Sourcing
status: experimental
order: 1
---
# Event Sourcing
""",
    "Roadmap/sagas.md": """---
title: Sagas
---
# Sagas
""",
}

# "Tutorials/missing" is listed but has no file on disk.
MANIFEST: list[str] = [
    "index",
    "Tutorials/getting-started",
    "Tutorials/basic-setup",
    "Tutorials/missing",
    "Concepts/dispatcher",
    "Concepts/event-store",
    "Roadmap/event-sourcing",
    "Roadmap/sagas",
]

CODE_DOCS: dict[str, Any] = {
    "IDispatcher": {
        "file": "src/Dispatcher/IDispatcher.cs",
        "line": 10,
        "symbol": "IDispatcher",
        "docs": "concepts/dispatcher",
    },
    "BasicSetup": {
        "file": "src/Setup.cs",
        "line": 3,
        "symbol": "BasicSetup",
        "docs": "tutorials/basic-setup",
    },
    "Orphan": {
        "file": "src/Orphan.cs",
        "line": 1,
        "symbol": "Orphan",
        "docs": "concepts/removed-page",
    },
}

CODE_TESTS: dict[str, Any] = {
    "codeToTests": {
        "OrderAggregate": [
            {
                "testFile": "tests/OrderTests.cs",
                "testMethod": "Create_Works",
                "testLine": 12,
                "testClass": "OrderTests",
                "linkSource": "XmlTag",
            },
            {
                "testFile": "tests/OrderTests.cs",
                "testMethod": "Ship_Works",
                "testClass": "OrderTests",
                "linkSource": "Convention",
            },
        ],
        "Dispatcher": [
            {
                "testFile": "tests/DispatcherTests.cs",
                "testMethod": "Dispatch_Routes",
                "testClass": "DispatcherTests",
                "linkSource": "SemanticAnalysis",
            },
        ],
    },
    "testsToCode": {
        "OrderTests.Create_Works": [
            {
                "sourceFile": "src/Order.cs",
                "sourceLine": 5,
                "sourceSymbol": "OrderAggregate",
                "sourceType": "class",
                "linkSource": "XmlTag",
            },
        ],
        "OrderTests.Ship_Works": [
            {"sourceFile": "src/Order.cs", "sourceSymbol": "OrderAggregate"},
        ],
        "DispatcherTests.Dispatch_Routes": [
            {"sourceFile": "src/Dispatcher.cs", "sourceSymbol": "Dispatcher"},
        ],
    },
    "metadata": {
        "generated": "2024-05-01T00:00:00Z",
        "sourceFiles": 2,
        "testFiles": 2,
        "totalLinks": 3,
    },
}


def write_site(
    root: Path,
    *,
    pages: dict[str, str] | None = None,
    manifest: list[str] | None = None,
    code_docs: dict[str, Any] | None = None,
    code_tests: dict[str, Any] | None = None,
) -> Path:
    """Lay out ``src/assets/docs`` under *root*; return the docs directory.

    Mirrors the default configuration: the manifest and both index
    artifacts sit one level above the docs directory.
    """
    assets = root / "src" / "assets"
    docs = assets / "docs"
    for rel, text in (PAGES if pages is None else pages).items():
        path = docs / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    docs.mkdir(parents=True, exist_ok=True)

    (assets / "docs-list.json").write_text(
        json.dumps(MANIFEST if manifest is None else manifest), encoding="utf-8"
    )
    (assets / "code-docs-map.json").write_text(
        json.dumps(CODE_DOCS if code_docs is None else code_docs), encoding="utf-8"
    )
    (assets / "code-tests-map.json").write_text(
        json.dumps(CODE_TESTS if code_tests is None else code_tests), encoding="utf-8"
    )
    return docs


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's REFDOCS_* environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("REFDOCS_"):
            monkeypatch.delenv(name)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Sample documentation site; returns the docs directory."""
    return write_site(tmp_path)


@pytest.fixture
def settings(tmp_path: Path, docs_root: Path) -> RefdocsSettings:
    """Settings pointing at the sample site through the default layout."""
    return RefdocsSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def catalog(settings: RefdocsSettings) -> Generator[DocsCatalog]:
    """Catalog over the sample site, closed after the test."""
    cat = DocsCatalog(settings)
    try:
        yield cat
    finally:
        cat.close()


@pytest.fixture
def _isolated_site(tmp_path: Path, docs_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample site so the CLI finds it with no config.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
