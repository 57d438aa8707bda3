"""Tests for CrossRefService: code/docs and code/tests queries."""

from __future__ import annotations

from pathlib import Path

import pytest

from refdocs.config.settings import RefdocsSettings
from refdocs.infrastructure.catalog import DocsCatalog
from refdocs.services.xref import CrossRefService
from tests.conftest import write_site


@pytest.fixture
def svc(catalog: DocsCatalog) -> CrossRefService:
    return CrossRefService(catalog)


class TestCodeLocation:
    def test_concept_name_matches_by_containment(self, svc: CrossRefService) -> None:
        result = svc.code_location("dispatcher")
        assert result.ok
        assert result.op == "get_code_location"
        assert result.data["found"] is True
        assert result.data["symbol"] == "IDispatcher"
        assert result.data["file"] == "src/Dispatcher/IDispatcher.cs"
        assert result.data["line"] == 10

    def test_versioned_url_is_normalized(self, svc: CrossRefService) -> None:
        result = svc.code_location("/v1.0/concepts/dispatcher.md")
        assert result.data["symbol"] == "IDispatcher"
        assert result.data["docs"] == "concepts/dispatcher"

    def test_not_found_is_not_an_error(self, svc: CrossRefService) -> None:
        result = svc.code_location("projections")
        assert result.ok
        assert result.data["found"] is False
        assert result.data["concept"] == "projections"
        assert result.data["symbol"] is None


class TestRelatedDocs:
    def test_enriched_from_front_matter(self, svc: CrossRefService) -> None:
        result = svc.related_docs("IDispatcher")
        assert result.ok
        assert result.data == {
            "found": True,
            "symbol": "IDispatcher",
            "url": "concepts/dispatcher",
            "uri": "document://concepts/dispatcher",
            "title": "Dispatcher",
            "category": "Core Concepts",
            "file": "src/Dispatcher/IDispatcher.cs",
            "line": 10,
        }

    def test_page_missing_from_manifest(self, svc: CrossRefService) -> None:
        data = svc.related_docs("Orphan").data
        assert data["found"] is True
        assert data["uri"] == "document://concepts/removed-page"
        assert data["title"] is None
        assert data["category"] is None

    def test_unknown_symbol(self, svc: CrossRefService) -> None:
        data = svc.related_docs("NoSuchThing").data
        assert data["found"] is False
        assert data["url"] is None


class TestValidateDocLinks:
    def test_counts_and_details(self, svc: CrossRefService) -> None:
        result = svc.validate_doc_links()
        assert result.ok
        assert result.data["valid"] == 2
        assert result.data["broken"] == 1
        statuses = {d["symbol"]: d["status"] for d in result.data["details"]}
        assert statuses == {"IDispatcher": "valid", "BasicSetup": "valid", "Orphan": "broken"}
        assert result.warnings == []

    def test_empty_manifest_warns(self, tmp_path: Path) -> None:
        site = tmp_path / "bare"
        write_site(site, pages={}, manifest=[])
        cat = DocsCatalog(RefdocsSettings.from_cli(project_root=site))
        result = CrossRefService(cat).validate_doc_links()
        assert result.data["valid"] == 0
        assert result.data["broken"] == 3
        assert len(result.warnings) == 1


class TestTestsForCode:
    def test_found_keeps_artifact_keys(self, svc: CrossRefService) -> None:
        result = svc.tests_for_code("OrderAggregate")
        assert result.op == "get_tests_for_code"
        assert result.data["found"] is True
        assert result.data["test_count"] == 2
        assert result.data["tests"][0] == {
            "testFile": "tests/OrderTests.cs",
            "testMethod": "Create_Works",
            "testLine": 12,
            "testClass": "OrderTests",
            "linkSource": "XmlTag",
        }

    def test_untested_symbol(self, svc: CrossRefService) -> None:
        result = svc.tests_for_code("Payment")
        assert result.ok
        assert result.data == {"found": False, "symbol": "Payment"}


class TestCodeForTest:
    def test_found(self, svc: CrossRefService) -> None:
        result = svc.code_for_test("OrderTests.Ship_Works")
        assert result.data["code_count"] == 1
        assert result.data["code"] == [
            {"sourceFile": "src/Order.cs", "sourceSymbol": "OrderAggregate"}
        ]

    def test_unknown_key(self, svc: CrossRefService) -> None:
        assert svc.code_for_test("Nope.Nothing").data["found"] is False


class TestCoverageAndValidation:
    def test_coverage_stats(self, svc: CrossRefService) -> None:
        data = svc.coverage_stats().data
        assert data["total_code_symbols"] == 2
        assert data["total_test_methods"] == 3
        assert data["average_tests_per_symbol"] == 1.5
        assert data["link_source_breakdown"] == {
            "XmlTag": 1,
            "Convention": 1,
            "SemanticAnalysis": 1,
        }
        assert data["metadata"] == {
            "generated": "2024-05-01T00:00:00Z",
            "source_files": 2,
            "test_files": 2,
        }

    def test_untested_symbols_keep_order(self, svc: CrossRefService) -> None:
        result = svc.untested_symbols(["Refund", "OrderAggregate", "Payment", "Dispatcher"])
        assert result.data == {"checked": 4, "count": 2, "untested": ["Refund", "Payment"]}

    def test_validate_test_links(self, svc: CrossRefService) -> None:
        data = svc.validate_test_links().data
        assert data["valid"] == 3
        assert data["total_links"] == 3
        assert data["validation_rate"] == "100.0%"
        assert data["details"][0] == {
            "symbol": "OrderAggregate",
            "test_method": "Create_Works",
            "status": "valid",
        }

    def test_empty_index(self, tmp_path: Path) -> None:
        site = tmp_path / "bare"
        write_site(site, code_tests={})
        cat = DocsCatalog(RefdocsSettings.from_cli(project_root=site))
        svc = CrossRefService(cat)
        assert svc.validate_test_links().data["validation_rate"] == "0.0%"
        stats = svc.coverage_stats().data
        assert stats["average_tests_per_symbol"] == 0.0
        assert "metadata" not in stats
