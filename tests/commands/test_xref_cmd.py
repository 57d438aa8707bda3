"""Tests for the xref command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from refdocs.cli import cli


@pytest.mark.usefixtures("_isolated_site")
class TestCodeDocsCommands:
    def test_code_location(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "xref", "code-location", "dispatcher"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["data"]["symbol"] == "IDispatcher"

    def test_code_location_not_found_is_success(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["xref", "code-location", "projections"])
        assert result.exit_code == 0
        assert "No mapping found for projections" in result.stdout

    def test_related_docs(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["xref", "related-docs", "IDispatcher"])
        assert result.exit_code == 0
        assert "document://concepts/dispatcher" in result.stdout
        assert "Core Concepts" in result.stdout

    def test_validate_links(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "xref", "validate-links"])
        payload = json.loads(result.stdout)
        assert payload["data"]["valid"] == 2
        assert payload["data"]["broken"] == 1


@pytest.mark.usefixtures("_isolated_site")
class TestCodeTestsCommands:
    def test_tests_for(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "xref", "tests-for", "OrderAggregate"])
        payload = json.loads(result.stdout)
        assert payload["data"]["test_count"] == 2

    def test_tests_for_rich_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["xref", "tests-for", "OrderAggregate"])
        assert result.exit_code == 0
        assert "Create_Works" in result.stdout

    def test_code_for(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "xref", "code-for", "OrderTests.Create_Works"])
        payload = json.loads(result.stdout)
        assert payload["data"]["code"][0]["sourceType"] == "class"

    def test_coverage(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "xref", "coverage"])
        payload = json.loads(result.stdout)
        assert payload["data"]["average_tests_per_symbol"] == 1.5

    def test_untested(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "xref", "untested", "Invoice", "Dispatcher"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Invoice"]

    def test_untested_requires_symbols(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["xref", "untested"])
        assert result.exit_code == 2

    def test_validate_test_links(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["xref", "validate-test-links"])
        assert result.exit_code == 0
        assert "validation_rate: 100.0%" in result.stdout
