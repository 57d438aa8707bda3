"""Tests for front-matter parsing and display metadata."""

import pytest

from refdocs.domain.errors import FrontmatterError
from refdocs.domain.frontmatter import (
    DocFrontmatter,
    doc_description,
    doc_title,
    is_roadmap_doc,
    parse_markdown,
    resource_metadata,
)


class TestParseMarkdown:
    def test_splits_header_and_body(self) -> None:
        parsed = parse_markdown("---\ntitle: Hello\norder: 3\n---\n# Body\n")
        assert parsed.frontmatter.title == "Hello"
        assert parsed.frontmatter.order == 3
        assert parsed.content == "# Body\n"

    def test_no_header(self) -> None:
        raw = "# Just markdown\n"
        parsed = parse_markdown(raw)
        assert parsed.frontmatter == DocFrontmatter()
        assert parsed.content == raw

    def test_unterminated_header_is_body(self) -> None:
        raw = "---\ntitle: Hello\n# no closing fence\n"
        parsed = parse_markdown(raw)
        assert parsed.frontmatter.title is None
        assert parsed.content == raw

    def test_crlf_line_endings(self) -> None:
        parsed = parse_markdown("---\r\ntitle: Windows\r\n---\r\nBody\r\n")
        assert parsed.frontmatter.title == "Windows"

    def test_excerpt_before_marker(self) -> None:
        parsed = parse_markdown("---\ntitle: T\n---\nIntro text.\n<!-- more -->\nRest.\n")
        assert parsed.excerpt == "Intro text.\n"

    def test_no_marker_no_excerpt(self) -> None:
        assert parse_markdown("Body only").excerpt is None

    def test_malformed_yaml_raises(self) -> None:
        with pytest.raises(FrontmatterError) as exc_info:
            parse_markdown("---\ntitle: [unclosed\n---\nBody\n")
        assert exc_info.value.code == "INVALID_FRONTMATTER"

    def test_non_mapping_header_is_empty(self) -> None:
        parsed = parse_markdown("---\n- a\n- b\n---\nBody\n")
        assert parsed.frontmatter == DocFrontmatter()

    def test_camel_case_keys(self) -> None:
        parsed = parse_markdown(
            "---\ntargetVersion: '2.0'\nlastUpdated: 2024-05-01\n---\n"
        )
        assert parsed.frontmatter.target_version == "2.0"
        assert parsed.frontmatter.last_updated == "2024-05-01"

    def test_numeric_version_is_text(self) -> None:
        parsed = parse_markdown("---\ntargetVersion: 2.1\n---\n")
        assert parsed.frontmatter.target_version == "2.1"

    def test_unknown_keys_ignored(self) -> None:
        parsed = parse_markdown("---\ntitle: T\nauthor: someone\n---\n")
        assert parsed.frontmatter.title == "T"

    def test_invalid_values_dropped_not_fatal(self) -> None:
        parsed = parse_markdown("---\ntitle: Kept\norder: first\nstatus: shipped\n---\n")
        assert parsed.frontmatter.title == "Kept"
        assert parsed.frontmatter.order is None
        assert parsed.frontmatter.status is None


class TestIsRoadmapDoc:
    def test_unreleased_flag(self) -> None:
        assert is_roadmap_doc(DocFrontmatter(unreleased=True)) is True

    def test_status_present(self) -> None:
        assert is_roadmap_doc(DocFrontmatter(status="planned")) is True

    def test_released_page(self) -> None:
        assert is_roadmap_doc(DocFrontmatter(title="Done")) is False

    def test_unreleased_false(self) -> None:
        assert is_roadmap_doc(DocFrontmatter(unreleased=False)) is False


class TestTitleAndDescription:
    def test_declared_title_wins(self) -> None:
        assert doc_title(DocFrontmatter(title="Declared"), "a/b-c.md") == "Declared"

    def test_title_from_filename(self) -> None:
        assert doc_title(DocFrontmatter(), "Tutorials/getting-started.md") == "Getting Started"

    def test_description_prefers_declared(self) -> None:
        fm = DocFrontmatter(description="Declared")
        assert doc_description(fm, "excerpt") == "Declared"

    def test_description_from_excerpt_is_truncated(self) -> None:
        assert doc_description(DocFrontmatter(), "x" * 300) == "x" * 200

    def test_description_empty(self) -> None:
        assert doc_description(DocFrontmatter()) == ""


class TestResourceMetadata:
    def test_present_fields_only(self) -> None:
        fm = DocFrontmatter(
            category="Tutorials",
            order=2,
            tags=["setup", "intro"],
            difficulty="BEGINNER",
        )
        assert resource_metadata(fm) == {
            "category": "Tutorials",
            "order": 2,
            "tags": "setup, intro",
            "difficulty": "BEGINNER",
        }

    def test_roadmap_fields(self) -> None:
        fm = DocFrontmatter(unreleased=True, status="planned", target_version="2.0")
        assert resource_metadata(fm) == {
            "unreleased": True,
            "status": "planned",
            "targetVersion": "2.0",
        }

    def test_empty_tags_and_false_flag_omitted(self) -> None:
        assert resource_metadata(DocFrontmatter(tags=[], unreleased=False)) == {}
