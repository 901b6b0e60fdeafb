"""Tests for the document model extractor and the fence scanner.

Covers:
- Title and metadata field extraction (present, blank, absent)
- Section boundaries with ``##`` lines inside fenced code
- Link extraction with 1-based line numbers
- Code block extraction with language tags, unclosed fences
- Tolerance of malformed input
"""

from __future__ import annotations

from idk_validator.parser.extractor import extract_document, extract_links, inline_code_spans
from idk_validator.parser.fences import count_complete_blocks, scan_fences, strip_fence_markers
from idk_validator.parser.model import DocumentKind


# ---------------------------------------------------------------------------
# Fence scanner
# ---------------------------------------------------------------------------

class TestScanFences:
    def test_tracks_state_line_by_line(self):
        lines = list(scan_fences("intro\n```bash\n## inside\n```\n## outside"))

        assert [line.is_fence for line in lines] == [False, True, False, True, False]
        assert [line.in_fence for line in lines] == [False, False, True, False, False]
        assert lines[1].language == "bash"
        assert lines[3].language is None

    def test_line_numbers_are_one_based(self):
        lines = list(scan_fences("a\nb\nc"))
        assert [line.number for line in lines] == [1, 2, 3]

    def test_unclosed_fence_keeps_rest_inside(self):
        lines = list(scan_fences("```\n## not a heading\nstill code"))
        assert all(line.in_fence for line in lines[1:])

    def test_strip_fence_markers_keeps_code_body(self):
        assert strip_fence_markers("```json\n{}\n```") == "{}"

    def test_count_complete_blocks(self):
        assert count_complete_blocks("```\na\n```\n```\nb") == 1
        assert count_complete_blocks("no code") == 0


# ---------------------------------------------------------------------------
# Document extraction
# ---------------------------------------------------------------------------

class TestExtractDocument:
    def test_fields_and_sections(self, make_entry):
        doc = extract_document(
            make_entry("ANALYZE this", "Core Commands", "analyze"),
            "dictionary/core/analyze.md",
        )

        assert doc.title == "ANALYZE this"
        assert doc.declared_category == "Core Commands"
        assert doc.definition.startswith("Analyze the target")
        assert list(doc.sections) == ["Example Prompts", "Expected Output Format", "Related Commands"]
        assert doc.kind == DocumentKind.ENTRY

    def test_heading_inside_code_block_does_not_split_section(self):
        text = "# T\n## Expected Output Format\n```\n## Report\nbody\n```\nafter\n## Next\nx"
        doc = extract_document(text, "a.md")

        body = doc.sections["Expected Output Format"]
        assert "## Report" in body
        assert "after" in body
        assert "Report" not in doc.sections
        assert doc.sections["Next"] == "x"

    def test_title_inside_code_block_is_ignored(self):
        doc = extract_document("```bash\n# comment\n```\n# Real Title", "a.md")
        assert doc.title == "Real Title"

    def test_h3_stays_inside_section(self):
        doc = extract_document("# T\n## Core Commands\n### Analysis\n- item", "a.md")
        assert "### Analysis" in doc.sections["Core Commands"]

    def test_blank_field_is_empty_string(self):
        doc = extract_document("# T\n**Category**:\n", "a.md")
        assert doc.declared_category == ""
        assert doc.definition is None

    def test_first_field_occurrence_wins(self):
        doc = extract_document("**Category**: Core Commands\n**Category**: Git Operations", "a.md")
        assert doc.declared_category == "Core Commands"

    def test_malformed_input_yields_partial_record(self):
        doc = extract_document("just some text\n\nno structure", "broken.md")

        assert doc.title is None
        assert doc.declared_category is None
        assert doc.definition is None
        assert dict(doc.sections) == {}
        assert doc.links == ()

    def test_empty_title(self):
        doc = extract_document("# \nbody", "a.md")
        assert doc.title == ""

    def test_code_blocks(self):
        doc = extract_document("```python\nprint(1)\n```\n\n```\n```\n```open", "a.md")

        assert len(doc.code_blocks) == 2
        assert doc.code_blocks[0].language == "python"
        assert doc.code_blocks[0].body == "print(1)"
        assert doc.code_blocks[0].line == 1
        assert doc.code_blocks[1].language is None
        assert doc.code_blocks[1].body == ""

    def test_crlf_input(self):
        doc = extract_document("# Title\r\n## Example Prompts\r\n- a\r\n", "a.md")
        assert doc.title == "Title"
        assert "Example Prompts" in doc.sections

    def test_sections_are_read_only(self):
        doc = extract_document("# T\n## A\nx", "a.md")
        try:
            doc.sections["B"] = "y"  # type: ignore[index]
        except TypeError:
            pass
        else:
            raise AssertionError("sections should be immutable")

    def test_extraction_is_deterministic(self, make_entry):
        text = make_entry("PLAN this", "Workflow Commands", "plan", "- [A](../core/analyze.md)")
        assert extract_document(text, "p.md") == extract_document(text, "p.md")


class TestLinks:
    def test_line_numbers(self):
        links = extract_links("# T\n\nsee [One](one.md)\n[Two](two.md) and [Three](three.md)")

        assert [(link.display_text, link.target, link.line) for link in links] == [
            ("One", "one.md", 3),
            ("Two", "two.md", 4),
            ("Three", "three.md", 4),
        ]

    def test_links_inside_code_are_still_collected(self):
        links = extract_links("```\n[X](x.md)\n```")
        assert links[0].line == 2


class TestInlineCodeSpans:
    def test_spans_from_prose_only(self):
        text = "- `analyze this`\n```\n`not a span`\n```\n- `plan that`"
        assert inline_code_spans(text) == ["analyze this", "plan that"]

    def test_whitespace_span_is_kept(self):
        assert inline_code_spans("- ` `") == [" "]


class TestDocumentToDict:
    def test_links_and_blocks_serialised(self):
        doc = extract_document("# T\n[A](a.md)\n```sh\nls\n```", "x.md")
        data = doc.to_dict()

        assert data["links"] == [{"display_text": "A", "target": "a.md", "line": 2}]
        assert data["code_blocks"] == [{"language": "sh", "body": "ls", "line": 3}]
        assert data["kind"] == "entry"
