"""Tests for the chaining grammar checker and vocabulary matchers.

Covers:
- Expression detection and segment splitting
- Well-formed sequential / parallel / complex expressions
- Empty segments, unknown commands, repeated consecutive commands
- Section prose checks (presence, length, keywords, framing)
- Pluggable matchers (exact, substring, fuzzy)
"""

from __future__ import annotations

import pytest

from idk_validator.checks.chaining import (
    check_chaining,
    check_expression,
    check_section_prose,
    extract_expressions,
    is_chaining_expression,
    parse_expression,
)
from idk_validator.checks.matching import ExactMatcher, FuzzyMatcher, SubstringMatcher, get_matcher
from idk_validator.checks.vocabulary import CommandVocabulary
from idk_validator.findings import FindingKind

KEYWORDS = ("then", "and")

PROSE = (
    "Commands chain with then for sequential execution and with and for parallel "
    "execution, so several steps can be requested in one prompt.\n\n"
)


@pytest.fixture
def vocabulary():
    return CommandVocabulary(
        commands=("ANALYZE", "DEBUG", "TEST", "DOCUMENT", "PLAN"),
        fallback_verbs=("optimize", "fix"),
    )


def codes(findings):
    return [f.code for f in findings]


class TestParseExpression:
    def test_sequential_expression(self):
        expr = parse_expression("analyze this system then optimize this performance", KEYWORDS)

        assert expr.segments == ("analyze this system", "optimize this performance")
        assert expr.keyword_count == 1
        assert expr.leading_words == ("analyze", "optimize")
        assert not expr.is_complex

    def test_complex_expression(self):
        expr = parse_expression("debug this then fix that then test it", KEYWORDS)
        assert expr.is_complex
        assert len(expr.segments) == 3

    def test_doubled_keyword_leaves_empty_segment(self):
        expr = parse_expression("debug this issue then fix this problem then then test", KEYWORDS)

        assert expr.has_empty_segment
        assert expr.segments[2] == ""

    def test_keyword_inside_word_is_not_a_token(self):
        expr = parse_expression("analyze authentication handlers", KEYWORDS)
        assert expr.segments == ("analyze authentication handlers",)

    def test_detection_needs_spaced_keyword(self):
        assert is_chaining_expression("test this and that", KEYWORDS)
        assert not is_chaining_expression("understand the handler", KEYWORDS)
        assert not is_chaining_expression("then", KEYWORDS)

    def test_extract_expressions_skips_plain_spans(self):
        section = "- `analyze this`\n- `plan this then test this`"
        found = extract_expressions(section, KEYWORDS)
        assert [e.text for e in found] == ["plan this then test this"]


class TestCheckExpression:
    def test_sequential_is_valid(self, vocabulary):
        expr = parse_expression("analyze this system then optimize this performance", KEYWORDS)
        assert check_expression(expr, vocabulary) == []

    def test_empty_segment(self, vocabulary):
        expr = parse_expression("debug this issue then fix this problem then then test", KEYWORDS)
        findings = check_expression(expr, vocabulary, "index.md")

        assert "G007" in codes(findings)
        assert all(f.kind == FindingKind.GRAMMAR for f in findings)
        assert all(f.document == "index.md" for f in findings)

    def test_unknown_command(self, vocabulary):
        expr = parse_expression("analyze this then frobnicate that", KEYWORDS)
        findings = check_expression(expr, vocabulary)

        assert codes(findings) == ["G008"]
        assert '"frobnicate"' in findings[0].message

    def test_repeated_consecutive_command(self, vocabulary):
        expr = parse_expression("test this then test that then plan it", KEYWORDS)
        assert codes(check_expression(expr, vocabulary)) == ["G010"]

    def test_repeated_non_consecutive_command_is_fine(self, vocabulary):
        expr = parse_expression("test this then plan it then test that", KEYWORDS)
        assert check_expression(expr, vocabulary) == []


class TestSectionProse:
    def test_missing_section(self, settings):
        assert codes(check_section_prose(None, settings)) == ["G001"]

    def test_brief_section(self, settings):
        findings = check_section_prose("sequential then and parallel", settings)
        assert codes(findings) == ["G002"]

    def test_missing_keyword_and_framing(self, settings):
        body = "x" * 120 + " then"
        assert codes(check_section_prose(body, settings)) == ["G003", "G004", "G004"]


class TestCheckChaining:
    def test_valid_section(self, vocabulary, settings):
        section = PROSE + (
            "- `analyze this system then optimize this performance`\n"
            "- `test this component and document this API`\n"
            "- `debug this issue then fix this problem then test this solution`\n"
        )
        assert check_chaining(section, vocabulary, settings) == []

    def test_no_code_spans(self, vocabulary, settings):
        assert codes(check_chaining(PROSE, vocabulary, settings)) == ["G005"]

    def test_no_expressions(self, vocabulary, settings):
        section = PROSE + "- `analyze this`\n"
        assert codes(check_chaining(section, vocabulary, settings)) == ["G005"]

    def test_no_complex_example(self, vocabulary, settings):
        section = PROSE + "- `analyze this then test that`\n"
        assert codes(check_chaining(section, vocabulary, settings)) == ["G011"]

    def test_example_inside_code_block_is_ignored(self, vocabulary, settings):
        section = PROSE + (
            "- `debug this then fix this then test this`\n"
            "```\n`frobnicate this then zap that`\n```\n"
        )
        assert check_chaining(section, vocabulary, settings) == []


class TestMatchers:
    def test_exact(self):
        matcher = ExactMatcher()
        assert matcher.matches("Analyze", ["ANALYZE"])
        assert not matcher.matches("analyzing", ["ANALYZE"])

    def test_substring_is_bidirectional(self):
        matcher = SubstringMatcher()
        assert matcher.matches("reanalyze", ["ANALYZE"])
        assert matcher.matches("gh", ["GH PR"])
        assert matcher.matches("commits", ["commit"])

    def test_substring_ignores_empty(self):
        assert not SubstringMatcher().matches("", ["ANALYZE"])
        assert not SubstringMatcher().matches("x", [""])

    def test_fuzzy(self):
        matcher = FuzzyMatcher(0.8)
        assert matcher.matches("analyse", ["analyze"])
        assert not matcher.matches("plan", ["analyze"])

    def test_get_matcher(self):
        assert get_matcher("exact").name == "exact"
        assert get_matcher("fuzzy", threshold=0.5).name == "fuzzy"
        with pytest.raises(ValueError):
            get_matcher("soundex")

    def test_vocabulary_uses_configured_matcher(self):
        strict = CommandVocabulary(commands=("COMMIT",), matcher=ExactMatcher())
        assert "commit" in strict
        assert "commits" not in strict
        assert len(strict) == 1
