"""
Chaining Grammar Checker.

The index's Command Chaining section teaches a two-keyword mini grammar:
``<step> then <step>`` runs steps one after another, ``<step> and <step>``
runs them side by side. Every backticked example that uses a keyword is a
chaining expression and must be well formed:

    expression := segment (KEYWORD segment)+
    segment    := COMMAND word*

Keywords are whole whitespace-delimited tokens, so
``fix this problem then then test`` has an empty segment between the two
``then`` tokens.

Examples:
    >>> expr = parse_expression("analyze this system then optimize this performance", ("then", "and"))
    >>> expr.segments
    ('analyze this system', 'optimize this performance')
    >>> expr.leading_words
    ('analyze', 'optimize')
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from idk_validator.checks.vocabulary import CommandVocabulary
from idk_validator.config import ValidatorSettings
from idk_validator.findings import Finding, grammar_error
from idk_validator.parser.extractor import inline_code_spans


def _keyword_token(keywords: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(k) for k in keywords)
    return re.compile(rf"(?<!\S)(?:{alternatives})(?!\S)")


def _keyword_word(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword)}\b")


@dataclass(frozen=True)
class ChainingExpression:
    """A backticked chaining example split into segments.

    Attributes:
        text: Expression as written (without backticks)
        segments: Text between keyword tokens, trimmed
        keyword_count: Number of keyword tokens
    """

    text: str
    segments: tuple[str, ...]
    keyword_count: int

    @property
    def is_complex(self) -> bool:
        return self.keyword_count >= 2

    @property
    def has_empty_segment(self) -> bool:
        return any(not segment for segment in self.segments)

    @property
    def leading_words(self) -> tuple[str, ...]:
        return tuple(segment.split()[0] for segment in self.segments if segment)


def is_chaining_expression(span: str, keywords: tuple[str, ...]) -> bool:
    """A code span is a chaining expression if a keyword appears between spaces."""
    return any(f" {keyword} " in span for keyword in keywords)


def parse_expression(text: str, keywords: tuple[str, ...]) -> ChainingExpression:
    token = _keyword_token(keywords)
    parts = token.split(text)
    return ChainingExpression(
        text=text,
        segments=tuple(part.strip() for part in parts),
        keyword_count=len(parts) - 1,
    )


def extract_expressions(section: str, keywords: tuple[str, ...]) -> list[ChainingExpression]:
    return [
        parse_expression(span, keywords)
        for span in inline_code_spans(section)
        if is_chaining_expression(span, keywords)
    ]


# ── Checks ───────────────────────────────────────────────────────────────


def check_section_prose(section: str | None, settings: ValidatorSettings,
                        document: str | None = None) -> list[Finding]:
    """Presence, length, keywords and sequential/parallel framing."""
    if section is None:
        return [grammar_error("G001", f"{settings.chaining_section} section not found", document)]

    findings: list[Finding] = []
    body = section.strip()
    if len(body) < settings.min_chaining_length:
        findings.append(grammar_error(
            "G002",
            f"{settings.chaining_section} section is too brief "
            f"({len(body)} < {settings.min_chaining_length} characters)",
            document,
        ))

    for keyword in settings.joining_keywords:
        if not _keyword_word(keyword).search(body):
            findings.append(grammar_error(
                "G003", f'Chaining keyword "{keyword}" not demonstrated', document,
            ))

    lowered = body.lower()
    for framing in ("sequential", "parallel"):
        if framing not in lowered:
            findings.append(grammar_error(
                "G004", f"{settings.chaining_section} section does not explain {framing} chaining",
                document,
            ))
    return findings


def check_expression(expression: ChainingExpression, vocabulary: CommandVocabulary,
                     document: str | None = None) -> list[Finding]:
    findings: list[Finding] = []
    text = expression.text

    if len(expression.segments) < 2:
        findings.append(grammar_error("G006", f"Chain needs at least 2 steps: {text}", document))
    if expression.has_empty_segment:
        findings.append(grammar_error("G007", f"Empty segment in chain: {text}", document))

    for segment in expression.segments:
        if not segment:
            continue
        word = segment.split()[0]
        if not vocabulary.is_known(word):
            findings.append(grammar_error(
                "G008", f'Unknown command "{word}" in "{segment}" ({text})', document,
            ))

    if expression.is_complex:
        if len(expression.segments) < 3:
            findings.append(grammar_error(
                "G009", f"Complex workflow needs at least 3 steps: {text}", document,
            ))
        words = [w.lower() for w in expression.leading_words]
        for previous, current in zip(words, words[1:]):
            if previous == current:
                findings.append(grammar_error(
                    "G010", f'Repeated consecutive command "{current}" in workflow: {text}', document,
                ))
                break
    return findings


def check_chaining(section: str | None, vocabulary: CommandVocabulary,
                   settings: ValidatorSettings, document: str | None = None) -> list[Finding]:
    """Validate the Command Chaining section of the index.

    Args:
        section: Body of the chaining section (``None`` if absent)
        vocabulary: Known commands for the run
        settings: Validator settings (keywords, thresholds)
        document: Index path, attached to findings

    Returns:
        Grammar findings in section then expression order
    """
    findings = check_section_prose(section, settings, document)
    if section is None:
        return findings

    keywords = settings.joining_keywords
    spans = inline_code_spans(section)
    if not spans:
        findings.append(grammar_error("G005", "No chaining examples found in backticks", document))
        return findings

    expressions = extract_expressions(section, keywords)
    if not expressions:
        findings.append(grammar_error("G005", "No examples with chaining keywords found", document))
        return findings

    for expression in expressions:
        findings.extend(check_expression(expression, vocabulary, document))

    if not any(expression.is_complex for expression in expressions):
        findings.append(grammar_error(
            "G011", "No complex workflow example (multiple chaining keywords)", document,
        ))
    return findings
