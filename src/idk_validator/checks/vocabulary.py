"""
Command vocabulary.

The set of known command names comes from the first column of the index's
Quick Reference table. A short list of common verb fragments backs it up for
prose that uses a verb the table lists under a longer name.

Examples:
    >>> rows = parse_quick_reference('''
    ... | Command | Purpose | Category |
    ... |---------|---------|----------|
    ... | **ANALYZE** | Inspect code | Core |
    ... ''')
    >>> rows[0].command
    'ANALYZE'
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass

from idk_validator.checks.matching import SubstringMatcher, VocabularyMatcher, get_matcher
from idk_validator.config import ValidatorSettings
from idk_validator.findings import Finding, advisory, structural_error
from idk_validator.logging import get_logger
from idk_validator.parser.fences import prose_lines
from idk_validator.parser.model import Document

logger = get_logger(__name__)

SEPARATOR_CELL = re.compile(r"^:?-{2,}:?$")
MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")


def clean_cell(cell: str) -> str:
    """Strip links, emphasis and code markers from a table cell."""
    text = MARKDOWN_LINK.sub(r"\1", cell)
    return text.replace("**", "").replace("`", "").strip()


@dataclass(frozen=True)
class QuickReferenceRow:
    command: str
    purpose: str = ""
    category: str = ""


def _split_row(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def parse_quick_reference(body: str) -> list[QuickReferenceRow]:
    """Data rows of the first table in ``body`` (header and separator skipped)."""
    table_lines = [line for line in prose_lines(body) if line.strip().startswith("|")]
    rows = [
        _split_row(line)
        for line in table_lines
        if not all(SEPARATOR_CELL.match(cell) for cell in _split_row(line) if cell)
    ]

    parsed: list[QuickReferenceRow] = []
    for cells in rows[1:]:
        command = clean_cell(cells[0]) if cells else ""
        if not command:
            continue
        parsed.append(QuickReferenceRow(
            command=command,
            purpose=clean_cell(cells[1]) if len(cells) > 1 else "",
            category=clean_cell(cells[2]) if len(cells) > 2 else "",
        ))
    return parsed


@dataclass(frozen=True)
class CommandVocabulary:
    """Known command names plus fallback verb fragments.

    Built once per run from the index; read-only afterwards.
    """

    commands: tuple[str, ...]
    fallback_verbs: tuple[str, ...] = ()
    rows: tuple[QuickReferenceRow, ...] = ()
    matcher: VocabularyMatcher = SubstringMatcher()

    @classmethod
    def from_index(cls, index: Document, settings: ValidatorSettings) -> CommandVocabulary:
        body = index.section(settings.quick_reference_section) or ""
        rows = tuple(parse_quick_reference(body))
        vocabulary = cls(
            commands=tuple(row.command for row in rows),
            fallback_verbs=tuple(settings.fallback_verbs),
            rows=rows,
            matcher=get_matcher(settings.vocabulary_matcher, threshold=settings.fuzzy_threshold),
        )
        logger.info(
            "vocabulary_built",
            commands=len(vocabulary.commands),
            matcher=vocabulary.matcher.name,
        )
        return vocabulary

    def is_known(self, word: str) -> bool:
        return (
            self.matcher.matches(word, self.commands)
            or self.matcher.matches(word, self.fallback_verbs)
        )

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_known(word)

    def __len__(self) -> int:
        return len(self.commands)


# ── Quick reference coverage ─────────────────────────────────────────────


def _slug(command: str) -> str:
    return re.sub(r"\s+", "-", command.strip().lower())


def find_entry_for_command(command: str, entry_paths: list[str]) -> str | None:
    """Entry whose file name is the slugged command, or whose path contains it."""
    slug = _slug(command)
    if not slug:
        return None
    for path in entry_paths:
        stem = posixpath.splitext(posixpath.basename(path))[0].lower()
        if stem == slug or slug in path.lower():
            return path
    return None


def check_quick_reference(index: Document, vocabulary: CommandVocabulary,
                          entry_paths: list[str]) -> list[Finding]:
    """S011 when the table is missing; W005 for commands without an entry."""
    if not vocabulary.rows:
        return [structural_error(
            "S011",
            "Quick Reference table not found or has no command rows",
            index.path,
        )]

    findings: list[Finding] = []
    for row in vocabulary.rows:
        if find_entry_for_command(row.command, entry_paths) is None:
            findings.append(advisory(
                "W005",
                f'Quick Reference command "{row.command}" has no entry in the dictionary',
                index.path,
            ))
    return findings
