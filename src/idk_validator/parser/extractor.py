"""
Document Model Extractor.

Turns the raw markdown of one dictionary document into a :class:`Document`.
The extractor never validates: a document with no title, no metadata and no
sections still yields a (mostly empty) record, and the schema validator
decides what is missing.

Architecture:
    ```
    raw text
       │
       ├──► scan_fences()  ──► title, metadata fields, sections, code blocks
       │                       (structure lines are only honoured outside
       │                        fenced code)
       │
       └──► LINK_PATTERN.finditer(text) ──► links + 1-based line numbers
                                            (whole text, code included)
    ```

Examples:
    >>> doc = extract_document("# Analyze\\n**Category**: Core Commands\\n", "dictionary/core/analyze.md")
    >>> doc.title, doc.declared_category
    ('Analyze', 'Core Commands')
"""

from __future__ import annotations

import re

from idk_validator.logging import get_logger
from idk_validator.parser.fences import scan_fences
from idk_validator.parser.model import CodeBlock, Document, DocumentKind, Link

logger = get_logger(__name__)

TITLE_PATTERN = re.compile(r"^#[ \t]+(.*?)[ \t]*$")
SECTION_PATTERN = re.compile(r"^##[ \t]+(.*?)[ \t]*$")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
INLINE_CODE_PATTERN = re.compile(r"`([^`\n]+)`")


def _field_pattern(label: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*\*\*{re.escape(label)}\*\*:[ \t]*(.*?)\s*$")


CATEGORY_PATTERN = _field_pattern("Category")
DEFINITION_PATTERN = _field_pattern("Definition")


def line_number_at(text: str, index: int) -> int:
    """1-based line number of character offset ``index`` in ``text``."""
    return text.count("\n", 0, index) + 1


def extract_links(text: str) -> tuple[Link, ...]:
    """Every ``[text](target)`` occurrence, scanned over the whole text."""
    return tuple(
        Link(
            display_text=match.group(1),
            target=match.group(2).strip(),
            line=line_number_at(text, match.start()),
        )
        for match in LINK_PATTERN.finditer(text)
    )


def inline_code_spans(text: str) -> list[str]:
    """Contents of single-backtick code spans found in prose lines of ``text``."""
    spans: list[str] = []
    for line in scan_fences(text):
        if line.is_prose:
            spans.extend(INLINE_CODE_PATTERN.findall(line.text))
    return spans


def extract_document(text: str, path: str, kind: DocumentKind = DocumentKind.ENTRY) -> Document:
    """Parse ``text`` into a :class:`Document`.

    Args:
        text: Raw markdown
        path: Corpus-relative POSIX path of the document
        kind: Whether this is the index or an entry

    Returns:
        Document; fields that could not be found are ``None`` or empty
    """
    text = text.replace("\r\n", "\n")

    title: str | None = None
    category: str | None = None
    definition: str | None = None
    sections: dict[str, str] = {}
    code_blocks: list[CodeBlock] = []

    current_heading: str | None = None
    current_body: list[str] = []
    open_block: tuple[str | None, int] | None = None
    block_body: list[str] = []

    def close_section() -> None:
        if current_heading is not None and current_heading not in sections:
            sections[current_heading] = "\n".join(current_body)

    for line in scan_fences(text):
        if line.is_fence:
            if open_block is None:
                open_block = (line.language, line.number)
                block_body = []
            else:
                code_blocks.append(CodeBlock(open_block[0], "\n".join(block_body), open_block[1]))
                open_block = None
        elif line.in_fence:
            block_body.append(line.text)
        else:
            section_match = SECTION_PATTERN.match(line.text)
            if section_match:
                close_section()
                current_heading = section_match.group(1)
                current_body = []
                continue

            if title is None:
                title_match = TITLE_PATTERN.match(line.text)
                if title_match:
                    title = title_match.group(1)
            if category is None:
                category_match = CATEGORY_PATTERN.match(line.text)
                if category_match:
                    category = category_match.group(1)
            if definition is None:
                definition_match = DEFINITION_PATTERN.match(line.text)
                if definition_match:
                    definition = definition_match.group(1)

        if current_heading is not None:
            current_body.append(line.text)

    close_section()

    document = Document(
        path=path,
        kind=kind,
        title=title,
        declared_category=category,
        definition=definition,
        sections=sections,
        links=extract_links(text),
        code_blocks=tuple(code_blocks),
    )
    logger.debug(
        "document_extracted",
        path=path,
        kind=kind.value,
        sections=len(sections),
        links=len(document.links),
        code_blocks=len(code_blocks),
    )
    return document
