"""
Document model.

Immutable records produced by the extractor and read by every checker.
Only :func:`idk_validator.parser.extractor.extract_document` constructs
:class:`Document` instances.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class DocumentKind(str, Enum):
    """Role of a document in the corpus."""

    INDEX = "index"
    ENTRY = "entry"


@dataclass(frozen=True)
class Link:
    """An inline ``[display_text](target)`` reference."""

    display_text: str
    target: str
    line: int


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block.

    Attributes:
        language: Tag on the opening fence (``None`` if untagged)
        body: Text between the fences, without the fence lines
        line: 1-based line number of the opening fence
    """

    language: str | None
    body: str
    line: int


@dataclass(frozen=True)
class Document:
    """Structured view of one markdown document.

    Attributes:
        path: Corpus-relative POSIX path, unique within a run
        kind: Index or Entry
        title: Text of the first top-level heading
        declared_category: Value of the ``**Category**:`` field
        definition: Value of the ``**Definition**:`` field
        sections: Second-level heading -> raw body, in document order
        links: Inline links in document order
        code_blocks: Fenced code blocks in document order
    """

    path: str
    kind: DocumentKind
    title: str | None = None
    declared_category: str | None = None
    definition: str | None = None
    sections: Mapping[str, str] = field(default_factory=dict)
    links: tuple[Link, ...] = ()
    code_blocks: tuple[CodeBlock, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.sections, MappingProxyType):
            object.__setattr__(self, "sections", MappingProxyType(dict(self.sections)))

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.path)

    def section(self, heading: str) -> str | None:
        return self.sections.get(heading)

    def has_section(self, heading: str) -> bool:
        return heading in self.sections

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "title": self.title,
            "declared_category": self.declared_category,
            "definition": self.definition,
            "sections": dict(self.sections),
            "links": [
                {"display_text": link.display_text, "target": link.target, "line": link.line}
                for link in self.links
            ],
            "code_blocks": [
                {"language": b.language, "body": b.body, "line": b.line}
                for b in self.code_blocks
            ],
        }
