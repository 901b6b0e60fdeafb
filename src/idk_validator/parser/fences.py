"""
Fence-aware line scanning.

A two-state scanner (outside / inside a fenced code block) over a line
stream. Every consumer that needs to know whether a line is prose or code
sample goes through :func:`scan_fences`, so a ``## heading`` or ``# comment``
inside a code sample is never mistaken for document structure.

Examples:
    >>> [line.in_fence for line in scan_fences("text\\n```\\n## not a heading\\n```")]
    [False, False, True, False]
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

# Up to three spaces of indentation, then three backticks and an optional tag
FENCE_PATTERN = re.compile(r"^ {0,3}```\s*([^\s`]*)")


@dataclass(frozen=True)
class ScannedLine:
    """One source line plus its fence state.

    Attributes:
        number: 1-based line number
        text: Line without the trailing newline
        is_fence: Line opens or closes a fenced block
        in_fence: Line is inside a fenced block (fence lines themselves are not)
        language: Tag of an opening fence, else ``None``
    """

    number: int
    text: str
    is_fence: bool
    in_fence: bool
    language: str | None = None

    @property
    def is_prose(self) -> bool:
        return not self.is_fence and not self.in_fence


def is_fence_line(line: str) -> bool:
    return FENCE_PATTERN.match(line) is not None


def scan_fences(text: str, *, first_line: int = 1) -> Iterator[ScannedLine]:
    """Yield every line of ``text`` annotated with its fence state."""
    inside = False
    for offset, line in enumerate(text.split("\n")):
        match = FENCE_PATTERN.match(line)
        if match:
            language = None if inside else (match.group(1) or None)
            yield ScannedLine(first_line + offset, line, True, False, language)
            inside = not inside
        else:
            yield ScannedLine(first_line + offset, line, False, inside)


def prose_lines(text: str) -> list[str]:
    """Lines of ``text`` that are outside fenced blocks and not fences."""
    return [line.text for line in scan_fences(text) if line.is_prose]


def strip_fence_markers(text: str) -> str:
    """Drop fence lines, keeping everything else (code bodies included)."""
    return "\n".join(line.text for line in scan_fences(text) if not line.is_fence)


def count_complete_blocks(text: str) -> int:
    """Number of fenced blocks in ``text`` that are both opened and closed."""
    fences = sum(1 for line in scan_fences(text) if line.is_fence)
    return fences // 2
