"""
Link Graph Builder & Checker.

Builds a directed reference graph from every inline link of every document
and checks it against the corpus file set.

Architecture:
    ```
    documents ──► links ──► is_exempt? ──yes──► (dropped: no edge, no finding)
                               │
                               no
                               ▼
                   resolve against source dir ──► ReferenceEdge(resolved=exists(...))
                               │
          ┌────────────────────┼─────────────────────────┐
          ▼                    ▼                         ▼
    R001 broken link    W002 mixed link text    R002/R003 index → entry
                        for one target          title must match text
    ```

    External URLs are never part of the graph. Their *format* is checked
    separately (W003 plain http, R004 malformed URL).

Examples:
    >>> resolve_target("dictionary/core/analyze.md", "../git/commit.md")
    'dictionary/git/commit.md'
    >>> titles_match("**ANALYZE this**", "Analyze This")
    True
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from idk_validator.findings import Finding, advisory, reference_error, structural_error
from idk_validator.logging import get_logger
from idk_validator.parser.model import Document, DocumentKind

if TYPE_CHECKING:
    from idk_validator.context import ValidationContext

logger = get_logger(__name__)

EXTERNAL_SCHEMES = ("http://", "https://")
URL_SHAPE = re.compile(r"^https?://.+\..+")
EMPHASIS = re.compile(r"\*\*|__|\*|`")


@dataclass(frozen=True)
class ReferenceEdge:
    """A non-exempt link from one document to a corpus path.

    Attributes:
        source: Path of the linking document
        target: Target exactly as written in the link
        display_text: Link text
        line: 1-based line of the link in ``source``
        resolved_path: Target normalised relative to the source directory
        resolved: ``resolved_path`` exists in the corpus
    """

    source: str
    target: str
    display_text: str
    line: int
    resolved_path: str
    resolved: bool


def is_exempt(target: str, prefixes: Iterable[str]) -> bool:
    """External URLs and conventionally external directories are never resolved."""
    return any(target.startswith(prefix) for prefix in prefixes)


def resolve_target(source_path: str, target: str) -> str:
    """Normalise ``target`` relative to the directory of ``source_path``.

    A ``#fragment`` suffix is ignored; a bare fragment points at the source
    document itself.
    """
    path = target.split("#", 1)[0].strip()
    if not path:
        return source_path
    if path.startswith("/"):
        return posixpath.normpath(path.lstrip("/"))
    return posixpath.normpath(posixpath.join(posixpath.dirname(source_path), path))


def build_reference_graph(
    documents: Iterable[Document],
    exists: Callable[[str], bool],
    exempt_prefixes: Iterable[str],
) -> list[ReferenceEdge]:
    """One edge per non-exempt link, in document then link order."""
    prefixes = tuple(exempt_prefixes)
    edges: list[ReferenceEdge] = []
    for document in documents:
        for link in document.links:
            if is_exempt(link.target, prefixes):
                continue
            resolved_path = resolve_target(document.path, link.target)
            edges.append(ReferenceEdge(
                source=document.path,
                target=link.target,
                display_text=link.display_text,
                line=link.line,
                resolved_path=resolved_path,
                resolved=exists(resolved_path),
            ))
    logger.debug("reference_graph_built", edges=len(edges))
    return edges


# ── Checks ───────────────────────────────────────────────────────────────


def check_broken_links(edges: Iterable[ReferenceEdge]) -> list[Finding]:
    return [
        reference_error("R001", f"Broken link to {edge.target}", edge.source, edge.line)
        for edge in edges
        if not edge.resolved
    ]


def check_link_consistency(edges: Iterable[ReferenceEdge]) -> list[Finding]:
    """Advisory only: several different texts used for the same target.

    In-page anchors (``#section``) name different places of one document and
    are not grouped.
    """
    by_target: dict[str, list[ReferenceEdge]] = {}
    for edge in edges:
        if edge.target.startswith("#"):
            continue
        by_target.setdefault(edge.resolved_path, []).append(edge)

    findings: list[Finding] = []
    for target, references in by_target.items():
        texts = list(dict.fromkeys(ref.display_text for ref in references))
        if len(texts) > 1:
            details = ", ".join(f'"{ref.display_text}" in {ref.source}' for ref in references)
            findings.append(advisory("W002", f"Link text varies for {target}: {details}"))
    return findings


def normalize_title(text: str) -> str:
    return EMPHASIS.sub("", text).strip().lower()


def titles_match(display_text: str, title: str) -> bool:
    """Loose bidirectional containment after stripping emphasis and case."""
    link = normalize_title(display_text)
    target = normalize_title(title)
    return link == target or link in target or target in link


def check_index_titles(edges: Iterable[ReferenceEdge], context: ValidationContext) -> list[Finding]:
    """Index links into the dictionary must name the entry they point at."""
    findings: list[Finding] = []
    index_path = context.settings.index_path
    for edge in edges:
        if edge.source != index_path or not edge.resolved:
            continue
        if not context.is_entry_path(edge.resolved_path):
            continue
        target = context.documents.get(edge.resolved_path)
        if target is None:
            continue
        if not target.title:
            findings.append(reference_error(
                "R003", f"Link target has no title: {edge.target}", edge.source, edge.line,
            ))
        elif not titles_match(edge.display_text, target.title):
            findings.append(reference_error(
                "R002",
                f'Link text "{edge.display_text}" does not match target title "{target.title}"',
                edge.source,
                edge.line,
            ))
    return findings


def check_external_links(documents: Iterable[Document]) -> list[Finding]:
    """Format of http(s) links; these never enter the reference graph."""
    findings: list[Finding] = []
    for document in documents:
        for link in document.links:
            if not link.target.startswith(EXTERNAL_SCHEMES):
                continue
            if " " in link.target:
                findings.append(reference_error(
                    "R004", f"URL contains spaces: {link.target}", document.path, link.line,
                ))
            elif not URL_SHAPE.match(link.target):
                findings.append(reference_error(
                    "R004", f"Invalid URL format: {link.target}", document.path, link.line,
                ))
            if link.target.startswith("http://"):
                findings.append(advisory(
                    "W003", f"Consider using HTTPS: {link.target}", document.path, link.line,
                ))
    return findings


def check_index_links_present(index: Document, context: ValidationContext) -> list[Finding]:
    """The index must link into the dictionary at least once."""
    prefixes = tuple(context.settings.exempt_prefixes)
    for link in index.links:
        if is_exempt(link.target, prefixes):
            continue
        if context.is_entry_path(resolve_target(index.path, link.target)):
            return []
    return [structural_error("S012", "Index has no links to dictionary entries", index.path)]


def check_links(context: ValidationContext) -> list[Finding]:
    """Run every link check over the whole corpus."""
    documents = sorted(context.documents.values(), key=lambda d: (d.kind != DocumentKind.INDEX, d.path))
    edges = build_reference_graph(documents, context.exists, context.settings.exempt_prefixes)

    findings: list[Finding] = []
    findings.extend(check_broken_links(edges))
    findings.extend(check_index_titles(edges, context))
    findings.extend(check_index_links_present(context.index, context))
    findings.extend(check_link_consistency(edges))
    findings.extend(check_external_links(documents))
    return findings
