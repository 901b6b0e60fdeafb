"""
Parser module for the dictionary validator.

Provides the fence-aware line scanner and the extractor that turns raw
markdown into immutable :class:`Document` records.
"""

from idk_validator.parser.extractor import extract_document, extract_links, inline_code_spans
from idk_validator.parser.fences import ScannedLine, scan_fences
from idk_validator.parser.model import CodeBlock, Document, DocumentKind, Link

__all__ = [
    "extract_document",
    "extract_links",
    "inline_code_spans",
    "ScannedLine",
    "scan_fences",
    "CodeBlock",
    "Document",
    "DocumentKind",
    "Link",
]
