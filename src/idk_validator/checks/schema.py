"""Schema Validator.

Checks one extracted document against the schema for its kind. Pure
function of the document and the settings; every problem becomes a
structural finding naming the document.

Index schema::

    # Information Dense Keywords Dictionary
    ## Command Chaining
    ## Core Commands
    ## Quick Reference

Entry schema::

    # <Title>
    **Category**: <canonical label>
    **Definition**: <text>
    ## Example Prompts            (>= 2 "- " bullets, no blank `code`)
    ## Expected Output Format     (>= 50 chars, >= 1 complete fenced block)
"""

from __future__ import annotations

from idk_validator.config import ValidatorSettings
from idk_validator.findings import Finding, advisory, structural_error
from idk_validator.parser.extractor import inline_code_spans
from idk_validator.parser.fences import count_complete_blocks, prose_lines, strip_fence_markers
from idk_validator.parser.model import Document, DocumentKind


def check_schema(document: Document, settings: ValidatorSettings) -> list[Finding]:
    """Dispatch on document kind."""
    if document.kind == DocumentKind.INDEX:
        return check_index_schema(document, settings)
    return check_entry_schema(document, settings)


def check_index_schema(document: Document, settings: ValidatorSettings) -> list[Finding]:
    findings: list[Finding] = []

    if document.title is None:
        findings.append(structural_error("S001", "Missing title (H1)", document.path))
    elif document.title.strip() != settings.index_title:
        findings.append(structural_error(
            "S002",
            f'Index title "{document.title}" does not match "{settings.index_title}"',
            document.path,
        ))

    findings.extend(_missing_sections(document, settings.index_required_sections))
    return findings


def check_entry_schema(document: Document, settings: ValidatorSettings) -> list[Finding]:
    findings: list[Finding] = []
    path = document.path

    if document.title is None:
        findings.append(structural_error("S001", "Missing title (H1)", path))
    elif not document.title.strip():
        findings.append(structural_error("S001", "Empty title (H1)", path))

    if document.declared_category is None:
        findings.append(structural_error("S004", "Missing Category field", path))
    elif not document.declared_category.strip():
        findings.append(structural_error("S004", "Empty Category field", path))
    elif document.declared_category.strip() not in settings.canonical_categories:
        findings.append(structural_error(
            "S005",
            f'Unknown category "{document.declared_category.strip()}"',
            path,
        ))

    if document.definition is None:
        findings.append(structural_error("S004", "Missing Definition field", path))
    elif not document.definition.strip():
        findings.append(structural_error("S004", "Empty Definition field", path))

    findings.extend(_missing_sections(document, settings.entry_required_sections))

    examples = document.section(settings.example_prompts_section)
    if examples is not None:
        findings.extend(_check_example_prompts(path, examples, settings))

    output_format = document.section(settings.output_format_section)
    if output_format is not None:
        findings.extend(_check_output_format(path, output_format, settings))

    findings.extend(_check_code_blocks(document))
    return findings


def _missing_sections(document: Document, required: list[str]) -> list[Finding]:
    return [
        structural_error("S003", f"Missing required section: {heading}", document.path)
        for heading in required
        if not document.has_section(heading)
    ]


def _check_example_prompts(path: str, body: str, settings: ValidatorSettings) -> list[Finding]:
    findings: list[Finding] = []

    bullets = [line for line in prose_lines(body) if line.startswith("- ")]
    if len(bullets) < settings.min_example_prompts:
        findings.append(structural_error(
            "S006",
            f"Need at least {settings.min_example_prompts} example prompts, found {len(bullets)}",
            path,
        ))

    if any(not span.strip() for span in inline_code_spans(body)):
        findings.append(structural_error(
            "S007", "Empty inline code span in Example Prompts", path,
        ))
    return findings


def _check_output_format(path: str, body: str, settings: ValidatorSettings) -> list[Finding]:
    findings: list[Finding] = []

    content = strip_fence_markers(body).strip()
    if len(content) < settings.min_output_format_length:
        findings.append(structural_error(
            "S008",
            f"Expected Output Format is too brief ({len(content)} < "
            f"{settings.min_output_format_length} characters)",
            path,
        ))

    if count_complete_blocks(body) < 1:
        findings.append(structural_error(
            "S009", "Expected Output Format has no fenced code block", path,
        ))
    return findings


def _check_code_blocks(document: Document) -> list[Finding]:
    return [
        advisory("W004", "Empty code block", document.path, block.line)
        for block in document.code_blocks
        if not block.body.strip()
    ]
