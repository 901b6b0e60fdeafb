"""
Validation Orchestrator.

Coordinates one validation run: extract every document once, build the
shared context, run every checker, and collect their findings in a fixed
order.

Architecture:
    ```
    SourceDocument[] + exists()
          │
          ├──► extract_document() per source  (sorted by path)
          │
          ├──► CommandVocabulary.from_index()
          │
          ├──► ValidationContext (immutable, one per run)
          │
          └──► findings, in order:
                 schema (index, then entries)
                 category placement + coverage
                 links (broken, index titles, consistency, external)
                 quick reference coverage
                 chaining grammar
    ```

Examples:
    >>> corpus = InMemoryCorpus.from_mapping(texts)
    >>> report = validate_corpus(corpus.documents, corpus.exists)
    >>> report.passed
    True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from idk_validator.checks.categories import check_category, check_category_coverage
from idk_validator.checks.chaining import check_chaining
from idk_validator.checks.links import check_links
from idk_validator.checks.schema import check_schema
from idk_validator.checks.vocabulary import CommandVocabulary, check_quick_reference
from idk_validator.config import ValidatorSettings
from idk_validator.context import ValidationContext
from idk_validator.corpus import SourceDocument
from idk_validator.errors import DuplicateDocumentError, IndexNotFoundError
from idk_validator.findings import ValidationReport, structural_error
from idk_validator.logging import get_logger
from idk_validator.parser.extractor import extract_document
from idk_validator.parser.model import Document, DocumentKind

logger = get_logger(__name__)


def extract_corpus(sources: Iterable[SourceDocument],
                   settings: ValidatorSettings) -> dict[str, Document]:
    """Extract every source once, keyed by path.

    Raises:
        DuplicateDocumentError: If two sources share a path
        IndexNotFoundError: If no source is the index
    """
    documents: dict[str, Document] = {}
    for source in sorted(sources, key=lambda s: s.path):
        if source.path in documents:
            raise DuplicateDocumentError(source.path)
        kind = DocumentKind.INDEX if source.path == settings.index_path else DocumentKind.ENTRY
        documents[source.path] = extract_document(source.text, source.path, kind)

    if settings.index_path not in documents:
        raise IndexNotFoundError(settings.index_path)
    return documents


def build_context(documents: dict[str, Document], exists: Callable[[str], bool],
                  settings: ValidatorSettings) -> ValidationContext:
    vocabulary = CommandVocabulary.from_index(documents[settings.index_path], settings)
    return ValidationContext(
        settings=settings,
        documents=documents,
        exists=exists,
        vocabulary=vocabulary,
    )


def validate_corpus(
    sources: Iterable[SourceDocument],
    exists: Callable[[str], bool],
    settings: ValidatorSettings | None = None,
) -> ValidationReport:
    """Validate a whole corpus.

    Args:
        sources: Index and entry documents (paths corpus-relative)
        exists: Whether a corpus-relative path exists (file or directory)
        settings: Validator settings (defaults when omitted)

    Returns:
        ValidationReport; ``passed`` is True iff there are no errors

    Raises:
        IndexNotFoundError: If the index is not among ``sources``
        DuplicateDocumentError: If a path appears twice
    """
    settings = settings or ValidatorSettings()
    documents = extract_corpus(sources, settings)
    context = build_context(documents, exists, settings)
    index = context.index
    entries = context.entries

    report = ValidationReport(documents_checked=len(documents))

    report.extend(check_schema(index, settings))
    if not entries:
        report.extend([structural_error("S010", "No entry documents found in the dictionary")])
    for entry in entries:
        report.extend(check_schema(entry, settings))

    for entry in entries:
        report.extend(check_category(entry, context))
    if entries:
        report.extend(check_category_coverage(context))

    report.extend(check_links(context))
    report.extend(check_quick_reference(index, context.vocabulary, context.entry_paths))
    report.extend(check_chaining(
        index.section(settings.chaining_section),
        context.vocabulary,
        settings,
        document=index.path,
    ))

    logger.info(
        "validation_finished",
        documents=report.documents_checked,
        errors=len(report.errors),
        warnings=len(report.warnings),
        passed=report.passed,
    )
    return report
