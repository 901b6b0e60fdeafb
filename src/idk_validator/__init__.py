"""
Information Dense Keywords dictionary validator.

Checks a keyword dictionary corpus (a master index plus one document per
command) for schema conformance, link integrity, category placement and
well-formed command-chaining examples.

Example:
    >>> from pathlib import Path
    >>> from idk_validator import ValidatorSettings, load_corpus, validate_corpus
    >>> settings = ValidatorSettings()
    >>> corpus = load_corpus(Path("."), settings)
    >>> report = validate_corpus(corpus.documents, corpus.exists, settings)
    >>> report.passed
    True
"""

from idk_validator.config import ValidatorSettings
from idk_validator.corpus import InMemoryCorpus, SourceDocument, load_corpus
from idk_validator.errors import (
    ConfigError,
    CorpusError,
    DuplicateDocumentError,
    IndexNotFoundError,
    ValidatorError,
)
from idk_validator.findings import Finding, FindingKind, Severity, ValidationReport
from idk_validator.orchestrator import validate_corpus

__version__ = "0.1.0"

__all__ = [
    "ValidatorSettings",
    "InMemoryCorpus",
    "SourceDocument",
    "load_corpus",
    "ValidatorError",
    "CorpusError",
    "IndexNotFoundError",
    "DuplicateDocumentError",
    "ConfigError",
    "Finding",
    "FindingKind",
    "Severity",
    "ValidationReport",
    "validate_corpus",
    "__version__",
]
