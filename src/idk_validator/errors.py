"""
Structured error types for the dictionary validator.

Checkers never raise for malformed document *content*; that is turned into
findings. The exceptions here are reserved for input the run cannot work
without: an unreadable or missing index, a corpus that repeats a path, or a
settings file that cannot be loaded.

Architecture:
    ::

        ValidatorError  (message, context)
        ├── CorpusError
        │   ├── IndexNotFoundError
        │   └── DuplicateDocumentError
        └── ConfigError

Examples:
    >>> error = IndexNotFoundError("information-dense-keywords.md")
    >>> error.to_dict()["error_type"]
    'IndexNotFoundError'
"""

from __future__ import annotations

from typing import Any


class ValidatorError(Exception):
    """Base exception for fatal validator errors.

    Attributes:
        message: Human-readable description.
        context: Structured metadata for logging (path, setting name, ...).
        cause: Underlying exception, chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ValidatorError:
        """Add context to this error (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# =============================================================================
# CORPUS ERRORS
# =============================================================================


class CorpusError(ValidatorError):
    """The corpus handed to the validator cannot be checked at all."""


class IndexNotFoundError(CorpusError):
    """The master index document is missing or unreadable."""

    def __init__(self, path: str, message: str | None = None, **kwargs: Any):
        self.path = path
        super().__init__(message or f"Index document not found: {path}", **kwargs)
        self.context.setdefault("path", path)


class DuplicateDocumentError(CorpusError):
    """Two source documents share the same corpus-relative path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Duplicate document path in corpus: {path}", context={"path": path})


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(ValidatorError):
    """Settings could not be loaded or are invalid."""
