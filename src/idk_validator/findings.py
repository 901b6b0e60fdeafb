"""Findings and the aggregated validation report.

Every checker returns a list of :class:`Finding` objects. The orchestrator
collects them, in run order, into a :class:`ValidationReport`.

Architecture::

    check_schema / check_category / check_links / check_chaining / ...
    │
    ▼
    list[Finding]          (code, severity, kind, message, document, line)
    │
    ▼
    ValidationReport
    ├── findings: list[Finding]
    ├── passed → bool (no errors)
    ├── errors / warnings
    └── summary() → str
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level for a finding."""

    ERROR = "error"
    WARNING = "warning"


class FindingKind(str, Enum):
    """Error taxonomy: what kind of defect a finding describes."""

    STRUCTURAL = "structural"
    REFERENCE = "reference"
    GRAMMAR = "grammar"
    ADVISORY = "advisory"


@dataclass(frozen=True)
class Finding:
    """A single validation outcome.

    Attributes:
        code: Short stable identifier (e.g. ``"S003"``).
        severity: ``error`` or ``warning``.
        kind: Taxonomy bucket of the defect.
        message: Human-readable description.
        document: Corpus-relative path of the offending document, if any.
        line: 1-based line number inside ``document``, if known.
    """

    code: str
    severity: Severity
    kind: FindingKind
    message: str
    document: str | None = None
    line: int | None = None

    @property
    def location(self) -> str:
        if self.document and self.line is not None:
            return f"{self.document}:{self.line}"
        return self.document or ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "kind": self.kind.value,
            "message": self.message,
            "document": self.document,
            "line": self.line,
        }

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.value.upper()}"
        location = f" {self.location}" if self.location else ""
        return f"{prefix}{location}: {self.message}"


# ── Constructors ─────────────────────────────────────────────────────────


def structural_error(code: str, message: str, document: str | None = None,
                     line: int | None = None) -> Finding:
    return Finding(code, Severity.ERROR, FindingKind.STRUCTURAL, message, document, line)


def reference_error(code: str, message: str, document: str | None = None,
                    line: int | None = None) -> Finding:
    return Finding(code, Severity.ERROR, FindingKind.REFERENCE, message, document, line)


def grammar_error(code: str, message: str, document: str | None = None,
                  line: int | None = None) -> Finding:
    return Finding(code, Severity.ERROR, FindingKind.GRAMMAR, message, document, line)


def advisory(code: str, message: str, document: str | None = None,
             line: int | None = None) -> Finding:
    return Finding(code, Severity.WARNING, FindingKind.ADVISORY, message, document, line)


# ── Report ───────────────────────────────────────────────────────────────


@dataclass
class ValidationReport:
    """Aggregated result of validating one corpus.

    Attributes:
        findings: All findings from all checkers, in run order.
        documents_checked: Number of documents extracted for the run.
    """

    findings: list[Finding] = field(default_factory=list)
    documents_checked: int = 0

    def extend(self, findings: list[Finding]) -> None:
        self.findings.extend(findings)

    @property
    def passed(self) -> bool:
        """True if there are no error-level findings."""
        return not any(f.severity == Severity.ERROR for f in self.findings)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    def by_kind(self, kind: FindingKind) -> list[Finding]:
        return [f for f in self.findings if f.kind == kind]

    def summary(self) -> str:
        """One-line summary of the report."""
        status = "PASS" if self.passed else "FAIL"
        return (
            f"{status}: {self.documents_checked} documents | "
            f"{len(self.errors)} errors | {len(self.warnings)} warnings"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "documents_checked": self.documents_checked,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "findings": [f.to_dict() for f in self.findings],
        }

    def __str__(self) -> str:
        lines = [self.summary()]
        for f in self.findings:
            lines.append(f"  {f}")
        return "\n".join(lines)
