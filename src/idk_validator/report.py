"""
Report rendering: rich tables for terminals, JSON for machines.
"""

from __future__ import annotations

import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from idk_validator.findings import Severity, ValidationReport

_SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


def render_report(report: ValidationReport, console: Console, *, show_warnings: bool = True) -> None:
    """Print a findings table and a summary line."""
    findings = report.findings if show_warnings else report.errors

    if findings:
        table = Table(title="Findings", show_lines=False)
        table.add_column("Code", style="cyan", no_wrap=True)
        table.add_column("Severity", no_wrap=True)
        table.add_column("Location")
        table.add_column("Message")
        for finding in findings:
            style = _SEVERITY_STYLE[finding.severity]
            table.add_row(
                finding.code,
                f"[{style}]{finding.severity.value}[/{style}]",
                escape(finding.location or "-"),
                escape(finding.message),
            )
        console.print(table)

    if report.passed and not report.warnings:
        console.print("[bold green]✅ All validations passed! Dictionary is well-formed.[/bold green]")
    elif report.passed:
        console.print(f"[bold green]✅ No errors[/bold green] ({len(report.warnings)} warnings)")
    else:
        console.print(f"[bold red]❌ {len(report.errors)} error(s) found[/bold red]")

    console.print(
        f"Summary: {report.documents_checked} documents, "
        f"{len(report.errors)} errors, {len(report.warnings)} warnings"
    )


def render_json(report: ValidationReport, console: Console) -> None:
    console.print_json(json.dumps(report.to_dict()))
