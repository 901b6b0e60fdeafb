"""
CLI for the dictionary validator.

Usage:
    idk-validate check .
    idk-validate check path/to/repo --json
    idk-validate vocabulary .
    idk-validate extract dictionary/core/analyze.md

Exit codes for ``check``: 0 when there are no errors (warnings allowed),
1 when errors were found, 2 when the corpus could not be validated at all.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from idk_validator.config import ValidatorSettings, load_settings
from idk_validator.corpus import load_corpus
from idk_validator.errors import ValidatorError
from idk_validator.logging import configure_logging
from idk_validator.orchestrator import build_context, extract_corpus, validate_corpus
from idk_validator.parser.extractor import extract_document
from idk_validator.parser.model import DocumentKind
from idk_validator.report import render_json, render_report

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="idk-validate",
    help="Validate an Information Dense Keywords dictionary.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from idk_validator import __version__

        typer.echo(f"idk-validate {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Schema, link and command-chaining checks for the keyword dictionary."""


def _settings(config: Path | None, log_level: str | None) -> ValidatorSettings:
    try:
        settings = load_settings(config, log_level=log_level)
    except ValidatorError as exc:
        err_console.print(f"[bold red]Config error:[/bold red] {exc.message}")
        raise typer.Exit(code=2) from exc
    configure_logging(level=settings.log_level, format=settings.log_format, force=True)
    return settings


@app.command()
def check(
    root: Path = typer.Argument(Path("."), help="Repository root containing the index."),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML settings file."),
    as_json: bool = typer.Option(False, "--json", help="Output findings as JSON."),
    warnings: bool = typer.Option(True, "--warnings/--no-warnings", help="Show warnings."),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    """Validate the index and every dictionary entry."""
    settings = _settings(config, log_level)

    try:
        corpus = load_corpus(root, settings)
        report = validate_corpus(corpus.documents, corpus.exists, settings)
    except ValidatorError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc.message}")
        raise typer.Exit(code=2) from exc

    if as_json:
        render_json(report, console)
    else:
        console.print("\n[bold blue]🧪 Validating Information Dense Keywords Dictionary[/bold blue]\n")
        render_report(report, console, show_warnings=warnings)

    if not report.passed:
        raise typer.Exit(code=1)


@app.command()
def vocabulary(
    root: Path = typer.Argument(Path("."), help="Repository root containing the index."),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML settings file."),
) -> None:
    """List the commands known from the index's Quick Reference table."""
    settings = _settings(config, None)

    try:
        corpus = load_corpus(root, settings)
        documents = extract_corpus(corpus.documents, settings)
    except ValidatorError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc.message}")
        raise typer.Exit(code=2) from exc

    context = build_context(documents, corpus.exists, settings)

    table = Table(title=f"Command Vocabulary ({len(context.vocabulary)} commands)")
    table.add_column("Command", style="cyan")
    table.add_column("Purpose")
    table.add_column("Category")
    for row in context.vocabulary.rows:
        table.add_row(row.command, row.purpose, row.category)
    console.print(table)
    console.print(f"[bold]Fallback verbs:[/bold] {', '.join(context.vocabulary.fallback_verbs)}")


@app.command()
def extract(
    file_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Markdown document."),
    index: bool = typer.Option(False, "--index", help="Treat the file as the index."),
) -> None:
    """Show the document model extracted from a single file."""
    _settings(None, None)
    kind = DocumentKind.INDEX if index else DocumentKind.ENTRY
    document = extract_document(file_path.read_text(encoding="utf-8"), file_path.as_posix(), kind)
    console.print_json(data=document.to_dict())


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
