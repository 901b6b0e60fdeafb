"""
Shared pytest fixtures for the dictionary validator tests.

This module provides:
- ``make_entry`` / ``make_index``: builders for schema-valid documents
- ``corpus_texts``: a fresh path -> text mapping that passes every check
- ``run_validation``: validate a mapping in memory and return the report
- ``write_corpus``: materialise a mapping under ``tmp_path`` for CLI tests

Tests break exactly one rule by editing ``corpus_texts`` before validating.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from idk_validator.config import ValidatorSettings
from idk_validator.corpus import InMemoryCorpus
from idk_validator.findings import ValidationReport
from idk_validator.orchestrator import validate_corpus

INDEX_PATH = "information-dense-keywords.md"

# (path, title, category, verb)
ENTRIES = [
    ("dictionary/core/analyze.md", "ANALYZE this", "Core Commands", "analyze"),
    ("dictionary/development/debug.md", "DEBUG this", "Development Commands", "debug"),
    ("dictionary/documentation/document.md", "DOCUMENT this", "Documentation Commands", "document"),
    ("dictionary/quality-assurance/test.md", "TEST this", "Quality Assurance Commands", "test"),
    ("dictionary/workflow/plan.md", "PLAN this", "Workflow Commands", "plan"),
    ("dictionary/git/commit.md", "COMMIT this", "Git Operations", "commit"),
]


def _entry(title: str, category: str, verb: str, related: str = "") -> str:
    return f"""# {title}

**Category**: {category}

**Definition**: {verb.capitalize()} the target and report what matters most.

## Example Prompts

- `{verb} this authentication module for security issues`
- `{verb} this data pipeline before the release`

## Expected Output Format

```markdown
## {verb.capitalize()} Report
- Finding one with supporting detail
- Finding two with supporting detail
```

## Related Commands

{related}
"""


CHAINING_SECTION = """Commands can be combined for sequential or parallel execution.
Use the keyword then to run steps one after another, and use the keyword and
to run independent steps side by side.

- Sequential: `analyze this system then optimize this performance`
- Parallel: `test this component and document this API`
- Complex: `debug this issue then fix this problem then test this solution`
"""


def _index(chaining: str = CHAINING_SECTION) -> str:
    links = "\n".join(
        f"- [{title}]({path}) - {category}" for path, title, category, _ in ENTRIES
    )
    rows = "\n".join(
        f"| {verb.upper()} | {verb.capitalize()} things | {category} |"
        for _, _, category, verb in ENTRIES
    )
    return f"""# Information Dense Keywords Dictionary

A shared vocabulary of commands. See [Setup](docs/setup.md) and the
[project page](https://example.com/idk).

## Command Chaining

{chaining}
---

## Core Commands

{links}

## Quick Reference

| Command | Purpose | Category |
|---------|---------|----------|
{rows}
"""


@pytest.fixture
def make_entry() -> Callable[..., str]:
    return _entry


@pytest.fixture
def make_index() -> Callable[..., str]:
    return _index


@pytest.fixture
def corpus_texts() -> dict[str, str]:
    """A corpus that satisfies every schema, link, category and grammar rule."""
    texts = {INDEX_PATH: _index()}
    for path, title, category, verb in ENTRIES:
        if verb == "analyze":
            related = "- [DEBUG this](../development/debug.md)"
        else:
            related = "- [ANALYZE this](../core/analyze.md)"
        texts[path] = _entry(title, category, verb, related)
    return texts


@pytest.fixture
def settings() -> ValidatorSettings:
    return ValidatorSettings()


@pytest.fixture
def run_validation(settings) -> Callable[..., ValidationReport]:
    def run(texts: dict[str, str], extra_paths: tuple[str, ...] = (),
            settings_override: ValidatorSettings | None = None) -> ValidationReport:
        corpus = InMemoryCorpus.from_mapping(texts, extra_paths)
        return validate_corpus(corpus.documents, corpus.exists, settings_override or settings)

    return run


@pytest.fixture
def write_corpus(tmp_path) -> Callable[[dict[str, str]], Path]:
    def write(texts: dict[str, str]) -> Path:
        for relative, text in texts.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return tmp_path

    return write
