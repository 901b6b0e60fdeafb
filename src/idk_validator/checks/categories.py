"""Category consistency.

An entry's directory under the dictionary root decides its category. A
declared label that disagrees is only a warning (the label is advisory
metadata); an entry outside every recognised category directory is an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from idk_validator.findings import Finding, advisory, structural_error
from idk_validator.parser.model import Document

if TYPE_CHECKING:
    from idk_validator.context import ValidationContext


def expected_category(path: str, context: ValidationContext) -> str | None:
    directory = context.category_dir(path)
    if directory is None:
        return None
    return context.settings.category_partition.get(directory)


def check_category(document: Document, context: ValidationContext) -> list[Finding]:
    """S013 for entries outside the partition, W001 for label mismatches."""
    expected = expected_category(document.path, context)
    if expected is None:
        directory = context.category_dir(document.path)
        where = f'"{directory}"' if directory else "the dictionary root"
        return [structural_error(
            "S013",
            f"Entry is not inside a recognised category directory (found in {where})",
            document.path,
        )]

    if document.declared_category is None:
        return []

    declared = document.declared_category.strip()
    if declared and declared != expected:
        return [advisory(
            "W001",
            f'Category "{declared}" does not match directory (expected "{expected}")',
            document.path,
        )]
    return []


def check_category_coverage(context: ValidationContext) -> list[Finding]:
    """W006 for canonical category directories without any entry."""
    populated = {context.category_dir(path) for path in context.entry_paths}
    return [
        advisory("W006", f'Category directory "{directory}" has no entries')
        for directory in context.settings.category_partition
        if directory not in populated
    ]
