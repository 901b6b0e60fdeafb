"""Per-run validation context.

Everything the checkers share (settings, extracted documents, the corpus
existence predicate, the command vocabulary) is bundled into one immutable
object built by the orchestrator at the start of a run. Nothing is cached at
module level, so two runs in one process cannot see each other's state.
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from idk_validator.checks.vocabulary import CommandVocabulary
from idk_validator.config import ValidatorSettings
from idk_validator.parser.model import Document, DocumentKind


@dataclass(frozen=True)
class ValidationContext:
    settings: ValidatorSettings
    documents: Mapping[str, Document]
    exists: Callable[[str], bool]
    vocabulary: CommandVocabulary

    def __post_init__(self) -> None:
        if not isinstance(self.documents, MappingProxyType):
            object.__setattr__(self, "documents", MappingProxyType(dict(self.documents)))

    @property
    def index(self) -> Document:
        return self.documents[self.settings.index_path]

    @property
    def entries(self) -> list[Document]:
        return [d for d in self.documents.values() if d.kind == DocumentKind.ENTRY]

    @property
    def entry_paths(self) -> list[str]:
        return [d.path for d in self.entries]

    def is_entry_path(self, path: str) -> bool:
        root = self.settings.dictionary_root.rstrip("/") + "/"
        return posixpath.normpath(path).startswith(root)

    def category_dir(self, path: str) -> str | None:
        """First path segment under the dictionary root, if ``path`` is nested there."""
        if not self.is_entry_path(path):
            return None
        relative = posixpath.relpath(posixpath.normpath(path), self.settings.dictionary_root)
        head, _, rest = relative.partition("/")
        return head if rest else None
