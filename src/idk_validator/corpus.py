"""
Corpus input boundary.

The validator core consumes ``(path, text)`` pairs plus an ``exists``
predicate and knows nothing about disks. This module provides the two
adapters that feed it: :class:`InMemoryCorpus` for tests and embedding, and
:func:`load_corpus` for a dictionary checked out on the filesystem.

Paths are always corpus-relative POSIX strings (``dictionary/core/analyze.md``).
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from idk_validator.config import ValidatorSettings
from idk_validator.errors import CorpusError, IndexNotFoundError
from idk_validator.logging import get_logger

logger = get_logger(__name__)

ExistsPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class SourceDocument:
    """Raw content of one corpus document."""

    path: str
    text: str


@dataclass(frozen=True)
class InMemoryCorpus:
    """A corpus held entirely in memory.

    ``extra_paths`` lists files that exist but are not documents (images,
    non-markdown assets); links may point at them. Parent directories of
    every known path also exist.

    Examples:
        >>> corpus = InMemoryCorpus.from_mapping({"dictionary/core/a.md": "# A"})
        >>> corpus.exists("dictionary/core"), corpus.exists("dictionary/core/b.md")
        (True, False)
    """

    documents: tuple[SourceDocument, ...]
    extra_paths: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_mapping(cls, texts: Mapping[str, str],
                     extra_paths: Iterable[str] = ()) -> InMemoryCorpus:
        return cls(
            documents=tuple(SourceDocument(path, text) for path, text in texts.items()),
            extra_paths=frozenset(extra_paths),
        )

    @property
    def known_paths(self) -> frozenset[str]:
        paths: set[str] = set(self.extra_paths)
        paths.update(doc.path for doc in self.documents)
        for path in list(paths):
            parent = posixpath.dirname(path)
            while parent:
                paths.add(parent)
                parent = posixpath.dirname(parent)
        return frozenset(paths)

    def exists(self, path: str) -> bool:
        normalized = posixpath.normpath(path)
        if normalized == ".":
            return True
        return normalized in self.known_paths


@dataclass(frozen=True)
class FileSystemCorpus:
    """A corpus read from a directory on disk."""

    root: Path
    documents: tuple[SourceDocument, ...]

    def exists(self, path: str) -> bool:
        normalized = posixpath.normpath(path)
        if normalized.startswith("../") or normalized == ".." or posixpath.isabs(normalized):
            return False
        return (self.root / normalized).exists()


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def load_corpus(root: Path, settings: ValidatorSettings) -> FileSystemCorpus:
    """Discover the index and every entry under the dictionary root.

    Args:
        root: Repository root containing the index and the dictionary
        settings: Validator settings (index path, dictionary root)

    Returns:
        FileSystemCorpus with documents sorted by path

    Raises:
        IndexNotFoundError: If the index is missing or unreadable
        CorpusError: If an entry document cannot be read
    """
    root = Path(root)
    index_file = root / settings.index_path
    try:
        documents = [SourceDocument(settings.index_path, _read(index_file))]
    except (OSError, UnicodeDecodeError) as exc:
        raise IndexNotFoundError(settings.index_path, cause=exc) from exc

    dictionary_dir = root / settings.dictionary_root
    entry_files = sorted(dictionary_dir.rglob("*.md")) if dictionary_dir.is_dir() else []

    for file_path in entry_files:
        relative = file_path.relative_to(root).as_posix()
        try:
            documents.append(SourceDocument(relative, _read(file_path)))
        except (OSError, UnicodeDecodeError) as exc:
            raise CorpusError(f"Cannot read entry document: {relative}",
                              context={"path": relative}, cause=exc) from exc

    logger.info("corpus_loaded", root=str(root), documents=len(documents))
    return FileSystemCorpus(root=root, documents=tuple(documents))
