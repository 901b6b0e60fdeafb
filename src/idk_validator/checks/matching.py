"""Vocabulary matching strategies.

The chaining checker asks one question of the vocabulary: "is this word a
command?". How loosely that is answered is a strategy:

- ``substring`` (default): case-insensitive containment in either direction.
  Prose abbreviates and conjugates command names ("analyzing", "gh"), so
  this keeps false positives low. Short words such as ``a`` match almost
  everything.
- ``exact``: case-insensitive equality.
- ``fuzzy``: :class:`difflib.SequenceMatcher` ratio at or above a threshold.
"""

from __future__ import annotations

from collections.abc import Iterable
from difflib import SequenceMatcher
from typing import Protocol


class VocabularyMatcher(Protocol):
    name: str

    def matches(self, word: str, candidates: Iterable[str]) -> bool: ...


class ExactMatcher:
    name = "exact"

    def matches(self, word: str, candidates: Iterable[str]) -> bool:
        needle = word.lower()
        return bool(needle) and any(needle == c.lower() for c in candidates)


class SubstringMatcher:
    name = "substring"

    def matches(self, word: str, candidates: Iterable[str]) -> bool:
        needle = word.lower()
        if not needle:
            return False
        for candidate in candidates:
            known = candidate.lower()
            if known and (known in needle or needle in known):
                return True
        return False


class FuzzyMatcher:
    name = "fuzzy"

    def __init__(self, threshold: float = 0.8):
        self.threshold = threshold

    def matches(self, word: str, candidates: Iterable[str]) -> bool:
        needle = word.lower()
        if not needle:
            return False
        return any(
            SequenceMatcher(None, needle, c.lower()).ratio() >= self.threshold
            for c in candidates
            if c
        )


def get_matcher(name: str, *, threshold: float = 0.8) -> VocabularyMatcher:
    """Return the matcher registered under ``name``."""
    if name == "exact":
        return ExactMatcher()
    if name == "substring":
        return SubstringMatcher()
    if name == "fuzzy":
        return FuzzyMatcher(threshold)
    raise ValueError(f"Unknown vocabulary matcher: {name!r}")
