"""
Data models for parsed diffs.

A :class:`FileRecord` describes one changed file of a staged diff and a
:class:`DiffResult` aggregates all of them together with the inferred
commit type and scopes.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class FileCategory(str, Enum):
    """Coarse category of a changed file, derived from its path only."""

    SOURCE = "source"
    TEST = "test"
    DOC = "doc"
    CONFIG = "config"


# Diff metadata lines skipped when summarising a file body
_METADATA_PREFIXES = ("diff --git", "index ", "---", "+++", "@@")


@dataclass(frozen=True)
class FileRecord:
    """Representation of a single file in a staged diff.

    Attributes
    ----------
    path : str
        Repository-relative path with the ``b/`` prefix removed. Empty
        when the ``diff --git`` header could not be parsed.
    category : FileCategory
        Category assigned by the file classifier.
    is_new : bool
        True if the diff creates the file.
    is_deleted : bool
        True if the diff deletes the file.
    body : str
        Raw diff lines between this file's header and the next one.
    """

    path: str
    category: FileCategory
    is_new: bool = False
    is_deleted: bool = False
    body: str = ""

    @property
    def status(self) -> str:
        if self.is_new:
            return "added"
        if self.is_deleted:
            return "deleted"
        return "modified"

    def summarize(self, max_lines: int = 3, max_length: int = 100) -> str:
        """Return a one-line preview of the changed lines in ``body``.

        Only added or removed lines are collected; diff metadata is
        skipped. When more than ``max_lines`` changed lines exist an
        ellipsis is appended.
        """
        picked: List[str] = []
        for line in self.body.split("\n"):
            line = line.strip()
            if not line or line.startswith(_METADATA_PREFIXES):
                continue
            if line.startswith(("+", "-")):
                if len(picked) < max_lines:
                    picked.append(line)
                else:
                    picked.append("...")
                    break
        summary = " ".join(picked)
        if len(summary) > max_length:
            summary = summary[:max_length] + "..."
        return summary


@dataclass
class DiffResult:
    """Aggregate output of the diff analysis.

    ``files`` keeps the order in which the files appear in ``raw_diff``.
    ``commit_type`` is empty when the diff contains no files.
    """

    files: List[FileRecord] = field(default_factory=list)
    commit_type: str = ""
    scopes: List[str] = field(default_factory=list)
    raw_diff: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.files

    @property
    def diff_hash(self) -> str:
        return diff_hash(self.raw_diff)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON serialisable dictionary (without the raw diff)."""
        return {
            "commit_type": self.commit_type,
            "scopes": list(self.scopes),
            "diff_hash": self.diff_hash,
            "files": [
                {
                    "path": f.path,
                    "category": f.category.value,
                    "is_new": f.is_new,
                    "is_deleted": f.is_deleted,
                }
                for f in self.files
            ],
        }


def diff_hash(raw_diff: str) -> str:
    """Return the SHA-256 hex digest identifying a diff."""
    return hashlib.sha256(raw_diff.encode("utf-8")).hexdigest()


class DiffParseError(Exception):
    """Raised when a diff could not be turned into a complete file list."""

    pass
