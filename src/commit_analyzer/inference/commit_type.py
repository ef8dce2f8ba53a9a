"""
Heuristics for inferring a Conventional Commit type from a file set.

Each file adds weight to one or more commit types; a few aggregate
signals (new modules, dependency-only changes) add bonuses on top. The
highest scoring type wins. The scoring is deterministic so it can be
unit tested without a language model.
"""

from __future__ import annotations

import posixpath
from enum import Enum
from typing import List, Sequence, Set

from commit_analyzer.diff.models import FileCategory, FileRecord
from commit_analyzer.inference.file_classifier import is_dependency_manifest


class CommitType(str, Enum):
    """Commit types that can be inferred, in tie-break priority order."""

    FEAT = "feat"
    FIX = "fix"
    BUILD = "build"
    DOCS = "docs"
    TEST = "test"
    REFACTOR = "refactor"
    CHORE = "chore"


_ORDER = list(CommitType)
_INDEX = {commit_type: i for i, commit_type in enumerate(_ORDER)}

# Per-file weights
NEW_SOURCE_WEIGHT = 15
MODIFIED_SOURCE_REFACTOR_WEIGHT = 10
MODIFIED_SOURCE_FIX_WEIGHT = 5
NEW_TEST_WEIGHT = 8
MODIFIED_TEST_WEIGHT = 3
DOC_WEIGHT = 3
DEPENDENCY_WEIGHT = 2
CONFIG_WEIGHT = 2

# Aggregate bonuses
NEW_DIRECTORIES_BONUS = 30
NEW_SOURCES_BONUS = 30
ONLY_CONFIG_BONUS = 15
ONLY_CONFIG_PENALTY = 5
NEW_SOURCE_OVERRIDE_BONUS = 50
NEW_SOURCE_OVERRIDE_PENALTY = 20


class _Scores:
    """Integer score per commit type, stored in enum order."""

    def __init__(self) -> None:
        self._values: List[int] = [0] * len(_ORDER)

    def add(self, commit_type: CommitType, amount: int) -> None:
        self._values[_INDEX[commit_type]] += amount

    def __getitem__(self, commit_type: CommitType) -> int:
        return self._values[_INDEX[commit_type]]

    def best(self) -> CommitType:
        # max() keeps the first maximum, i.e. the earlier type in _ORDER
        best_index = max(range(len(_ORDER)), key=lambda i: self._values[i])
        if self._values[best_index] <= 0:
            return CommitType.CHORE
        return _ORDER[best_index]


def score_commit_types(files: Sequence[FileRecord]) -> _Scores:
    """Accumulate the commit type scores for ``files``."""
    scores = _Scores()
    source_count = 0
    new_source_count = 0
    new_directories: Set[str] = set()
    has_dependency = False
    has_regular_config = False

    for file in files:
        directory = posixpath.dirname(posixpath.normpath(file.path)) if file.path else ""
        if file.is_new and directory:
            new_directories.add(directory)

        if file.category is FileCategory.SOURCE:
            source_count += 1
            if file.is_new:
                new_source_count += 1
                scores.add(CommitType.FEAT, NEW_SOURCE_WEIGHT)
            elif not file.is_deleted:
                scores.add(CommitType.REFACTOR, MODIFIED_SOURCE_REFACTOR_WEIGHT)
                scores.add(CommitType.FIX, MODIFIED_SOURCE_FIX_WEIGHT)
        elif file.category is FileCategory.TEST:
            scores.add(CommitType.TEST, NEW_TEST_WEIGHT if file.is_new else MODIFIED_TEST_WEIGHT)
        elif file.category is FileCategory.DOC:
            scores.add(CommitType.DOCS, DOC_WEIGHT)
        elif file.category is FileCategory.CONFIG:
            if is_dependency_manifest(file.path):
                has_dependency = True
                scores.add(CommitType.BUILD, DEPENDENCY_WEIGHT)
            else:
                has_regular_config = True
                scores.add(CommitType.CHORE, CONFIG_WEIGHT)

    if len(new_directories) >= 2:
        scores.add(CommitType.FEAT, NEW_DIRECTORIES_BONUS)
    if new_source_count >= 2:
        scores.add(CommitType.FEAT, NEW_SOURCES_BONUS)

    if has_dependency and source_count == 0 and not has_regular_config:
        scores.add(CommitType.BUILD, ONLY_CONFIG_BONUS)
        scores.add(CommitType.CHORE, -ONLY_CONFIG_PENALTY)
    if has_regular_config and source_count == 0 and not has_dependency:
        scores.add(CommitType.CHORE, ONLY_CONFIG_BONUS)
        scores.add(CommitType.BUILD, -ONLY_CONFIG_PENALTY)

    # Feature work stays feat even when it also touches manifests
    if new_source_count > 0:
        scores.add(CommitType.FEAT, NEW_SOURCE_OVERRIDE_BONUS)
        scores.add(CommitType.BUILD, -NEW_SOURCE_OVERRIDE_PENALTY)
        scores.add(CommitType.CHORE, -NEW_SOURCE_OVERRIDE_PENALTY)

    return scores


def infer_commit_type(files: Sequence[FileRecord]) -> str:
    """Return the recommended commit type for a set of changed files.

    Parameters
    ----------
    files : Sequence[FileRecord]
        Classified files of the diff.

    Returns
    -------
    str
        One of ``feat``, ``fix``, ``build``, ``docs``, ``test``,
        ``refactor`` or ``chore``. An empty file set yields ``chore``.

    Notes
    -----
    Equal scores are resolved by the declaration order of
    :class:`CommitType`, so the result never depends on iteration order.
    """
    if not files:
        return CommitType.CHORE.value
    return score_commit_types(files).best().value
