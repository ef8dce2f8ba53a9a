"""
Scope inference from changed paths.

The primary scope is the deepest directory shared by all relevant
files. When the files share no meaningful directory, each file votes
for the directory it belongs to and the most common one wins. Generic
container directories such as ``src`` or ``internal`` never make a
scope on their own.
"""

from __future__ import annotations

import posixpath
from typing import Dict, List, Optional, Sequence, Tuple

from commit_analyzer.diff.models import FileCategory, FileRecord
from commit_analyzer.inference.file_classifier import is_dependency_manifest


MAX_SCOPES = 2
MAX_SCOPE_LENGTH = 20
SECONDARY_SCOPE_MIN_FILES = 4
SECONDARY_SCOPE_MIN_SUBDIR_FILES = 2

MULTIPLE_SCOPE = "multiple"
CONFIG_SCOPE = "config"
DOCS_SCOPE = "docs"
TEST_SCOPE = "test"

CONTAINER_DIRECTORIES = frozenset({"src", "lib", "app", "internal", "pkg", "cmd"})

Dirs = Tuple[str, ...]


def _directory_parts(path: str) -> Dirs:
    if not path:
        return ()
    parts = [p for p in posixpath.normpath(path).split("/") if p and p != "."]
    return tuple(parts[:-1])


def _common_prefix(dirs: Sequence[Dirs]) -> Dirs:
    if not dirs:
        return ()
    common = dirs[0]
    for other in dirs[1:]:
        i = 0
        while i < min(len(common), len(other)) and common[i] == other[i]:
            i += 1
        common = common[:i]
        if not common:
            break
    return common


def _is_trivial(dirs: Dirs) -> bool:
    return all(part in CONTAINER_DIRECTORIES for part in dirs)


def _functional_directory(dirs: Dirs) -> Optional[Dirs]:
    """Path up to the first non-container directory; None for root files."""
    if not dirs:
        return None
    for i, part in enumerate(dirs):
        if part not in CONTAINER_DIRECTORIES:
            return dirs[: i + 1]
    return dirs[:1]


def _top_voted(keys: Sequence[Dirs]) -> Tuple[Dirs, int, int]:
    """Return (winner, winner votes, number of candidates); ties go to the first seen."""
    votes: Dict[Dirs, int] = {}
    for key in keys:
        votes[key] = votes.get(key, 0) + 1
    winner = max(votes, key=lambda k: votes[k])
    return winner, votes[winner], len(votes)


def simplify_scope_name(scope: str) -> str:
    """Shorten scope names longer than :data:`MAX_SCOPE_LENGTH`."""
    if len(scope) <= MAX_SCOPE_LENGTH:
        return scope
    last = scope.rstrip("/").rsplit("/", 1)[-1]
    return last[:MAX_SCOPE_LENGTH]


def _secondary_scope(primary: Dirs, dirs: Sequence[Dirs]) -> Optional[str]:
    if len(dirs) < SECONDARY_SCOPE_MIN_FILES:
        return None
    depth = len(primary)
    if any(d[:depth] != primary for d in dirs):
        return None
    subdirs = [(d[depth],) for d in dirs if len(d) > depth]
    if not subdirs:
        return None
    winner, count, candidates = _top_voted(subdirs)
    if candidates < 2 or count < SECONDARY_SCOPE_MIN_SUBDIR_FILES:
        return None
    return simplify_scope_name(winner[0])


def _scopes_from_sources(files: Sequence[FileRecord]) -> List[str]:
    dirs = [_directory_parts(f.path) for f in files]

    common = _common_prefix(dirs)
    if common and not _is_trivial(common):
        primary = common
    else:
        keys = [k for k in (_functional_directory(d) for d in dirs) if k is not None]
        if not keys:
            return []
        winner, count, candidates = _top_voted(keys)
        if candidates >= 3 and count * 2 <= len(keys):
            return [MULTIPLE_SCOPE]
        primary = winner

    scopes = [simplify_scope_name(primary[-1])]
    secondary = _secondary_scope(primary, dirs)
    if secondary and secondary != scopes[0]:
        scopes.append(secondary)
    return scopes[:MAX_SCOPES]


def _scopes_from_config(files: Sequence[FileRecord]) -> List[str]:
    common = _common_prefix([_directory_parts(f.path) for f in files])
    if common and not _is_trivial(common):
        return [simplify_scope_name(common[-1])]
    return [CONFIG_SCOPE]


def infer_scopes(files: Sequence[FileRecord]) -> List[str]:
    """Return up to two scopes for ``files``, primary scope first.

    Source files decide the scope whenever present. Without source
    files, dependency manifests and configuration are used, then
    documentation and finally tests.
    """
    if not files:
        return []

    sources: List[FileRecord] = []
    dependencies: List[FileRecord] = []
    configs: List[FileRecord] = []
    docs: List[FileRecord] = []
    tests: List[FileRecord] = []
    for file in files:
        if file.category is FileCategory.SOURCE:
            sources.append(file)
        elif file.category is FileCategory.CONFIG:
            if is_dependency_manifest(file.path):
                dependencies.append(file)
            else:
                configs.append(file)
        elif file.category is FileCategory.DOC:
            docs.append(file)
        elif file.category is FileCategory.TEST:
            tests.append(file)

    if sources:
        return _scopes_from_sources(sources)
    if dependencies or configs:
        return _scopes_from_config(dependencies + configs)
    if docs:
        return [DOCS_SCOPE]
    if tests:
        return [TEST_SCOPE]
    return []
