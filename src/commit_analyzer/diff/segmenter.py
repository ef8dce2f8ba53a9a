"""
Split a unified diff into per-file blocks.

The segmenter only cuts the text at ``diff --git`` headers; it never
interprets hunks. Each block keeps the exact lines that belong to it so
that the sum of all block bodies equals the input minus the headers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from commit_analyzer.diff.models import FileRecord
from commit_analyzer.inference.file_classifier import classify_path


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


HEADER_PREFIX = "diff --git"
NEW_FILE_PREFIX = "new file mode"
DELETED_FILE_PREFIX = "deleted file mode"
HUNK_PREFIX = "@@"


@dataclass(frozen=True)
class DiffBlock:
    """Header line and body lines of one file in a diff."""

    index: int
    header: str
    body_lines: Tuple[str, ...] = ()

    @property
    def body(self) -> str:
        return "\n".join(self.body_lines)


def _split_lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        # A final newline terminates the last line, it does not start a new one
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def segment_diff(text: str) -> List[DiffBlock]:
    """Split raw diff text into ordered :class:`DiffBlock` objects.

    Lines before the first ``diff --git`` header are discarded. An empty
    or whitespace-only diff yields an empty list.
    """
    if not text.strip():
        return []

    blocks: List[DiffBlock] = []
    header = None
    body: List[str] = []
    skipped = 0

    for line in _split_lines(text):
        if line.startswith(HEADER_PREFIX):
            if header is not None:
                blocks.append(DiffBlock(len(blocks), header, tuple(body)))
            header = line
            body = []
        elif header is not None:
            body.append(line)
        else:
            skipped += 1

    if header is not None:
        blocks.append(DiffBlock(len(blocks), header, tuple(body)))

    if skipped:
        logger.debug("Discarded %d line(s) preceding the first file header", skipped)
    logger.debug("Segmented diff into %d file block(s)", len(blocks))
    return blocks


def count_file_headers(text: str) -> int:
    """Return the number of ``diff --git`` headers in ``text``."""
    return sum(1 for line in text.split("\n") if line.startswith(HEADER_PREFIX))


def parse_header(header: str) -> str:
    """Extract the repository-relative path from a ``diff --git`` line.

    The fourth whitespace separated field is used with its ``b/`` prefix
    removed. Headers with fewer fields yield an empty path.
    """
    fields = header.split()
    if len(fields) < 4:
        logger.warning("Malformed diff header, keeping anonymous file: %r", header)
        return ""
    path = fields[3]
    if path.startswith("b/"):
        path = path[2:]
    return path


def scan_file_flags(body_lines: Sequence[str]) -> Tuple[bool, bool]:
    """Return ``(is_new, is_deleted)`` from the extended header lines."""
    is_new = False
    is_deleted = False
    for line in body_lines:
        if line.startswith(HUNK_PREFIX):
            break
        if line.startswith(NEW_FILE_PREFIX):
            is_new = True
        elif line.startswith(DELETED_FILE_PREFIX):
            is_deleted = True
    return is_new, is_deleted


def build_record(block: DiffBlock) -> FileRecord:
    """Turn one diff block into a classified :class:`FileRecord`."""
    path = parse_header(block.header)
    is_new, is_deleted = scan_file_flags(block.body_lines)
    return FileRecord(
        path=path,
        category=classify_path(path),
        is_new=is_new,
        is_deleted=is_deleted,
        body=block.body,
    )
