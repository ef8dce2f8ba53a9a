"""
Turn a staged diff into a :class:`DiffResult`.

Small diffs are classified sequentially. Diffs with more files than the
parallel threshold are classified on the worker pool; both paths share
:func:`build_record`, so they produce the same records, and the pooled
results are put back into input order before inference runs.
"""

from __future__ import annotations

import logging
from typing import List

from commit_analyzer.diff.models import DiffResult, FileRecord
from commit_analyzer.diff.segmenter import build_record, segment_diff
from commit_analyzer.inference.commit_type import infer_commit_type
from commit_analyzer.inference.scope import infer_scopes
from commit_analyzer.worker.pool import (
    MAX_WORKERS,
    PARALLEL_THRESHOLD,
    optimal_worker_count,
    parse_blocks_parallel,
)


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def parse_diff(
    text: str,
    parallel_threshold: int = PARALLEL_THRESHOLD,
    max_workers: int = MAX_WORKERS,
) -> List[FileRecord]:
    """Parse diff text into classified file records in input order.

    Raises
    ------
    DiffParseError
        If parallel classification did not return a record for every
        file.
    """
    blocks = segment_diff(text)
    if len(blocks) <= parallel_threshold:
        logger.debug("Parsing %d file(s) sequentially", len(blocks))
        return [build_record(block) for block in blocks]

    workers = optimal_worker_count(len(blocks), max_workers)
    logger.debug("Parsing %d file(s) with %d worker(s)", len(blocks), workers)
    indexed = parse_blocks_parallel(blocks, workers)
    indexed.sort(key=lambda pair: pair[0])
    return [record for _, record in indexed]


def analyze_diff(
    text: str,
    parallel_threshold: int = PARALLEL_THRESHOLD,
    max_workers: int = MAX_WORKERS,
) -> DiffResult:
    """Parse ``text`` and infer the commit type and scopes.

    An empty diff yields an empty result with no commit type.
    """
    files = parse_diff(text, parallel_threshold, max_workers)
    if not files:
        return DiffResult(files=[], commit_type="", scopes=[], raw_diff=text)
    result = DiffResult(
        files=files,
        commit_type=infer_commit_type(files),
        scopes=infer_scopes(files),
        raw_diff=text,
    )
    logger.debug(
        "Inferred commit type %r with scopes %s for %d file(s)",
        result.commit_type,
        result.scopes,
        len(files),
    )
    return result
