"""
Parallel diff processing.

See :mod:`commit_analyzer.worker.pool` for the thread pool used on
large diffs.
"""

from .pool import (  # noqa: F401
    PARALLEL_THRESHOLD,
    WorkerPool,
    optimal_worker_count,
    parse_blocks_parallel,
)
