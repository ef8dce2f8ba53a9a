"""
Thread worker pool for classifying large diffs.

Blocks are fanned out to a fixed number of worker threads through a
bounded input queue and fanned back in through a bounded output queue.
A single aggregator thread drains the output queue while blocks are
still being submitted, so a small output buffer never stalls the
producer. No ordering is guaranteed among results; every record is
paired with its block index so callers can restore input order.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable, List, Optional, Sequence, Tuple

from commit_analyzer.diff.models import DiffParseError, FileRecord
from commit_analyzer.diff.segmenter import DiffBlock, build_record


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


MIN_WORKERS = 2
MAX_WORKERS = 8
PARALLEL_THRESHOLD = 5

# Marks the end of a queue
_STOP = object()


def optimal_worker_count(file_count: int, max_workers: int = MAX_WORKERS) -> int:
    """Return the number of workers to use for ``file_count`` files.

    The count rises in steps with the number of files: 2 up to 10
    files, 4 up to 50, 6 up to 100 and 8 beyond that. The result is
    capped at ``max_workers``.
    """
    if file_count <= 10:
        count = MIN_WORKERS
    elif file_count <= 50:
        count = 4
    elif file_count <= 100:
        count = 6
    else:
        count = MAX_WORKERS
    return max(1, min(count, max_workers))


class WorkerPool:
    """Fixed-size pool of threads applying ``process`` to submitted items.

    Parameters
    ----------
    workers : int
        Number of worker threads.
    process : Callable
        Function applied to every submitted item. Its return value is
        placed on the output queue.
    """

    def __init__(self, workers: int, process: Callable[[Any], Any]) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.workers = workers
        self._process = process
        self._input: "queue.Queue[Any]" = queue.Queue(maxsize=workers * 2)
        self._output: "queue.Queue[Any]" = queue.Queue(maxsize=workers * 2)
        self._threads: List[threading.Thread] = []
        self._errors: List[BaseException] = []
        self._errors_lock = threading.Lock()
        self.submitted = 0

    @property
    def errors(self) -> List[BaseException]:
        with self._errors_lock:
            return list(self._errors)

    def start(self) -> None:
        """Start the worker threads."""
        for worker_id in range(self.workers):
            thread = threading.Thread(
                target=self._worker,
                args=(worker_id,),
                name=f"diff-worker-{worker_id}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)
        logger.debug("Started %d diff worker(s)", self.workers)

    def _worker(self, worker_id: int) -> None:
        failed = False
        while True:
            item = self._input.get()
            if item is _STOP:
                break
            if failed:
                # Keep draining so the producer never blocks on a full queue
                continue
            try:
                result = self._process(item)
            except BaseException as exc:
                logger.error("Worker %d failed: %s", worker_id, exc)
                with self._errors_lock:
                    self._errors.append(exc)
                failed = True
                continue
            self._output.put(result)

    def submit(self, item: Any) -> None:
        """Queue an item, blocking while the input queue is full."""
        self._input.put(item)
        self.submitted += 1

    def close(self) -> None:
        """Signal that no more items will be submitted."""
        for _ in self._threads:
            self._input.put(_STOP)

    def wait(self) -> None:
        """Block until every worker has exited, then close the output."""
        for thread in self._threads:
            thread.join()
        self._output.put(_STOP)

    def results(self) -> List[Any]:
        """Drain the output queue until it is closed by :meth:`wait`."""
        collected: List[Any] = []
        while True:
            item = self._output.get()
            if item is _STOP:
                break
            collected.append(item)
        return collected


def _indexed_record(block: DiffBlock) -> Tuple[int, FileRecord]:
    return block.index, build_record(block)


def parse_blocks_parallel(
    blocks: Sequence[DiffBlock],
    workers: int,
    process: Optional[Callable[[DiffBlock], Tuple[int, FileRecord]]] = None,
) -> List[Tuple[int, FileRecord]]:
    """Classify ``blocks`` on a worker pool.

    Returns ``(block_index, record)`` pairs in completion order.

    Raises
    ------
    DiffParseError
        If any worker failed or the number of results differs from the
        number of submitted blocks.
    """
    pool = WorkerPool(workers, process or _indexed_record)
    pool.start()

    collected: List[List[Any]] = []
    aggregator = threading.Thread(
        target=lambda: collected.append(pool.results()),
        name="diff-aggregator",
        daemon=True,
    )
    aggregator.start()

    for block in blocks:
        pool.submit(block)
    pool.close()
    pool.wait()
    aggregator.join()

    results = collected[0] if collected else []
    errors = pool.errors
    if errors:
        raise DiffParseError(
            f"{len(errors)} diff worker(s) failed: {errors[0]}"
        ) from errors[0]
    if len(results) != pool.submitted:
        raise DiffParseError(
            f"Expected {pool.submitted} parsed file(s), got {len(results)}"
        )
    logger.debug("Parsed %d file block(s) with %d worker(s)", len(results), workers)
    return results
