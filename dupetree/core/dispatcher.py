# dupetree/core/dispatcher.py
"""
Fan-out / fan-in of the per-file hashing work.

Callers pick a concrete executor (sequential, thread pool, process pool);
the hashing step only depends on ``Executor.run``. Workers never touch
shared state: each task hashes one file and returns a ``HashResult``, and
``hash_entries`` writes fingerprints back onto the entries in a single
aggregating pass once every task has finished.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from tqdm import tqdm

from .errors import HashFailure, InvalidArgument
from .models import FileEntry
from .scanner import calculate_digest, DEFAULT_BLOCK_SIZE

logger = logging.getLogger(__name__)

ProgressCb = Callable[[], None]


class HashResult(NamedTuple):
    index: int
    path: str
    digest: Optional[str]
    error: Optional[str]


class Executor:
    """Runs ``fn`` over ``items`` and returns the results in input order."""

    max_workers = 1

    def run(self, fn: Callable[[Any], Any], items: Sequence[Any], progress: Optional[ProgressCb] = None) -> List[Any]:
        raise NotImplementedError


class SequentialExecutor(Executor):

    def run(self, fn, items, progress=None):
        results = []
        for item in items:
            results.append(fn(item))
            if progress:
                progress()
        return results

    def __repr__(self):
        return "SequentialExecutor()"


class PoolExecutor(Executor):
    """Bounded worker pool backed by ``concurrent.futures``."""

    def __init__(self, max_workers: int, kind: str = "thread"):
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            raise InvalidArgument("Worker count must be a positive integer", "n_workers", max_workers)
        if kind not in ("thread", "process"):
            raise InvalidArgument("Executor kind must be 'thread' or 'process'", "executor_kind", kind)
        self.max_workers = max_workers
        self.kind = kind

    def _pool(self):
        if self.kind == "process":
            return ProcessPoolExecutor(max_workers=self.max_workers)
        return ThreadPoolExecutor(max_workers=self.max_workers)

    def run(self, fn, items, progress=None):
        results: List[Any] = [None] * len(items)
        if not items:
            return results
        with self._pool() as pool:
            future_to_index = {pool.submit(fn, item): i for i, item in enumerate(items)}
            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()
                if progress:
                    progress()
        return results

    def __repr__(self):
        return f"PoolExecutor(max_workers={self.max_workers}, kind={self.kind!r})"


def make_executor(n_workers: int = 1, kind: str = "thread") -> Executor:
    if n_workers == 1:
        return SequentialExecutor()
    return PoolExecutor(n_workers, kind)


def _hash_task(task: Tuple[int, str, str, int]) -> HashResult:
    # Module level so process pools can pickle it
    index, path, algorithm, block_size = task
    try:
        return HashResult(index, path, calculate_digest(path, algorithm, block_size), None)
    except HashFailure as e:
        return HashResult(index, path, None, str(e))


def hash_entries(
    entries: List[FileEntry],
    executor: Optional[Executor] = None,
    algorithm: str = "md5",
    show_progress: bool = False,
    block_size: int = DEFAULT_BLOCK_SIZE
) -> Dict[str, str]:
    """
    Fingerprints every entry, isolating per-file failures.

    Returns:
        Dict[str, str]: path -> error message for files that could not be
        hashed. Those entries keep ``fingerprint = None``.
    """
    if executor is None:
        executor = SequentialExecutor()
    tasks = [(i, entry.path, algorithm, block_size) for i, entry in enumerate(entries)]

    with tqdm(total=len(tasks), desc="Hashing files", unit="file", disable=not show_progress) as pbar:
        results = executor.run(_hash_task, tasks, progress=lambda: pbar.update(1))

    errors: Dict[str, str] = {}
    for result in results:
        entry = entries[result.index]
        if result.error is not None:
            entry.fingerprint = None
            errors[result.path] = result.error
            logger.debug(result.error)
        else:
            entry.fingerprint = result.digest
    logger.debug("Hashed %d files with %r, %d failures", len(entries), executor, len(errors))
    return errors
