from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial

from contact_dedupe.index import assemble_index, sweep_origins
from contact_dedupe.interfaces import PairMatcher
from contact_dedupe.models import ContactRecord, DuplicateCandidate, DuplicateIndex, PairFailure
from contact_dedupe.steps.matcher import PairwiseMatcher

logger = logging.getLogger(__name__)

# Set once per worker process by the pool initializer; unused in thread mode.
_worker_records: Sequence[ContactRecord] = ()
_worker_matcher: PairMatcher | None = None


class ParallelDedupePipeline:
    """Shards the origin sweep across a worker pool.

    Every worker reads the full record collection and owns a disjoint slice of
    origins, so per-origin results merge without coordination. The output is the
    same as ``LocalDedupePipeline``.
    """

    def __init__(
        self,
        matcher: PairMatcher | None = None,
        max_workers: int | None = None,
        chunk_size: int = 64,
        use_threads: bool = False,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._matcher = matcher or PairwiseMatcher()
        self._max_workers = max_workers
        self._chunk_size = chunk_size
        self._use_threads = use_threads

    def run(self, records: Sequence[ContactRecord]) -> DuplicateIndex:
        records = list(records)
        if len(records) < 2:
            return assemble_index({})

        chunks = [
            range(start, min(start + self._chunk_size, len(records)))
            for start in range(0, len(records), self._chunk_size)
        ]
        logger.debug("Sweeping %d records in %d chunks", len(records), len(chunks))
        matches: dict[int, list[DuplicateCandidate]] = {}
        failures: list[PairFailure] = []

        with self._executor(records) as executor:
            if self._use_threads:
                # Threads share this module, so each task carries its own inputs.
                sweep = partial(sweep_origins, records, matcher=self._matcher)
            else:
                sweep = _sweep_chunk
            # map() yields in submission order, which keeps origins in record order.
            for chunk_matches, chunk_failures in executor.map(sweep, chunks):
                for origin_id, candidates in chunk_matches.items():
                    matches.setdefault(origin_id, []).extend(candidates)
                failures.extend(chunk_failures)

        return assemble_index(matches, failures)

    def _executor(self, records: list[ContactRecord]) -> Executor:
        if self._use_threads:
            return ThreadPoolExecutor(max_workers=self._max_workers)
        return ProcessPoolExecutor(
            max_workers=self._max_workers,
            initializer=_init_worker,
            initargs=(records, self._matcher),
        )


def _init_worker(records: Sequence[ContactRecord], matcher: PairMatcher) -> None:
    global _worker_records, _worker_matcher
    _worker_records = records
    _worker_matcher = matcher


def _sweep_chunk(
    positions: range,
) -> tuple[dict[int, list[DuplicateCandidate]], list[PairFailure]]:
    if _worker_matcher is None:
        raise RuntimeError("worker process was not initialized with a matcher")
    return sweep_origins(_worker_records, positions, _worker_matcher)
