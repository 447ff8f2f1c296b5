import threading

import pytest

from contact_dedupe.datasets import ReferenceDatasetGenerator
from contact_dedupe.models import ContactRecord, DuplicateCandidate
from contact_dedupe.runners import LocalDedupePipeline, ParallelDedupePipeline
from contact_dedupe.runners.parallel import _sweep_chunk
from contact_dedupe.steps import PairwiseMatcher


def _as_rows(index) -> list[tuple[int, int, float, tuple[str, ...]]]:
    return [
        (origin_id, c.candidate_id, c.score, c.reasons)
        for origin_id, candidates in index.items()
        for c in candidates
    ]


def test_pipeline_returns_candidates_for_near_duplicates() -> None:
    records = [
        ContactRecord(1, "Jane Smith", "JS", "jane@example.com", "E1 6AN", "12 Market Street"),
        ContactRecord(2, "Jane Smit", "JS", "jane@example.com", "E1 6AN", "12 Market St"),
        ContactRecord(3, "Alex Doe", "AD", "alex@example.com", "N1 9GU", "44 Pine Road"),
    ]

    index = LocalDedupePipeline(matcher=PairwiseMatcher()).run(records)

    assert [c.candidate_id for c in index[1]] == [2]
    assert [c.candidate_id for c in index[2]] == [1]
    assert 3 not in index


def test_parallel_threads_match_local_sweep() -> None:
    records = ReferenceDatasetGenerator(seed=3).generate(size=60, duplicate_rate=0.3)

    local = LocalDedupePipeline().run(records)
    parallel = ParallelDedupePipeline(max_workers=3, chunk_size=7, use_threads=True).run(records)

    assert _as_rows(parallel) == _as_rows(local)
    assert list(parallel) == list(local)


def test_parallel_processes_match_local_sweep() -> None:
    records = ReferenceDatasetGenerator(seed=11).generate(size=40, duplicate_rate=0.25)

    local = LocalDedupePipeline().run(records)
    parallel = ParallelDedupePipeline(max_workers=2, chunk_size=10).run(records)

    assert _as_rows(parallel) == _as_rows(local)


class _GatedMatcher:
    """Signals on its first evaluation, then waits until released."""

    def __init__(self) -> None:
        self.started = threading.Event()
        self.release = threading.Event()
        self._inner = PairwiseMatcher()

    def evaluate(self, origin: ContactRecord, other: ContactRecord) -> DuplicateCandidate | None:
        self.started.set()
        self.release.wait(timeout=10)
        return self._inner.evaluate(origin, other)


def test_concurrent_thread_runs_keep_their_own_records() -> None:
    first_records = ReferenceDatasetGenerator(seed=2).generate(size=12, duplicate_rate=0.3)
    second_records = [
        ContactRecord(100, "Jane Smith", email="jane@example.com", postal_code="54321"),
        ContactRecord(101, "Jane Smith", email="jane@example.com", postal_code="54321"),
    ]
    gated = _GatedMatcher()
    results: dict[str, object] = {}

    def run_first() -> None:
        pipeline = ParallelDedupePipeline(matcher=gated, max_workers=2, chunk_size=3, use_threads=True)
        results["first"] = pipeline.run(first_records)

    worker = threading.Thread(target=run_first)
    worker.start()
    assert gated.started.wait(timeout=10)

    second = ParallelDedupePipeline(max_workers=2, chunk_size=1, use_threads=True).run(second_records)
    gated.release.set()
    worker.join(timeout=30)

    assert not worker.is_alive()
    assert _as_rows(second) == _as_rows(LocalDedupePipeline().run(second_records))
    first = results["first"]
    assert first.failures == ()
    assert _as_rows(first) == _as_rows(LocalDedupePipeline().run(first_records))


def test_sweep_chunk_requires_initialized_worker() -> None:
    with pytest.raises(RuntimeError, match="not initialized"):
        _sweep_chunk(range(0, 1))


def test_parallel_handles_tiny_inputs() -> None:
    pipeline = ParallelDedupePipeline(max_workers=2, use_threads=True)

    assert len(pipeline.run([])) == 0
    assert len(pipeline.run([ContactRecord(1, "Solo")])) == 0


def test_generator_is_deterministic_and_plants_duplicates() -> None:
    first = ReferenceDatasetGenerator(seed=5).generate(size=50, duplicate_rate=0.2)
    second = ReferenceDatasetGenerator(seed=5).generate(size=50, duplicate_rate=0.2)

    assert first == second
    assert sorted(r.record_id for r in first) == list(range(1, 51))
    assert LocalDedupePipeline().run(first).total_matches() > 0


def test_generator_empty_size() -> None:
    assert ReferenceDatasetGenerator().generate(size=0) == []
