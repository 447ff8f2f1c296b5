import pytest

from contact_dedupe.index import build_duplicate_index
from contact_dedupe.models import ContactRecord, DuplicateCandidate
from contact_dedupe.steps import PairwiseMatcher


class _FailingMatcher:
    """Raises for every pair targeting ``bad_id``; delegates otherwise."""

    def __init__(self, bad_id: int) -> None:
        self._bad_id = bad_id
        self._inner = PairwiseMatcher()

    def evaluate(self, origin: ContactRecord, other: ContactRecord) -> DuplicateCandidate | None:
        if other.record_id == self._bad_id:
            raise RuntimeError("boom")
        return self._inner.evaluate(origin, other)


def test_scenario_finds_single_duplicate(contacts: list[ContactRecord]) -> None:
    index = build_duplicate_index(contacts)

    assert [c.candidate_id for c in index[1]] == [2]
    assert index[1][0].score > 0.5
    assert [c.candidate_id for c in index[2]] == [1]
    assert 3 not in index
    assert 4 not in index
    assert index.total_matches() == 2
    assert index.failures == ()


def test_both_directions_score_the_same(contacts: list[ContactRecord]) -> None:
    index = build_duplicate_index(contacts)

    assert index[1][0].score == index[2][0].score


@pytest.mark.parametrize("size", [0, 1])
def test_empty_or_single_input_gives_empty_index(size: int) -> None:
    records = [ContactRecord(1, "John Doe", email="john@example.com")][:size]

    index = build_duplicate_index(records)

    assert len(index) == 0
    assert dict(index) == {}


def test_no_self_matches() -> None:
    records = [ContactRecord(i, "John Doe", "JD", "john@example.com", "12345", "123 Main St") for i in range(5)]

    index = build_duplicate_index(records)

    for origin_id, candidates in index.items():
        assert origin_id not in {c.candidate_id for c in candidates}
        assert len(candidates) == 4


def test_ranking_by_score_then_candidate_id() -> None:
    near = dict(name="John Doe", email="john.doe@example.com", postal_code="12345", address="123 Main Street")
    exact = dict(name="John Doe", email="john@example.com", postal_code="12345", address="123 Main St")
    records = [
        ContactRecord(1, **exact),
        ContactRecord(4, **near),
        ContactRecord(2, **near),
        ContactRecord(3, **exact),
    ]

    ranked = build_duplicate_index(records)[1]

    assert [c.candidate_id for c in ranked] == [3, 2, 4]
    scores = [c.score for c in ranked]
    assert scores == sorted(scores, reverse=True)


def test_failing_pair_is_isolated(contacts: list[ContactRecord]) -> None:
    index = build_duplicate_index(contacts, matcher=_FailingMatcher(bad_id=3))

    assert [c.candidate_id for c in index[1]] == [2]
    assert [c.candidate_id for c in index[2]] == [1]
    assert {(f.origin_id, f.candidate_id) for f in index.failures} == {(1, 3), (2, 3), (4, 3)}
    assert all(f.error == "RuntimeError: boom" for f in index.failures)


def test_index_is_read_only(contacts: list[ContactRecord]) -> None:
    index = build_duplicate_index(contacts)

    with pytest.raises(TypeError):
        index[99] = ()  # type: ignore[index]
    with pytest.raises(TypeError):
        index._matches[99] = ()  # type: ignore[index]
    with pytest.raises(AttributeError):
        index.failures = ()  # type: ignore[misc]
