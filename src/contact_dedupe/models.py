from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ContactRecord:
    """Canonical representation of a contact entry."""

    record_id: int
    name: str | None = None
    alt_name: str | None = None
    email: str | None = None
    postal_code: str | None = None
    address: str | None = None


@dataclass(frozen=True, slots=True)
class FieldContribution:
    """What one field added to a pair's aggregate score."""

    field_name: str
    weight: float
    similarity: float
    reason: str

    @property
    def value(self) -> float:
        return self.weight * self.similarity


@dataclass(frozen=True, slots=True)
class DuplicateCandidate:
    """Potential duplicate of an origin record with an explainable score."""

    candidate_id: int
    score: float
    reasons: tuple[str, ...]
    contributions: tuple[FieldContribution, ...] = ()


@dataclass(frozen=True, slots=True)
class PairFailure:
    """An ordered pair whose evaluation raised instead of producing a score."""

    origin_id: int
    candidate_id: int
    error: str


class DuplicateIndex(Mapping[int, tuple[DuplicateCandidate, ...]]):
    """Read-only mapping of origin record id to its ranked duplicate candidates."""

    def __init__(
        self,
        matches: Mapping[int, tuple[DuplicateCandidate, ...]] | None = None,
        failures: tuple[PairFailure, ...] = (),
    ) -> None:
        self._matches = MappingProxyType(dict(matches or {}))
        self._failures = tuple(failures)

    @property
    def failures(self) -> tuple[PairFailure, ...]:
        return self._failures

    def __getitem__(self, origin_id: int) -> tuple[DuplicateCandidate, ...]:
        return self._matches[origin_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._matches)

    def __len__(self) -> int:
        return len(self._matches)

    def __repr__(self) -> str:
        return f"DuplicateIndex(origins={len(self)}, matches={self.total_matches()}, failures={len(self.failures)})"

    def origin_ids(self) -> list[int]:
        return sorted(self._matches)

    def total_matches(self) -> int:
        return sum(len(candidates) for candidates in self._matches.values())

