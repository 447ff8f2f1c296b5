from __future__ import annotations

from typing import Protocol, Sequence

from contact_dedupe.models import ContactRecord, DuplicateCandidate, DuplicateIndex, FieldContribution


class FieldPolicy(Protocol):
    """How one attribute is guarded, compared, gated and weighted."""

    def evaluate(self, left: ContactRecord, right: ContactRecord) -> FieldContribution | None:
        ...


class PairMatcher(Protocol):
    """Scores one ordered pair; ``None`` when the pair is not published."""

    def evaluate(self, origin: ContactRecord, other: ContactRecord) -> DuplicateCandidate | None:
        ...


class DedupePipeline(Protocol):
    """Unified pipeline interface for sequential or multi-process execution."""

    def run(self, records: Sequence[ContactRecord]) -> DuplicateIndex:
        ...
