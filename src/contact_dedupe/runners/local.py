from __future__ import annotations

from collections.abc import Sequence

from contact_dedupe.index import build_duplicate_index
from contact_dedupe.interfaces import PairMatcher
from contact_dedupe.models import ContactRecord, DuplicateIndex
from contact_dedupe.steps.matcher import PairwiseMatcher


class LocalDedupePipeline:
    """Single-process runner; fine for a few thousand records."""

    def __init__(self, matcher: PairMatcher | None = None) -> None:
        self._matcher = matcher or PairwiseMatcher()

    def run(self, records: Sequence[ContactRecord]) -> DuplicateIndex:
        return build_duplicate_index(records, self._matcher)
