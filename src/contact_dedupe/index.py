"""Sweep every ordered record pair and rank the published candidates per origin."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from contact_dedupe.interfaces import PairMatcher
from contact_dedupe.models import ContactRecord, DuplicateCandidate, DuplicateIndex, PairFailure
from contact_dedupe.steps.matcher import PairwiseMatcher

logger = logging.getLogger(__name__)


def build_duplicate_index(
    records: Sequence[ContactRecord],
    matcher: PairMatcher | None = None,
) -> DuplicateIndex:
    """Evaluate all ordered pairs ``(i, j)``, ``i != j``, and return the ranked index.

    Both directions are evaluated independently. Nothing is surfaced until the whole
    sweep is done. A pair whose evaluation raises is logged, recorded on
    ``DuplicateIndex.failures`` and skipped; the remaining pairs are still evaluated.
    """
    matcher = matcher or PairwiseMatcher()
    logger.debug("Building duplicate index over %d records (%d ordered pairs)", len(records), _pair_count(records))

    matches, failures = sweep_origins(records, range(len(records)), matcher)
    index = assemble_index(matches, failures)

    logger.debug(
        "Duplicate index built: origins=%d matches=%d failures=%d",
        len(index),
        index.total_matches(),
        len(index.failures),
    )
    return index


def sweep_origins(
    records: Sequence[ContactRecord],
    origin_positions: Iterable[int],
    matcher: PairMatcher,
) -> tuple[dict[int, list[DuplicateCandidate]], list[PairFailure]]:
    """Match each origin at ``origin_positions`` against every other record.

    Reads ``records`` only, so disjoint sets of positions can be swept in parallel
    and merged afterwards.
    """
    matches: dict[int, list[DuplicateCandidate]] = {}
    failures: list[PairFailure] = []

    for i in origin_positions:
        origin = records[i]
        found: list[DuplicateCandidate] = []
        for j, other in enumerate(records):
            if i == j:
                continue
            try:
                candidate = matcher.evaluate(origin, other)
            except Exception as exc:
                logger.exception("Skipping pair %s -> %s: evaluation failed", origin.record_id, other.record_id)
                failures.append(
                    PairFailure(
                        origin_id=origin.record_id,
                        candidate_id=other.record_id,
                        error=f"{type(exc).__name__}: {exc}",
                    )
                )
                continue
            if candidate is not None:
                found.append(candidate)
        if found:
            matches.setdefault(origin.record_id, []).extend(found)

    return matches, failures


def assemble_index(
    matches: dict[int, list[DuplicateCandidate]],
    failures: Sequence[PairFailure] = (),
) -> DuplicateIndex:
    ranked = {
        origin_id: tuple(rank_candidates(candidates))
        for origin_id, candidates in matches.items()
        if candidates
    }
    if failures:
        logger.warning("%d record pair(s) could not be evaluated and were skipped", len(failures))
    return DuplicateIndex(ranked, failures=tuple(failures))


def rank_candidates(candidates: Iterable[DuplicateCandidate]) -> list[DuplicateCandidate]:
    """Score descending, then candidate id ascending."""
    return sorted(candidates, key=lambda candidate: (-candidate.score, candidate.candidate_id))


def _pair_count(records: Sequence[ContactRecord]) -> int:
    return len(records) * (len(records) - 1)
