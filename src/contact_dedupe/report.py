from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from contact_dedupe.config import DEFAULT_SETTINGS, MatchSettings
from contact_dedupe.models import ContactRecord, DuplicateIndex

_RULE = "=" * 54
_THIN_RULE = "-" * 54


def precision_label(score: float, settings: MatchSettings = DEFAULT_SETTINGS) -> str:
    return "High" if score >= settings.high_precision_threshold else "Low"


def format_records(records: Sequence[ContactRecord]) -> str:
    return "\n".join(f"{record.record_id:3d}: {record.name or ''}" for record in records)


def format_report(index: DuplicateIndex, settings: MatchSettings = DEFAULT_SETTINGS) -> str:
    """Render the index as a fixed-width table, origins in ascending id order."""
    lines = [
        _RULE,
        "POTENTIAL DUPLICATE CONTACTS".center(len(_RULE)).rstrip(),
        _RULE,
        f"{'Origin ID':<20} {'Match ID':<20} {'Precision':<15}".rstrip(),
        _THIN_RULE,
    ]
    if not index:
        lines.append("No potential duplicates found.")
        return "\n".join(lines)

    for origin_id in index.origin_ids():
        for candidate in index[origin_id]:
            label = precision_label(candidate.score, settings)
            lines.append(f"{origin_id:<20d} {candidate.candidate_id:<20d} {label:<15}".rstrip())

    lines.append(_RULE)
    lines.append(f"Total matches found: {index.total_matches()}")
    return "\n".join(lines)


def index_to_payload(index: DuplicateIndex) -> list[dict[str, Any]]:
    return [
        {
            "origin_id": origin_id,
            "candidate_id": candidate.candidate_id,
            "score": round(candidate.score, 4),
            "reasons": list(candidate.reasons),
        }
        for origin_id in index.origin_ids()
        for candidate in index[origin_id]
    ]


def build_summary(records: Sequence[ContactRecord], index: DuplicateIndex) -> dict[str, object]:
    return {
        "record_count": len(records),
        "origin_count": len(index),
        "match_count": index.total_matches(),
        "failure_count": len(index.failures),
        "failures": [
            {"origin_id": f.origin_id, "candidate_id": f.candidate_id, "error": f.error}
            for f in index.failures
        ],
    }
