"""Fuzzy duplicate detection for contact records."""

from contact_dedupe.config import MatchSettings
from contact_dedupe.index import build_duplicate_index
from contact_dedupe.models import ContactRecord, DuplicateCandidate, DuplicateIndex, FieldContribution, PairFailure
from contact_dedupe.schema import FieldTag, RecordSchema

__all__ = [
    "ContactRecord",
    "DuplicateCandidate",
    "DuplicateIndex",
    "FieldContribution",
    "PairFailure",
    "FieldTag",
    "RecordSchema",
    "MatchSettings",
    "build_duplicate_index",
]
