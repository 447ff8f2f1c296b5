from __future__ import annotations

import math
from dataclasses import dataclass

from contact_dedupe.config import DEFAULT_SETTINGS, MatchSettings
from contact_dedupe.interfaces import FieldPolicy
from contact_dedupe.models import ContactRecord, FieldContribution
from contact_dedupe.schema import FieldTag
from contact_dedupe.steps.cleanup import normalize
from contact_dedupe.steps.similarity import similarity


@dataclass(frozen=True, slots=True)
class FuzzyFieldPolicy:
    """Counts a field when its edit-distance similarity is strictly above ``threshold``.

    ``placeholder`` is a literal (compared ignoring case) that some sources write
    instead of leaving the cell empty; it is treated as absent. With
    ``normalize_first`` both values are canonicalized before scoring.
    """

    tag: FieldTag
    label: str
    threshold: float
    weight: float
    placeholder: str | None = None
    normalize_first: bool = False

    def evaluate(self, left: ContactRecord, right: ContactRecord) -> FieldContribution | None:
        left_value = self.tag.value_of(left)
        right_value = self.tag.value_of(right)
        if left_value is None or right_value is None:
            return None
        if self._is_placeholder(left_value) or self._is_placeholder(right_value):
            return None

        if self.normalize_first:
            score = similarity(normalize(left_value), normalize(right_value))
        else:
            score = similarity(left_value, right_value)
        if score <= self.threshold:
            return None

        return FieldContribution(
            field_name=self.tag.field_name,
            weight=self.weight,
            similarity=score,
            reason=f"{self.label} similar ({percent(score)}%)",
        )

    def _is_placeholder(self, value: str) -> bool:
        return self.placeholder is not None and value.lower() == self.placeholder.lower()


@dataclass(frozen=True, slots=True)
class ExactFieldPolicy:
    """Flat ``weight`` when both raw values are present and identical."""

    tag: FieldTag
    reason: str
    weight: float

    def evaluate(self, left: ContactRecord, right: ContactRecord) -> FieldContribution | None:
        left_value = self.tag.value_of(left)
        right_value = self.tag.value_of(right)
        if left_value is None or right_value is None or left_value != right_value:
            return None
        return FieldContribution(
            field_name=self.tag.field_name,
            weight=self.weight,
            similarity=1.0,
            reason=self.reason,
        )


def default_policies(settings: MatchSettings = DEFAULT_SETTINGS) -> tuple[FieldPolicy, ...]:
    """The field table in evaluation order: name, email, address, postal code."""
    return (
        FuzzyFieldPolicy(
            tag=FieldTag.NAME,
            label="Name",
            threshold=settings.name_threshold,
            weight=settings.name_weight,
        ),
        FuzzyFieldPolicy(
            tag=FieldTag.EMAIL,
            label="Email",
            threshold=settings.email_threshold,
            weight=settings.email_weight,
            placeholder=settings.email_placeholder,
        ),
        FuzzyFieldPolicy(
            tag=FieldTag.ADDRESS,
            label="Address",
            threshold=settings.address_threshold,
            weight=settings.address_weight,
            normalize_first=True,
        ),
        ExactFieldPolicy(
            tag=FieldTag.POSTAL_CODE,
            reason="Same postal code",
            weight=settings.postal_code_weight,
        ),
    )


def percent(score: float) -> int:
    """Score as a whole percentage, halves rounded up."""
    return math.floor(score * 100 + 0.5)
