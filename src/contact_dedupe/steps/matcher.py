from __future__ import annotations

import math
from collections.abc import Sequence

from contact_dedupe.config import DEFAULT_SETTINGS, MatchSettings
from contact_dedupe.interfaces import FieldPolicy
from contact_dedupe.models import ContactRecord, DuplicateCandidate, FieldContribution
from contact_dedupe.steps.policies import default_policies


class PairwiseMatcher:
    """Weighted multi-field matcher: candidate if the summed contributions reach the publish threshold."""

    def __init__(
        self,
        policies: Sequence[FieldPolicy] | None = None,
        publish_threshold: float | None = None,
        settings: MatchSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._policies = tuple(policies) if policies is not None else default_policies(settings)
        self._publish_threshold = settings.publish_threshold if publish_threshold is None else publish_threshold

    @property
    def publish_threshold(self) -> float:
        return self._publish_threshold

    def contributions(self, origin: ContactRecord, other: ContactRecord) -> list[FieldContribution]:
        contributions: list[FieldContribution] = []
        for policy in self._policies:
            contribution = policy.evaluate(origin, other)
            if contribution is not None:
                contributions.append(contribution)
        return contributions

    def evaluate(self, origin: ContactRecord, other: ContactRecord) -> DuplicateCandidate | None:
        contributions = self.contributions(origin, other)
        score = min(1.0, max(0.0, math.fsum(c.value for c in contributions)))
        if score < self._publish_threshold:
            return None
        return DuplicateCandidate(
            candidate_id=other.record_id,
            score=score,
            reasons=tuple(c.reason for c in contributions),
            contributions=tuple(contributions),
        )
