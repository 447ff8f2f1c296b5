from __future__ import annotations

from dataclasses import dataclass, fields, replace

from contact_dedupe.errors import ConfigurationError

LOG_LEVEL_ENV = "CONTACT_DEDUPE_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class MatchSettings:
    """Gates and weights of the duplicate heuristic.

    The defaults are empirical and kept as-is for compatibility with existing
    reports: a field only contributes when its similarity is strictly above its
    threshold, and a pair is published once the weighted sum reaches
    ``publish_threshold``.
    """

    name_threshold: float = 0.70
    email_threshold: float = 0.80
    address_threshold: float = 0.60
    name_weight: float = 0.40
    email_weight: float = 0.30
    address_weight: float = 0.20
    postal_code_weight: float = 0.10
    publish_threshold: float = 0.50
    high_precision_threshold: float = 0.75
    email_placeholder: str = "null"

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name.endswith("_threshold") and not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{item.name} must be within [0, 1], got {value}")
            if item.name.endswith("_weight") and value < 0.0:
                raise ConfigurationError(f"{item.name} must be non-negative, got {value}")

        # Tolerate float noise such as 0.4 + 0.3 + 0.2 + 0.1.
        if self.total_weight() > 1.0 + 1e-9:
            raise ConfigurationError(f"field weights must sum to at most 1.0, got {self.total_weight():.4f}")

    def total_weight(self) -> float:
        return self.name_weight + self.email_weight + self.address_weight + self.postal_code_weight

    def with_overrides(self, **overrides: object) -> "MatchSettings":
        """Return a copy with the non-``None`` overrides applied."""
        applied = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **applied)


DEFAULT_SETTINGS = MatchSettings()
