from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Mapping, Sequence

if TYPE_CHECKING:
    from contact_dedupe.models import ContactRecord


class FieldTag(StrEnum):
    CONTACT_ID = "CONTACT_ID"
    NAME = "NAME"
    ALT_NAME = "ALT_NAME"
    EMAIL = "EMAIL"
    POSTAL_CODE = "POSTAL_CODE"
    ADDRESS = "ADDRESS"

    @property
    def field_name(self) -> str:
        """Attribute of ``ContactRecord`` holding this field."""
        if self is FieldTag.CONTACT_ID:
            return "record_id"
        return self.value.lower()

    def value_of(self, record: "ContactRecord") -> str | None:
        return getattr(record, self.field_name)


@dataclass(frozen=True)
class RecordSchema:
    """Maps source-system columns to stable semantic tags."""

    tag_to_columns: Mapping[FieldTag, tuple[str, ...]]

    @classmethod
    def from_mapping(cls, mapping: Mapping[FieldTag, Sequence[str]]) -> "RecordSchema":
        frozen = {tag: tuple(columns) for tag, columns in mapping.items()}
        return cls(tag_to_columns=frozen)

    def columns_for(self, tag: FieldTag) -> tuple[str, ...]:
        return self.tag_to_columns.get(tag, ())

    def resolve(self, headers: Sequence[str]) -> "RecordSchema":
        """Rebind columns to the spelling found in ``headers``, matching case-insensitively.

        Columns absent from ``headers`` are dropped.
        """
        by_key = {header.strip().upper(): header for header in headers if header}
        resolved: dict[FieldTag, list[str]] = {}
        for tag, columns in self.tag_to_columns.items():
            found = [by_key[column.upper()] for column in columns if column.upper() in by_key]
            if found:
                resolved[tag] = found
        return RecordSchema.from_mapping(resolved)

    def values_for(self, attributes: Mapping[str, object], tag: FieldTag) -> list[str]:
        values: list[str] = []
        for column in self.columns_for(tag):
            value = attributes.get(column)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                values.append(text)
        return values

    def joined_value(self, attributes: Mapping[str, object], tag: FieldTag, sep: str = " ") -> str:
        return sep.join(self.values_for(attributes, tag)).strip()

    def optional_value(self, attributes: Mapping[str, object], tag: FieldTag) -> str | None:
        """Like ``joined_value`` but ``None`` when every column is blank."""
        return self.joined_value(attributes, tag) or None
