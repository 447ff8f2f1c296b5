from __future__ import annotations

from contact_dedupe.schema import FieldTag, RecordSchema

# Column order of the contacts workbook; positional sheets follow it too.
CONTACT_COLUMNS = [
    "CONTACT_ID",
    "NAME",
    "ALT_NAME",
    "EMAIL",
    "POSTAL_CODE",
    "ADDRESS",
]


CONTACT_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.CONTACT_ID: ["CONTACT_ID"],
        FieldTag.NAME: ["NAME"],
        FieldTag.ALT_NAME: ["ALT_NAME"],
        FieldTag.EMAIL: ["EMAIL"],
        FieldTag.POSTAL_CODE: ["POSTAL_CODE"],
        FieldTag.ADDRESS: ["ADDRESS"],
    }
)
