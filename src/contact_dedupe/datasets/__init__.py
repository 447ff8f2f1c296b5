from contact_dedupe.datasets.profiles import CONTACT_COLUMNS, CONTACT_SCHEMA
from contact_dedupe.datasets.reference import ReferenceDatasetGenerator

__all__ = ["CONTACT_COLUMNS", "CONTACT_SCHEMA", "ReferenceDatasetGenerator"]
