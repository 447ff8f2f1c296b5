import logging
from collections.abc import Iterator

import pytest

from contact_dedupe.models import ContactRecord


@pytest.fixture
def contacts() -> list[ContactRecord]:
    return [
        ContactRecord(1, "John Doe", "JD", "john@example.com", "12345", "123 Main St"),
        ContactRecord(2, "John Doe", "JD", "john.doe@example.com", "12345", "123 Main Street"),
        ContactRecord(3, "Jane Smith", "JS", "jane@example.com", "54321", "456 Oak Ave"),
        ContactRecord(4, "Robert Johnson", "RJ", "robert@example.com", "67890", "789 Pine Rd"),
    ]


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("contact_dedupe")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
