from __future__ import annotations

import random
from dataclasses import replace

from contact_dedupe.models import ContactRecord

_FIRST_NAMES = [
    "Dominique",
    "Luke",
    "Alex",
    "Sofia",
    "Maya",
    "Daniel",
    "Emma",
    "Chris",
    "Olivia",
    "Noah",
]
_LAST_NAMES = [
    "Smith",
    "Johnson",
    "Brown",
    "Taylor",
    "Wilson",
    "Davies",
    "Martin",
    "Thomas",
]
_STREETS = [
    "Luke Street",
    "Maple Road",
    "King Avenue",
    "River Lane",
    "Elm Street",
    "Station Road",
]
_DOMAINS = ["gmail.com", "outlook.com", "yahoo.com", "example.com"]


class ReferenceDatasetGenerator:
    """Generate synthetic contacts (with intentional dupes) for tests and benchmarks."""

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(self, size: int, duplicate_rate: float = 0.15) -> list[ContactRecord]:
        if size <= 0:
            return []

        unique_count = int(size * (1.0 - duplicate_rate))
        unique_count = max(1, min(unique_count, size))

        profiles = [self._profile(i) for i in range(unique_count)]
        while len(profiles) < size:
            profiles.append(self._perturb(self._rng.choice(profiles[:unique_count])))

        self._rng.shuffle(profiles)
        return [replace(profile, record_id=i + 1) for i, profile in enumerate(profiles)]

    def _profile(self, idx: int) -> ContactRecord:
        first_name = self._rng.choice(_FIRST_NAMES)
        last_name = self._rng.choice(_LAST_NAMES)
        street = self._rng.choice(_STREETS)
        email_local = f"{first_name}.{last_name}{idx % 97}".lower()

        return ContactRecord(
            record_id=idx,
            name=f"{first_name} {last_name}",
            alt_name=f"{first_name[0]}{last_name[0]}",
            # Some sources write the literal "null" for a missing email.
            email=f"{email_local}@{self._rng.choice(_DOMAINS)}" if self._rng.random() > 0.05 else "null",
            postal_code=f"{10000 + (idx % 89999)}",
            address=f"{1 + (idx % 180)} {street}",
        )

    def _perturb(self, source: ContactRecord) -> ContactRecord:
        mutation = self._rng.choice(["email", "name", "address", "mixed"])
        record = source

        if mutation in {"email", "mixed"} and record.email:
            record = replace(record, email=self._email_variant(record.email))
        if mutation in {"name", "mixed"} and record.name:
            record = replace(record, name=self._name_variant(record.name))
        if mutation in {"address", "mixed"} and record.address:
            record = replace(record, address=self._address_variant(record.address))
        return record

    def _email_variant(self, email: str) -> str:
        if "@" not in email:
            return email
        local, domain = email.split("@", maxsplit=1)
        variant = self._rng.choice(["plus", "dot", "case"])

        if variant == "plus":
            suffix = self._rng.choice(["test", "shop", "vip"])
            return f"{local}+{suffix}@{domain}"
        if variant == "dot" and len(local) > 3 and "." not in local:
            insert_at = max(1, len(local) // 2)
            return f"{local[:insert_at]}.{local[insert_at:]}@{domain}"
        return f"{local.capitalize()}@{domain}"

    def _name_variant(self, name: str) -> str:
        first, _, last = name.partition(" ")
        if first.lower().startswith("dom"):
            first = self._rng.choice(["Dom", "Dominique"])
        elif len(first) > 4:
            first = first[:3]
        else:
            expansion = {"alex": "Alexander", "chris": "Christopher", "dan": "Daniel"}
            first = expansion.get(first.lower(), first)

        last = self._rng.choice([last.upper(), last.lower(), last[:-1] if len(last) > 4 else last])
        return f"{first} {last}".strip()

    def _address_variant(self, address: str) -> str:
        if "street" in address.lower():
            variant = address.replace("Street", "St").replace("street", "st")
        elif address.lower().endswith(" st"):
            variant = f"{address}reet"
        else:
            variant = address

        if self._rng.random() < 0.6:
            variant = f"{variant}, Top floor"
        return variant
