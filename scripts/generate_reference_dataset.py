from __future__ import annotations

import argparse
from pathlib import Path

from contact_dedupe.datasets import ReferenceDatasetGenerator
from contact_dedupe.io import write_contacts_csv


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic contacts dataset")
    parser.add_argument("--size", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--duplicate-rate", type=float, default=0.15)
    parser.add_argument("--output", type=Path, default=Path("data/reference_contacts.csv"))
    args = parser.parse_args()

    records = ReferenceDatasetGenerator(seed=args.seed).generate(
        size=args.size,
        duplicate_rate=args.duplicate_rate,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    write_contacts_csv(args.output, records)


if __name__ == "__main__":
    main()
