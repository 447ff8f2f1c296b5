from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from contact_dedupe.config import DEFAULT_SETTINGS, MatchSettings
from contact_dedupe.datasets import ReferenceDatasetGenerator
from contact_dedupe.errors import ConfigurationError, RecordLoadError
from contact_dedupe.interfaces import DedupePipeline
from contact_dedupe.io import read_contacts, write_contacts_csv
from contact_dedupe.logging_setup import configure_logging
from contact_dedupe.models import ContactRecord, DuplicateIndex
from contact_dedupe.report import build_summary, format_records, format_report, index_to_payload
from contact_dedupe.runners import LocalDedupePipeline, ParallelDedupePipeline
from contact_dedupe.steps import PairwiseMatcher

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RECORDS = 1
EXIT_BAD_INPUT = 2


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        configure_logging(args.log_level)
        settings = DEFAULT_SETTINGS.with_overrides(publish_threshold=args.publish_threshold)
    except (ConfigurationError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.command == "detect":
        return detect(
            input_path=args.input,
            output_dir=args.output_dir,
            workers=args.workers,
            positional=args.positional,
            settings=settings,
        )
    if args.command == "run-test":
        return run_test(
            size=args.size,
            duplicate_rate=args.duplicate_rate,
            seed=args.seed,
            output_dir=args.output_dir,
            workers=args.workers,
            settings=settings,
        )

    parser.print_help()
    return EXIT_OK


def detect(
    *,
    input_path: Path,
    output_dir: Path | None,
    workers: int,
    positional: bool,
    settings: MatchSettings,
) -> int:
    try:
        records = read_contacts(input_path, positional=positional)
    except RecordLoadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if not records:
        print("No contacts found in the input file.")
        return EXIT_NO_RECORDS

    print("\n=== LOADED CONTACTS ===")
    print(format_records(records))
    print()

    index = _pipeline(workers, settings).run(records)
    print(format_report(index, settings))

    if output_dir is not None:
        _write_outputs(output_dir, records, index, dataset_path=input_path)
    return EXIT_OK


def run_test(
    *,
    size: int,
    duplicate_rate: float,
    seed: int,
    output_dir: Path,
    workers: int,
    settings: MatchSettings,
) -> int:
    output_dir.mkdir(parents=True, exist_ok=True)

    records = ReferenceDatasetGenerator(seed=seed).generate(size=size, duplicate_rate=duplicate_rate)
    dataset_path = output_dir / "test_dataset.csv"
    write_contacts_csv(dataset_path, records)

    index = _pipeline(workers, settings).run(records)
    summary = _write_outputs(output_dir, records, index, dataset_path=dataset_path)

    print(f"Dataset: {dataset_path}")
    print(f"Matches: {output_dir / 'matches.json'}")
    print(f"Summary: {output_dir / 'summary.json'}")
    print("---")
    print(f"records={summary['record_count']}")
    print(f"origins_with_matches={summary['origin_count']}")
    print(f"matches={summary['match_count']}")
    print(f"failed_pairs={summary['failure_count']}")
    return EXIT_OK


def _pipeline(workers: int, settings: MatchSettings) -> DedupePipeline:
    matcher = PairwiseMatcher(settings=settings)
    if workers > 1:
        return ParallelDedupePipeline(matcher=matcher, max_workers=workers)
    return LocalDedupePipeline(matcher=matcher)


def _write_outputs(
    output_dir: Path,
    records: Sequence[ContactRecord],
    index: DuplicateIndex,
    dataset_path: Path,
) -> dict[str, object]:
    output_dir.mkdir(parents=True, exist_ok=True)
    matches_path = output_dir / "matches.json"
    summary_path = output_dir / "summary.json"

    summary = build_summary(records, index)
    summary["dataset_path"] = str(dataset_path)
    summary["matches_path"] = str(matches_path)

    _write_json(matches_path, index_to_payload(index))
    _write_json(summary_path, summary)
    logger.info("Wrote %s and %s", matches_path, summary_path)
    return summary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contact-dedupe", description="Contact duplicate detection CLI")
    subparsers = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--workers", type=int, default=1, help="Worker processes for the pair sweep")
    common.add_argument("--publish-threshold", type=float, default=None)
    common.add_argument("--log-level", type=str, default=None, help="Defaults to $CONTACT_DEDUPE_LOG_LEVEL or WARNING")

    detect_parser = subparsers.add_parser(
        "detect",
        parents=[common],
        help="Load contacts from a CSV or Excel file and report likely duplicates",
    )
    detect_parser.add_argument("input", type=Path)
    detect_parser.add_argument("--output-dir", type=Path, default=None)
    detect_parser.add_argument(
        "--positional",
        action="store_true",
        help="Read Excel columns by position (id, name, alt name, email, postal code, address)",
    )

    run_test_parser = subparsers.add_parser(
        "run-test",
        parents=[common],
        help="Generate a synthetic dataset, run detection, and write matches + summary",
    )
    run_test_parser.add_argument("--size", type=int, default=500)
    run_test_parser.add_argument("--duplicate-rate", type=float, default=0.15)
    run_test_parser.add_argument("--seed", type=int, default=42)
    run_test_parser.add_argument("--output-dir", type=Path, default=Path("data/cli_output"))

    return parser


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


if __name__ == "__main__":
    raise SystemExit(main())
