import json
from pathlib import Path

import pytest

from contact_dedupe.cli import EXIT_BAD_INPUT, EXIT_NO_RECORDS, EXIT_OK, main
from contact_dedupe.io import write_contacts_csv
from contact_dedupe.models import ContactRecord


def test_detect_prints_report_and_writes_outputs(
    tmp_path: Path,
    contacts: list[ContactRecord],
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = tmp_path / "contacts.csv"
    write_contacts_csv(source, contacts)
    output_dir = tmp_path / "out"

    code = main(["detect", str(source), "--output-dir", str(output_dir)])

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "  1: John Doe" in out
    assert "Total matches found: 2" in out
    matches = json.loads((output_dir / "matches.json").read_text(encoding="utf-8"))
    summary = json.loads((output_dir / "summary.json").read_text(encoding="utf-8"))
    assert [(m["origin_id"], m["candidate_id"]) for m in matches] == [(1, 2), (2, 1)]
    assert summary["match_count"] == 2


def test_detect_with_no_records(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "empty.csv"
    source.write_text("CONTACT_ID,NAME\n", encoding="utf-8")

    assert main(["detect", str(source)]) == EXIT_NO_RECORDS
    assert "No contacts found" in capsys.readouterr().out


def test_detect_with_bad_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "broken.csv"
    source.write_text("CONTACT_ID,NAME\nx,Jane\n", encoding="utf-8")

    assert main(["detect", str(source)]) == EXIT_BAD_INPUT
    assert "is not an integer" in capsys.readouterr().err


def test_invalid_publish_threshold(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["detect", str(tmp_path / "x.csv"), "--publish-threshold", "1.5"]) == EXIT_BAD_INPUT
    assert "publish_threshold" in capsys.readouterr().err


def test_run_test_generates_dataset(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["run-test", "--size", "40", "--seed", "1", "--output-dir", str(tmp_path)])

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert (tmp_path / "test_dataset.csv").exists()
    assert "records=40" in out
    summary = json.loads((tmp_path / "summary.json").read_text(encoding="utf-8"))
    assert summary["record_count"] == 40


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == EXIT_OK
    assert "contact-dedupe" in capsys.readouterr().out
