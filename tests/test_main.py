"""Tests for the command line entry point."""
import logging

import pytest

import main
from roster_audit.utilities.models import AuditResult

from helpers import staff_grid, staff_row, summary_grid, write_workbook


@pytest.fixture
def roster_file(tmp_path):
    path = tmp_path / "DUTY ROSTER April 2025.xlsx"
    write_workbook(path, {
        "Table 1": summary_grid(20, 19),
        "Ward A": staff_grid([staff_row(1, 9, "Omar", "02/04/2025-04/04/2025")]),
    })
    return path


def test_main_writes_audit_workbook(roster_file, tmp_path):
    output = tmp_path / "audit.xlsx"
    assert main.main([str(roster_file), "-o", str(output), "--log-level", "WARNING"]) == 0
    assert output.exists()


def test_main_reports_failure(tmp_path):
    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"garbage")
    assert main.main([str(broken)]) == 1


def test_main_can_skip_bad_files(roster_file, tmp_path):
    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"garbage")
    assert main.main([str(broken), str(roster_file), "--skip-bad-files"]) == 0


def test_main_requires_input():
    with pytest.raises(SystemExit):
        main.main([])


def test_main_rejects_missing_file(tmp_path):
    with pytest.raises(SystemExit):
        main.main([str(tmp_path / "nope.xlsx")])


def test_main_logs_search_matches(roster_file, caplog):
    caplog.set_level(logging.INFO, logger="main")
    assert main.main([str(roster_file), "--search", "oma"]) == 0
    messages = [record.getMessage() for record in caplog.records if record.name == "main"]
    assert "Search 'oma': 1 employee(s), 1 vacation record(s)" in messages
    assert any("2025-04-02 to 2025-04-04 (3 days)" in message for message in messages)


def test_log_search_results_without_matches(caplog):
    caplog.set_level(logging.INFO, logger="main")
    main.log_search_results(AuditResult(), "nobody")
    assert caplog.records[-1].getMessage() == "Search 'nobody': 0 employee(s), 0 vacation record(s)"
