"""Tests for reading management totals from the summary sheet."""
from roster_audit.extractors.summary_reader import read_summary_figures

from helpers import summary_grid


def test_reads_total_row(settings):
    figures = read_summary_figures({"Table 1": summary_grid(500, 470)}, settings)
    assert figures.sheet_found and figures.total_row_found
    assert figures.actual_on_site_total == 500
    assert figures.used_vacation_total == 470
    assert figures.missing_columns == []


def test_missing_summary_sheet_defaults_to_zero(settings):
    figures = read_summary_figures({"Ward A": [["Name"]]}, settings)
    assert not figures.sheet_found
    assert figures.actual_on_site_total == 0
    assert figures.used_vacation_total == 0


def test_only_exact_sheet_name_counts(settings):
    figures = read_summary_figures({"table 1": summary_grid(500, 470)}, settings)
    assert not figures.sheet_found


def test_missing_total_row(settings):
    grid = summary_grid(500, 470)[:-1]
    figures = read_summary_figures({"Table 1": grid}, settings)
    assert figures.sheet_found
    assert not figures.total_row_found
    assert figures.actual_on_site_total == 0


def test_missing_column_reported(settings):
    grid = [["Location", "Actual On Site"], ["TOTAL=", 410]]
    figures = read_summary_figures({"Table 1": grid}, settings)
    assert figures.actual_on_site_total == 410
    assert figures.used_vacation_total == 0
    assert figures.missing_columns == ["used"]


def test_synonym_labels_and_text_figures(settings):
    grid = [
        ["Site", "Total Staff", "Staff Attendance"],
        ["Total = ", 1, 1],
        ["TOTAL=", "512 staff", "n/a"],
    ]
    figures = read_summary_figures({"Table 1": grid}, settings)
    assert figures.actual_on_site_total == 512
    assert figures.used_vacation_total == 0


def test_arabic_labels(settings):
    grid = [["الموقع", "الاجمالي", "الموجودين"], ["TOTAL=", 300, 290]]
    figures = read_summary_figures({"Table 1": grid}, settings)
    assert figures.actual_on_site_total == 300
    assert figures.used_vacation_total == 290


def test_canonical_label_wins_over_earlier_synonym(settings):
    grid = [
        ["Location", "TOTAL NUMBER (CONTRACT)", "ACTUAL ON SITE", "USED VACATION"],
        ["TOTAL=", 531, 500, 470],
    ]
    figures = read_summary_figures({"Table 1": grid}, settings)
    assert figures.actual_on_site_total == 500
    assert figures.used_vacation_total == 470


def test_canonical_label_in_later_row_still_wins(settings):
    grid = [
        ["Total Staff", None, None],
        ["Location", "Actual On Site", "Used Vacation"],
        ["TOTAL=", 410, 400],
    ]
    figures = read_summary_figures({"Table 1": grid}, settings)
    assert figures.actual_on_site_total == 410
