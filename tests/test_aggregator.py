"""Tests for run-wide aggregation of monthly results."""
from roster_audit.pipelines.pipeline import audit_rosters
from roster_audit.transformers.register_service import search_employees, search_vacations

from helpers import make_roster, staff_row


def _rosters():
    march = make_roster(
        "Roster March 2025.xlsx",
        [staff_row(1, 11, "Alice", "01/03/2025-04/03/2025"), staff_row(2, 12, "Bob", "02/03/2025")],
        actual=50, used=48,
    )
    january = make_roster(
        "Roster January 2025.xlsx",
        [staff_row(1, 11, "Alice", "10/01/2025-11/01/2025"), staff_row(2, 13, "Carl", "05/01/2025-05/01/2025")],
        actual=50, used=47,
    )
    february = make_roster(
        "Roster February 2025.xlsx",
        [staff_row(1, 11, "Alice", position="Supervisor")],
        actual=50, used=50,
    )
    return [march, january, february]


def test_summaries_are_chronological(settings):
    result = audit_rosters(_rosters(), settings)
    assert [s.month for s in result.monthly_summaries] == ["JANUARY 2025", "FEBRUARY 2025", "MARCH 2025"]


def test_year_ordering_beats_month_ordering(settings):
    rosters = [make_roster("Roster January 2026.xlsx", []), make_roster("Roster December 2025.xlsx", [])]
    result = audit_rosters(rosters, settings)
    assert [s.month for s in result.monthly_summaries] == ["DECEMBER 2025", "JANUARY 2026"]


def test_confirmed_vacation_counts_each_key_once(settings):
    result = audit_rosters(_rosters(), settings)
    assert len(result.detailed_register) == 3
    assert result.full_year_totals.total_confirmed_vacation == 2
    assert result.full_year_totals.total_confirmed_vacation == len({row.key for row in result.detailed_register})


def test_year_totals(settings):
    totals = audit_rosters(_rosters(), settings).full_year_totals
    assert totals.total_actual_on_site == 150
    assert totals.total_used_vacation == 145
    assert totals.total_calculated_vacation == 5
    assert totals.total_vacation_days == 4 + 2 + 1
    assert totals.total_exceptions == 1


def test_directory_reflects_last_processed_file(settings):
    result = audit_rosters(_rosters(), settings)
    alice = next(e for e in result.master_employees if e.mrn == "11")
    # February is processed last even though March is chronologically later
    assert alice.last_seen_month == "FEBRUARY 2025"
    assert alice.position == "Supervisor"
    assert [e.mrn for e in result.master_employees] == ["11", "12", "13"]


def test_register_keeps_processing_order(settings):
    result = audit_rosters(_rosters(), settings)
    assert [row.month for row in result.detailed_register] == ["MARCH 2025", "JANUARY 2025", "JANUARY 2025"]


def test_audit_is_idempotent(settings):
    assert audit_rosters(_rosters(), settings) == audit_rosters(_rosters(), settings)


def test_empty_run(settings):
    result = audit_rosters([], settings)
    assert result.monthly_summaries == []
    assert result.full_year_totals.total_confirmed_vacation == 0


def test_search_employees(settings):
    result = audit_rosters(_rosters(), settings)
    assert [e.name for e in search_employees(result, "ali")] == ["Alice"]
    assert [e.name for e in search_employees(result, "13")] == ["Carl"]
    assert search_employees(result, "  ") == []


def test_search_vacations(settings):
    result = audit_rosters(_rosters(), settings)
    assert len(search_vacations(result, "")) == 3
    assert len(search_vacations(result, "alice")) == 2
    assert search_vacations(result, "nobody") == []
