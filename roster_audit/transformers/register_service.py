"""Lookups over the employee directory and vacation register."""
from typing import List

from roster_audit.transformers.data_processor import normalize_text
from roster_audit.utilities.models import AuditResult, DetailedVacationRow, MasterEmployee


def _matches(query: str, *values: str) -> bool:
    return any(query in normalize_text(value) for value in values)


def search_employees(result: AuditResult, query: str) -> List[MasterEmployee]:
    """Employees whose name or MRN contains the query; nothing for an empty query."""
    query = normalize_text(query)
    if not query:
        return []
    return [employee for employee in result.master_employees if _matches(query, employee.name, employee.mrn)]


def search_vacations(result: AuditResult, query: str) -> List[DetailedVacationRow]:
    """Register rows whose name or MRN contains the query; the whole register for an empty query."""
    query = normalize_text(query)
    if not query:
        return list(result.detailed_register)
    return [row for row in result.detailed_register if _matches(query, row.name, row.mrn)]
