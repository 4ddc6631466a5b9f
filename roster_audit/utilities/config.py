"""Configuration constants and settings for the roster audit system."""
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Set

from roster_audit.utilities.exceptions import ConfigurationError
from roster_audit.utilities.models import AuditSettings

logger = logging.getLogger(__name__)

# ============================================================================
# CONTRACT CONFIGURATION
# ============================================================================

# Contracted headcount; ROSTER_AUDIT_CONTRACT_TOTAL overrides it at load time
CONTRACT_TOTAL = 531
CONTRACT_TOTAL_ENV = "ROSTER_AUDIT_CONTRACT_TOTAL"

# Optional JSON file with synonym/month/keyword overrides
CONFIG_FILE = os.getenv("ROSTER_AUDIT_CONFIG", "")

# ============================================================================
# WORKBOOK LAYOUT
# ============================================================================

SUMMARY_SHEET_NAME = "Table 1"
TOTAL_ROW_MARKER = "TOTAL="
HEADER_SCAN_MAX_ROWS = 50

DEFAULT_YEAR = "2025"
UNKNOWN_MONTH = "UNKNOWN"

# ============================================================================
# FILE SYSTEM CONFIGURATION
# ============================================================================

EXCLUDED_FOLDERS: Set[str] = {"Template", "archive", "output"}

ROSTER_FILE_PATTERNS = ["*.xlsx", "*.xlsm", "*.xls"]

# ============================================================================
# BILINGUAL DICTIONARIES
# ============================================================================

MONTH_MAP: Dict[str, int] = {
    "JANUARY": 1, "JAN": 1, "FEBRUARY": 2, "FEB": 2, "MARCH": 3, "MAR": 3,
    "APRIL": 4, "APR": 4, "MAY": 5, "JUNE": 6, "JUN": 6,
    "JULY": 7, "JUL": 7, "AUGUST": 8, "AUG": 8, "SEPTEMBER": 9, "SEP": 9,
    "OCTOBER": 10, "OCT": 10, "NOVEMBER": 11, "NOV": 11, "DECEMBER": 12, "DEC": 12,
    "يناير": 1, "فبراير": 2, "مارس": 3, "أبريل": 4, "مايو": 5, "يونيو": 6,
    "يوليو": 7, "أغسطس": 8, "سبتمبر": 9, "أكتوبر": 10, "نوفمبر": 11, "ديسمبر": 12,
}

# Roles: name, mrn (identifier), position, comments, location
COLUMN_SYNONYMS: Dict[str, List[str]] = {
    "name": ["NAME", "FULL NAME", "EMP NAME", "EMPLOYEE NAME", "الاسم", "اسم الموظف"],
    "mrn": ["MRN", "MEDICAL RECORD", "الملف الطبي", "رقم الملف", "M.R.N", "FILE NO"],
    "position": ["POSITION", "JOB TITLE", "TITLE", "الوظيفة", "المسمى"],
    "comments": ["COMMENTS", "REMARKS", "ملاحظات"],
    "location": ["LOCATION", "LOC", "WARD", "UNIT", "DEPT", "الموقع", "القسم"],
}

# Labels that always win the name role over a generic synonym hit
PREFERRED_NAME_LABELS: List[str] = ["NAME (ENG)"]

SUMMARY_SYNONYMS: Dict[str, List[str]] = {
    "actual": ["ACTUAL ON SITE", "TOTAL STAFF", "TOTAL REGISTERED", "TOTAL NUMBER (CONTRACT)",
               "الاجمالي", "العدد الكلي"],
    "used": ["USED VACATION", "ACTUALLY PRESENT", "TOTAL PRESENT", "STAFF ATTENDANCE",
             "الموجودين", "صافي العمل"],
}

VACATION_KEYWORDS: List[str] = ["VAC", "LEAVE", "ANNUAL", "OFF", "إجازة", "اجازه", "AL", "VL"]

# ============================================================================
# BUSINESS RULES
# ============================================================================

SINGLE_DATE_PROBLEM = "Single date found (missing end date)"
UNPAIRED_DATES_PROBLEM = "Unpaired dates detected"
INVALID_DATE_PROBLEM = "Date outside calendar range"
PROBLEM_SEPARATOR = ", "

MATCHED = "Matched"
MISMATCH = "Mismatch"

# ============================================================================
# EXPORT CONFIGURATION
# ============================================================================

EXPORT_SHEETS = {
    "summary": "Executive Summary",
    "register": "Confirmed Vacations",
    "exceptions": "Exceptions",
    "employees": "All Employees",
    "logs": "Processing Log",
}

VACATION_ONLY_SHEET = "Yearly Vacation Records"

SUMMARY_COLUMNS = {
    "month": "Month",
    "actual_on_site_total": "Actual On Site",
    "used_vacation_total": "Used Vacation",
    "calculated_vacation_count": "Calculated Vacation",
    "extracted_vacation_count": "Extracted Vacation",
    "total_vacation_days": "Total Vacation Days",
    "contract_shortfall": "Contract Shortfall",
    "match_status": "Status",
    "difference": "Difference",
}

REGISTER_COLUMNS = {
    "month": "Month",
    "mrn": "MRN",
    "name": "Name",
    "location": "Location",
    "sheet_name": "Sheet",
    "start_date": "Start Date",
    "end_date": "End Date",
    "duration": "Duration (Days)",
    "original_comments": "Original Comments",
}

EXCEPTION_COLUMNS = {
    "month": "Month",
    "mrn": "MRN",
    "name": "Name",
    "location": "Location",
    "sheet_name": "Sheet",
    "problem_type": "Problem",
    "original_comments": "Original Comments",
}

EMPLOYEE_COLUMNS = {
    "mrn": "MRN",
    "name": "Name",
    "location": "Location",
    "position": "Position",
    "last_seen_month": "Last Seen Month",
    "source_sheet": "Source Sheet",
}

LOG_COLUMNS = {
    "file_name": "File",
    "sheet_name": "Sheet",
    "severity": "Severity",
    "message": "Message",
    "blocks_found": "Blocks Found",
    "rows_extracted": "Rows Extracted",
}

REPORT_ROWS_PER_PAGE = 40
REPORT_ORGANIZATION = "Environmental Services Department"


def load_settings(config_path: Optional[str | Path] = None) -> AuditSettings:
    """
    Build audit settings from module constants and an optional JSON override file.

    The override file may contain any of ``contract_total``, ``month_map``,
    ``column_synonyms``, ``summary_synonyms`` and ``vacation_keywords``.
    Dictionary overrides replace whole entries, not individual synonyms.

    Args:
        config_path: JSON file path (falls back to ROSTER_AUDIT_CONFIG)

    Returns:
        AuditSettings instance

    Raises:
        ConfigurationError: If the override file cannot be read or parsed,
            or the contract total is not an integer
    """
    month_map = dict(MONTH_MAP)
    column_synonyms = {role: list(labels) for role, labels in COLUMN_SYNONYMS.items()}
    summary_synonyms = {role: list(labels) for role, labels in SUMMARY_SYNONYMS.items()}
    vacation_keywords = list(VACATION_KEYWORDS)
    contract_total = _parse_contract_total(os.getenv(CONTRACT_TOTAL_ENV, str(CONTRACT_TOTAL)), CONTRACT_TOTAL_ENV)

    path = config_path or CONFIG_FILE
    if path:
        overrides = _read_overrides(Path(path))
        logger.info("Applying configuration overrides from %s", path)
        if "contract_total" in overrides:
            contract_total = _parse_contract_total(overrides["contract_total"], f"{path} contract_total")
        month_map.update({key.upper(): int(value) for key, value in overrides.get("month_map", {}).items()})
        column_synonyms.update(overrides.get("column_synonyms", {}))
        summary_synonyms.update(overrides.get("summary_synonyms", {}))
        vacation_keywords = list(overrides.get("vacation_keywords", vacation_keywords))

    return AuditSettings(
        contract_total=contract_total,
        header_scan_rows=HEADER_SCAN_MAX_ROWS,
        summary_sheet_name=SUMMARY_SHEET_NAME,
        total_row_marker=TOTAL_ROW_MARKER,
        default_year=DEFAULT_YEAR,
        unknown_month=UNKNOWN_MONTH,
        month_map=month_map,
        column_synonyms={role: tuple(labels) for role, labels in column_synonyms.items()},
        preferred_name_labels=tuple(PREFERRED_NAME_LABELS),
        summary_synonyms={role: tuple(labels) for role, labels in summary_synonyms.items()},
        vacation_keywords=tuple(vacation_keywords),
    )


def _read_overrides(path: Path) -> dict:
    """Read and validate the JSON override file."""
    try:
        with path.open(encoding="utf-8") as handle:
            overrides = json.load(handle)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Configuration file {path} could not be loaded: {exc}") from exc

    if not isinstance(overrides, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a JSON object")

    return overrides


def _parse_contract_total(value, source: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Contract total from {source} must be an integer, got {value!r}") from exc
