"""Spreadsheet export of audit results."""
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from roster_audit.utilities import config
from roster_audit.utilities.exceptions import EmptyExportError
from roster_audit.utilities.models import AuditResult, DetailedVacationRow

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
MAX_COLUMN_WIDTH = 60


def records_to_frame(records: Sequence, columns: Mapping[str, str]) -> pd.DataFrame:
    """
    Project dataclass records onto a frame with display headings.

    Args:
        records: Dataclass instances of one type
        columns: Field name to heading, in output order

    Returns:
        DataFrame with one row per record (headings only when empty)
    """
    rows = []
    for record in records:
        values = asdict(record)
        rows.append({heading: values[field] for field, heading in columns.items()})
    return pd.DataFrame(rows, columns=list(columns.values()))


def summary_frame(result: AuditResult) -> pd.DataFrame:
    return records_to_frame(result.monthly_summaries, config.SUMMARY_COLUMNS)


def register_frame(rows: Sequence[DetailedVacationRow]) -> pd.DataFrame:
    return records_to_frame(rows, config.REGISTER_COLUMNS)


def exception_frame(result: AuditResult) -> pd.DataFrame:
    return records_to_frame(result.exception_report, config.EXCEPTION_COLUMNS)


def employee_frame(result: AuditResult) -> pd.DataFrame:
    return records_to_frame(result.master_employees, config.EMPLOYEE_COLUMNS)


def log_frame(result: AuditResult) -> pd.DataFrame:
    return records_to_frame(result.logs, config.LOG_COLUMNS)


def audit_frames(result: AuditResult, include_logs: bool = False) -> Dict[str, pd.DataFrame]:
    """Sheet name to frame for the full audit workbook."""
    frames = {
        config.EXPORT_SHEETS["summary"]: summary_frame(result),
        config.EXPORT_SHEETS["register"]: register_frame(result.detailed_register),
        config.EXPORT_SHEETS["exceptions"]: exception_frame(result),
        config.EXPORT_SHEETS["employees"]: employee_frame(result),
    }
    if include_logs:
        frames[config.EXPORT_SHEETS["logs"]] = log_frame(result)
    return frames


def write_audit_workbook(result: AuditResult, output_path: str | Path, include_logs: bool = False) -> Path:
    """
    Write the full audit workbook.

    Args:
        result: Audit result
        output_path: Target .xlsx path
        include_logs: Add a processing log sheet

    Returns:
        Path written
    """
    return _write_frames(audit_frames(result, include_logs=include_logs), output_path)


def write_vacation_workbook(rows: Sequence[DetailedVacationRow], output_path: str | Path) -> Path:
    """
    Write a vacation-only workbook.

    Raises:
        EmptyExportError: If there are no vacation rows
    """
    if not rows:
        raise EmptyExportError("No vacation records to export")
    return _write_frames({config.VACATION_ONLY_SHEET: register_frame(rows)}, output_path)


def vacations_for_month(result: AuditResult, month: str) -> List[DetailedVacationRow]:
    """Register rows for one month label."""
    rows = [row for row in result.detailed_register if row.month == month]
    if not rows:
        raise EmptyExportError(f"No vacation records found for {month}")
    return rows


def monthly_export_name(month: str) -> str:
    return f"Vacations_{'_'.join(month.split())}.xlsx"


def _write_frames(frames: Mapping[str, pd.DataFrame], output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, frame in frames.items():
            frame.to_excel(writer, sheet_name=sheet_name, index=False)
            _style_sheet(writer.sheets[sheet_name], frame)

    logger.info("Wrote %s (%s)", path, ", ".join(f"{name}: {len(frame)}" for name, frame in frames.items()))
    return path


def _style_sheet(worksheet, frame: pd.DataFrame) -> None:
    """Bold, shaded header row and column widths fitted to content."""
    for cell in worksheet[1]:
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL

    for index, column in enumerate(frame.columns, start=1):
        values = [str(column)] + [str(value) for value in frame[column].tolist()]
        width = min(max(len(value) for value in values) + 2, MAX_COLUMN_WIDTH)
        worksheet.column_dimensions[get_column_letter(index)].width = width

    worksheet.freeze_panes = "A2"
