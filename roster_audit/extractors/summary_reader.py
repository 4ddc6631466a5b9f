"""Management summary ("Table 1") reading for roster workbooks."""
import logging
from typing import Dict, Mapping, Optional, Sequence

from roster_audit.transformers.data_processor import cell_at, matches_synonym, normalize_text, to_number
from roster_audit.utilities.models import AuditSettings, SheetGrid, SummaryFigures

logger = logging.getLogger(__name__)


def read_summary_figures(
    sheets: Mapping[str, SheetGrid],
    settings: AuditSettings,
) -> SummaryFigures:
    """
    Read the reported actual-on-site and used-vacation totals.

    Missing sheet, columns or total row leave the affected figure at 0.

    Args:
        sheets: Workbook sheets by name
        settings: Audit settings with summary synonyms

    Returns:
        SummaryFigures (sheet_found/total_row_found tell what was located)
    """
    figures = SummaryFigures()
    grid = sheets.get(settings.summary_sheet_name)
    if grid is None:
        return figures

    figures.sheet_found = True
    columns = _find_summary_columns(grid, settings)
    figures.missing_columns = [role for role in settings.summary_synonyms if role not in columns]

    total_row = _find_total_row(grid, settings.total_row_marker)
    if total_row is None:
        logger.debug("No %r row in summary sheet", settings.total_row_marker)
        return figures

    figures.total_row_found = True
    row = grid[total_row]
    if "actual" in columns:
        figures.actual_on_site_total = to_number(cell_at(row, columns["actual"]))
    if "used" in columns:
        figures.used_vacation_total = to_number(cell_at(row, columns["used"]))

    return figures


def _find_summary_columns(grid: SheetGrid, settings: AuditSettings) -> Dict[str, int]:
    """
    Column per summary role within the header scan window.

    The first synonym of a role is its canonical label and wins wherever it
    appears; the other synonyms apply only when the canonical label is absent.
    """
    window = grid[: settings.header_scan_rows]
    columns: Dict[str, int] = {}
    for role, synonyms in settings.summary_synonyms.items():
        index = _first_matching_column(window, synonyms[:1])
        if index is None:
            index = _first_matching_column(window, synonyms[1:])
        if index is not None:
            columns[role] = index
    return columns


def _first_matching_column(window: SheetGrid, synonyms: Sequence[str]) -> Optional[int]:
    if not synonyms:
        return None
    for row in window:
        for index, cell in enumerate(row or []):
            if matches_synonym(cell, synonyms):
                return index
    return None


def _find_total_row(grid: SheetGrid, marker: str) -> Optional[int]:
    marker = normalize_text(marker)
    for index, row in enumerate(grid):
        if marker in normalize_text(cell_at(row, 0)):
            return index
    return None
