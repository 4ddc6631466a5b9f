"""Roster grid and workbook builders shared by the test modules."""
from typing import Any, List, Optional, Sequence

import pandas as pd

from roster_audit.utilities.models import RosterFile

STAFF_HEADER = ["No", "MRN", "Name", "Position", "Ward", "Comments"]


def summary_grid(actual: Any, used: Any) -> List[List[Any]]:
    return [
        ["Monthly Manpower Summary", None, None],
        [None, None, None],
        ["Location", "Actual On Site", "Used Vacation"],
        ["Ward A", 300, 280],
        ["Ward B", 200, 190],
        ["TOTAL=", actual, used],
    ]


def staff_grid(rows: Sequence[Sequence[Any]], title: str = "Staff list - Ward A") -> List[List[Any]]:
    """Staff sheet with a title row, a blank row, the header and the given rows."""
    return [[title], [], list(STAFF_HEADER)] + [list(row) for row in rows]


def staff_row(number: int, mrn: Any, name: str, comments: Optional[str] = None,
              position: str = "Cleaner", ward: str = "Ward A") -> List[Any]:
    return [number, mrn, name, position, ward, comments]


def make_roster(file_name: str, staff_rows: Sequence[Sequence[Any]],
                actual: Any = None, used: Any = None, sheet_name: str = "Ward A") -> RosterFile:
    sheets = {}
    if actual is not None or used is not None:
        sheets["Table 1"] = summary_grid(actual, used)
    sheets[sheet_name] = staff_grid(staff_rows)
    return RosterFile(file_name=file_name, sheets=sheets)


def write_workbook(path, sheets) -> None:
    """Write raw grids to an .xlsx file without header or index."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, grid in sheets.items():
            pd.DataFrame(grid).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
