"""Excel roster discovery and reading for the roster audit system."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from roster_audit.utilities import config
from roster_audit.utilities.exceptions import WorkbookReadError
from roster_audit.utilities.models import RosterFile

logger = logging.getLogger(__name__)


def find_excel_files(
    folder_path: str | Path,
    excluded_folders: Optional[Sequence[str]] = None,
) -> List[Path]:
    """
    Find all roster workbooks in folder, excluding specified folders.

    Args:
        folder_path: Path to search
        excluded_folders: Folders to skip

    Returns:
        Sorted list of Excel file paths
    """
    base_path = Path(folder_path)
    exclusions = {folder.lower() for folder in (excluded_folders or config.EXCLUDED_FOLDERS)}
    files: List[Path] = []

    if not base_path.exists():
        logger.warning("Folder %s does not exist", base_path)
        return files

    for pattern in config.ROSTER_FILE_PATTERNS:
        for path in base_path.rglob(pattern):
            if path.name.startswith("~$"):
                continue
            relative_parts = path.relative_to(base_path).parts[:-1]
            if any(part.lower() in exclusions for part in relative_parts):
                continue
            files.append(path)

    return sorted(set(files))


def frame_to_grid(frame: pd.DataFrame) -> List[List[Any]]:
    """Convert a header-less sheet frame into rows of plain cell values (None for blanks)."""
    if frame is None or frame.empty:
        return []
    cleaned = frame.astype(object).where(pd.notna(frame), None)
    return cleaned.values.tolist()


def read_roster_workbook(file_path: str | Path) -> RosterFile:
    """
    Read every sheet of a workbook as a raw grid.

    Args:
        file_path: Workbook path

    Returns:
        RosterFile with sheets in workbook order

    Raises:
        WorkbookReadError: If the workbook or one of its sheets cannot be read
    """
    path = Path(file_path)
    try:
        workbook = pd.ExcelFile(path)
    except Exception as exc:
        raise WorkbookReadError(path.name, str(exc)) from exc

    sheets: Dict[str, List[List[Any]]] = {}
    with workbook:
        for sheet_name in workbook.sheet_names:
            try:
                frame = workbook.parse(sheet_name, header=None)
            except Exception as exc:
                raise WorkbookReadError(path.name, f"sheet '{sheet_name}': {exc}") from exc
            sheets[sheet_name] = frame_to_grid(frame)

    logger.debug("Read %s: %d sheet(s)", path.name, len(sheets))
    return RosterFile(file_name=path.name, sheets=sheets)


def collect_roster_paths(
    file_paths: Optional[Sequence[str | Path]] = None,
    folder_paths: Optional[Sequence[str | Path]] = None,
) -> List[Path]:
    """
    Build the ordered list of roster files to audit.

    Explicit files come first in the order given, followed by the files found
    in each folder. Duplicates keep their first position.
    """
    ordered: List[Path] = []
    for file_path in file_paths or []:
        ordered.append(Path(file_path))
    for folder in folder_paths or []:
        found = find_excel_files(folder)
        if not found:
            logger.warning("No Excel files found in directory: %s", folder)
        ordered.extend(found)

    unique: List[Path] = []
    seen = set()
    for path in ordered:
        marker = path.resolve()
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(path)
    return unique
