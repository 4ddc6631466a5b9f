"""Header row detection and column role mapping for roster sheets."""
import logging
from typing import Any, Dict, Optional, Sequence

from roster_audit.transformers.data_processor import matches_synonym, normalize_text
from roster_audit.utilities.models import AuditSettings, HeaderMapping, SheetGrid

logger = logging.getLogger(__name__)

OPTIONAL_ROLES = ("mrn", "comments", "position", "location")


class HeaderResolver:
    """
    Locate the header row of a staff sheet and map column roles to indexes.

    The first row (within the scan window) that contains a name column is the
    header row. In that row an exact "NAME" or a preferred label such as
    "NAME (ENG)" replaces a generic name synonym found earlier; a generic
    synonym only fills the name role while it is still empty.
    """

    def __init__(self, settings: AuditSettings):
        self.scan_rows = settings.header_scan_rows
        self.synonyms = settings.column_synonyms
        self.preferred_name_labels = [normalize_text(label) for label in settings.preferred_name_labels]

    def resolve(self, grid: SheetGrid) -> Optional[HeaderMapping]:
        """
        Find the header row of a sheet.

        Args:
            grid: Sheet rows as sequences of cell values

        Returns:
            HeaderMapping, or None when no row in the window has a name column
        """
        for row_index, row in enumerate(grid[: self.scan_rows]):
            columns = self._map_row(row or [])
            if "name" in columns:
                logger.debug("Header found at row %d: %s", row_index, columns)
                return HeaderMapping(row_index=row_index, columns=columns)
        return None

    def _map_row(self, row: Sequence[Any]) -> Dict[str, int]:
        columns: Dict[str, int] = {}
        for index, cell in enumerate(row):
            norm = normalize_text(cell)
            if not norm:
                continue

            if norm == "NAME" or any(label in norm for label in self.preferred_name_labels):
                columns["name"] = index
            elif "name" not in columns and matches_synonym(norm, self.synonyms.get("name", ())):
                columns["name"] = index

            for role in OPTIONAL_ROLES:
                if matches_synonym(norm, self.synonyms.get(role, ())):
                    columns[role] = index
        return columns
