"""Data models for the roster audit system."""
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

SheetGrid = Sequence[Sequence[Any]]

SEVERITY_INFO = "info"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


@dataclass(frozen=True)
class AuditSettings:
    """Immutable lookup tables and constants injected into the engine."""
    contract_total: int
    header_scan_rows: int
    summary_sheet_name: str
    total_row_marker: str
    default_year: str
    unknown_month: str
    month_map: Mapping[str, int]
    column_synonyms: Mapping[str, Tuple[str, ...]]
    preferred_name_labels: Tuple[str, ...]
    summary_synonyms: Mapping[str, Tuple[str, ...]]
    vacation_keywords: Tuple[str, ...]


@dataclass
class RosterFile:
    """One roster workbook as ordered sheet grids."""
    file_name: str
    sheets: Dict[str, SheetGrid] = field(default_factory=dict)


@dataclass(frozen=True)
class VacationRange:
    """A paired start/end date taken from a remark."""
    start_date: date
    end_date: date
    duration: int
    original_text: str


@dataclass
class DetailedVacationRow:
    """One confirmed vacation instance."""
    month: str
    mrn: str
    name: str
    location: str
    sheet_name: str
    start_date: date
    end_date: date
    duration: int
    original_comments: str

    @property
    def key(self) -> str:
        return self.mrn or self.name


@dataclass
class ExceptionRow:
    """A remark with date-like text that could not be resolved into a range."""
    month: str
    mrn: str
    name: str
    location: str
    sheet_name: str
    problem_type: str
    original_comments: str


@dataclass
class MonthlyAuditStats:
    """Reconciliation figures for one processed file."""
    month: str
    actual_on_site_total: float = 0
    used_vacation_total: float = 0
    calculated_vacation_count: float = 0
    extracted_vacation_count: int = 0
    total_vacation_days: int = 0
    contract_shortfall: float = 0
    match_status: str = "Mismatch"
    difference: float = 0


@dataclass
class MasterEmployee:
    """Directory entry for the most recently processed occurrence of an employee."""
    mrn: str
    name: str
    location: str
    position: str
    last_seen_month: str
    source_sheet: str

    @property
    def key(self) -> str:
        return self.mrn or self.name


@dataclass
class ProcessingLog:
    """Structured processing event for a file/sheet."""
    file_name: str
    sheet_name: str
    message: str = ""
    severity: str = SEVERITY_INFO
    blocks_found: Optional[int] = None
    rows_extracted: Optional[int] = None


@dataclass
class HeaderMapping:
    """Located header row and the column index per role."""
    row_index: int
    columns: Dict[str, int] = field(default_factory=dict)

    @property
    def name(self) -> int:
        return self.columns["name"]

    def get(self, role: str) -> Optional[int]:
        return self.columns.get(role)


@dataclass
class SummaryFigures:
    """Management-reported totals read from the summary sheet."""
    actual_on_site_total: float = 0
    used_vacation_total: float = 0
    sheet_found: bool = False
    total_row_found: bool = False
    missing_columns: List[str] = field(default_factory=list)


@dataclass
class RemarkParseResult:
    """Ranges and problems found in one remark."""
    ranges: List[VacationRange] = field(default_factory=list)
    problems: List[str] = field(default_factory=list)
    token_count: int = 0


@dataclass
class FileAudit:
    """Side-effect-free result of reconciling a single roster file."""
    file_name: str
    stats: MonthlyAuditStats
    vacations: List[DetailedVacationRow] = field(default_factory=list)
    exceptions: List[ExceptionRow] = field(default_factory=list)
    employees: Dict[str, MasterEmployee] = field(default_factory=dict)
    logs: List[ProcessingLog] = field(default_factory=list)


@dataclass
class FullYearTotals:
    """Year-level totals across all processed months."""
    total_actual_on_site: float = 0
    total_used_vacation: float = 0
    total_calculated_vacation: float = 0
    total_confirmed_vacation: int = 0
    total_vacation_days: int = 0
    total_exceptions: int = 0


@dataclass
class AuditResult:
    """Aggregate result of an audit run."""
    monthly_summaries: List[MonthlyAuditStats] = field(default_factory=list)
    detailed_register: List[DetailedVacationRow] = field(default_factory=list)
    exception_report: List[ExceptionRow] = field(default_factory=list)
    master_employees: List[MasterEmployee] = field(default_factory=list)
    full_year_totals: FullYearTotals = field(default_factory=FullYearTotals)
    logs: List[ProcessingLog] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
