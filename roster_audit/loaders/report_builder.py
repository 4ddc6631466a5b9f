"""Document projections of audit results for PDF renderers."""
import logging
import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from roster_audit.utilities import config
from roster_audit.utilities.models import AuditResult, AuditSettings, DetailedVacationRow, MonthlyAuditStats
from roster_audit.utilities.utils import month_sort_value, month_year

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ReportTable:
    title: str
    headers: List[str]
    rows: List[List[Any]] = field(default_factory=list)


@dataclass
class ReportPage:
    heading: str
    tables: List[ReportTable] = field(default_factory=list)
    footer: str = ""


@dataclass
class ReportDocument:
    """Title block, metadata and paginated tables of one report."""
    title: str
    subtitle: List[str]
    generated_at: str
    fiscal_year: str
    file_name: str
    pages: List[ReportPage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def sorted_summaries(summaries: Sequence[MonthlyAuditStats], settings: AuditSettings) -> List[MonthlyAuditStats]:
    return sorted(summaries, key=lambda s: month_sort_value(s.month, settings.month_map, settings.default_year))


def fiscal_year(result: AuditResult, settings: AuditSettings) -> str:
    """Year of the latest processed month, or the default year when nothing was processed."""
    summaries = sorted_summaries(result.monthly_summaries, settings)
    if not summaries:
        return settings.default_year
    return month_year(summaries[-1].month, settings.default_year)


def data_integrity_score(result: AuditResult) -> int:
    """Percentage score that drops with the exception-to-employee ratio."""
    employees = len(result.master_employees) or 1
    return max(0, 100 - _round_half_up(len(result.exception_report) / employees * 100))


def average_monthly_participation(result: AuditResult) -> int:
    months = len(result.monthly_summaries) or 1
    return _round_half_up(result.full_year_totals.total_confirmed_vacation / months)


def paginate(rows: Sequence[List[Any]], rows_per_page: int) -> List[List[List[Any]]]:
    """Split table rows into page-sized chunks (one empty chunk for no rows)."""
    if not rows:
        return [[]]
    return [list(rows[start:start + rows_per_page]) for start in range(0, len(rows), rows_per_page)]


def _number_pages(document: ReportDocument, footer_label: str) -> ReportDocument:
    total = len(document.pages)
    for number, page in enumerate(document.pages, start=1):
        page.footer = f"{footer_label} | Page {number} of {total}"
    return document


def build_reconciliation_report(
    result: AuditResult,
    settings: AuditSettings,
    generated_at: Optional[datetime] = None,
    rows_per_page: int = config.REPORT_ROWS_PER_PAGE,
) -> ReportDocument:
    """
    Monthly reconciliation summary report.

    Args:
        result: Audit result
        settings: Audit settings (month ordering, defaults)
        generated_at: Report timestamp (defaults to now)
        rows_per_page: Table rows per page

    Returns:
        ReportDocument
    """
    year = fiscal_year(result, settings)
    document = ReportDocument(
        title="Monthly Reconciliation Summary",
        subtitle=[f"Fiscal Year: {year} Audit"],
        generated_at=(generated_at or datetime.now()).strftime(TIMESTAMP_FORMAT),
        fiscal_year=year,
        file_name=f"Monthly_Reconciliation_Report_{year}.pdf",
    )

    headers = ["Month", "Actual", "Used", "Vac. Count", "Total Days", "Shortfall", "Status", "Variance"]
    rows = [
        [s.month, s.actual_on_site_total, s.used_vacation_total, s.extracted_vacation_count,
         s.total_vacation_days, s.contract_shortfall, s.match_status, s.difference]
        for s in sorted_summaries(result.monthly_summaries, settings)
    ]
    for chunk in paginate(rows, rows_per_page):
        document.pages.append(ReportPage(
            heading=document.title,
            tables=[ReportTable(title="Monthly Reconciliation", headers=headers, rows=chunk)],
        ))

    return _number_pages(document, "Monthly Reconciliation Summary")


def build_board_report(
    result: AuditResult,
    settings: AuditSettings,
    generated_at: Optional[datetime] = None,
    rows_per_page: int = config.REPORT_ROWS_PER_PAGE,
    organization: str = config.REPORT_ORGANIZATION,
) -> ReportDocument:
    """
    Annual vacation report for the board.

    The first page carries the KPI and monthly participation tables; the
    individual leave records follow on their own pages in chronological order.
    """
    year = fiscal_year(result, settings)
    summaries = sorted_summaries(result.monthly_summaries, settings)
    register: List[DetailedVacationRow] = sorted(
        result.detailed_register,
        key=lambda row: month_sort_value(row.month, settings.month_map, settings.default_year),
    )

    document = ReportDocument(
        title="ANNUAL VACATION REPORT",
        subtitle=[f"Prepared for: {organization}", f"FISCAL YEAR {year}"],
        generated_at=(generated_at or datetime.now()).strftime(TIMESTAMP_FORMAT),
        fiscal_year=year,
        file_name=f"Board_Vacation_Full_Audit_{year}.pdf",
    )

    kpis = ReportTable(
        title="EXECUTIVE SUMMARY & KPIS",
        headers=["Key Performance Indicator", "Value"],
        rows=[
            ["Total Unique Employees with Leave", str(result.full_year_totals.total_confirmed_vacation)],
            ["Average Monthly Participation", f"{average_monthly_participation(result)} Staff/Month"],
            ["Data Integrity Score", f"{data_integrity_score(result)}%"],
        ],
    )
    participation = ReportTable(
        title="MONTHLY LEAVE PARTICIPATION",
        headers=["Reporting Month", "Employee Count (Took Leave)",
                 f"Percentage of Contract ({settings.contract_total})"],
        rows=[
            [s.month, f"{s.extracted_vacation_count} Employees",
             f"{s.extracted_vacation_count / (settings.contract_total or 1) * 100:.1f}%"]
            for s in summaries
        ],
    )
    document.pages.append(ReportPage(heading=document.title, tables=[kpis, participation]))

    headers = ["Month", "Staff Name", "MRN", "Start Date", "End Date", "Duration"]
    rows = [
        [row.month, row.name.upper(), row.mrn, row.start_date.isoformat(), row.end_date.isoformat(),
         f"{row.duration} Days"]
        for row in register
    ]
    for chunk in paginate(rows, rows_per_page):
        document.pages.append(ReportPage(
            heading="Individual Leave Records",
            tables=[ReportTable(title="Individual Leave Records", headers=headers, rows=chunk)],
        ))

    logger.info("Board report: %d page(s), %d leave record(s)", len(document.pages), len(rows))
    return _number_pages(document, "Employees' Leave Report")
