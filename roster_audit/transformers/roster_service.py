"""Per-file reconciliation of roster workbooks."""
import logging
from typing import Optional, Set

from roster_audit.extractors.header_resolver import HeaderResolver
from roster_audit.extractors.summary_reader import read_summary_figures
from roster_audit.transformers.data_processor import cell_at, cell_text, mentions_keyword
from roster_audit.transformers.date_extractor import DateRangeExtractor
from roster_audit.utilities import config
from roster_audit.utilities.models import (
    SEVERITY_INFO,
    SEVERITY_WARNING,
    AuditSettings,
    DetailedVacationRow,
    ExceptionRow,
    FileAudit,
    MasterEmployee,
    MonthlyAuditStats,
    ProcessingLog,
    RosterFile,
    SheetGrid,
    SummaryFigures,
)
from roster_audit.utilities.utils import extract_month_label

logger = logging.getLogger(__name__)


class RosterReconciler:
    """
    Reconcile one roster file at a time.

    ``reconcile`` is a pure function of the file content: it returns a
    FileAudit and leaves merging into run-wide state to the aggregator.
    """

    def __init__(
        self,
        settings: AuditSettings,
        resolver: Optional[HeaderResolver] = None,
        extractor: Optional[DateRangeExtractor] = None,
    ):
        self.settings = settings
        self.resolver = resolver or HeaderResolver(settings)
        self.extractor = extractor or DateRangeExtractor()

    def reconcile(self, roster: RosterFile) -> FileAudit:
        """
        Reconcile a single roster file.

        Args:
            roster: File name and its sheet grids

        Returns:
            FileAudit with the month's stats, rows, directory updates and logs
        """
        month = extract_month_label(
            roster.file_name,
            self.settings.month_map,
            default_year=self.settings.default_year,
            unknown_month=self.settings.unknown_month,
        )
        logger.info("Reconciling %s as %s", roster.file_name, month)

        audit = FileAudit(file_name=roster.file_name, stats=MonthlyAuditStats(month=month))

        summary = read_summary_figures(roster.sheets, self.settings)
        self._log_summary(audit, summary)

        confirmed: Set[str] = set()
        for sheet_name, grid in roster.sheets.items():
            if sheet_name == self.settings.summary_sheet_name:
                continue
            self._process_sheet(audit, month, sheet_name, grid, confirmed)

        audit.stats = self._build_stats(month, summary, audit, confirmed)
        logger.info(
            "%s: %d confirmed employees, %d vacation rows, %d exceptions (%s)",
            month,
            audit.stats.extracted_vacation_count,
            len(audit.vacations),
            len(audit.exceptions),
            audit.stats.match_status,
        )
        return audit

    def _process_sheet(
        self,
        audit: FileAudit,
        month: str,
        sheet_name: str,
        grid: SheetGrid,
        confirmed: Set[str],
    ) -> None:
        header = self.resolver.resolve(grid)
        if header is None:
            logger.warning("%s | %s: no name column in first %d rows; sheet skipped",
                           audit.file_name, sheet_name, self.settings.header_scan_rows)
            audit.logs.append(ProcessingLog(
                file_name=audit.file_name,
                sheet_name=sheet_name,
                message="No header row with a name column found; sheet skipped",
                severity=SEVERITY_WARNING,
                blocks_found=0,
                rows_extracted=0,
            ))
            return

        rows_extracted = 0
        unpaired_rows = 0
        undated_leave_rows = 0

        for row in grid[header.row_index + 1:]:
            name = cell_text(cell_at(row, header.name))
            if not name:
                continue

            mrn = cell_text(cell_at(row, header.get("mrn")))
            comments = cell_text(cell_at(row, header.get("comments")))
            location = cell_text(cell_at(row, header.get("location")))
            position = cell_text(cell_at(row, header.get("position")))
            key = mrn or name
            rows_extracted += 1

            audit.employees[key] = MasterEmployee(
                mrn=mrn,
                name=name,
                location=location,
                position=position,
                last_seen_month=month,
                source_sheet=sheet_name,
            )

            if not comments:
                continue

            parsed = self.extractor.extract(comments)
            if parsed.ranges:
                confirmed.add(key)
                for vacation in parsed.ranges:
                    audit.vacations.append(DetailedVacationRow(
                        month=month,
                        mrn=mrn,
                        name=name,
                        location=location,
                        sheet_name=sheet_name,
                        start_date=vacation.start_date,
                        end_date=vacation.end_date,
                        duration=vacation.duration,
                        original_comments=comments,
                    ))
                if parsed.problems:
                    unpaired_rows += 1
            elif parsed.problems:
                audit.exceptions.append(ExceptionRow(
                    month=month,
                    mrn=mrn,
                    name=name,
                    location=location,
                    sheet_name=sheet_name,
                    problem_type=config.PROBLEM_SEPARATOR.join(parsed.problems),
                    original_comments=comments,
                ))
            elif not parsed.token_count and mentions_keyword(comments, self.settings.vacation_keywords):
                undated_leave_rows += 1

        audit.logs.append(ProcessingLog(
            file_name=audit.file_name,
            sheet_name=sheet_name,
            message=f"Header at row {header.row_index + 1}; extracted {rows_extracted} employee records",
            severity=SEVERITY_INFO,
            blocks_found=1,
            rows_extracted=rows_extracted,
        ))
        if unpaired_rows:
            audit.logs.append(ProcessingLog(
                file_name=audit.file_name,
                sheet_name=sheet_name,
                message=f"{unpaired_rows} remark(s) with unpaired or invalid dates; paired ranges were kept",
                severity=SEVERITY_WARNING,
            ))
        if undated_leave_rows:
            audit.logs.append(ProcessingLog(
                file_name=audit.file_name,
                sheet_name=sheet_name,
                message=f"{undated_leave_rows} remark(s) mention leave without any date",
                severity=SEVERITY_INFO,
            ))

    def _log_summary(self, audit: FileAudit, summary: SummaryFigures) -> None:
        sheet_name = self.settings.summary_sheet_name
        if not summary.sheet_found:
            message = f"Summary sheet '{sheet_name}' not found; reported totals default to 0"
        elif summary.missing_columns:
            message = f"Summary columns not found: {', '.join(summary.missing_columns)}; defaulting to 0"
        elif not summary.total_row_found:
            message = f"No '{self.settings.total_row_marker}' row in summary sheet; totals default to 0"
        else:
            audit.logs.append(ProcessingLog(
                file_name=audit.file_name,
                sheet_name=sheet_name,
                message=(f"Reported actual on site {summary.actual_on_site_total}, "
                         f"used vacation {summary.used_vacation_total}"),
            ))
            return

        logger.warning("%s | %s", audit.file_name, message)
        audit.logs.append(ProcessingLog(
            file_name=audit.file_name,
            sheet_name=sheet_name,
            message=message,
            severity=SEVERITY_WARNING,
        ))

    def _build_stats(
        self,
        month: str,
        summary: SummaryFigures,
        audit: FileAudit,
        confirmed: Set[str],
    ) -> MonthlyAuditStats:
        actual = summary.actual_on_site_total
        used = summary.used_vacation_total
        calculated = actual - used
        extracted = len(confirmed)
        difference = extracted - calculated
        baseline = used if used != 0 else actual

        return MonthlyAuditStats(
            month=month,
            actual_on_site_total=actual,
            used_vacation_total=used,
            calculated_vacation_count=calculated,
            extracted_vacation_count=extracted,
            total_vacation_days=sum(row.duration for row in audit.vacations),
            contract_shortfall=self.settings.contract_total - baseline,
            match_status=config.MATCHED if difference == 0 else config.MISMATCH,
            difference=difference,
        )
