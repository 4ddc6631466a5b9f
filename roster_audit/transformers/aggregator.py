"""Run-wide aggregation of per-file reconciliation results."""
import logging
from typing import Dict, List

from roster_audit.utilities.models import (
    AuditResult,
    AuditSettings,
    DetailedVacationRow,
    ExceptionRow,
    FileAudit,
    FullYearTotals,
    MasterEmployee,
    MonthlyAuditStats,
    ProcessingLog,
)
from roster_audit.utilities.utils import month_sort_value

logger = logging.getLogger(__name__)


class AuditAccumulator:
    """
    Ordered fold of FileAudit values into one AuditResult.

    Files must be added in the caller's file order: a later file replaces the
    directory entry of any employee key it shares with an earlier one.
    """

    def __init__(self, settings: AuditSettings):
        self.settings = settings
        self.summaries: List[MonthlyAuditStats] = []
        self.register: List[DetailedVacationRow] = []
        self.exceptions: List[ExceptionRow] = []
        self.employees: Dict[str, MasterEmployee] = {}
        self.logs: List[ProcessingLog] = []

    def add(self, audit: FileAudit) -> None:
        """Fold one file's result into the run."""
        self.summaries.append(audit.stats)
        self.register.extend(audit.vacations)
        self.exceptions.extend(audit.exceptions)
        self.employees.update(audit.employees)
        self.logs.extend(audit.logs)

    def add_log(self, entry: ProcessingLog) -> None:
        self.logs.append(entry)

    def build(self) -> AuditResult:
        """
        Produce the final result.

        Summaries are ordered by year and month number. Year totals are sums
        of the monthly figures, except confirmed vacation, which counts each
        identifier-or-name in the register once.
        """
        summaries = sorted(
            self.summaries,
            key=lambda stats: month_sort_value(stats.month, self.settings.month_map, self.settings.default_year),
        )

        totals = FullYearTotals(
            total_actual_on_site=sum(s.actual_on_site_total for s in summaries),
            total_used_vacation=sum(s.used_vacation_total for s in summaries),
            total_calculated_vacation=sum(s.calculated_vacation_count for s in summaries),
            total_confirmed_vacation=len({row.key for row in self.register}),
            total_vacation_days=sum(s.total_vacation_days for s in summaries),
            total_exceptions=len(self.exceptions),
        )

        logger.info(
            "Aggregated %d month(s): %d unique employees on leave, %d vacation days, %d exceptions",
            len(summaries),
            totals.total_confirmed_vacation,
            totals.total_vacation_days,
            totals.total_exceptions,
        )

        return AuditResult(
            monthly_summaries=summaries,
            detailed_register=list(self.register),
            exception_report=list(self.exceptions),
            master_employees=list(self.employees.values()),
            full_year_totals=totals,
            logs=list(self.logs),
        )
