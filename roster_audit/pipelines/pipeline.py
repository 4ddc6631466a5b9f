"""Main orchestration pipeline for roster audits."""
import json
import logging
import time
from pathlib import Path
from typing import Iterable, Optional, Sequence

from roster_audit.extractors import excel_reader
from roster_audit.loaders import excel_exporter, report_builder
from roster_audit.transformers.aggregator import AuditAccumulator
from roster_audit.transformers.roster_service import RosterReconciler
from roster_audit.utilities import config
from roster_audit.utilities.exceptions import AuditRunError, EmptyExportError
from roster_audit.utilities.models import SEVERITY_ERROR, AuditResult, AuditSettings, ProcessingLog, RosterFile

logger = logging.getLogger(__name__)


def audit_rosters(
    rosters: Iterable[RosterFile],
    settings: Optional[AuditSettings] = None,
) -> AuditResult:
    """
    Audit roster files that are already in memory.

    Files are folded in iteration order, which decides the directory entry
    kept for employees seen in more than one file.

    Args:
        rosters: Roster files as sheet grids
        settings: Audit settings (defaults from config)

    Returns:
        AuditResult
    """
    settings = settings or config.load_settings()
    reconciler = RosterReconciler(settings)
    accumulator = AuditAccumulator(settings)

    for roster in rosters:
        accumulator.add(reconciler.reconcile(roster))

    return accumulator.build()


def run_audit(
    file_paths: Sequence[str | Path],
    settings: Optional[AuditSettings] = None,
    skip_failed_files: bool = False,
) -> AuditResult:
    """
    Read and audit roster workbooks in the given order.

    By default the first failing file aborts the run and no result is
    returned. With skip_failed_files the failing file is left out, an error
    entry is added to the processing log and the remaining files are audited.

    Args:
        file_paths: Workbook paths in processing order
        settings: Audit settings (defaults from config)
        skip_failed_files: Isolate per-file failures instead of aborting

    Returns:
        AuditResult

    Raises:
        AuditRunError: If a file fails and skip_failed_files is False
    """
    settings = settings or config.load_settings()
    reconciler = RosterReconciler(settings)
    accumulator = AuditAccumulator(settings)
    failed = 0

    for file_path in file_paths:
        path = Path(file_path)
        try:
            audit = reconciler.reconcile(excel_reader.read_roster_workbook(path))
        except Exception as exc:
            if not skip_failed_files:
                raise AuditRunError(path.name, exc) from exc
            failed += 1
            logger.error("✗ Skipping %s: %s", path.name, exc)
            accumulator.add_log(ProcessingLog(
                file_name=path.name,
                sheet_name="",
                message=f"File could not be processed: {exc}",
                severity=SEVERITY_ERROR,
            ))
            continue
        accumulator.add(audit)

    if failed:
        logger.warning("⚠ %d of %d file(s) were skipped", failed, len(file_paths))

    return accumulator.build()


def export_results(
    result: AuditResult,
    settings: AuditSettings,
    output_path: Optional[str | Path] = None,
    vacations_output: Optional[str | Path] = None,
    monthly_dir: Optional[str | Path] = None,
    report_json: Optional[str | Path] = None,
) -> None:
    """Write whichever exports were requested."""
    if output_path:
        excel_exporter.write_audit_workbook(result, output_path, include_logs=True)

    if vacations_output:
        if result.detailed_register:
            excel_exporter.write_vacation_workbook(result.detailed_register, vacations_output)
        else:
            logger.warning("No vacation records found; %s not written", vacations_output)

    if monthly_dir:
        for month in dict.fromkeys(summary.month for summary in result.monthly_summaries):
            try:
                rows = excel_exporter.vacations_for_month(result, month)
            except EmptyExportError:
                logger.info("No vacation records for %s; skipping monthly export", month)
                continue
            excel_exporter.write_vacation_workbook(
                rows, Path(monthly_dir) / excel_exporter.monthly_export_name(month)
            )

    if report_json:
        payload = {
            "reconciliation": report_builder.build_reconciliation_report(result, settings).to_dict(),
            "board": report_builder.build_board_report(result, settings).to_dict(),
        }
        path = Path(report_json)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
        logger.info("Wrote report projections to %s", path)


def run_full_pipeline(
    file_paths: Optional[Sequence[str | Path]] = None,
    folder_paths: Optional[Sequence[str | Path]] = None,
    output_path: Optional[str | Path] = None,
    vacations_output: Optional[str | Path] = None,
    monthly_dir: Optional[str | Path] = None,
    report_json: Optional[str | Path] = None,
    config_path: Optional[str | Path] = None,
    skip_failed_files: bool = False,
) -> AuditResult:
    """
    Run the complete roster audit pipeline.

    Args:
        file_paths: Explicit workbook paths (processed first, in order)
        folder_paths: Folders searched for workbooks
        output_path: Full audit workbook target
        vacations_output: Vacation-only workbook target
        monthly_dir: Folder for one vacation workbook per month
        report_json: Target for the report projections as JSON
        config_path: JSON configuration override file
        skip_failed_files: Isolate per-file failures instead of aborting

    Returns:
        AuditResult
    """
    settings = config.load_settings(config_path)
    paths = excel_reader.collect_roster_paths(file_paths, folder_paths)

    logger.info("=" * 70)
    logger.info("STARTING ROSTER AUDIT PIPELINE")
    logger.info("Files: %d | Contract headcount: %d", len(paths), settings.contract_total)
    logger.info("=" * 70)

    start_time = time.time()

    if not paths:
        logger.warning("⚠ WARNING: No roster files to process")

    result = run_audit(paths, settings, skip_failed_files=skip_failed_files)

    for summary in result.monthly_summaries:
        logger.info(
            "  %-16s actual=%s used=%s calculated=%s extracted=%d days=%d -> %s (%+g)",
            summary.month,
            summary.actual_on_site_total,
            summary.used_vacation_total,
            summary.calculated_vacation_count,
            summary.extracted_vacation_count,
            summary.total_vacation_days,
            summary.match_status,
            summary.difference,
        )

    export_results(
        result,
        settings,
        output_path=output_path,
        vacations_output=vacations_output,
        monthly_dir=monthly_dir,
        report_json=report_json,
    )

    elapsed_time = time.time() - start_time
    logger.info("=" * 70)
    logger.info("PIPELINE COMPLETE - Total time: %.2f seconds", elapsed_time)
    logger.info("=" * 70)

    return result
