"""Main entry point for the roster audit system."""
import argparse
import logging
from pathlib import Path

from roster_audit.pipelines import pipeline
from roster_audit.transformers.register_service import search_employees, search_vacations

logger = logging.getLogger(__name__)


def existing_file(path_str: str) -> Path:
    """Argument type for files that must exist."""
    path = Path(path_str)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"File not found: {path_str}")
    return path


def log_search_results(result, query: str) -> None:
    """Log directory and register matches for a name or MRN query."""
    employees = search_employees(result, query)
    vacations = search_vacations(result, query)
    logger.info("Search %r: %d employee(s), %d vacation record(s)", query, len(employees), len(vacations))
    for employee in employees:
        logger.info("  %s | MRN %s | %s | last seen %s",
                    employee.name, employee.mrn or "-", employee.location or "-", employee.last_seen_month)
    for row in vacations:
        logger.info("  %s | %s | %s to %s (%d days)",
                    row.month, row.name, row.start_date, row.end_date, row.duration)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reconcile monthly staff rosters against reported vacation totals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Audit two monthly rosters and write the full audit workbook
  python main.py "DUTY ROSTER January 2025.xlsx" "DUTY ROSTER February 2025.xlsx" -o Full_Audit_Report.xlsx

  # Audit every workbook in a folder, also exporting the vacation registry
  python main.py --folders rosters/2025 -o audit.xlsx --vacations-output Yearly_Vacation_Registry.xlsx

  # Keep going when a workbook cannot be read
  python main.py --folders rosters/2025 --skip-bad-files -o audit.xlsx

  # Look up one employee across the year
  python main.py --folders rosters/2025 --search "ahmed"

  # Use custom synonym tables
  python main.py --folders rosters/2025 --config synonyms.json -o audit.xlsx
        """,
    )

    parser.add_argument(
        "files",
        nargs="*",
        type=existing_file,
        help="Roster workbooks, processed in the order given",
    )

    parser.add_argument(
        "--folders",
        nargs="+",
        help="Folder paths to search for roster workbooks",
    )

    parser.add_argument(
        "-o", "--output",
        help="Full audit workbook (summary, confirmed vacations, exceptions, employees)",
    )

    parser.add_argument(
        "--vacations-output",
        help="Vacation-only workbook with every confirmed vacation",
    )

    parser.add_argument(
        "--monthly-dir",
        help="Folder for one vacation workbook per month",
    )

    parser.add_argument(
        "--report-json",
        help="Write the reconciliation and board report projections as JSON",
    )

    parser.add_argument(
        "--config",
        help="JSON file overriding synonym tables, month names or contract headcount",
    )

    parser.add_argument(
        "--search",
        metavar="QUERY",
        help="Log employees and confirmed vacations whose name or MRN contains QUERY",
    )

    parser.add_argument(
        "--skip-bad-files",
        action="store_true",
        help="Skip unreadable workbooks instead of failing the whole run",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level (default: INFO)",
    )

    return parser


def main(argv=None):
    """Main entry point with CLI argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.files and not args.folders:
        parser.error("provide roster files or --folders")

    # Configure logging with detailed format
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    logger.info("="*70)
    logger.info("ROSTER AUDIT STARTING")
    logger.info("Log level: %s", args.log_level)
    if args.folders:
        logger.info("Folders: %s", args.folders)
    logger.info("="*70)

    try:
        result = pipeline.run_full_pipeline(
            file_paths=args.files,
            folder_paths=args.folders,
            output_path=args.output,
            vacations_output=args.vacations_output,
            monthly_dir=args.monthly_dir,
            report_json=args.report_json,
            config_path=args.config,
            skip_failed_files=args.skip_bad_files,
        )
        totals = result.full_year_totals
        logger.info("="*70)
        logger.info(
            "AUDIT COMPLETED: %d month(s), %d unique employees on leave, %d exception(s)",
            len(result.monthly_summaries),
            totals.total_confirmed_vacation,
            totals.total_exceptions,
        )
        logger.info("="*70)
        if args.search:
            log_search_results(result, args.search)
        return 0
    except KeyboardInterrupt:
        logger.warning("Audit interrupted by user")
        return 130
    except Exception as exc:
        logger.error("="*70)
        logger.error("AUDIT FAILED")
        logger.error("="*70)
        logger.exception("Fatal error: %s", exc)
        logger.error("="*70)
        return 1


if __name__ == "__main__":
    exit(main())
