"""
Command-line interface for the delivery ledger.

Usage:
    delivery-ledger submit --workbook <path> --values '<json list>'
    delivery-ledger report --workbook <path> [--date YYYY-MM-DD]
    delivery-ledger sheets --workbook <path>
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from delivery_ledger.core.config import LedgerConfig, load_config
from delivery_ledger.core.errors import ConfigurationError
from delivery_ledger.core.models import FormSubmitEvent
from delivery_ledger.ingest import IngestHandler, handle_form_submit
from delivery_ledger.observability.logger import DEFAULT_LOGGER_NAME, get_logger, setup_logger
from delivery_ledger.report import ReportGenerator
from delivery_ledger.store import WorkbookStore
from delivery_ledger.ui import ConsoleNotifier

logger = get_logger(__name__)


def open_store(args, config: LedgerConfig) -> WorkbookStore:
    return WorkbookStore.open(args.workbook, timezone=config.timezone)


def submit_command(args, config: LedgerConfig) -> int:
    """
    Append a response to the intake sheet and route it, as the forms
    front end and its trigger would.

    Args:
        args: Command-line arguments
        config: Ledger configuration

    Returns:
        Exit code
    """
    try:
        values = json.loads(args.values)
    except json.JSONDecodeError as e:
        logger.error(f"--values is not valid JSON: {e}")
        return 1
    if not isinstance(values, list):
        logger.error("--values must be a JSON list of answers")
        return 1

    with open_store(args, config) as store:
        intake = store.get_sheet(config.intake_sheet_name)
        if intake is None:
            logger.error(f'Intake sheet "{config.intake_sheet_name}" not found')
            return 1

        row = intake.append_row(values, min_row=2)
        event = FormSubmitEvent(sheet_name=intake.name, row=row, values=values)

        handler = IngestHandler(store, config)
        result = handle_form_submit(event, handler)

    if result is None:
        print("Submission recorded on the intake sheet but not routed; see the log.")
        return 1

    print(f'Routed to "{result.client_name}" (ledger row {result.client_row}, summary row {result.summary_row}).')
    for warning in result.warnings:
        print(f"  warning: {warning}")
    return 0


def report_command(args, config: LedgerConfig) -> int:
    """
    Generate the daily delivery report.

    Args:
        args: Command-line arguments
        config: Ledger configuration

    Returns:
        Exit code
    """
    with open_store(args, config) as store:
        if args.date:
            summary = store.get_sheet(config.summary_sheet_name)
            if summary is not None:
                summary.write_cell(config.date_input_cell, args.date)

        generator = ReportGenerator(store, config, notifier=ConsoleNotifier())
        result = generator.generate()

    return 0 if result.ok else 1


def sheets_command(args, config: LedgerConfig) -> int:
    """List sheets with their data-row counts."""
    store = open_store(args, config)
    for sheet in store.sheets():
        if sheet.name == config.summary_sheet_name:
            kind, header_rows = "summary", config.summary_start_row - 1
        elif sheet.name == config.intake_sheet_name:
            kind, header_rows = "intake", 1
        else:
            kind, header_rows = "client", config.client_header_rows
        data_rows = max(sheet.last_row() - header_rows, 0)
        print(f"{sheet.name:<30} {kind:<8} {data_rows:>6} rows")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="delivery-ledger",
        description="Route delivery form submissions and build daily delivery reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Route a submission
  delivery-ledger submit --workbook deliveries.xlsx \\
      --values '["2025-06-08T10:00:00", "driver@x.com", "ClientA", "Drive", "C100", "ID1",
                 "Dana", "Cohen", "Tel Aviv", "Haifa", "2025-06-09", "הלוך-חזור"]'

  # Build the report for a given day
  delivery-ledger report --workbook deliveries.xlsx --date 2025-06-09

  # Rebuild the report for the date already in the input cell
  delivery-ledger report --workbook deliveries.xlsx
        """
    )
    parser.add_argument("--config", help="Path to ledger YAML configuration")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-format", default=None, choices=["json", "text"], help="Log output format")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    submit_parser = subparsers.add_parser("submit", help="Record and route one form submission")
    submit_parser.add_argument("--workbook", required=True, help="Path to the .xlsx workbook")
    submit_parser.add_argument("--values", required=True, help="JSON list of the 12 form answers")

    report_parser = subparsers.add_parser("report", help="Generate the daily delivery report")
    report_parser.add_argument("--workbook", required=True, help="Path to the .xlsx workbook")
    report_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Target day (YYYY-MM-DD); written to the input cell before the run",
    )

    sheets_parser = subparsers.add_parser("sheets", help="List sheets and row counts")
    sheets_parser.add_argument("--workbook", required=True, help="Path to the .xlsx workbook")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    load_dotenv()
    setup_logger(DEFAULT_LOGGER_NAME, level=args.log_level, format_type=args.log_format)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    if not Path(args.workbook).exists():
        logger.error(f"Workbook not found: {args.workbook}")
        return 1

    commands = {
        "submit": submit_command,
        "report": report_command,
        "sheets": sheets_command,
    }
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
