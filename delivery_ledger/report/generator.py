"""
Daily delivery report generation.

Coordinates the flow: read target date -> scan client ledgers -> filter
by calendar day -> rebuild the summary body.
"""

from datetime import date
from typing import Any

from delivery_ledger.core.config import LedgerConfig
from delivery_ledger.core.errors import ConfigurationError, InputError, LedgerError
from delivery_ledger.core.mapping import calendar_day
from delivery_ledger.core.models import ReportResult
from delivery_ledger.observability import metrics
from delivery_ledger.observability.logger import get_logger, log_operation
from delivery_ledger.store import Sheet, TabularStore, is_blank
from delivery_ledger.ui import LoggingNotifier, Notifier

logger = get_logger(__name__)

GENERIC_ERROR_TITLE = "Script Error"
REPORT_TITLE = "Report Generated"


class ReportGenerator:
    """
    Rebuilds the summary sheet for the date in its input cell.

    Flow:
    1. Read and validate the target date
    2. Scan every non-reserved sheet in tab order
    3. Keep rows whose delivery date falls on the target day
    4. Clear the summary body, rewrite header and rows
    5. Format date/timestamp columns and fit column widths

    A regeneration replaces the whole body, including rows appended by
    ingest since the previous run.
    """

    def __init__(self, store: TabularStore, config: LedgerConfig, notifier: Notifier | None = None):
        """
        Initialize report generator.

        Args:
            store: Store holding the ledgers and the summary sheet
            config: Ledger configuration
            notifier: Where user-facing alerts go (log only by default)
        """
        self.store = store
        self.config = config
        self.notifier = notifier or LoggingNotifier()

    def generate(self) -> ReportResult:
        """
        Run the report.

        Configuration and input problems are alerted with their own
        titles; any other fault is alerted as a generic script error.
        Nothing is raised to the caller.
        """
        try:
            with log_operation("Generating daily delivery report", logger=logger):
                result = self._generate()
        except LedgerError as e:
            status = "input_error" if isinstance(e, InputError) else "configuration_error"
            self.notifier.alert(e.title, str(e))
            metrics.record_report_run(status)
            return ReportResult(status=status, message=str(e))
        except Exception as e:
            logger.exception("Unexpected error while generating the daily report")
            message = f"An unexpected error occurred: {e}\nMore details logged in the execution log."
            self.notifier.alert(GENERIC_ERROR_TITLE, message)
            metrics.record_report_run("error")
            return ReportResult(status="error", message=message)

        self.notifier.alert(REPORT_TITLE, result.message)
        metrics.record_report_run("success", matched=result.matched)
        return result

    def _generate(self) -> ReportResult:
        summary = self._summary_sheet()
        target_day = self.read_target_date(summary)
        logger.info(f"Normalized target date for comparison: {target_day.isoformat()}")

        compiled, scanned, failed = self.collect(target_day)
        logger.info(f"Total compiled deliveries matching target date: {len(compiled)}")

        self.write_summary(summary, compiled, target_day)

        display_date = target_day.strftime(self.config.date_format)
        if compiled:
            message = f"{len(compiled)} deliveries found for {display_date}."
        else:
            message = self.config.no_deliveries_template.format(date=display_date)
        if failed:
            message += f" Could not read: {', '.join(failed)}."

        return ReportResult(
            status="success",
            target_date=target_day,
            matched=len(compiled),
            partitions_scanned=scanned,
            failed_partitions=failed,
            message=message,
        )

    def _summary_sheet(self) -> Sheet:
        summary = self.store.get_sheet(self.config.summary_sheet_name)
        if summary is None:
            raise ConfigurationError(
                f'Sheet named "{self.config.summary_sheet_name}" not found. '
                "Please create it or check summary_sheet_name in the configuration."
            )
        return summary

    def read_target_date(self, summary: Sheet) -> date:
        """
        Target day from the summary's input cell.

        Raises:
            InputError: If the cell is empty or does not hold a date
        """
        cell = self.config.date_input_cell
        value = summary.read_cell(cell)
        logger.info(f"Raw date value read from cell {cell}", extra={"value": repr(value)})

        day = calendar_day(value, self.store.tz) if value is not None else None
        if day is None:
            raise InputError(
                f'Please enter a valid date in cell {cell} in sheet "{summary.name}". '
                "The current value is not recognized as a date."
            )
        return day

    def collect(self, target_day: date) -> tuple[list[list[Any]], list[str], list[str]]:
        """
        Matching rows from every client ledger.

        A ledger that cannot be read is logged and skipped; the other
        ledgers are still scanned.

        Returns:
            (summary rows in ledger-then-row order, ledgers scanned, ledgers that failed)
        """
        compiled: list[list[Any]] = []
        scanned: list[str] = []
        failed: list[str] = []

        for sheet in self.store.sheets():
            if self.config.is_reserved(sheet.name):
                logger.debug(f'Skipping reserved sheet "{sheet.name}"')
                continue
            try:
                rows = self.scan_partition(sheet, target_day)
            except Exception:
                logger.exception(f'Failed to scan client sheet "{sheet.name}"; continuing with the next sheet')
                metrics.record_partition_scan_failure()
                failed.append(sheet.name)
                continue
            scanned.append(sheet.name)
            compiled.extend(rows)

        return compiled, scanned, failed

    def scan_partition(self, sheet: Sheet, target_day: date) -> list[list[Any]]:
        """
        Summary rows for one client ledger.

        Args:
            sheet: Client ledger
            target_day: Day to keep

        Returns:
            Matching rows, each prefixed with the ledger name
        """
        schema = self.config.field_schema
        header_rows = self.config.client_header_rows
        date_index = schema.date_index

        if sheet.max_rows() <= header_rows:
            logger.debug(f'Sheet "{sheet.name}" has no data rows below its headers. Skipping.')
            return []

        rows_to_read = sheet.last_row() - header_rows
        if rows_to_read <= 0:
            logger.debug(f'No data rows to read in sheet "{sheet.name}". Skipping.')
            return []

        values = sheet.read_rows(header_rows + 1, rows_to_read, schema.width)
        matches = []
        for offset, row in enumerate(values):
            if all(is_blank(cell) for cell in row) or len(row) <= date_index:
                continue

            date_value = row[date_index]
            if is_blank(date_value):
                continue

            delivery_day = calendar_day(date_value, self.store.tz)
            if delivery_day is None:
                logger.info(
                    f'Skipping row in sheet "{sheet.name}": non-date value in date column',
                    extra={"row": header_rows + 1 + offset, "value": str(date_value)},
                )
                continue

            if delivery_day == target_day:
                matches.append(self.project_row(sheet.name, row))

        logger.info(f'Processed {len(values)} rows in sheet "{sheet.name}", {len(matches)} match the target date')
        return matches

    def project_row(self, client_name: str, row: list[Any]) -> list[Any]:
        """Summary row: ledger name plus every schema column, blanks as ""."""
        width = self.config.field_schema.width
        cells = [row[i] if i < len(row) and row[i] is not None else "" for i in range(width)]
        return [client_name, *cells]

    def write_summary(self, summary: Sheet, compiled: list[list[Any]], target_day: date) -> None:
        """Clear the summary body and write the header and the compiled rows."""
        schema = self.config.field_schema
        header_row = self.config.summary_header_row
        start_row = self.config.summary_start_row
        width = schema.summary_width

        rows_to_clear = summary.max_rows() - header_row + 1
        if rows_to_clear > 0:
            summary.clear_range(header_row, rows_to_clear, width)
            logger.info(f'Cleared summary sheet "{summary.name}" from row {header_row}')

        summary.write_rows(header_row, [schema.summary_headers])
        summary.style_header(header_row, width)

        if not compiled:
            display_date = target_day.strftime(self.config.date_format)
            summary.write_cell(
                f"A{start_row}",
                self.config.no_deliveries_template.format(date=display_date),
            )
            return

        summary.write_rows(start_row, compiled)
        summary.set_number_format(
            start_row,
            schema.summary_index_of(schema.date_key) + 1,
            len(compiled),
            self.config.date_number_format,
        )
        summary.set_number_format(
            start_row,
            schema.summary_index_of(schema.timestamp_key) + 1,
            len(compiled),
            self.config.timestamp_number_format,
        )
        summary.auto_fit_columns(width)
        logger.info(f'Wrote {len(compiled)} delivery records to "{summary.name}" starting at row {start_row}')
