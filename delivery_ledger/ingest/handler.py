"""
Ingest handler: routes one submission to its client ledger and the summary.

Flow: map -> look up both destinations -> append to client ledger ->
append to summary -> format the new summary row.
"""

from delivery_ledger.core.config import LedgerConfig
from delivery_ledger.core.errors import ConfigurationError, PartitionNotFoundError
from delivery_ledger.core.models import IngestResult, RawSubmission
from delivery_ledger.observability import metrics
from delivery_ledger.observability.logger import get_logger, log_operation
from delivery_ledger.store import TabularStore

from .mapper import SubmissionMapper

logger = get_logger(__name__)


class IngestHandler:
    """
    Writes form submissions to client ledgers and the daily summary.

    Both destinations are resolved before anything is written, so a
    rejected submission leaves every sheet untouched. The two appends
    are not transactional: a fault between them leaves the client row
    without its summary row.
    """

    def __init__(self, store: TabularStore, config: LedgerConfig):
        """
        Initialize ingest handler.

        Args:
            store: Store holding the client ledgers and the summary sheet
            config: Ledger configuration
        """
        self.store = store
        self.config = config
        self.mapper = SubmissionMapper(config)

    def handle(self, raw: RawSubmission) -> IngestResult:
        """
        Route a submission.

        Args:
            raw: The form response

        Returns:
            IngestResult with the rows written and any warnings

        Raises:
            PartitionNotFoundError: No ledger sheet for the client name
            ConfigurationError: The summary sheet is missing
        """
        schema = self.config.field_schema
        mapped = self.mapper.map(raw)
        client_name = mapped.client_name

        with log_operation("Routing submission", logger=logger, client_name=client_name):
            if not client_name or self.config.is_reserved(client_name):
                raise PartitionNotFoundError(client_name)
            client_sheet = self.store.get_sheet(client_name)
            if client_sheet is None:
                raise PartitionNotFoundError(client_name)
            logger.debug(f'Client sheet "{client_name}" found')

            summary_sheet = self.store.get_sheet(self.config.summary_sheet_name)
            if summary_sheet is None:
                raise ConfigurationError(
                    f'Summary sheet "{self.config.summary_sheet_name}" not found, cannot append data.'
                )

            client_row = client_sheet.append_row(
                mapped.record.to_row(schema),
                min_row=self.config.client_header_rows + 1,
            )
            logger.info(f'New row appended to client sheet "{client_name}" at row {client_row}')

            summary_row = summary_sheet.append_row(
                mapped.record.summary_row(schema, client_name),
                min_row=self.config.summary_start_row,
            )
            summary_sheet.set_number_format(
                summary_row,
                schema.summary_index_of(schema.date_key) + 1,
                1,
                self.config.date_number_format,
            )
            summary_sheet.set_number_format(
                summary_row,
                schema.summary_index_of(schema.timestamp_key) + 1,
                1,
                self.config.timestamp_number_format,
            )
            logger.info(f'New data appended to summary sheet "{summary_sheet.name}" at row {summary_row}')

        metrics.record_submission("written")
        return IngestResult(
            client_name=client_name,
            client_row=client_row,
            summary_row=summary_row,
            record=mapped.record,
            warnings=mapped.warnings,
        )
