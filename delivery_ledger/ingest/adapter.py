"""
Adapter between the host's form-submit trigger and the ingest handler.

The trigger has no user interface to report to, so every outcome here
ends in the log. Nothing is raised back to the host.
"""

from typing import Any

from pydantic import ValidationError

from delivery_ledger.core.errors import ConfigurationError, PartitionNotFoundError
from delivery_ledger.core.models import FormSubmitEvent, IngestResult, RawSubmission
from delivery_ledger.observability import metrics
from delivery_ledger.observability.logger import get_logger

from .handler import IngestHandler

logger = get_logger(__name__)


def parse_event(payload: Any) -> FormSubmitEvent | None:
    """
    Validate a raw trigger payload.

    Returns:
        The event, or None if the payload is not a usable event
    """
    if isinstance(payload, FormSubmitEvent):
        return payload
    try:
        return FormSubmitEvent.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Invalid trigger event object: {e}", extra={"payload": repr(payload)})
        return None


def handle_form_submit(payload: Any, handler: IngestHandler) -> IngestResult | None:
    """
    Entry point for a "form submitted" trigger.

    Args:
        payload: FormSubmitEvent or a dict with sheet_name, row and values
        handler: Configured ingest handler

    Returns:
        IngestResult when the submission was written, otherwise None
    """
    logger.info("--- form submit trigger started ---")
    try:
        event = parse_event(payload)
        if event is None:
            metrics.record_submission("error")
            return None

        intake_sheet = handler.config.intake_sheet_name
        if event.sheet_name != intake_sheet:
            logger.info(
                f'Trigger activated from non-form responses sheet: "{event.sheet_name}". Skipping.'
            )
            metrics.record_submission("skipped")
            return None

        logger.info(
            f"Raw data from form responses sheet (row {event.row})",
            extra={"values": [str(value) for value in event.values]},
        )
        result = handler.handle(RawSubmission.from_values(event.values))
        logger.info(f"Data successfully saved for {result.client_name}")
        return result

    except PartitionNotFoundError as e:
        logger.error(str(e), extra={"client_name": e.client_name})
        metrics.record_submission("rejected")
        return None
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        metrics.record_submission("error")
        return None
    except Exception:
        logger.exception("Unexpected error in form submit trigger")
        metrics.record_submission("error")
        return None
    finally:
        logger.info("--- form submit trigger finished ---")
