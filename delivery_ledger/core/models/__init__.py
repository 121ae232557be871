"""
Core data models for the delivery ledger.

All models use Pydantic for runtime validation and type safety.
"""

from .delivery_record import DeliveryRecord
from .form_event import FormSubmitEvent
from .raw_submission import RAW_FIELD_ORDER, RawSubmission
from .results import IngestResult, ReportResult

__all__ = [
    "DeliveryRecord",
    "FormSubmitEvent",
    "IngestResult",
    "RAW_FIELD_ORDER",
    "RawSubmission",
    "ReportResult",
]
