"""
Form submission ingest.
"""

from .adapter import handle_form_submit, parse_event
from .handler import IngestHandler
from .mapper import MappedSubmission, SubmissionMapper

__all__ = [
    "IngestHandler",
    "MappedSubmission",
    "SubmissionMapper",
    "handle_form_submit",
    "parse_event",
]
