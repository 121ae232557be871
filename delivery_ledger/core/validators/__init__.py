"""
Submission checks.

Checks produce warnings only; see the ingest handler.
"""

from .base_validator import BaseValidator, ValidationError
from .required_field_validator import RequiredFieldValidator, RouteEndpointsValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldValidator",
    "RouteEndpointsValidator",
]
