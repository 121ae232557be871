"""
Mapping rules from raw form answers to ledger values.
"""

from .dates import (
    calendar_day,
    coerce_datetime,
    format_delivery_date,
    format_timestamp,
    parse_text,
    reconcile_delivery_date,
    to_zone,
)
from .fields import as_text, build_description, map_quantity

__all__ = [
    "as_text",
    "build_description",
    "calendar_day",
    "coerce_datetime",
    "format_delivery_date",
    "format_timestamp",
    "map_quantity",
    "parse_text",
    "reconcile_delivery_date",
    "to_zone",
]
